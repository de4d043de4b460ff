import logging
from dataclasses import dataclass
from pathlib import Path

from markovgen.analytics.generator import RandomSource, WeightedChooser, generate, random_state
from markovgen.analytics.markov import TransitionTable, build_table
from markovgen.analytics.stats import table_stats
from markovgen.config import settings
from markovgen.core.formatting import format_output
from markovgen.core.tokenize import tokenize
from markovgen.store.codec import deserialize, serialize
from markovgen.store.files import is_model_bytes, read_binary, write_binary

logger = logging.getLogger(__name__)

# model served by the API; replaced wholesale, never mutated
_table: TransitionTable | None = None


@dataclass
class GenerationResult:
    tokens: list[str]
    requested: int
    produced: int

    @property
    def truncated(self) -> bool:
        return self.produced < self.requested

    @property
    def text(self) -> str:
        return format_output(self.tokens)


def train(text: str | bytes, state_size: int | None = None) -> TransitionTable:
    return build_table(tokenize(text), settings.state_size if state_size is None else state_size)


def load_input(path: str | Path, state_size: int | None = None) -> TransitionTable:
    """Load a saved model, or train on the file when it is plain text."""
    data = read_binary(path)
    if is_model_bytes(data):
        logger.info("loading saved model from %s", path)
        return deserialize(data)
    logger.info("training on %s", path)
    return train(data, state_size)


def save_table(table: TransitionTable, path: str | Path | None = None) -> Path:
    path = Path(path or settings.save_path or settings.default_save_path)
    write_binary(path, serialize(table))
    logger.info("saved %d states to %s", len(table), path)
    return path


def generate_text(
    table: TransitionTable,
    phrase: str | None = None,
    output_size: int | None = None,
    rng: WeightedChooser | None = None,
    short_seed: str | None = None,
) -> GenerationResult:
    rng = rng or RandomSource()
    requested = settings.output_size if output_size is None else output_size
    if phrase is None:
        start = random_state(table, rng)
        seed = list(start) if start else []
    else:
        seed = tokenize(phrase)
    if phrase is None and not seed:
        new = []
    else:
        new = generate(table, seed, requested, rng, short_seed=short_seed or settings.short_seed)
    if len(new) < requested:
        logger.info("generation stopped after %d of %d tokens", len(new), requested)
    return GenerationResult(tokens=seed + new, requested=requested, produced=len(new))


def get_stats(table: TransitionTable) -> dict:
    return table_stats(table).as_dict()


def set_model(table: TransitionTable | None):
    global _table
    _table = table


def current_model() -> TransitionTable | None:
    return _table


def load_configured_model() -> TransitionTable | None:
    if settings.model_path is None:
        return None
    table = load_input(settings.model_path)
    set_model(table)
    return table
