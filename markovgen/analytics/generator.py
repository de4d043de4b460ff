import logging
import random
from bisect import bisect_right
from itertools import accumulate
from typing import Protocol, Sequence

from markovgen.analytics.markov import TransitionTable
from markovgen.core.errors import ConfigurationError
from markovgen.core.tokenize import State, tail_state
from markovgen.core.validation import check_output_size, check_short_seed

logger = logging.getLogger(__name__)


class WeightedChooser(Protocol):
    def choose_index(self, weights: Sequence[int]) -> int: ...


class RandomSource:
    """Weighted index draws over a private random.Random."""

    def __init__(self, seed: int | random.Random | None = None):
        self.rng = seed if isinstance(seed, random.Random) else random.Random(seed)

    def choose_index(self, weights: Sequence[int]) -> int:
        cum = list(accumulate(weights))
        if not cum or cum[-1] <= 0:
            raise ValueError("weights must contain at least one positive value")
        x = self.rng.random() * cum[-1]
        # clamp guards against x rounding up to the total
        return min(bisect_right(cum, x), len(cum) - 1)


def sample_successor(successors, rng: WeightedChooser) -> str:
    tokens = list(successors)
    return tokens[rng.choose_index([successors[t] for t in tokens])]


def random_state(table: TransitionTable, rng: WeightedChooser) -> State | None:
    states = table.states()
    if not states:
        return None
    return states[rng.choose_index([1] * len(states))]


def _match_state(table: TransitionTable, seed: Sequence[str], rng: WeightedChooser) -> State | None:
    candidates = table.states_ending_with(seed)
    if not candidates:
        return None
    weights = [sum(table.lookup(s).values()) for s in candidates]
    return candidates[rng.choose_index(weights)]


def initial_cursor(
    table: TransitionTable,
    seed_tokens: Sequence[str],
    rng: WeightedChooser,
    short_seed: str = "reject",
) -> State | None:
    check_short_seed(short_seed)
    if len(seed_tokens) >= table.state_size:
        return tail_state(seed_tokens, table.state_size)
    if short_seed == "reject":
        raise ConfigurationError(
            f"seed phrase has {len(seed_tokens)} tokens, at least {table.state_size} required"
        )
    return _match_state(table, seed_tokens, rng)


def generate(
    table: TransitionTable,
    seed_tokens: Sequence[str],
    output_size: int = 200,
    rng: WeightedChooser | None = None,
    *,
    short_seed: str = "reject",
) -> list[str]:
    """Continue ``seed_tokens`` with up to ``output_size`` sampled tokens.

    Only new tokens are returned. The run stops early, without error, once
    the cursor reaches a state that has no recorded successors.
    """
    check_output_size(output_size)
    rng = rng or RandomSource()
    cursor = initial_cursor(table, seed_tokens, rng, short_seed)
    out: list[str] = []
    if cursor is None:
        logger.debug("no state matches seed %r", list(seed_tokens))
        return out
    while len(out) < output_size:
        successors = table.lookup(cursor)
        if successors is None:
            logger.debug("state %r has no successors, stopping after %d tokens", cursor, len(out))
            break
        token = sample_successor(successors, rng)
        out.append(token)
        cursor = cursor[1:] + (token,)
    return out
