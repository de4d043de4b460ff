import logging
import warnings
from types import MappingProxyType
from typing import Iterator, Mapping, Sequence

from markovgen.core.errors import ConfigurationError, EmptyModelWarning
from markovgen.core.tokenize import State, state_pairs
from markovgen.core.validation import check_state_size

logger = logging.getLogger(__name__)


class TransitionTable:
    """Frequency-weighted successor counts keyed by n-gram state.

    Counts are kept as raw integers; probabilities are derived at sampling
    time from the successor multiset.
    """

    def __init__(self, state_size: int = 2):
        self.state_size = check_state_size(state_size)
        self._C: dict[State, dict[str, int]] = {}

    def record(self, state: Sequence[str], token: str, count: int = 1):
        state = tuple(state)
        if len(state) != self.state_size:
            raise ConfigurationError(
                f"state {state!r} has {len(state)} tokens, table expects {self.state_size}"
            )
        if count < 1:
            raise ValueError(f"count must be positive, got {count}")
        row = self._C.setdefault(state, {})
        row[token] = row.get(token, 0) + count

    def lookup(self, state: Sequence[str]) -> Mapping[str, int] | None:
        row = self._C.get(tuple(state))
        if row is None:
            return None
        return MappingProxyType(row)

    def states(self) -> list[State]:
        return list(self._C)

    def items(self) -> Iterator[tuple[State, Mapping[str, int]]]:
        for state, row in self._C.items():
            yield state, MappingProxyType(row)

    def states_ending_with(self, suffix: Sequence[str]) -> list[State]:
        suffix = tuple(suffix)
        if not suffix:
            return self.states()
        n = len(suffix)
        return [s for s in self._C if s[-n:] == suffix]

    def total_transitions(self) -> int:
        return sum(sum(row.values()) for row in self._C.values())

    def __len__(self) -> int:
        return len(self._C)

    def __contains__(self, state) -> bool:
        return tuple(state) in self._C

    def __eq__(self, other) -> bool:
        if not isinstance(other, TransitionTable):
            return NotImplemented
        return self.state_size == other.state_size and self._C == other._C

    def __repr__(self) -> str:
        return f"TransitionTable(state_size={self.state_size}, states={len(self)})"


def build_table(tokens: Sequence[str], state_size: int = 2) -> TransitionTable:
    table = TransitionTable(state_size)
    for state, nxt in state_pairs(tokens, state_size):
        table.record(state, nxt)
    if not len(table):
        logger.warning(
            "no transitions learned from %d tokens with state_size=%d", len(tokens), state_size
        )
        warnings.warn(
            f"corpus of {len(tokens)} tokens is too short for state_size={state_size}",
            EmptyModelWarning,
            stacklevel=2,
        )
    else:
        logger.debug(
            "built table: %d states, %d transitions", len(table), table.total_transitions()
        )
    return table
