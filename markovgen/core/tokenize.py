import re
from typing import Iterator, Sequence

from markovgen.core.validation import check_state_size

State = tuple[str, ...]

WHITESPACE = re.compile(r"[ \t\n\r]+")


def tokenize(text: str | bytes) -> list[str]:
    # surrogateescape keeps undecodable bytes exact through serialize()
    if isinstance(text, bytes):
        text = text.decode("utf-8", errors="surrogateescape")
    return [t for t in WHITESPACE.split(text) if t]


def state_pairs(tokens: Sequence[str], state_size: int) -> Iterator[tuple[State, str]]:
    """Yield every (state, next_token) window of the token sequence."""
    check_state_size(state_size)
    for i in range(len(tokens) - state_size):
        yield tuple(tokens[i:i + state_size]), tokens[i + state_size]


def tail_state(tokens: Sequence[str], state_size: int) -> State:
    check_state_size(state_size)
    start = max(len(tokens) - state_size, 0)
    return tuple(tokens[start:])
