import math
from dataclasses import asdict, dataclass
from typing import Iterable

from markovgen.analytics.markov import TransitionTable


def entropy(counts: Iterable[int]) -> float:
    # Shannon entropy in bits
    counts = [c for c in counts if c > 0]
    n = sum(counts)
    H = 0.0
    for c in counts:
        p = c / n
        H -= p * math.log(p, 2)
    return H


@dataclass
class TableStats:
    state_size: int
    states: int
    transitions: int
    vocabulary: int
    branching: float
    entropy: float

    def as_dict(self) -> dict:
        return asdict(self)


def table_stats(table: TransitionTable) -> TableStats:
    vocab = set()
    total = 0
    weighted_H = 0.0
    distinct = 0
    for state, row in table.items():
        vocab.update(state)
        vocab.update(row)
        n = sum(row.values())
        total += n
        distinct += len(row)
        weighted_H += n * entropy(row.values())
    states = len(table)
    return TableStats(
        state_size=table.state_size,
        states=states,
        transitions=total,
        vocabulary=len(vocab),
        branching=(distinct / states) if states else 0.0,
        entropy=(weighted_H / total) if total else 0.0,
    )
