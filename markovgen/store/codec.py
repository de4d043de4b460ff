"""Binary persistence for transition tables.

Layout, all integers unsigned little-endian::

    magic       3 bytes   03 04 05
    version     u8        1
    state_size  u32
    n_states    u32
    n_states x:
        state_size x (len u32, token bytes)
        n_succ      u32
        n_succ x    (len u32, token bytes, count u32)

Token bytes are UTF-8 with surrogateescape, so any token produced from raw
bytes is stored exactly.
"""
import logging
import struct

from markovgen.analytics.markov import TransitionTable
from markovgen.core.errors import CorruptDataError

logger = logging.getLogger(__name__)

MAGIC = b"\x03\x04\x05"
VERSION = 1

HEADER = struct.Struct("<3s B I I")
U32 = struct.Struct("<I")
U32_MAX = 0xFFFFFFFF


def _encode_token(token: str) -> bytes:
    raw = token.encode("utf-8", errors="surrogateescape")
    return U32.pack(len(raw)) + raw


def serialize(table: TransitionTable) -> bytes:
    parts = [HEADER.pack(MAGIC, VERSION, table.state_size, len(table))]
    for state in sorted(table.states()):
        row = table.lookup(state)
        parts.extend(_encode_token(t) for t in state)
        parts.append(U32.pack(len(row)))
        for token in sorted(row):
            count = row[token]
            if count > U32_MAX:
                raise ValueError(f"count {count} for {token!r} does not fit in u32")
            parts.append(_encode_token(token))
            parts.append(U32.pack(count))
    return b"".join(parts)


class _Reader:
    def __init__(self, data: bytes):
        self.data = memoryview(data)
        self.pos = 0

    def remaining(self) -> int:
        return len(self.data) - self.pos

    def take(self, n: int, what: str) -> bytes:
        if n > self.remaining():
            raise CorruptDataError(
                f"{what} needs {n} bytes at offset {self.pos}, only {self.remaining()} left"
            )
        chunk = bytes(self.data[self.pos:self.pos + n])
        self.pos += n
        return chunk

    def u32(self, what: str) -> int:
        return U32.unpack(self.take(U32.size, what))[0]

    def token(self) -> str:
        n = self.u32("token length")
        return self.take(n, "token bytes").decode("utf-8", errors="surrogateescape")


def deserialize(data: bytes) -> TransitionTable:
    if len(data) < HEADER.size:
        raise CorruptDataError(f"buffer of {len(data)} bytes is shorter than the {HEADER.size}-byte header")
    magic, version, state_size, n_states = HEADER.unpack_from(data)
    if magic != MAGIC:
        raise CorruptDataError(f"bad magic {magic!r}")
    if version != VERSION:
        raise CorruptDataError(f"unsupported format version {version}")
    if state_size < 1:
        raise CorruptDataError("state_size is zero")

    r = _Reader(data)
    r.pos = HEADER.size
    table = TransitionTable(state_size)
    for _ in range(n_states):
        state = tuple(r.token() for _ in range(state_size))
        if state in table:
            raise CorruptDataError(f"duplicate state {state!r}")
        n_succ = r.u32("successor count")
        if n_succ == 0:
            raise CorruptDataError(f"state {state!r} has no successors")
        seen = set()
        for _ in range(n_succ):
            token = r.token()
            count = r.u32("transition count")
            if count == 0:
                raise CorruptDataError(f"zero count for {token!r} under {state!r}")
            if token in seen:
                raise CorruptDataError(f"duplicate successor {token!r} under {state!r}")
            seen.add(token)
            table.record(state, token, count)
    if r.remaining():
        raise CorruptDataError(f"{r.remaining()} trailing bytes after last state")
    logger.debug("decoded table: %d states, state_size=%d", len(table), state_size)
    return table
