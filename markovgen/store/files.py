import os
import sys
import tempfile
from pathlib import Path

from markovgen.store.codec import MAGIC


def read_text(path: str | Path) -> str:
    if str(path) == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8", errors="surrogateescape") as f:
        return f.read()


def read_binary(path: str | Path) -> bytes:
    if str(path) == "-":
        return sys.stdin.buffer.read()
    return Path(path).read_bytes()


def write_binary(path: str | Path, data: bytes) -> None:
    # write beside the target then rename, so a failed write leaves nothing behind
    path = Path(path)
    directory = path.parent
    directory.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=directory, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.replace(tmp, path)
    except BaseException:
        os.unlink(tmp)
        raise


def is_model_bytes(data: bytes) -> bool:
    return data[:len(MAGIC)] == MAGIC
