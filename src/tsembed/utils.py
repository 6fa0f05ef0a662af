"""
TSEmbed Utilities

Stream opening, payload source reading, and display helpers.
"""

import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager, nullcontext
from pathlib import Path
from typing import BinaryIO, Union

from .debug import debug
from .exceptions import PayloadSourceError

PathOrStream = Union[str, os.PathLike, BinaryIO]


def is_path(source) -> bool:
    """True if `source` names a file rather than being an open stream."""
    return isinstance(source, (str, os.PathLike))


@contextmanager
def open_stream(source: PathOrStream, mode: str) -> Iterator[BinaryIO]:
    """
    Open a path for binary I/O, or pass an open stream through.

    Paths are closed on every exit path; streams passed in stay open and
    remain owned by the caller.

    Args:
        source: File path or open binary stream
        mode: "rb" or "wb"
    """
    debug.validate(mode in ("rb", "wb"), f"Unsupported stream mode: {mode}")

    if is_path(source):
        with open(source, mode) as f:
            yield f
    else:
        with nullcontext(source) as f:
            yield f


def same_file(a, b) -> bool:
    """True if two paths name the same existing file."""
    try:
        return os.path.samefile(a, b)
    except OSError:
        return False


@contextmanager
def open_output(target: PathOrStream) -> Iterator[BinaryIO]:
    """
    Open an output for binary writing.

    A path is written through a temporary file in the same directory and
    renamed over the target only when the block completes; on error the
    temporary file is removed and the target is left untouched. Streams are
    passed through as with open_stream().
    """
    if not is_path(target):
        with open_stream(target, "wb") as f:
            yield f
        return

    target = Path(target)
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{target.name}.", suffix=".tmp", dir=target.parent
    )
    try:
        with os.fdopen(fd, "wb") as f:
            yield f
        os.replace(tmp_name, target)
    except BaseException:
        debug.print(f"Discarding partial output {tmp_name}", "WARN")
        Path(tmp_name).unlink(missing_ok=True)
        raise


def read_payload_source(source) -> bytes:
    """
    Read payload bytes from any supported source.

    Args:
        source: bytes-like object, file path, or binary file-like object

    Returns:
        Payload bytes

    Raises:
        PayloadSourceError: Source cannot be opened or read
    """
    if isinstance(source, (bytes, bytearray, memoryview)):
        return bytes(source)

    if is_path(source):
        try:
            return Path(source).read_bytes()
        except OSError as e:
            raise PayloadSourceError(str(source), e.strerror or str(e)) from e

    if hasattr(source, "read"):
        try:
            data = source.read()
        except OSError as e:
            raise PayloadSourceError(repr(source), str(e)) from e
        if not isinstance(data, (bytes, bytearray)):
            raise PayloadSourceError(repr(source), "stream is not opened in binary mode")
        return bytes(data)

    raise PayloadSourceError(repr(source), f"unsupported source type {type(source).__name__}")


def format_file_size(size_bytes: int) -> str:
    """
    Format file size for display.

    Example:
        >>> format_file_size(1500000)
        "1.4 MB"
    """
    debug.validate(size_bytes >= 0, f"File size cannot be negative: {size_bytes}")

    size: float = float(size_bytes)
    for unit in ["B", "KB", "MB", "GB"]:
        if size < 1024:
            if unit == "B":
                return f"{int(size)} {unit}"
            return f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} TB"
