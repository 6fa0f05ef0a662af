"""
TSEmbed Entry Header

Every entry starts with a text header, followed by the raw entry data:

    "<data size in decimal>:<name>" 0x00 <data size bytes>

The header is the only record of where an entry ends. This module builds it
on the writer side and parses it back out of the reader's accumulated bytes.
"""

from dataclasses import dataclass
from enum import Enum

from .constants import HEADER_SEPARATOR, HEADER_TERMINATOR, NAME_ENCODING
from .models import EntryHeader


class HeaderStatus(Enum):
    """Outcome of a header parse attempt."""

    INCOMPLETE = "incomplete"  # No terminator yet, need more bytes
    INVALID = "invalid"  # Terminator found, text is not "<digits>:<name>"
    VALID = "valid"


@dataclass
class HeaderParse:
    status: HeaderStatus
    header: EntryHeader | None = None

    @property
    def is_valid(self) -> bool:
        return self.status is HeaderStatus.VALID


def build_header(name: str, data_size: int) -> bytes:
    """
    Build the header for an entry.

    Args:
        name: Entry name (must not contain a zero byte)
        data_size: Number of data bytes following the header

    Returns:
        Header bytes including the terminating zero byte
    """
    if data_size < 0:
        raise ValueError(f"Data size must be non-negative, got {data_size}")

    return (
        str(data_size).encode("ascii")
        + HEADER_SEPARATOR
        + name.encode(NAME_ENCODING)
        + HEADER_TERMINATOR
    )


def parse_header(buffer: bytearray) -> HeaderParse:
    """
    Parse an entry header from the front of `buffer`.

    Only the text up to the first zero byte is considered. On success the
    header and its terminator are removed from `buffer` in place, leaving
    only entry data.

    An empty digit run before the separator parses as a size of 0.
    """
    end = buffer.find(HEADER_TERMINATOR)
    if end < 0:
        return HeaderParse(HeaderStatus.INCOMPLETE)

    text = bytes(buffer[:end])
    digits, sep, name = text.partition(HEADER_SEPARATOR)
    if not sep or (digits and not digits.isdigit()):
        return HeaderParse(HeaderStatus.INVALID)

    try:
        filename = name.decode(NAME_ENCODING)
    except UnicodeDecodeError:
        return HeaderParse(HeaderStatus.INVALID)

    del buffer[: end + 1]
    return HeaderParse(
        HeaderStatus.VALID,
        EntryHeader(data_size=int(digits) if digits else 0, filename=filename),
    )
