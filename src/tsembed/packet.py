"""
TSEmbed Packet Module

Fixed-size 188-byte transport stream packets.

Packets written by TSEmbed carry a 12 byte tag:

    47 1F FF 10 'A' 'W' 'M' 'K' <kind>

where <kind> is "file" for the first packet of an entry and "data" for
continuation packets. Bytes [12, 188) hold entry payload. Any other packet
is classified UNKNOWN and copied through untouched.
"""

from collections.abc import Iterator
from enum import Enum
from typing import BinaryIO

from .constants import (
    KIND_DATA,
    KIND_FILE,
    PACKET_SIZE,
    PAYLOAD_OFFSET,
    SYNC_BYTE,
    TAG_PREFIX,
    TAG_SIZE,
)
from .exceptions import BadSyncError, ShortReadError, ShortWriteError


class PacketKind(Enum):
    """Classification of a packet by its tag region."""

    UNKNOWN = "unknown"
    FILE = "file"
    DATA = "data"


_KIND_SUFFIX = {
    PacketKind.FILE: KIND_FILE,
    PacketKind.DATA: KIND_DATA,
}

_TAGS = {kind: TAG_PREFIX + suffix for kind, suffix in _KIND_SUFFIX.items()}
_KINDS_BY_TAG = {tag: kind for kind, tag in _TAGS.items()}


def tag_bytes(kind: PacketKind) -> bytes:
    """
    Get the 12 byte tag for a packet kind.

    UNKNOWN has an all-zero tag; it is never written.
    """
    return _TAGS.get(kind, bytes(TAG_SIZE))


def classify_tag(tag: bytes) -> PacketKind:
    """Classify a packet from (at least) its first 12 bytes."""
    return _KINDS_BY_TAG.get(bytes(tag[:TAG_SIZE]), PacketKind.UNKNOWN)


class Packet:
    """A single 188-byte transport stream packet."""

    __slots__ = ("_data",)

    def __init__(self, kind: PacketKind | None = None):
        self._data = bytearray(PACKET_SIZE)
        if kind is not None:
            self.clear(kind)

    @classmethod
    def from_bytes(cls, data: bytes) -> "Packet":
        """Build a packet from exactly 188 bytes."""
        if len(data) != PACKET_SIZE:
            raise ValueError(f"Packet must be {PACKET_SIZE} bytes, got {len(data)}")
        packet = cls()
        packet._data[:] = data
        return packet

    def read(self, stream: BinaryIO, offset: int | None = None) -> bool:
        """
        Read one packet from a binary stream.

        Args:
            stream: Readable binary stream
            offset: Stream offset of this packet, used in error messages

        Returns:
            True if a packet was read, False on a clean end of stream

        Raises:
            ShortReadError: Stream ended inside the packet
            BadSyncError: First byte is not 'G'
        """
        view = memoryview(self._data)
        got = 0
        while got < PACKET_SIZE:
            chunk = stream.read(PACKET_SIZE - got)
            if not chunk:
                break
            view[got : got + len(chunk)] = chunk
            got += len(chunk)

        if got == 0:
            return False
        if got != PACKET_SIZE:
            raise ShortReadError(got, PACKET_SIZE)
        if self._data[0] != SYNC_BYTE:
            raise BadSyncError(offset)
        return True

    def write(self, stream: BinaryIO) -> None:
        """
        Write all 188 bytes to a binary stream.

        Raises:
            ShortWriteError: Stream accepted fewer than 188 bytes
        """
        written = stream.write(bytes(self._data))
        if written != PACKET_SIZE:
            raise ShortWriteError(written or 0, PACKET_SIZE)

    def clear(self, kind: PacketKind) -> None:
        """Zero-fill the packet and write the tag for `kind`."""
        self._data[:] = bytes(PACKET_SIZE)
        self._data[:TAG_SIZE] = tag_bytes(kind)

    def classify(self) -> PacketKind:
        return classify_tag(self._data)

    @property
    def payload(self) -> bytes:
        """Payload region, bytes [12, 188)."""
        return bytes(self._data[PAYLOAD_OFFSET:])

    @property
    def raw(self) -> bytes:
        return bytes(self._data)

    def __getitem__(self, index):
        return self._data[index]

    def __setitem__(self, index, value) -> None:
        self._data[index] = value

    def __len__(self) -> int:
        return PACKET_SIZE

    def __bytes__(self) -> bytes:
        return bytes(self._data)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Packet):
            return NotImplemented
        return self._data == other._data

    def __repr__(self) -> str:
        return f"Packet(kind={self.classify().value})"


def iter_packets(stream: BinaryIO) -> Iterator[Packet]:
    """
    Yield packets from a binary stream until end of stream.

    A fresh Packet is yielded for every read. Read errors propagate and
    end the iteration.
    """
    offset = 0
    while True:
        packet = Packet()
        if not packet.read(stream, offset):
            return
        yield packet
        offset += PACKET_SIZE
