"""
Shared fixtures for TSEmbed tests.

Carrier streams are built from synthetic packets: a sync byte, a fixed
PID/flags header, and a deterministic filler pattern. None of them match
the TSEmbed tag.
"""

import io

import pytest

from tsembed.constants import PACKET_SIZE, SYNC_BYTE


def make_packet(index: int) -> bytes:
    """Build an ordinary (untagged) 188-byte packet."""
    header = bytes([SYNC_BYTE, 0x41, 0x00, 0x10 | (index & 0x0F)])
    filler = bytes((index * 31 + i) % 256 for i in range(PACKET_SIZE - len(header)))
    return header + filler


def make_carrier(n_packets: int) -> bytes:
    """Build a carrier stream of `n_packets` untagged packets."""
    return b"".join(make_packet(i) for i in range(n_packets))


@pytest.fixture
def carrier():
    """Two-packet carrier stream contents."""
    return make_carrier(2)


@pytest.fixture
def carrier_file(tmp_path, carrier):
    """Two-packet carrier written to disk."""
    path = tmp_path / "input.ts"
    path.write_bytes(carrier)
    return path


@pytest.fixture
def payload_file(tmp_path):
    """Small binary payload on disk."""
    path = tmp_path / "payload.bin"
    path.write_bytes(bytes(range(256)) * 3)
    return path


def embed(carrier_bytes: bytes, entries) -> bytes:
    """Embed (name, data) pairs into carrier bytes, in memory."""
    from tsembed.writer import TSWriter

    writer = TSWriter()
    for name, data in entries:
        writer.append_data(name, data)
    output = io.BytesIO()
    writer.process(io.BytesIO(carrier_bytes), output)
    return output.getvalue()
