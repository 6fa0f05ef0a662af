"""
Tests for TSEmbed writer.
"""

import io

import pytest

from tsembed.constants import PACKET_SIZE, PAYLOAD_OFFSET, PAYLOAD_SIZE
from tsembed.exceptions import (
    BadSyncError,
    EntryNameError,
    PayloadSourceError,
    SameFileError,
    ShortReadError,
    ShortWriteError,
)
from tsembed.models import Entry
from tsembed.packet import PacketKind, tag_bytes
from tsembed.writer import TSWriter, embed_entries, frame_entry, packet_count, packetize

from conftest import embed, make_carrier


def split_packets(data: bytes) -> list[bytes]:
    assert len(data) % PACKET_SIZE == 0
    return [data[i : i + PACKET_SIZE] for i in range(0, len(data), PACKET_SIZE)]


class LimitedWriter(io.BytesIO):
    """Accepts `limit` full packets, then short-writes."""

    def __init__(self, limit: int):
        super().__init__()
        self.limit = limit

    def write(self, b):
        if self.limit <= 0:
            return super().write(bytes(b)[:-1])
        self.limit -= 1
        return super().write(b)


class TestFraming:
    """Tests for frame_entry, packet_count and packetize."""

    def test_frame_entry(self):
        entry = Entry(name="a", data=b"\x01\x02\x03")
        assert frame_entry(entry) == b"3:a\x00\x01\x02\x03"

    def test_single_packet(self):
        packets = list(packetize(Entry(name="a", data=b"\x01\x02\x03")))
        assert len(packets) == 1
        expected = tag_bytes(PacketKind.FILE) + b"3:a\x00\x01\x02\x03"
        expected += bytes(PACKET_SIZE - len(expected))
        assert packets[0].raw == expected

    def test_two_hundred_bytes(self):
        """200 data bytes span one file packet and one data packet."""
        entry = Entry(name="x", data=bytes(range(200)))
        framed = frame_entry(entry)
        packets = list(packetize(entry))

        assert [p.classify() for p in packets] == [PacketKind.FILE, PacketKind.DATA]
        assert packets[0].payload == framed[:PAYLOAD_SIZE]

        rest = framed[PAYLOAD_SIZE:]
        assert packets[1].payload[: len(rest)] == rest
        assert packets[1].payload[len(rest) :] == bytes(PAYLOAD_SIZE - len(rest))

    @pytest.mark.parametrize("data_size,n_packets", [(170, 1), (346, 2)])
    def test_exact_multiple_has_no_trailing_packet(self, data_size, n_packets):
        entry = Entry(name="a", data=b"\xaa" * data_size)
        assert len(frame_entry(entry)) == n_packets * PAYLOAD_SIZE

        packets = list(packetize(entry))
        assert len(packets) == n_packets
        assert packet_count(entry) == n_packets
        # Every payload byte of the last packet is entry data
        assert packets[-1].payload[-1] == 0xAA

    def test_empty_data(self):
        packets = list(packetize(Entry(name="empty", data=b"")))
        assert len(packets) == 1
        assert packets[0].payload.startswith(b"0:empty\x00")

    def test_packet_count(self):
        assert packet_count(Entry(name="x", data=bytes(200))) == 2
        assert packet_count(Entry(name="x", data=bytes(1000))) == 6


class TestAppendEntry:
    """Tests for entry registration."""

    def test_append_bytes(self):
        writer = TSWriter()
        entry = writer.append_data("a", b"abc")
        assert entry == Entry(name="a", data=b"abc")
        assert writer.entries == (entry,)

    def test_append_file(self, payload_file):
        writer = TSWriter()
        entry = writer.append_file("payload", payload_file)
        assert entry.data == payload_file.read_bytes()

    def test_append_file_like(self):
        writer = TSWriter()
        entry = writer.append_entry("s", io.BytesIO(b"stream data"))
        assert entry.data == b"stream data"

    def test_missing_file(self, tmp_path):
        writer = TSWriter()
        with pytest.raises(PayloadSourceError):
            writer.append_file("missing", tmp_path / "nope.bin")
        assert writer.entries == ()

    def test_text_stream_rejected(self):
        with pytest.raises(PayloadSourceError):
            TSWriter().append_entry("t", io.StringIO("text"))

    def test_unsupported_source(self):
        with pytest.raises(PayloadSourceError):
            TSWriter().append_entry("n", 12345)

    @pytest.mark.parametrize("name", ["", "a\x00b", "x" * 300])
    def test_invalid_names(self, name):
        with pytest.raises(EntryNameError):
            TSWriter().append_data(name, b"data")


class TestProcess:
    """Tests for TSWriter.process."""

    def test_concrete_scenario(self, carrier):
        output = embed(carrier, [("a", b"\x01\x02\x03")])
        packets = split_packets(output)

        assert len(packets) == 3
        assert b"".join(packets[:2]) == carrier
        header = packets[2][:PAYLOAD_OFFSET]
        assert header == tag_bytes(PacketKind.FILE)
        body = packets[2][PAYLOAD_OFFSET:]
        assert body[:7] == b"3:a\x00\x01\x02\x03"
        assert body[7:] == bytes(PAYLOAD_SIZE - 7)

    @pytest.mark.parametrize("n_packets", [0, 1, 25])
    def test_passthrough_is_byte_identical(self, n_packets):
        carrier = make_carrier(n_packets)
        output = embed(carrier, [("a", b"x" * 500)])
        assert output[: len(carrier)] == carrier

    def test_no_entries_copies_input(self, carrier):
        assert embed(carrier, []) == carrier

    def test_entries_follow_in_registration_order(self, carrier):
        output = embed(carrier, [("first", b"1" * 300), ("second", b"2")])
        kinds = [
            PacketKind.FILE if p[8:12] == b"file" else PacketKind.DATA
            for p in split_packets(output)[2:]
        ]
        assert kinds == [PacketKind.FILE, PacketKind.DATA, PacketKind.FILE]
        assert split_packets(output)[4][PAYLOAD_OFFSET:].startswith(b"1:second\x00")

    def test_stats(self, carrier):
        writer = TSWriter()
        writer.append_data("a", bytes(200))
        writer.append_data("b", b"")
        stats = writer.process(io.BytesIO(carrier), io.BytesIO())
        assert stats.passthrough_packets == 2
        assert stats.embedded_packets == 3
        assert stats.entries == 2
        assert stats.output_size == 5 * PACKET_SIZE

    def test_paths(self, carrier_file, payload_file, tmp_path):
        output = tmp_path / "out.ts"
        writer = TSWriter()
        writer.append_file("payload.bin", payload_file)
        writer.process(carrier_file, output)
        assert output.read_bytes().startswith(carrier_file.read_bytes())

    def test_process_twice_is_repeatable(self, carrier):
        writer = TSWriter()
        writer.append_data("a", b"abc")
        first, second = io.BytesIO(), io.BytesIO()
        writer.process(io.BytesIO(carrier), first)
        writer.process(io.BytesIO(carrier), second)
        assert first.getvalue() == second.getvalue()

    def test_bad_sync_input(self):
        writer = TSWriter()
        writer.append_data("a", b"abc")
        with pytest.raises(BadSyncError):
            writer.process(io.BytesIO(b"\x00" * PACKET_SIZE), io.BytesIO())

    def test_short_read_input(self, carrier):
        with pytest.raises(ShortReadError):
            TSWriter().process(io.BytesIO(carrier[:-1]), io.BytesIO())

    def test_short_write_during_passthrough(self, carrier):
        with pytest.raises(ShortWriteError):
            TSWriter().process(io.BytesIO(carrier), LimitedWriter(limit=1))

    def test_short_write_during_embedding(self, carrier):
        writer = TSWriter()
        writer.append_data("a", bytes(500))
        with pytest.raises(ShortWriteError):
            writer.process(io.BytesIO(carrier), LimitedWriter(limit=3))

    def test_embed_entries_helper(self, carrier):
        output = io.BytesIO()
        stats = embed_entries(io.BytesIO(carrier), output, {"a": b"1", "b": b"2"})
        assert stats.entries == 2
        assert len(output.getvalue()) == 4 * PACKET_SIZE


class TestOutputSafety:
    """Tests for output handling when paths are involved."""

    def test_output_same_as_input_rejected(self, carrier_file, carrier):
        writer = TSWriter()
        writer.append_data("a", b"abc")
        with pytest.raises(SameFileError):
            writer.process(carrier_file, carrier_file)
        assert carrier_file.read_bytes() == carrier

    def test_output_same_file_via_other_spelling(self, carrier_file, carrier):
        other = f"{carrier_file.parent}/./{carrier_file.name}"
        with pytest.raises(SameFileError):
            TSWriter().process(carrier_file, other)
        assert carrier_file.read_bytes() == carrier

    def test_failed_input_leaves_no_output(self, tmp_path):
        bad = tmp_path / "bad.ts"
        bad.write_bytes(b"\x00" * PACKET_SIZE)
        output = tmp_path / "out.ts"
        with pytest.raises(BadSyncError):
            TSWriter().process(bad, output)
        assert not output.exists()
        assert sorted(p.name for p in tmp_path.iterdir()) == ["bad.ts"]

    def test_failed_input_keeps_existing_output(self, tmp_path, carrier):
        truncated = tmp_path / "short.ts"
        truncated.write_bytes(carrier[:-1])
        output = tmp_path / "out.ts"
        output.write_bytes(b"previous result")
        with pytest.raises(ShortReadError):
            TSWriter().process(truncated, output)
        assert output.read_bytes() == b"previous result"

    def test_existing_output_replaced_on_success(self, carrier_file, carrier, tmp_path):
        output = tmp_path / "out.ts"
        output.write_bytes(b"old")
        TSWriter().process(carrier_file, output)
        assert output.read_bytes() == carrier
