"""
TSEmbed Writer

Copies a transport stream unchanged and appends named entries after it.

Each entry is framed as "<size>:<name>\\0<data>" and split across tagged
packets: one "file" packet followed by as many "data" packets as needed.
Entries are written in registration order, after all original packets.

Example:
    writer = TSWriter()
    writer.append_file("mark.bin", "payload.bin")
    writer.append_data("notes.txt", b"hello")
    stats = writer.process("input.ts", "output.ts")
"""

from collections.abc import Iterable, Iterator
from typing import BinaryIO

from .constants import PAYLOAD_OFFSET, PAYLOAD_SIZE
from .debug import debug
from .exceptions import SameFileError
from .header import build_header
from .models import Entry, WriteStats
from .packet import Packet, PacketKind, iter_packets
from .utils import PathOrStream, is_path, open_output, open_stream, read_payload_source, same_file
from .validation import require_valid_entry_name


def frame_entry(entry: Entry) -> bytes:
    """Header followed by the entry data, as split across packets."""
    return build_header(entry.name, len(entry.data)) + entry.data


def packet_count(entry: Entry) -> int:
    """Number of tagged packets an entry occupies."""
    return -(-len(frame_entry(entry)) // PAYLOAD_SIZE)


def packetize(entry: Entry) -> Iterator[Packet]:
    """
    Split a framed entry into tagged packets.

    The first packet is tagged "file", the rest "data". Each payload region
    is filled in order; the last packet is zero-padded if the entry does
    not fill it.
    """
    framed = frame_entry(entry)
    kind = PacketKind.FILE
    for start in range(0, len(framed), PAYLOAD_SIZE):
        chunk = framed[start : start + PAYLOAD_SIZE]
        packet = Packet(kind)
        packet[PAYLOAD_OFFSET : PAYLOAD_OFFSET + len(chunk)] = chunk
        yield packet
        kind = PacketKind.DATA


class TSWriter:
    """Embeds named entries into a transport stream."""

    def __init__(self):
        self._entries: list[Entry] = []

    @property
    def entries(self) -> tuple[Entry, ...]:
        """Registered entries, in embedding order."""
        return tuple(self._entries)

    def append_entry(self, name: str, data) -> Entry:
        """
        Register an entry to embed on the next process() call.

        Args:
            name: Entry name
            data: bytes-like object, path to a file, or binary file-like object

        Returns:
            The registered Entry

        Raises:
            EntryNameError: Name cannot be embedded
            PayloadSourceError: Data source cannot be opened or read
        """
        require_valid_entry_name(name)
        entry = Entry(name=name, data=read_payload_source(data))
        self._entries.append(entry)

        debug.print(f"Registered entry '{name}': {len(entry.data)} bytes")
        return entry

    def append_file(self, name: str, path) -> Entry:
        """Register the contents of the file at `path` under `name`."""
        return self.append_entry(name, path)

    def append_data(self, name: str, data: bytes) -> Entry:
        """Register in-memory bytes under `name`."""
        return self.append_entry(name, bytes(data))

    @debug.time
    def process(self, input: PathOrStream, output: PathOrStream) -> WriteStats:
        """
        Copy `input` to `output` and append all registered entries.

        Args:
            input: Path or readable binary stream of the original .ts file
            output: Path or writable binary stream for the result

        Returns:
            WriteStats

        Raises:
            BadSyncError, ShortReadError: Input is not a valid packet stream
            ShortWriteError: Output did not accept a full packet
            SameFileError: `output` is the same file as `input`

        An output path is only replaced once the whole pass succeeds.
        """
        stats = WriteStats()

        if is_path(input) and is_path(output) and same_file(input, output):
            raise SameFileError(str(output))

        with open_stream(input, "rb") as infile, open_output(output) as outfile:
            stats.passthrough_packets = self._copy_packets(infile, outfile)

            for entry in self._entries:
                written = self._write_entry(entry, outfile)
                stats.embedded_packets += written
                stats.entries += 1

        debug.print(
            f"Wrote {stats.passthrough_packets} passthrough packets, "
            f"{stats.entries} entries in {stats.embedded_packets} packets"
        )
        return stats

    @staticmethod
    def _copy_packets(infile: BinaryIO, outfile: BinaryIO) -> int:
        count = 0
        for packet in iter_packets(infile):
            packet.write(outfile)
            count += 1
        return count

    @staticmethod
    def _write_entry(entry: Entry, outfile: BinaryIO) -> int:
        count = 0
        for packet in packetize(entry):
            packet.write(outfile)
            count += 1

        debug.print(f"Embedded entry '{entry.name}': {len(entry.data)} bytes, {count} packets")
        return count


def embed_entries(
    input: PathOrStream,
    output: PathOrStream,
    entries: dict[str, bytes] | Iterable[tuple[str, bytes]],
) -> WriteStats:
    """
    Embed entries into a transport stream in one call.

    Args:
        input: Original .ts path or stream
        output: Output path or stream
        entries: Mapping or (name, data) pairs; data may be any source
            accepted by TSWriter.append_entry

    Returns:
        WriteStats
    """
    writer = TSWriter()
    items = entries.items() if isinstance(entries, dict) else entries
    for name, data in items:
        writer.append_entry(name, data)
    return writer.process(input, output)
