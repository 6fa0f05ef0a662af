"""
TSEmbed Reader

Recovers named entries from a transport stream written by TSWriter.

Untagged packets are skipped. Payload bytes of tagged packets are collected
into an AssemblyState until the entry header can be parsed and the announced
number of data bytes has arrived; the entry is then emitted and the state is
reset for the next one. A "file" packet always starts a new entry,
discarding any unfinished one.

Example:
    reader = TSReader()
    reader.load("output.ts")
    for entry in reader.entries():
        print(entry.name, len(entry.data))
"""

from dataclasses import dataclass, field

from .debug import debug
from .header import HeaderStatus, parse_header
from .models import EntryHeader, ReadStats, RecoveredEntry, StreamInfo
from .packet import Packet, PacketKind, iter_packets
from .utils import PathOrStream, open_stream


@dataclass
class AssemblyState:
    """Accumulator carried from packet to packet while assembling an entry."""

    buffer: bytearray = field(default_factory=bytearray)
    header: EntryHeader | None = None
    corrupt: bool = False  # Header was unparseable; skip until next "file"
    discarded: int = 0

    @property
    def in_progress(self) -> bool:
        """True while an unfinished entry is being assembled."""
        return bool(self.buffer) or self.header is not None

    def reset(self) -> None:
        self.buffer.clear()
        self.header = None
        self.corrupt = False


def feed(state: AssemblyState, packet: Packet) -> RecoveredEntry | None:
    """
    Process one packet.

    Args:
        state: Assembly state, updated in place
        packet: Next packet from the stream

    Returns:
        The completed entry if this packet finished one, else None
    """
    kind = packet.classify()

    if kind is PacketKind.UNKNOWN:
        return None

    if kind is PacketKind.FILE:
        if state.in_progress:
            debug.packet(packet.raw, "New entry started before previous one completed, discarding it")
            state.discarded += 1
        state.reset()
    elif kind is PacketKind.DATA:
        if state.corrupt:
            return None
    else:
        raise ValueError(f"Unhandled packet kind: {kind}")

    state.buffer += packet.payload

    if state.header is None:
        result = parse_header(state.buffer)
        if result.status is HeaderStatus.INVALID:
            debug.packet(packet.raw, "Unparseable entry header, skipping entry")
            state.discarded += 1
            state.reset()
            state.corrupt = True
            return None
        if result.status is HeaderStatus.INCOMPLETE:
            return None
        state.header = result.header
        debug.print(f"Entry header: name='{state.header.filename}', size={state.header.data_size}")

    if len(state.buffer) < state.header.data_size:
        return None

    entry = RecoveredEntry(
        name=state.header.filename,
        data=bytes(state.buffer[: state.header.data_size]),
    )
    state.reset()
    return entry


class TSReader:
    """Collects entries embedded in transport streams."""

    def __init__(self):
        self._entries: list[RecoveredEntry] = []

    @debug.time
    def load(self, input: PathOrStream) -> ReadStats:
        """
        Read a transport stream and collect every complete entry in it.

        Entries are appended to those found by earlier load() calls. An
        entry cut off by the end of the stream is dropped without error.

        Args:
            input: Path or readable binary stream

        Returns:
            ReadStats for this stream

        Raises:
            BadSyncError, ShortReadError: Input is not a valid packet stream
        """
        stats = ReadStats()
        state = AssemblyState()
        found: list[RecoveredEntry] = []

        with open_stream(input, "rb") as infile:
            for packet in iter_packets(infile):
                stats.total_packets += 1
                kind = packet.classify()
                if kind is PacketKind.FILE:
                    stats.file_packets += 1
                elif kind is PacketKind.DATA:
                    stats.data_packets += 1
                else:
                    stats.passthrough_packets += 1

                entry = feed(state, packet)
                if entry is not None:
                    debug.print(f"Recovered entry '{entry.name}': {entry.size} bytes")
                    found.append(entry)

        if state.in_progress:
            debug.print("Stream ended inside an entry, dropping it", "WARN")
            state.discarded += 1

        self._entries.extend(found)
        stats.entries = len(found)
        stats.discarded_entries = state.discarded
        return stats

    def entries(self) -> list[RecoveredEntry]:
        """Entries recovered so far, in completion order."""
        return list(self._entries)


def extract_entries(input: PathOrStream) -> list[RecoveredEntry]:
    """Recover all entries from a transport stream."""
    reader = TSReader()
    reader.load(input)
    return reader.entries()


def inspect_stream(input: PathOrStream) -> StreamInfo:
    """Count packets by kind and list the entries embedded in a stream."""
    reader = TSReader()
    stats = reader.load(input)
    return StreamInfo(stats=stats, entries=reader.entries())
