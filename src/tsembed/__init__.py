"""
TSEmbed - Named payloads in MPEG transport streams

Hides arbitrary named binary entries in a .ts file by appending tagged
188-byte packets after the original packets, and recovers them later.
The original packets are copied byte for byte, so the result is still a
structurally valid transport stream.

Embedding:
    from tsembed import TSWriter

    writer = TSWriter()
    writer.append_file("mark.bin", "payload.bin")
    writer.append_data("notes.txt", b"recorded 2020-03-01")
    writer.process("input.ts", "output.ts")

Extraction:
    from tsembed import TSReader

    reader = TSReader()
    reader.load("output.ts")
    for entry in reader.entries():
        print(entry.name, len(entry.data))

Debugging:
    from tsembed.debug import debug
    debug.enable(True)  # or set TSEMBED_DEBUG=1
"""

from .constants import __version__, PACKET_SIZE, PAYLOAD_SIZE, TAG_SIZE
from .models import (
    Entry,
    EntryHeader,
    RecoveredEntry,
    WriteStats,
    ReadStats,
    StreamInfo,
    ValidationResult,
)
from .exceptions import (
    TSEmbedError,
    TransportStreamError,
    BadSyncError,
    ShortReadError,
    ShortWriteError,
    PayloadError,
    PayloadSourceError,
    ValidationError,
    EntryNameError,
    CarrierValidationError,
    SameFileError,
)
from .packet import Packet, PacketKind, classify_tag, iter_packets, tag_bytes
from .header import HeaderParse, HeaderStatus, build_header, parse_header
from .writer import TSWriter, embed_entries, frame_entry, packet_count, packetize
from .reader import AssemblyState, TSReader, extract_entries, feed, inspect_stream
from .validation import (
    validate_entry_name,
    validate_carrier,
    safe_output_name,
    require_valid_entry_name,
    require_valid_carrier,
)

__all__ = [
    # Version
    "__version__",
    # Constants
    "PACKET_SIZE",
    "PAYLOAD_SIZE",
    "TAG_SIZE",
    # Models
    "Entry",
    "EntryHeader",
    "RecoveredEntry",
    "WriteStats",
    "ReadStats",
    "StreamInfo",
    "ValidationResult",
    # Exceptions
    "TSEmbedError",
    "TransportStreamError",
    "BadSyncError",
    "ShortReadError",
    "ShortWriteError",
    "PayloadError",
    "PayloadSourceError",
    "ValidationError",
    "EntryNameError",
    "CarrierValidationError",
    "SameFileError",
    # Packets
    "Packet",
    "PacketKind",
    "classify_tag",
    "iter_packets",
    "tag_bytes",
    # Header
    "HeaderParse",
    "HeaderStatus",
    "build_header",
    "parse_header",
    # Writer
    "TSWriter",
    "embed_entries",
    "frame_entry",
    "packet_count",
    "packetize",
    # Reader
    "AssemblyState",
    "TSReader",
    "extract_entries",
    "feed",
    "inspect_stream",
    # Validation
    "validate_entry_name",
    "validate_carrier",
    "safe_output_name",
    "require_valid_entry_name",
    "require_valid_carrier",
]
