"""
TSEmbed Data Models

Dataclasses for entries, parsed headers, and the statistics returned by
stream passes.
"""

from dataclasses import dataclass, field

from .constants import PACKET_SIZE


@dataclass
class Entry:
    """A named payload registered with the writer."""
    name: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass
class EntryHeader:
    """Header parsed from the front of an entry's byte stream."""
    data_size: int
    filename: str


@dataclass(frozen=True)
class RecoveredEntry:
    """Entry recovered from a transport stream."""
    name: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass
class WriteStats:
    """Result of a writer pass."""
    passthrough_packets: int = 0
    embedded_packets: int = 0
    entries: int = 0

    @property
    def total_packets(self) -> int:
        """Packets written to the output stream."""
        return self.passthrough_packets + self.embedded_packets

    @property
    def output_size(self) -> int:
        return self.total_packets * PACKET_SIZE


@dataclass
class ReadStats:
    """Result of a reader pass."""
    total_packets: int = 0
    passthrough_packets: int = 0
    file_packets: int = 0
    data_packets: int = 0
    entries: int = 0
    discarded_entries: int = 0

    @property
    def tagged_packets(self) -> int:
        return self.file_packets + self.data_packets


@dataclass
class StreamInfo:
    """Summary of a transport stream and the entries embedded in it."""
    stats: ReadStats
    entries: list[RecoveredEntry] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "packets": {
                "total": self.stats.total_packets,
                "passthrough": self.stats.passthrough_packets,
                "file": self.stats.file_packets,
                "data": self.stats.data_packets,
            },
            "entries": [{"name": e.name, "size": e.size} for e in self.entries],
            "discarded_entries": self.stats.discarded_entries,
        }


@dataclass
class ValidationResult:
    """Result of input validation."""
    is_valid: bool
    error_message: str = ""
    details: dict = field(default_factory=dict)

    @classmethod
    def ok(cls, **details) -> 'ValidationResult':
        """Create a successful validation result."""
        return cls(is_valid=True, details=details)

    @classmethod
    def error(cls, message: str, **details) -> 'ValidationResult':
        """Create a failed validation result."""
        return cls(is_valid=False, error_message=message, details=details)
