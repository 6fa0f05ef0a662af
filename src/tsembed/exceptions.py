"""
TSEmbed Exceptions

Custom exception classes for clear error handling across the library and CLI.
"""


class TSEmbedError(Exception):
    """Base exception for all TSEmbed errors."""

    pass


# ============================================================================
# TRANSPORT STREAM ERRORS
# ============================================================================


class TransportStreamError(TSEmbedError):
    """Base class for transport stream packet I/O errors."""

    pass


class BadSyncError(TransportStreamError):
    """Packet does not start with the 'G' sync byte."""

    def __init__(self, offset: int | None = None):
        self.offset = offset
        message = "bad packet sync while reading transport stream (.ts) packet"
        if offset is not None:
            message += f" at offset {offset:,}"
        super().__init__(message)


class ShortReadError(TransportStreamError):
    """Stream ended in the middle of a packet."""

    def __init__(self, got: int, expected: int):
        self.got = got
        self.expected = expected
        super().__init__(
            f"short read while reading transport stream (.ts) packet "
            f"({got} of {expected} bytes)"
        )


class ShortWriteError(TransportStreamError):
    """Fewer bytes than a full packet were written."""

    def __init__(self, written: int, expected: int):
        self.written = written
        self.expected = expected
        super().__init__(
            f"short write while writing transport stream (.ts) packet "
            f"({written} of {expected} bytes)"
        )


# ============================================================================
# PAYLOAD ERRORS
# ============================================================================


class PayloadError(TSEmbedError):
    """Base class for payload errors."""

    pass


class PayloadSourceError(PayloadError):
    """Payload source could not be opened or read."""

    def __init__(self, source: str, reason: str = ""):
        self.source = source
        self.reason = reason
        message = f"unable to open data source: {source}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


# ============================================================================
# VALIDATION ERRORS
# ============================================================================


class ValidationError(TSEmbedError):
    """Base class for validation errors."""

    pass


class EntryNameError(ValidationError):
    """Entry name cannot be embedded."""

    pass


class CarrierValidationError(ValidationError):
    """Carrier is not a structurally valid transport stream."""

    pass


class SameFileError(ValidationError):
    """Output path names the input file."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"output would overwrite the input file: {path}")
