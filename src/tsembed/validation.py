"""
TSEmbed Input Validation

Validators for entry names, carrier streams, and recovered file names,
with clear error messages.
"""

from pathlib import Path, PurePosixPath, PureWindowsPath

from .constants import MAX_ENTRY_NAME_LENGTH, NAME_ENCODING, PACKET_SIZE, SYNC_BYTE
from .exceptions import CarrierValidationError, EntryNameError
from .models import ValidationResult


def validate_entry_name(name: str) -> ValidationResult:
    """
    Validate an entry name before embedding.

    Rules:
    - Non-empty string
    - No zero byte (it terminates the header)
    - Encodable, at most MAX_ENTRY_NAME_LENGTH bytes

    Args:
        name: Entry name

    Returns:
        ValidationResult
    """
    if not isinstance(name, str):
        return ValidationResult.error(f"Entry name must be a string, got {type(name).__name__}")

    if not name:
        return ValidationResult.error("Entry name is required")

    if "\x00" in name:
        return ValidationResult.error("Entry name cannot contain a zero byte")

    try:
        encoded = name.encode(NAME_ENCODING)
    except UnicodeEncodeError:
        return ValidationResult.error(f"Entry name is not valid {NAME_ENCODING}")

    if len(encoded) > MAX_ENTRY_NAME_LENGTH:
        return ValidationResult.error(
            f"Entry name too long ({len(encoded)} bytes). Maximum: {MAX_ENTRY_NAME_LENGTH} bytes"
        )

    return ValidationResult.ok(length=len(encoded))


def validate_carrier(carrier: str | Path | bytes) -> ValidationResult:
    """
    Check that a carrier is a structurally valid transport stream.

    The size must be a whole number of packets and every packet must start
    with the sync byte. Packet contents are not inspected further.

    Args:
        carrier: Path to a .ts file, or its contents

    Returns:
        ValidationResult with the packet count in details
    """
    if isinstance(carrier, (bytes, bytearray, memoryview)):
        data = bytes(carrier)
    else:
        try:
            data = Path(carrier).read_bytes()
        except OSError as e:
            return ValidationResult.error(f"Cannot read carrier: {e}")

    if len(data) % PACKET_SIZE:
        return ValidationResult.error(
            f"Carrier size ({len(data):,} bytes) is not a multiple of {PACKET_SIZE}",
            size=len(data),
        )

    for offset in range(0, len(data), PACKET_SIZE):
        if data[offset] != SYNC_BYTE:
            return ValidationResult.error(
                f"Bad packet sync at offset {offset:,}",
                offset=offset,
            )

    return ValidationResult.ok(packets=len(data) // PACKET_SIZE, size=len(data))


def safe_output_name(name: str) -> str | None:
    """
    Reduce a recovered entry name to a bare file name safe to write.

    Directory components are dropped. Returns None if nothing usable is left.
    """
    base = PurePosixPath(PureWindowsPath(name).name).name
    base = base.replace("\x00", "").strip()
    if base in ("", ".", ".."):
        return None
    return base


# ============================================================================
# REQUIRE VARIANTS (raise on failure)
# ============================================================================


def require_valid_entry_name(name: str) -> None:
    """Raise EntryNameError if the entry name is invalid."""
    result = validate_entry_name(name)
    if not result.is_valid:
        raise EntryNameError(result.error_message)


def require_valid_carrier(carrier: str | Path | bytes) -> None:
    """Raise CarrierValidationError if the carrier is not a valid stream."""
    result = validate_carrier(carrier)
    if not result.is_valid:
        raise CarrierValidationError(result.error_message)
