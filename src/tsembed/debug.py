"""
TSEmbed Debugging Utilities

Debug output on stderr, packet dumps, and timing for stream passes.
Disabled by default; enable with debug.enable(True), the CLI --debug flag,
or the TSEMBED_DEBUG environment variable.
"""

import sys
import time
from collections.abc import Callable
from datetime import datetime
from functools import wraps

from .constants import PACKET_SIZE, TAG_SIZE, debug_from_environment

DEBUG_ENABLED = debug_from_environment()


def debug_print(message: str, level: str = "INFO") -> None:
    """Print a timestamped message to stderr if debugging is enabled."""
    if DEBUG_ENABLED:
        timestamp = datetime.now().strftime("%H:%M:%S.%f")[:-3]
        print(f"[{timestamp}] [{level}] {message}", file=sys.stderr)


def hexdump(data: bytes, offset: int = 0, length: int = 64) -> str:
    """Hex + ASCII dump, 16 bytes per line."""
    if not data:
        return "Empty"

    lines = []
    shown = data[:length]
    for i in range(0, len(shown), 16):
        row = shown[i : i + 16]
        hex_part = " ".join(f"{b:02x}" for b in row).ljust(47)
        text_part = "".join(chr(b) if 32 <= b < 127 else "." for b in row)
        lines.append(f"{offset + i:08x}: {hex_part}  {text_part}")

    if len(data) > length:
        lines.append(f"... ({len(data) - length} more bytes)")
    return "\n".join(lines)


def packet_dump(raw: bytes, header_bytes: int = 32) -> str:
    """
    Describe a packet: its tag region, then the start of its payload.

    Args:
        raw: Packet bytes (normally 188)
        header_bytes: Payload bytes to include after the tag
    """
    tag = bytes(raw[:TAG_SIZE])
    lines = [f"tag {tag.hex(' ')} ({len(raw)}/{PACKET_SIZE} bytes)"]
    lines.append(hexdump(bytes(raw[TAG_SIZE:]), offset=TAG_SIZE, length=header_bytes))
    return "\n".join(lines)


class Debug:
    """Switchable debug facility shared by all modules."""

    def enable(self, enable: bool = True) -> None:
        global DEBUG_ENABLED
        DEBUG_ENABLED = enable

    def print(self, message: str, level: str = "INFO") -> None:
        debug_print(message, level)

    def packet(self, raw: bytes, message: str, level: str = "WARN") -> None:
        """Print a message followed by a dump of the offending packet."""
        if DEBUG_ENABLED:
            debug_print(f"{message}\n{packet_dump(raw)}", level)

    def time(self, func: Callable) -> Callable:
        """Decorator reporting how long a stream pass took."""

        @wraps(func)
        def wrapper(*args, **kwargs):
            if not DEBUG_ENABLED:
                return func(*args, **kwargs)
            start = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                debug_print(f"{func.__qualname__} took {time.perf_counter() - start:.6f}s", "PERF")

        return wrapper

    def validate(self, condition: bool, message: str) -> None:
        """Internal consistency check."""
        if not condition:
            raise AssertionError(f"Validation failed: {message}")


debug = Debug()
