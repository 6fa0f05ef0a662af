"""
TSEmbed Constants and Configuration

Central location for the transport stream layout, the entry framing bytes,
and the limits used by validation and the CLI.
All version numbers, limits, and configuration values should be defined here.
"""

import os

# ============================================================================
# VERSION
# ============================================================================

__version__ = "1.0.0"

# ============================================================================
# TRANSPORT STREAM LAYOUT
# ============================================================================

# Standard MPEG transport stream packet length (protocol constant)
PACKET_SIZE = 188

# Every packet starts with 'G'
SYNC_BYTE = 0x47

# Tag region: 'G' + 3 marker bytes + "AWMK" + 4 byte kind
TAG_SIZE = 12
TAG_PREFIX = b"G\x1f\xff\x10AWMK"

KIND_FILE = b"file"
KIND_DATA = b"data"

# Payload region of a tagged packet: bytes [12, 188)
PAYLOAD_OFFSET = TAG_SIZE
PAYLOAD_SIZE = PACKET_SIZE - TAG_SIZE  # 176

# ============================================================================
# ENTRY FRAMING
# ============================================================================

# Header: "<decimal data size>:<name>\0"
HEADER_SEPARATOR = b":"
HEADER_TERMINATOR = b"\x00"

NAME_ENCODING = "utf-8"

# ============================================================================
# INPUT LIMITS
# ============================================================================

MAX_ENTRY_NAME_LENGTH = 255  # Encoded bytes

# ============================================================================
# CLI
# ============================================================================

# Default directory for `tsembed extract`
DEFAULT_EXTRACT_DIR = "."

# Suffix used by `tsembed embed` when no output path is given
EMBED_OUTPUT_SUFFIX = "_embedded"

# ============================================================================
# DEBUG CONFIGURATION
# ============================================================================

DEBUG_ENV_VAR = "TSEMBED_DEBUG"

_TRUTHY = {"1", "true", "yes", "on"}


def debug_from_environment() -> bool:
    """Check whether debug output was requested via the environment."""
    return os.environ.get(DEBUG_ENV_VAR, "").strip().lower() in _TRUTHY
