"""
TSEmbed - Main Entry Point

Usage:
    python -m tsembed --help
    tsembed --help  (if installed via pip)
"""

import sys

from .cli import main

if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(130)
