#!/usr/bin/env python3
"""
File Embedding Example

This example demonstrates how to embed a file inside a transport stream
and recover it again using TSEmbed.
"""

from pathlib import Path

import tsembed


def main():
    carrier = Path("recording.ts")
    secret_file = Path("watermark.bin")

    # Check the carrier first
    check = tsembed.validate_carrier(carrier)
    if not check.is_valid:
        print(f"Error: {check.error_message}")
        return
    print(f"Carrier: {check.details['packets']:,} packets")

    # Embed the file
    print("\nEmbedding file...")
    writer = tsembed.TSWriter()
    writer.append_file(secret_file.name, secret_file)
    writer.append_data("created-by", b"example script")

    output_path = Path("recording_with_file.ts")
    stats = writer.process(carrier, output_path)
    print(f"Added {stats.embedded_packets} packets, saved to: {output_path}")

    # Extract the file again
    print("\nExtracting file...")
    for entry in tsembed.extract_entries(output_path):
        name = tsembed.safe_output_name(entry.name)
        if name is None:
            continue
        extracted_path = Path(f"extracted_{name}")
        extracted_path.write_bytes(entry.data)
        print(f"Extracted: {extracted_path} ({entry.size:,} bytes)")


if __name__ == "__main__":
    main()
