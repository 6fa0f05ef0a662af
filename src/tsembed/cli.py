"""
TSEmbed CLI Module

Command line interface built with Click:

    tsembed                      <- Main entry point
    ├── embed                    <- Append files to a .ts stream
    ├── extract                  <- Write embedded entries back to disk
    ├── info                     <- Packet counts and embedded entries
    └── check                    <- Structural validation of a .ts file

Every command supports --json for machine-readable output:

    tsembed --json info recording.ts | jq '.entries[].name'
"""

import json
from pathlib import Path

import click

from .constants import DEFAULT_EXTRACT_DIR, EMBED_OUTPUT_SUFFIX, __version__
from .debug import debug
from .exceptions import TSEmbedError
from .utils import format_file_size, same_file
from .validation import safe_output_name, validate_carrier

# Click context settings - these apply to all commands
CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])


def _fail(ctx, message: str) -> None:
    """Report an error in the active output mode and exit with status 1."""
    if ctx.obj.get("json"):
        click.echo(json.dumps({"status": "error", "error": message}, indent=2))
    else:
        click.echo(f"✗ {message}", err=True)
    raise SystemExit(1)


def _parse_entry_spec(spec: str) -> tuple[str, Path]:
    """
    Split a NAME=PATH entry spec.

    A bare PATH uses the file's base name. An existing path is always taken
    as a bare PATH, even if it contains '='.
    """
    if "=" in spec and not Path(spec).exists():
        name, _, path = spec.partition("=")
        if name and path:
            return name, Path(path)
    path = Path(spec)
    return path.name, path


# =============================================================================
# ROOT GROUP
# =============================================================================


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, "-v", "--version")
@click.option("--json", "json_output", is_flag=True, help="Output results as JSON")
@click.option("--debug", "debug_output", is_flag=True, help="Print debug output to stderr")
@click.pass_context
def cli(ctx, json_output, debug_output):
    """
    TSEmbed - hide named files in MPEG transport streams.

    Entries are appended after the original packets as tagged packets,
    so players and TS tools still see a valid stream.
    """
    ctx.ensure_object(dict)
    ctx.obj["json"] = json_output
    if debug_output:
        debug.enable(True)


# =============================================================================
# EMBED
# =============================================================================


@cli.command()
@click.argument("carrier", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "-f",
    "--file",
    "entry_specs",
    multiple=True,
    required=True,
    help="File to embed, as PATH or NAME=PATH (repeatable)",
)
@click.option("-o", "--output", type=click.Path(dir_okay=False), help="Output .ts path")
@click.option("--dry-run", is_flag=True, help="Show what would be embedded without writing")
@click.pass_context
def embed(ctx, carrier, entry_specs, output, dry_run):
    """
    Embed one or more files into a transport stream.

    Examples:

        tsembed embed input.ts -f mark.bin -o output.ts

        tsembed embed input.ts -f payload=data/mark.bin -f notes.txt
    """
    from .writer import TSWriter, packet_count

    output = output or str(Path(carrier).with_name(f"{Path(carrier).stem}{EMBED_OUTPUT_SUFFIX}.ts"))
    if same_file(carrier, output):
        _fail(ctx, f"Output {output} is the carrier file; choose a different --output")

    writer = TSWriter()
    try:
        for spec in entry_specs:
            name, path = _parse_entry_spec(spec)
            writer.append_file(name, path)
    except TSEmbedError as e:
        _fail(ctx, str(e))

    if dry_run:
        entries = [
            {"name": e.name, "size": e.size, "packets": packet_count(e)}
            for e in writer.entries
        ]
        if ctx.obj.get("json"):
            click.echo(json.dumps({"carrier": carrier, "output": output, "entries": entries}, indent=2))
        else:
            click.echo(f"Would embed into {output}:")
            for item in entries:
                click.echo(
                    f"  {item['name']}: {format_file_size(item['size'])}, {item['packets']} packets"
                )
        return

    try:
        stats = writer.process(carrier, output)
    except TSEmbedError as e:
        _fail(ctx, f"Embedding failed: {e}")

    if ctx.obj.get("json"):
        click.echo(
            json.dumps(
                {
                    "status": "success",
                    "carrier": carrier,
                    "output": output,
                    "entries": stats.entries,
                    "passthrough_packets": stats.passthrough_packets,
                    "embedded_packets": stats.embedded_packets,
                },
                indent=2,
            )
        )
    else:
        click.echo(f"✓ Embedded {stats.entries} entries into {output}")
        click.echo(f"  Original packets: {stats.passthrough_packets:,}")
        click.echo(f"  Added packets: {stats.embedded_packets:,}")


# =============================================================================
# EXTRACT
# =============================================================================


@cli.command()
@click.argument("stream", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "-o",
    "--output-dir",
    type=click.Path(file_okay=False),
    default=DEFAULT_EXTRACT_DIR,
    show_default=True,
    help="Directory for extracted files",
)
@click.option("--force", is_flag=True, help="Overwrite existing files")
@click.option("--dry-run", is_flag=True, help="List entries without writing them")
@click.pass_context
def extract(ctx, stream, output_dir, force, dry_run):
    """
    Extract embedded entries from a transport stream.

    Entry names are reduced to bare file names before writing.
    """
    from .reader import extract_entries

    try:
        entries = extract_entries(stream)
    except TSEmbedError as e:
        _fail(ctx, f"Extraction failed: {e}")

    out_dir = Path(output_dir)
    targets = []
    used: set[str] = set()

    for entry in entries:
        base = safe_output_name(entry.name) or "entry"
        filename = base
        n = 1
        while filename in used:
            filename = f"{base}.{n}"
            n += 1
        used.add(filename)
        targets.append((entry, out_dir / filename))

    # Nothing is written if any target already exists
    if not dry_run and not force:
        existing = [str(target) for _, target in targets if target.exists()]
        if existing:
            _fail(ctx, f"{', '.join(existing)} exists (use --force to overwrite)")

    written = []
    for entry, target in targets:
        if not dry_run:
            out_dir.mkdir(parents=True, exist_ok=True)
            target.write_bytes(entry.data)
        written.append({"name": entry.name, "size": entry.size, "path": str(target)})

    if ctx.obj.get("json"):
        click.echo(json.dumps({"status": "success", "dry_run": dry_run, "entries": written}, indent=2))
        return

    if not written:
        click.echo("No embedded entries found")
        return

    verb = "Would write" if dry_run else "✓ Wrote"
    for item in written:
        click.echo(f"{verb} {item['path']} ({format_file_size(item['size'])})")


# =============================================================================
# INFO / CHECK
# =============================================================================


@cli.command()
@click.argument("stream", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def info(ctx, stream):
    """Show packet counts and embedded entries of a transport stream."""
    from .reader import inspect_stream

    try:
        stream_info = inspect_stream(stream)
    except TSEmbedError as e:
        _fail(ctx, str(e))

    if ctx.obj.get("json"):
        click.echo(json.dumps(stream_info.to_dict(), indent=2))
        return

    stats = stream_info.stats
    click.echo(f"Stream: {stream}")
    click.echo(f"  Packets: {stats.total_packets:,}")
    click.echo(f"  Passthrough: {stats.passthrough_packets:,}")
    click.echo(f"  Tagged: {stats.tagged_packets:,} ({stats.file_packets} file, {stats.data_packets} data)")
    if stats.discarded_entries:
        click.echo(f"  Incomplete entries: {stats.discarded_entries}")
    click.echo(f"Entries: {len(stream_info.entries)}")
    for entry in stream_info.entries:
        click.echo(f"  {entry.name} ({format_file_size(entry.size)})")


@cli.command()
@click.argument("stream", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def check(ctx, stream):
    """Check that a file is a structurally valid transport stream."""
    result = validate_carrier(stream)

    if ctx.obj.get("json"):
        click.echo(
            json.dumps(
                {"valid": result.is_valid, "error": result.error_message or None, **result.details},
                indent=2,
            )
        )
    elif result.is_valid:
        click.echo(f"✓ {stream}: {result.details['packets']:,} packets")
    else:
        click.echo(f"✗ {stream}: {result.error_message}", err=True)

    if not result.is_valid:
        raise SystemExit(1)


def main():
    """Entry point for CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
