"""
Dump command - annotated hex dump of a VGM or NSF file.
"""

from pathlib import Path

import typer
from rich.console import Console

from cli.display.hex_view import NSF_REGIONS, VGM_REGIONS, display_hex_dump

console = Console()
app = typer.Typer()


def parse_int(value: str) -> int:
    """Parse a decimal or 0x-prefixed offset."""
    return int(value, 0)


@app.command()
def dump(
    file: Path = typer.Argument(..., help="VGM or NSF file"),
    start: str = typer.Option("0", "--start", "-s", help="Start offset (e.g. 0x40)"),
    lines: int = typer.Option(8, "--lines", "-l", help="Number of 16-byte lines"),
) -> None:
    """
    Show a hex dump with the known header fields colored.

    Examples:

        vgm2nsf dump song.vgm

        vgm2nsf dump song.nsf --lines 16

        vgm2nsf dump song.vgm --start 0x40
    """
    if not file.exists():
        console.print(f"[red]Error: File not found: {file}[/red]")
        raise typer.Exit(1)

    try:
        start_offset = parse_int(start)
    except ValueError:
        console.print(f"[red]Error: Invalid offset: {start}[/red]")
        raise typer.Exit(1)

    with open(file, "rb") as f:
        data = f.read()

    if data[:4] == b"Vgm ":
        regions, kind = VGM_REGIONS, "VGM"
    elif data[:5] == b"NESM\x1a":
        regions, kind = NSF_REGIONS, "NSF"
    else:
        regions, kind = [], "Unknown"

    display_hex_dump(
        data,
        title=f"{kind} Hex Dump - {file.name}",
        start_offset=start_offset,
        max_lines=lines,
        regions=regions,
    )


if __name__ == "__main__":
    app()
