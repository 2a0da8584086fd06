"""
Info command - display VGM or NSF file information.
"""

from pathlib import Path

import typer
from rich.console import Console

from cli.display.tables import display_decode_stats, display_nsf_info, display_vgm_info

console = Console()
app = typer.Typer()


@app.command()
def info(
    file: Path = typer.Argument(..., help="VGM or NSF file to inspect"),
    no_pcm: bool = typer.Option(False, "--no-pcm", help="Skip PCM data blocks when decoding"),
) -> None:
    """
    Show header, metadata and command stream statistics.

    Examples:

        vgm2nsf info song.vgm

        vgm2nsf info song.nsf
    """
    from vgm2nsf.errors import ParseError
    from vgm2nsf.formats.nsf.reader import read_nsf_header
    from vgm2nsf.formats.vgm.reader import VGMReader

    if not file.exists():
        console.print(f"[red]Error: File not found: {file}[/red]")
        raise typer.Exit(1)

    with open(file, "rb") as f:
        data = f.read()

    try:
        if file.suffix.lower() == ".nsf":
            display_nsf_info(read_nsf_header(data), len(data))
            return

        reader = VGMReader()
        song = reader.parse_bytes(data)
    except ParseError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"[bold]File:[/bold] {file}")
    display_vgm_info(song)
    display_decode_stats(reader.decode_events(song, enable_pcm=not no_pcm))


if __name__ == "__main__":
    app()
