"""
Events command - decoded command stream timeline.
"""

from pathlib import Path
from typing import Optional

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from cli.display.formatters import noise_description, value_bar

console = Console()
app = typer.Typer()


def describe_event(event) -> str:
    """One-line description of a decoded event."""
    from vgm2nsf.models.events import (
        FmWriteEvent,
        NoiseEvent,
        PcmBlockEvent,
        ToneEvent,
    )

    if isinstance(event, ToneEvent):
        return (
            f"ch{event.channel} period={event.period:2d} "
            f"vol {value_bar(event.volume, max_value=3, width=6, show_percent=False)}"
        )
    if isinstance(event, NoiseEvent):
        return f"0x{event.register:02X} ({noise_description(event.register)})"
    if isinstance(event, FmWriteEvent):
        return f"reg=0x{event.register:02X} data=0x{event.data:02X}"
    if isinstance(event, PcmBlockEvent):
        return (
            f"type=0x{event.block_type:02X} {event.source_length} samples "
            f"-> {len(event.delta_encoded)} bytes"
        )
    return ""


@app.command()
def events(
    file: Path = typer.Argument(..., help="VGM file"),
    limit: int = typer.Option(50, "--limit", "-n", help="Maximum events to show (0 = all)"),
    event_type: Optional[str] = typer.Option(
        None, "--type", "-t", help="Only show one type (tone, noise, fm_write, pcm_block, end)"
    ),
    no_pcm: bool = typer.Option(False, "--no-pcm", help="Skip PCM data blocks"),
) -> None:
    """
    List decoded events in timeline order.

    Examples:

        vgm2nsf events song.vgm

        vgm2nsf events song.vgm --type noise --limit 0
    """
    from vgm2nsf.errors import ParseError
    from vgm2nsf.formats.vgm.reader import VGMReader
    from vgm2nsf.models.events import EventType

    if not file.exists():
        console.print(f"[red]Error: File not found: {file}[/red]")
        raise typer.Exit(1)

    wanted = None
    if event_type:
        try:
            wanted = EventType(event_type.lower())
        except ValueError:
            console.print(f"[red]Unknown event type: {event_type}[/red]")
            console.print("Available types: " + ", ".join(t.value for t in EventType))
            raise typer.Exit(1)

    try:
        song = VGMReader.read(file)
    except ParseError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    result = VGMReader.decode_events(song, enable_pcm=not no_pcm)
    selected = [e for e in result.events if wanted is None or e.type == wanted]
    shown = selected if limit == 0 else selected[:limit]

    table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
    table.add_column("#", style="dim", width=6)
    table.add_column("Sample", width=10)
    table.add_column("Type", style="cyan", width=10)
    table.add_column("Details", width=48)

    for index, event in enumerate(shown):
        table.add_row(str(index), str(event.sample_index), event.type.value, describe_event(event))

    console.print(table)
    console.print(f"[dim]Showing {len(shown)} of {len(selected)} events[/dim]")


if __name__ == "__main__":
    app()
