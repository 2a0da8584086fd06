"""
Rich table displays for VGM and NSF information.
"""

from collections import Counter

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from cli.display.formatters import format_clock, format_offset, format_samples
from vgm2nsf.converters.vgm_to_nsf import ConversionResult
from vgm2nsf.formats.nsf.reader import NSFHeader
from vgm2nsf.formats.vgm.decoder import DecodeResult
from vgm2nsf.models.song import ParsedSong
from vgm2nsf.models.track import NesChannel

console = Console()


def display_vgm_info(song: ParsedSong) -> None:
    """Display VGM header and GD3 metadata with Rich formatting."""
    header = song.header

    header_content = f"""[bold]Version:[/bold] {header.version_string}
[bold]File Size:[/bold] {song.size} bytes
[bold]SN76489 Clock:[/bold] {format_clock(header.sn76489_clock)}
[bold]YM2413 Clock:[/bold] {format_clock(header.ym2413_clock)}
[bold]Length:[/bold] {format_samples(header.total_samples)}
[bold]Loop:[/bold] {format_offset(header.absolute_loop_offset)} ({header.loop_samples} samples)
[bold]Data Offset:[/bold] 0x{header.data_offset:X}
[bold]GD3 Offset:[/bold] {format_offset(header.absolute_gd3_offset)}"""

    console.print(
        Panel(
            header_content,
            title="[bold blue]VGM Header[/bold blue]",
            border_style="blue",
            expand=False,
        )
    )

    meta = song.metadata
    if meta.is_empty:
        meta_content = "[dim]No GD3 metadata[/dim]"
    else:
        meta_content = f"""[bold]Track:[/bold] {meta.track_name or "N/A"}
[bold]Game:[/bold] {meta.game_name or "N/A"}
[bold]System:[/bold] {meta.system_name or "N/A"}
[bold]Author:[/bold] {meta.author or "N/A"}"""

    console.print(
        Panel(
            meta_content, title="[bold cyan]GD3 Tag[/bold cyan]", border_style="cyan", expand=False
        )
    )

    for warning in song.warnings:
        console.print(f"[yellow]Warning: {warning}[/yellow]")


def display_decode_stats(result: DecodeResult) -> None:
    """Display command stream statistics."""
    counts = Counter(event.type.value for event in result.events)

    table = Table(
        title="Command Stream", box=box.ROUNDED, show_header=True, header_style="bold magenta"
    )
    table.add_column("Property", style="cyan", width=22)
    table.add_column("Value", width=24)

    status = "[green]Complete[/green]" if result.ok else "[yellow]Incomplete[/yellow]"
    table.add_row("Status", status)
    table.add_row("Events", str(len(result.events)))
    for name, count in sorted(counts.items()):
        table.add_row(f"  {name}", str(count))
    table.add_row("Data blocks", str(result.data_blocks))
    table.add_row("Skipped opcodes", str(result.skipped_opcodes))
    table.add_row("Decoded length", format_samples(result.total_samples))
    if result.truncated:
        table.add_row("Truncated", "[red]yes[/red]")
    if result.capped:
        table.add_row("Event cap reached", "[yellow]yes[/yellow]")

    console.print(table)


def display_conversion_summary(song: ParsedSong, result: ConversionResult) -> None:
    """Display per-channel results of a conversion."""
    track = result.track

    table = Table(
        title="NES Channels", box=box.ROUNDED, show_header=True, header_style="bold green"
    )
    table.add_column("Channel", style="cyan", width=8)
    table.add_column("Entries", width=8)
    table.add_column("First", width=10)
    table.add_column("Last", width=10)

    for channel in NesChannel:
        entries = track.channel(channel)
        first = str(entries[0].sample_index) if entries else "-"
        last = str(entries[-1].sample_index) if entries else "-"
        table.add_row(channel.value, str(len(entries)), first, last)

    console.print(table)

    if track.loop_point is not None:
        loop = track.loop_point
        console.print(
            f"[bold]Loop:[/bold] sample {loop.offset} "
            f"(correlation {loop.correlation:.3f}, {loop.matching_points} matches)"
        )
    else:
        console.print("[dim]No loop point detected[/dim]")

    if track.unmapped:
        console.print(f"[yellow]Unmapped events: {len(track.unmapped)}[/yellow]")


def display_nsf_info(header: NSFHeader, size: int) -> None:
    """Display NSF header fields."""
    status = "[green]Valid[/green]" if header.is_valid() else "[red]Invalid[/red]"

    content = f"""[bold]Status:[/bold] {status}
[bold]Version:[/bold] {header.version}
[bold]Songs:[/bold] {header.total_songs} (start {header.starting_song})
[bold]Load/Init/Play:[/bold] ${header.load_address:04X} / ${header.init_address:04X} / ${header.play_address:04X}
[bold]Name:[/bold] {header.name}
[bold]Artist:[/bold] {header.artist}
[bold]Copyright:[/bold] {header.copyright}
[bold]Speed:[/bold] NTSC {header.ntsc_speed} us / PAL {header.pal_speed} us
[bold]File Size:[/bold] {size} bytes"""

    console.print(
        Panel(content, title="[bold blue]NSF Header[/bold blue]", border_style="blue", expand=False)
    )
