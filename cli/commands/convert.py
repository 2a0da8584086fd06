"""
Convert command - VGM to NSF conversion.
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn

from cli.display.tables import display_conversion_summary

console = Console()
app = typer.Typer()


@app.command()
def convert(
    source: Path = typer.Argument(..., help="Source VGM file (.vgm)"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output file path"),
    no_noise: bool = typer.Option(False, "--no-noise", help="Drop the noise channel"),
    no_pcm: bool = typer.Option(False, "--no-pcm", help="Skip PCM data blocks"),
    no_loops: bool = typer.Option(False, "--no-loops", help="Skip loop detection"),
    loop_threshold: float = typer.Option(
        0.85, "--loop-threshold", "-t", min=0.5, max=1.0, help="Loop correlation threshold"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show detailed progress"),
) -> None:
    """
    Convert an SN76489 VGM file to NSF.

    Examples:

        vgm2nsf convert song.vgm

        vgm2nsf convert song.vgm -o out/song.nsf --no-pcm

        vgm2nsf convert song.vgm --loop-threshold 0.95
    """
    from vgm2nsf.converters.vgm_to_nsf import ConversionOptions, VGMToNSFConverter
    from vgm2nsf.errors import VGMError
    from vgm2nsf.formats.vgm.reader import VGMReader

    if not source.exists():
        console.print(f"[red]Error: Source file not found: {source}[/red]")
        raise typer.Exit(1)

    output_path = output or source.with_suffix(".nsf")
    options = ConversionOptions(
        preserve_noise_channel=not no_noise,
        enable_pcm=not no_pcm,
        detect_loops=not no_loops,
        loop_threshold=loop_threshold,
    )

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=not verbose,
    ) as progress:
        task = progress.add_task("Converting VGM to NSF...", total=None)

        try:
            song = VGMReader.read(source)
            result = VGMToNSFConverter(options).convert_detailed(song)
            result.nsf.write(output_path)

            progress.update(task, description="Done!")

        except VGMError as e:
            console.print(f"[red]Error: {e}[/red]")
            if verbose:
                console.print_exception()
            raise typer.Exit(1)

    console.print(f"[green]Converted:[/green] {source} -> {output_path}")
    console.print(f"[dim]Output size: {len(result.nsf)} bytes[/dim]")

    if verbose:
        display_conversion_summary(song, result)

    for warning in song.warnings:
        console.print(f"[yellow]Warning: {warning}[/yellow]")

    if result.track.has_information_loss:
        console.print()
        console.print("[yellow]IMPORTANT - Conversion Limitations:[/yellow]")
        console.print(
            f"[yellow]  - {len(result.track.unmapped)} event(s) have no NES channel "
            "(third SN76489 tone channel or YM2413)[/yellow]"
        )
        console.print("[yellow]  - Pitch is not frequency accurate[/yellow]")
        console.print()


if __name__ == "__main__":
    app()
