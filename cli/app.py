"""
vgm2nsf - Convert SN76489 VGM files to NSF.

A CLI tool for converting and inspecting VGM music logs.
"""

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from cli.commands.convert import convert
from cli.commands.info import info
from cli.commands.events import events
from cli.commands.dump import dump
from vgm2nsf import __version__

console = Console()

# Main app
app = typer.Typer(
    name="vgm2nsf",
    help="Convert SN76489 VGM files to NES Sound Format (NSF).",
    add_completion=False,
    rich_markup_mode="rich",
)

# Add commands directly
app.command(name="convert")(convert)
app.command(name="info")(info)
app.command(name="events")(events)
app.command(name="dump")(dump)


def setup_logging(verbose: bool) -> None:
    """Route library logging through Rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]vgm2nsf[/bold] version {__version__}")
    console.print("[dim]SN76489 VGM to NES Sound Format converter[/dim]")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version_flag: bool = typer.Option(False, "--version", "-V", help="Show version"),
    debug: bool = typer.Option(False, "--debug", help="Show library debug logging"),
) -> None:
    """
    vgm2nsf - Convert Master System / Game Gear music to NSF.

    [bold]Quick Start:[/bold]

        vgm2nsf convert song.vgm              # Writes song.nsf
        vgm2nsf info song.vgm                 # Header, GD3 tag, stream stats

    [bold]Analysis Commands:[/bold]

        vgm2nsf events song.vgm               # Decoded event timeline
        vgm2nsf dump song.nsf                 # Annotated hex dump

    Use --help with any command for more details.
    """
    setup_logging(debug)

    if version_flag:
        version()
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


def run() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run()
