"""
lmms2midi - Export LMMS projects to Standard MIDI Files.

A CLI tool for converting and checking LMMS song projects.
"""

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from cli.commands.info import info
from cli.commands.convert import convert
from cli.commands.check import check
from lmms2midi import __version__

console = Console()

# Main app
app = typer.Typer(
    name="lmms2midi",
    help="Export LMMS projects to Standard MIDI Files.",
    add_completion=False,
    rich_markup_mode="rich",
)

# Add commands directly
app.command(name="info")(info)
app.command(name="convert")(convert)
app.command(name="check")(check)


def setup_logging(debug: bool) -> None:
    """Route library log records through rich."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
    )


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]lmms2midi[/bold] version {__version__}")
    console.print("[dim]LMMS project to Standard MIDI File exporter[/dim]")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version_flag: bool = typer.Option(False, "--version", "-V", help="Show version"),
    debug: bool = typer.Option(False, "--debug", help="Show debug log output"),
) -> None:
    """
    lmms2midi - Export LMMS projects to MIDI.

    [bold]Quick Start:[/bold]

        lmms2midi info song.mmpz              # Tracks, tempo and loop range
        lmms2midi convert song.mmpz           # Write song.mid
        lmms2midi convert song.mmpz -l marker # Add loopStart/loopEnd markers
        lmms2midi check song.mmpz             # List export warnings

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
