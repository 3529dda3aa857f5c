"""
tokenforge CLI utilities.

Shared helpers used across CLI modules.
"""

import logging
import platform
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from tokenforge.core.manifest import ForgeManifest, find_manifest, load_manifest
from tokenforge.events import LEVEL_DONE, LEVEL_ERROR, LEVEL_WARN, SynthesisEvent

console = Console()
err_console = Console(stderr=True)

_LEVEL_STYLES = {
    LEVEL_DONE: "green",
    LEVEL_WARN: "yellow",
    LEVEL_ERROR: "red",
}


def get_version() -> str:
    """Get tokenforge version from package metadata."""
    from tokenforge import __version__

    return __version__


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"tokenforge version {get_version()}")
        typer.echo("")
        typer.echo("Environment:")
        typer.echo(f"  Python:        {platform.python_implementation()} {platform.python_version()}")
        typer.echo(f"  Platform:      {platform.system()} {platform.release()}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route library logging through rich. Debug output only with --verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=verbose, markup=False)],
        force=True,
    )
    # Events are printed by the CLI itself
    logging.getLogger("tokenforge.events").setLevel(logging.DEBUG if verbose else logging.CRITICAL)


def print_event(event: SynthesisEvent) -> None:
    """Render one synthesis event for the terminal."""
    if event.kind == "log":
        style = _LEVEL_STYLES.get(event.level)
        message = escape(event.message)
        console.print(f"[{style}]{message}[/{style}]" if style else message)
    elif event.kind == "error":
        err_console.print(f"[red]Error: {escape(event.message)}[/red]")
    elif event.kind == "progress":
        console.print(f"[dim]{event.percent:3.0f}% {event.message}[/dim]")


def resolve_manifest(manifest: Path | None, root: Path | None = None) -> ForgeManifest:
    """Load ``--manifest`` if given, else tokenforge.toml from ``root``, else defaults."""
    if manifest is not None:
        return load_manifest(manifest)
    found = find_manifest(root or Path.cwd())
    return load_manifest(found) if found else ForgeManifest()
