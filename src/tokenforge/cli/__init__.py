"""
tokenforge CLI Package.

- synthesize.py: Full synthesis against the in-memory host
- tokens.py: DTCG transform and variant inspection
- utils.py: Shared utilities
"""

from typing import Annotated

import typer

from tokenforge.cli.synthesize import synthesize_command
from tokenforge.cli.tokens import transform_command, variants_command
from tokenforge.cli.utils import get_version, version_callback

app = typer.Typer(
    help="tokenforge - design-token and component synthesis",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            callback=version_callback,
            is_eager=True,
            help="Show version and environment information",
        ),
    ] = None,
) -> None:
    """tokenforge CLI main callback for global options."""
    pass


app.command(name="synthesize")(synthesize_command)
app.command(name="transform")(transform_command)
app.command(name="variants")(variants_command)


def main(argv: list[str] | None = None) -> None:
    app(args=argv, standalone_mode=True)


__all__ = [
    "app",
    "main",
    "get_version",
    "version_callback",
]
