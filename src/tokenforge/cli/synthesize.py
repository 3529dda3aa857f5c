"""
Synthesis CLI command.

Runs the full pipeline against the in-memory host and writes the
resulting scene graph as JSON.
"""

from __future__ import annotations

import dataclasses
import json
from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from tokenforge.cli.utils import (
    configure_logging,
    console,
    err_console,
    print_event,
    resolve_manifest,
)
from tokenforge.core.errors import TokenforgeError
from tokenforge.core.payload import load_payload
from tokenforge.events import SynthesisEvents
from tokenforge.host.memory import InMemoryHost
from tokenforge.synth.pipeline import synthesize


def synthesize_command(
    payload: Annotated[
        Path | None,
        typer.Argument(help="Token payload (.json/.yaml). Defaults to the bundled tokens."),
    ] = None,
    manifest: Annotated[
        Path | None, typer.Option("--manifest", "-m", help="Path to tokenforge.toml")
    ] = None,
    out: Annotated[
        Path | None, typer.Option("--out", "-o", help="Write the scene graph JSON here")
    ] = None,
    variables: Annotated[
        bool, typer.Option("--variables/--no-variables", help="Create variable collections")
    ] = True,
    text_styles: Annotated[
        bool, typer.Option("--text-styles/--no-text-styles", help="Create text styles")
    ] = True,
    effect_styles: Annotated[
        bool, typer.Option("--effect-styles/--no-effect-styles", help="Create effect styles")
    ] = True,
    components: Annotated[
        bool, typer.Option("--components/--no-components", help="Create components")
    ] = True,
    max_modes: Annotated[
        int | None, typer.Option("--max-modes", help="Simulate a plan limit on modes per collection")
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", help="Show debug logging")] = False,
) -> None:
    """Synthesize variables, styles and components from a token payload.

    Examples:
        tokenforge synthesize                           # Bundled tokens
        tokenforge synthesize tokens.json -o scene.json
        tokenforge synthesize tokens.yaml --max-modes 4 # Simulate a plan limit
        tokenforge synthesize --no-components           # Variables and styles only
    """
    configure_logging(verbose)

    try:
        config = resolve_manifest(manifest)
        if payload is None and config.payload:
            base = manifest.parent if manifest else Path.cwd()
            payload = base / config.payload
        data = load_payload(payload) if payload else None
    except TokenforgeError as e:
        err_console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    stages = config.stages
    options = dataclasses.replace(
        stages,
        variables=stages.variables and variables,
        text_styles=stages.text_styles and text_styles,
        effect_styles=stages.effect_styles and effect_styles,
        components=stages.components and components,
    ).to_options()

    host = InMemoryHost(max_modes=max_modes if max_modes is not None else config.host.max_modes)
    events = SynthesisEvents(subscribers=[print_event])
    stats = synthesize(data, options, host, events, config)

    if out is not None:
        out.write_text(json.dumps(host.to_scene(), indent=2) + "\n", encoding="utf-8")
        console.print(f"[dim]Scene written to {out}[/dim]")

    if stats is None or events.failed:
        raise typer.Exit(code=1)
