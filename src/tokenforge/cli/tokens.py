"""
Token CLI commands.

Commands:
- transform: Convert a DTCG token directory into a synthesis payload
- variants: Show the variant set and grid columns of one component
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from tokenforge.cli.utils import console, err_console
from tokenforge.core.dtcg import load_token_dir
from tokenforge.core.errors import TokenforgeError
from tokenforge.core.payload import dump_payload, find_component, load_payload
from tokenforge.core.variants import (
    DEFAULT_VARIANT_CAP,
    TruncationPolicy,
    combination_name,
    is_default,
    variant_set,
)
from tokenforge.layout.grid import grid_columns


def transform_command(
    tokens_dir: Annotated[Path, typer.Argument(help="DTCG token directory")],
    out: Annotated[
        Path | None, typer.Option("--out", "-o", help="Write the payload here (.json or .yaml)")
    ] = None,
) -> None:
    """Convert a DTCG token directory into a synthesis payload.

    Without --out the payload is printed as JSON.
    """
    try:
        payload = load_token_dir(tokens_dir)
    except TokenforgeError as e:
        err_console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    stats = payload.meta.get("stats", {})
    if out is None:
        typer.echo(json.dumps(payload.model_dump(mode="json", exclude_none=True), indent=2))
        return

    dump_payload(payload, out)
    console.print(f"[green]Payload written to {out}[/green]")
    console.print(
        f"  {stats.get('totalVars', 0)} variables "
        f"({stats.get('primitiveVars', 0)} primitive, {stats.get('semanticVars', 0)} semantic, "
        f"{stats.get('componentVars', 0)} component), {stats.get('themes', 0)} themes"
    )


def variants_command(
    payload: Annotated[Path, typer.Argument(help="Token payload (.json/.yaml)")],
    component: Annotated[str, typer.Argument(help="Component name")],
    policy: Annotated[
        TruncationPolicy,
        typer.Option("--policy", "-p", help="Truncation policy when over the cap"),
    ] = TruncationPolicy.TRAVERSAL,
    cap: Annotated[int, typer.Option("--cap", help="Maximum variants")] = DEFAULT_VARIANT_CAP,
) -> None:
    """Show the variants a component would be synthesized with."""
    try:
        definition = find_component(load_payload(payload), component)
    except TokenforgeError as e:
        err_console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    if not definition.has_variants:
        console.print(f"[dim]{component} has no variant axes.[/dim]")
        return

    combos = variant_set(definition.variants, definition.default_variant, cap, policy)

    table = Table(title=f"{component} variants")
    table.add_column("#", style="dim")
    for axis in definition.variants:
        table.add_column(axis)
    table.add_column("Name")
    for index, combo in enumerate(combos, start=1):
        marker = " [green](default)[/green]" if is_default(combo, definition.default_variant) else ""
        table.add_row(
            str(index),
            *(combo.get(axis, "") for axis in definition.variants),
            combination_name(combo) + marker,
        )

    console.print(table)
    console.print(
        f"\n[dim]{len(combos)} of {definition.product_size} combination(s), "
        f"{grid_columns(definition.variants, len(combos))} grid column(s)[/dim]"
    )
