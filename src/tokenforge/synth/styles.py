"""
Text, effect and color style creation.

Styles are created after all variables so that color styles can bind to
semantic variables by path.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from tokenforge.core.errors import HostError
from tokenforge.core.ir import ColorStyleDef, EffectStyleDef, TextStyleDef, Tier
from tokenforge.core.symbols import SymbolTable
from tokenforge.events import LEVEL_DONE, LEVEL_WARN, SynthesisEvents, noop
from tokenforge.synth.fonts import DEFAULT_FAMILY, REGULAR, weight_to_style

if TYPE_CHECKING:
    from tokenforge.host.base import HostPlatform

logger = logging.getLogger(__name__)

DEFAULT_STYLE_NAMESPACE = "Tokenforge"


async def create_text_styles(
    host: HostPlatform,
    definitions: Sequence[TextStyleDef],
    events: SynthesisEvents | None = None,
) -> list[str]:
    """
    Create one text style per definition.

    The font for the definition's weight is loaded first; if the host
    cannot load it, Inter Regular is used. A style is skipped only when
    even the fallback font fails.

    Returns:
        Ids of the created styles
    """
    events = events or noop()
    created: list[str] = []

    for definition in definitions:
        family = definition.font_family
        style = weight_to_style(definition.font_weight)
        try:
            await host.load_font(family, style)
        except HostError:
            family, style = DEFAULT_FAMILY, REGULAR
            try:
                await host.load_font(family, style)
            except HostError as e:
                events.log(f"Text style skipped: {definition.name} ({e.message})", LEVEL_WARN)
                continue

        style_id = host.create_text_style(
            definition.name,
            family=family,
            style=style,
            font_size=definition.font_size,
            line_height_percent=definition.line_height * 100,
            letter_spacing_percent=definition.letter_spacing * 100,
        )
        created.append(style_id)
        events.log(f"Text style: {definition.name}", LEVEL_DONE)

    return created


def create_effect_styles(
    host: HostPlatform,
    definitions: Sequence[EffectStyleDef],
    events: SynthesisEvents | None = None,
) -> list[str]:
    """Create drop/inner shadow effect styles."""
    events = events or noop()
    created: list[str] = []
    for definition in definitions:
        created.append(host.create_effect_style(definition.name, definition.effects))
        events.log(f"Effect style: {definition.name}", LEVEL_DONE)
    return created


def create_color_styles(
    host: HostPlatform,
    definitions: Sequence[ColorStyleDef],
    symbols: SymbolTable,
    events: SynthesisEvents | None = None,
    namespace: str = DEFAULT_STYLE_NAMESPACE,
) -> list[str]:
    """
    Create paint styles bound to semantic variables.

    Each style binds to ``semantic/<variable_path>`` when that entry exists
    and the host accepts the binding; otherwise it carries the static
    fallback colour. Names are namespaced as ``<namespace>/<name>``.
    """
    events = events or noop()
    created: list[str] = []

    for definition in definitions:
        name = f"{namespace}/{definition.name}" if namespace else definition.name
        variable = symbols.get(f"{Tier.SEMANTIC.prefix}/{definition.variable_path}")

        style_id = None
        if variable is not None:
            try:
                style_id = host.create_paint_style(name, definition.fallback, variable.handle)
            except HostError as e:
                logger.debug("Color style %s left unbound: %s", name, e.message)
        if style_id is None:
            style_id = host.create_paint_style(name, definition.fallback)

        created.append(style_id)
        events.log(f"Color style: {definition.name}", LEVEL_DONE)

    return created
