"""
Collection & Mode Manager.

Creates the three tier collections and their modes on the host. Mode
creation degrades gracefully: when the host caps the number of modes,
the remaining modes are skipped with a warning and the run continues.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from tokenforge.events import LEVEL_INFO, LEVEL_WARN, SynthesisEvents, noop

from .errors import HostError
from .ir import Collection

if TYPE_CHECKING:
    from tokenforge.host.base import HostPlatform

logger = logging.getLogger(__name__)

PRIMITIVE_MODES: tuple[str, ...] = ("Value",)

THEME_MODES: tuple[str, ...] = (
    "Light",
    "Dark",
    "Glass",
    "Neumorphic",
    "Brutalist",
    "Gradient",
    "Dark Luxury",
)

# Mode name → theme key in the payload's ``themes`` mapping. The default
# mode has no entry: it holds the base values.
THEME_KEYS: dict[str, str] = {
    "Dark": "dark",
    "Glass": "glass",
    "Neumorphic": "neumorphic",
    "Brutalist": "brutalist",
    "Gradient": "gradient",
    "Dark Luxury": "darkLuxury",
}


def theme_key_for(mode_name: str, theme_keys: dict[str, str] | None = None) -> str | None:
    """Map a mode name to its theme key, or None for the default mode."""
    table = THEME_KEYS if theme_keys is None else theme_keys
    return table.get(mode_name)


def create_collection(
    host: HostPlatform,
    name: str,
    mode_names: Sequence[str],
    events: SynthesisEvents | None = None,
) -> Collection:
    """
    Create a collection and its modes.

    The first name renames the implicitly created default mode; each later
    name attempts to add a mode. A refused add is logged (naming the
    collection and the number of modes that did succeed) and skipped.

    Args:
        host: Host platform
        name: Collection name ("Primitives", "Semantic", "Component")
        mode_names: Requested mode names, default first
        events: Event stream for user-visible logs

    Returns:
        The collection, possibly with fewer modes than requested
    """
    events = events or noop()
    if not mode_names:
        raise ValueError(f"Collection '{name}' needs at least one mode name")

    collection = host.create_collection(name)
    host.rename_mode(collection, collection.default_mode.id, mode_names[0])

    for mode_name in mode_names[1:]:
        try:
            host.add_mode(collection, mode_name)
        except HostError as e:
            events.log(
                f'Could not add mode "{mode_name}" to {name}: {e.message} '
                f"(plan may limit modes to {len(collection.modes)})",
                LEVEL_WARN,
            )

    logger.debug("Collection %s modes: %s", name, collection.mode_names)
    events.log(f'  Collection "{name}": {len(collection.modes)} modes created', LEVEL_INFO)
    return collection
