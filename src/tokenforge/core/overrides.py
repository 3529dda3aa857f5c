"""
Theme Override Applier.

Writes sparse per-theme values into an existing collection's mode. Only
entries addressed to this collection (by ``"<prefix>/"`` path prefix) are
considered; everything else belongs to another tier and is ignored.

The applier never raises past its own boundary: unresolvable paths and
host rejections are counted and reported in one summary line.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from tokenforge.events import LEVEL_DONE, LEVEL_ERROR, LEVEL_WARN, SynthesisEvents, noop

from .errors import HostError
from .ir import Collection, OverrideValue, ThemeOverrideSet
from .modes import theme_key_for
from .symbols import SymbolTable

if TYPE_CHECKING:
    from tokenforge.host.base import HostPlatform

logger = logging.getLogger(__name__)

MAX_MISSING_EXAMPLES = 5


@dataclass
class OverrideResult:
    """Counts for one (collection, mode) override pass."""

    applied: int = 0
    skipped: int = 0
    missing_examples: list[str] = field(default_factory=list)

    def summary(self) -> str:
        if not self.skipped:
            return f"Overrides: {self.applied} applied"
        missing = ", ".join(self.missing_examples)
        if self.skipped > MAX_MISSING_EXAMPLES:
            missing += ", ..."
        return f"Overrides: {self.applied} applied, {self.skipped} skipped (missing: {missing})"


def apply_overrides(
    host: HostPlatform,
    collection: Collection,
    mode_id: str,
    overrides: Mapping[str, OverrideValue],
    symbols: SymbolTable,
    collection_prefix: str,
    events: SynthesisEvents | None = None,
) -> OverrideResult:
    """
    Apply one theme's overrides to one mode of ``collection``.

    Args:
        host: Host platform
        collection: Collection owning ``mode_id``
        mode_id: Mode receiving the values
        overrides: Full path → override entry (all tiers mixed)
        symbols: Symbol Table, looked up by exact full path
        collection_prefix: Tier prefix of ``collection`` ("semantic", ...)
        events: Event stream for the summary line

    Returns:
        OverrideResult with applied/skipped counts
    """
    events = events or noop()
    result = OverrideResult()
    marker = f"{collection_prefix}/"

    for full_path, entry in overrides.items():
        if not full_path.startswith(marker):
            continue

        variable = symbols.get(full_path)
        if variable is None:
            result.skipped += 1
            if len(result.missing_examples) < MAX_MISSING_EXAMPLES:
                result.missing_examples.append(full_path)
            continue

        if entry.value is None:
            continue

        try:
            host.set_value(variable.handle, mode_id, entry.value)
        except HostError as e:
            events.log(f"  Override error {full_path}: {e.message}", LEVEL_ERROR)
            result.skipped += 1
            continue

        symbols.record_value(variable, mode_id, entry.value)
        result.applied += 1

    level = LEVEL_WARN if result.skipped else LEVEL_DONE
    events.log(f"  {result.summary()}", level)
    logger.debug(
        "%s/%s overrides: %d applied, %d skipped",
        collection.name,
        mode_id,
        result.applied,
        result.skipped,
    )
    return result


def apply_theme_overrides(
    host: HostPlatform,
    collection: Collection,
    themes: Mapping[str, ThemeOverrideSet],
    symbols: SymbolTable,
    collection_prefix: str,
    events: SynthesisEvents | None = None,
    theme_keys: dict[str, str] | None = None,
) -> dict[str, OverrideResult]:
    """
    Apply every theme to the mode it belongs to.

    Modes are visited in collection order. The default mode and modes
    with no matching theme in ``themes`` are left untouched.

    Returns:
        Mode name → OverrideResult for each mode that had a theme
    """
    events = events or noop()
    results: dict[str, OverrideResult] = {}

    for mode in collection.modes:
        key = theme_key_for(mode.name, theme_keys)
        if key is None:
            continue
        theme = themes.get(key)
        if theme is None:
            logger.debug("No theme '%s' for mode %s", key, mode.name)
            continue

        events.log(f"  Theme: {mode.name} ({len(theme.overrides)} overrides)")
        results[mode.name] = apply_overrides(
            host, collection, mode.id, theme.overrides, symbols, collection_prefix, events
        )

    return results
