"""
Font loading and style resolution.

Fonts are the only asynchronous host boundary. The registry loads a fixed
set of styles of one family up front and remembers which succeeded, so
text creation later never asks for a font the host could not load.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from tokenforge.core.errors import HostError
from tokenforge.events import LEVEL_DONE, LEVEL_WARN, SynthesisEvents, noop

if TYPE_CHECKING:
    from tokenforge.host.base import HostPlatform

logger = logging.getLogger(__name__)

DEFAULT_FAMILY = "Inter"
REGULAR = "Regular"
DEFAULT_STYLES: tuple[str, ...] = ("Regular", "Medium", "Semi Bold", "Bold", "Extra Bold")

FONT_WEIGHT_STYLES: dict[int, str] = {
    300: "Light",
    400: "Regular",
    500: "Medium",
    600: "Semi Bold",
    700: "Bold",
    800: "Extra Bold",
    900: "Black",
}


def weight_to_style(weight: int) -> str:
    """Map a numeric font weight to a style name; unknown weights are Regular."""
    return FONT_WEIGHT_STYLES.get(weight, REGULAR)


class FontRegistry:
    """Loaded styles of one font family."""

    def __init__(self, family: str = DEFAULT_FAMILY):
        self.family = family
        self.loaded: list[str] = []
        self.failed: list[str] = []

    async def load(
        self,
        host: HostPlatform,
        styles: Sequence[str] = DEFAULT_STYLES,
        events: SynthesisEvents | None = None,
    ) -> list[str]:
        """
        Load each style, recording failures instead of raising.

        Loading is idempotent: styles already loaded are not requested again.

        Returns:
            Styles loaded so far
        """
        events = events or noop()
        for style in styles:
            if style in self.loaded:
                continue
            try:
                await host.load_font(self.family, style)
            except HostError as e:
                logger.debug("Font %s %s unavailable: %s", self.family, style, e.message)
                if style not in self.failed:
                    self.failed.append(style)
                continue
            self.loaded.append(style)

        if self.loaded:
            events.log(f"Loaded fonts: {', '.join(self.loaded)}", LEVEL_DONE)
        else:
            events.log(f"No {self.family} styles could be loaded, using host default", LEVEL_WARN)
        return list(self.loaded)

    def is_loaded(self, style: str) -> bool:
        return style in self.loaded

    def resolve(self, style: str) -> str | None:
        """
        The style to use for a text node.

        Returns the requested style when loaded, else Regular when that
        loaded, else None (keep the host default font).
        """
        if style in self.loaded:
            return style
        if REGULAR in self.loaded:
            return REGULAR
        return None
