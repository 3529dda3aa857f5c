"""
Token binding for synthesized nodes.

Component definitions name token paths per visual property, optionally
templated on variant axes (``component/button/{Variant}/bg``). The binder
substitutes the active combination, resolves the path through the Symbol
Table, and binds the node property to the variable. Whenever a path does
not resolve or the host refuses the binding, the hard-coded fallback
value is applied instead; binding never raises.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from functools import lru_cache
from typing import TYPE_CHECKING

from tokenforge.core.errors import HostError
from tokenforge.core.ir import RGBA, ResolvedVariable
from tokenforge.core.symbols import SymbolTable

if TYPE_CHECKING:
    from tokenforge.host.base import HostPlatform, SceneNode
    from tokenforge.synth.fonts import FontRegistry

logger = logging.getLogger(__name__)

DEFAULT_RADIUS = 6
DEFAULT_STROKE = RGBA(r=0.886, g=0.91, b=0.941)
DEFAULT_TEXT_FILL = RGBA(r=0.06, g=0.09, b=0.16)
WHITE = RGBA(r=1, g=1, b=1)

_PLACEHOLDER_RE = re.compile(r"\{([^{}]+)\}")


def rgb(r: float, g: float, b: float, a: float = 1.0) -> RGBA:
    """Shorthand for the builders' hard-coded fallback colours."""
    return RGBA(r=r, g=g, b=b, a=a)


class BindableProperty(StrEnum):
    """Keys of ``ComponentDefinition.tokens`` understood by the builders."""

    FILL = "fill"
    TEXT = "text"
    BORDER = "border"
    RADIUS = "radius"
    STROKE = "stroke"
    TRACK = "track"
    ACCENT = "accent"
    MUTED = "muted"
    SUBTLE_FILL = "subtle_fill"


@lru_cache(maxsize=512)
def _placeholders(template: str) -> tuple[str, ...]:
    return tuple(dict.fromkeys(_PLACEHOLDER_RE.findall(template)))


@dataclass(frozen=True)
class PropertyBinding:
    """A token path template with its ``{Axis}`` placeholders pre-parsed."""

    template: str
    placeholders: tuple[str, ...] = ()

    @classmethod
    def from_template(cls, template: str) -> PropertyBinding:
        return cls(template=template, placeholders=_placeholders(template))

    def resolve(self, combo: Mapping[str, str] | None = None) -> str:
        """
        Substitute axis values from ``combo``.

        Placeholders naming an axis absent from ``combo`` are left in place,
        so the resulting path simply fails to resolve.

        >>> PropertyBinding.from_template("button/{Variant}/bg").resolve({"Variant": "primary"})
        'button/primary/bg'
        """
        path = self.template
        for axis in self.placeholders:
            if combo and axis in combo:
                path = path.replace(f"{{{axis}}}", combo[axis])
        return path


class TokenBinder:
    """Binds node paints and radii to Symbol Table variables, with fallbacks."""

    def __init__(
        self,
        host: HostPlatform,
        symbols: SymbolTable,
        fonts: FontRegistry | None = None,
    ):
        self.host = host
        self.symbols = symbols
        self.fonts = fonts
        self.bound = 0
        self.fallbacks = 0

    def resolve(
        self, template: str | None, combo: Mapping[str, str] | None = None
    ) -> ResolvedVariable | None:
        """Resolve a templated token path to a variable, or None."""
        if not template:
            return None
        path = PropertyBinding.from_template(template).resolve(combo)
        return self.symbols.lookup(path)

    def fill(
        self,
        node: SceneNode,
        template: str | None,
        combo: Mapping[str, str] | None,
        fallback: RGBA | None,
    ) -> bool:
        """Bind the fill; returns True when a variable was bound."""
        variable = self.resolve(template, combo)
        if variable is not None:
            try:
                self.host.bind_fill(node, variable.handle, fallback or WHITE)
                self.bound += 1
                return True
            except HostError as e:
                logger.debug("Fill binding refused for %s: %s", variable.path, e.message)
        if fallback is not None:
            self.host.set_fill(node, fallback)
            self.fallbacks += 1
        return False

    def stroke(
        self,
        node: SceneNode,
        template: str | None,
        combo: Mapping[str, str] | None,
        fallback: RGBA | None,
        weight: float = 1,
    ) -> bool:
        variable = self.resolve(template, combo)
        if variable is not None:
            try:
                self.host.bind_stroke(node, variable.handle, fallback or DEFAULT_STROKE, weight)
                self.bound += 1
                return True
            except HostError as e:
                logger.debug("Stroke binding refused for %s: %s", variable.path, e.message)
        if fallback is not None:
            self.host.set_stroke(node, fallback, weight)
            self.fallbacks += 1
        return False

    def radius(
        self,
        node: SceneNode,
        template: str | None,
        combo: Mapping[str, str] | None,
        fallback: float = DEFAULT_RADIUS,
    ) -> bool:
        variable = self.resolve(template, combo)
        if variable is not None:
            try:
                self.host.bind_radius(node, variable.handle)
                self.bound += 1
                return True
            except HostError as e:
                logger.debug("Radius binding refused for %s: %s", variable.path, e.message)
        self.host.set_radius(node, fallback or DEFAULT_RADIUS)
        self.fallbacks += 1
        return False

    def text(
        self,
        characters: str,
        font_size: float,
        style: str,
        fill_template: str | None,
        combo: Mapping[str, str] | None,
        fallback: RGBA | None = DEFAULT_TEXT_FILL,
    ) -> SceneNode:
        """
        Create a text node in the best loaded font style.

        A fill template binds the text colour (falling back to ``fallback``);
        without one the static fallback colour is used.
        """
        resolved_style = self.fonts.resolve(style) if self.fonts else None
        family = self.fonts.family if self.fonts and resolved_style else None
        node = self.host.create_text(
            str(characters), font_size=font_size or 14, family=family, style=resolved_style
        )
        if fill_template:
            self.fill(node, fill_template, combo, fallback or DEFAULT_TEXT_FILL)
        elif fallback is not None:
            self.host.set_fill(node, fallback)
        return node
