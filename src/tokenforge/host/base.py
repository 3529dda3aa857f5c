"""
Host platform interface.

The synthesis engine never renders anything itself; it drives a host
design application through this interface. Implementations raise the
``HostError`` subclasses from :mod:`tokenforge.core.errors` for the
failures the engine knows how to absorb:

- ``HostCapacityError`` from ``add_mode`` when the plan limits modes
- ``HostNameConflict`` from ``create_variable`` on a duplicate name
- ``HostTypeMismatch`` from ``set_alias`` and the ``bind_*`` calls
- ``HostValueError`` from ``set_value`` when a value is rejected
- ``FontUnavailableError`` from ``load_font``
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from tokenforge.core.ir import RGBA, Collection, EffectDef, Mode, TokenType, TokenValue
from tokenforge.layout.types import LayoutBox


@dataclass(frozen=True)
class VariableAlias:
    """A mode value that points at another variable."""

    id: str


@dataclass(eq=False)
class SceneNode(LayoutBox):
    """A node in the host scene graph. Position fields come from LayoutBox."""

    id: str = ""
    type: str = "FRAME"
    name: str = ""
    children: list[SceneNode] = field(default_factory=list)
    props: dict[str, Any] = field(default_factory=dict)

    def find(self, name: str) -> SceneNode | None:
        """Depth-first search for a descendant (or self) by name."""
        if self.name == name:
            return self
        for child in self.children:
            found = child.find(name)
            if found is not None:
                return found
        return None

    def walk(self) -> list[SceneNode]:
        nodes = [self]
        for child in self.children:
            nodes.extend(child.walk())
        return nodes


class HostPlatform(ABC):
    """
    Node-creation, variable, style and font API of a host design tool.

    Methods are grouped in the order the pipeline uses them.
    """

    # --------------------------------------------------------------------- #
    # Collections & modes
    # --------------------------------------------------------------------- #

    @abstractmethod
    def create_collection(self, name: str) -> Collection:
        """Create a collection with a single, implicitly named default mode."""

    @abstractmethod
    def rename_mode(self, collection: Collection, mode_id: str, name: str) -> Mode:
        """Rename a mode and return the updated mode record."""

    @abstractmethod
    def add_mode(self, collection: Collection, name: str) -> Mode:
        """Add a mode. Raises HostCapacityError when the plan limit is reached."""

    # --------------------------------------------------------------------- #
    # Variables
    # --------------------------------------------------------------------- #

    @abstractmethod
    def create_variable(self, name: str, collection: Collection, token_type: TokenType) -> str:
        """Create a variable and return its handle. Raises HostNameConflict."""

    @abstractmethod
    def set_description(self, handle: str, description: str) -> None:
        """Attach a description to a variable."""

    @abstractmethod
    def set_value(self, handle: str, mode_id: str, value: TokenValue) -> None:
        """Set a literal value for one mode. Raises HostValueError."""

    @abstractmethod
    def set_alias(self, handle: str, mode_id: str, target_handle: str) -> None:
        """Point a mode value at another variable. Raises HostTypeMismatch."""

    # --------------------------------------------------------------------- #
    # Fonts & styles
    # --------------------------------------------------------------------- #

    @abstractmethod
    async def load_font(self, family: str, style: str) -> None:
        """Load a font. Raises FontUnavailableError."""

    @abstractmethod
    def create_text_style(
        self,
        name: str,
        *,
        family: str,
        style: str,
        font_size: float,
        line_height_percent: float,
        letter_spacing_percent: float,
    ) -> str:
        """Create a text style and return its id."""

    @abstractmethod
    def create_effect_style(self, name: str, effects: Sequence[EffectDef]) -> str:
        """Create an effect style and return its id."""

    @abstractmethod
    def create_paint_style(self, name: str, color: RGBA, variable: str | None = None) -> str:
        """Create a paint style, optionally bound to a color variable."""

    # --------------------------------------------------------------------- #
    # Nodes
    # --------------------------------------------------------------------- #

    @abstractmethod
    def create_component(self, name: str, width: float, height: float) -> SceneNode:
        """Create a component node of the given size."""

    @abstractmethod
    def create_frame(self, name: str, width: float, height: float) -> SceneNode:
        """Create a plain frame node."""

    @abstractmethod
    def create_text(
        self,
        characters: str,
        *,
        font_size: float,
        family: str | None = None,
        style: str | None = None,
    ) -> SceneNode:
        """Create a text node; ``style=None`` keeps the host default font."""

    @abstractmethod
    def create_section(self, name: str) -> SceneNode:
        """Create an empty section container."""

    @abstractmethod
    def create_instance(self, component: SceneNode) -> SceneNode:
        """Create an instance of a component (or a component set member)."""

    @abstractmethod
    def append_child(self, parent: SceneNode, child: SceneNode) -> None:
        """Reparent ``child`` under ``parent``."""

    @abstractmethod
    def append_to_page(self, node: SceneNode) -> None:
        """Attach a top-level node to the current page."""

    @abstractmethod
    def resize(self, node: SceneNode, width: float, height: float) -> None:
        """Resize a node without constraints."""

    @abstractmethod
    def combine_as_variants(self, components: Sequence[SceneNode], name: str) -> SceneNode:
        """Combine components into a component set."""

    def set_properties(self, node: SceneNode, **props: Any) -> None:
        """Set plain presentational properties (layout, padding, opacity, effects)."""
        node.props.update(props)

    # --------------------------------------------------------------------- #
    # Paint & variable binding
    # --------------------------------------------------------------------- #

    @abstractmethod
    def set_fill(self, node: SceneNode, color: RGBA) -> None:
        """Set a static solid fill."""

    @abstractmethod
    def bind_fill(self, node: SceneNode, handle: str, fallback: RGBA) -> None:
        """Bind the fill to a color variable. Raises HostTypeMismatch."""

    @abstractmethod
    def set_stroke(self, node: SceneNode, color: RGBA, weight: float) -> None:
        """Set a static stroke."""

    @abstractmethod
    def bind_stroke(self, node: SceneNode, handle: str, fallback: RGBA, weight: float) -> None:
        """Bind the stroke to a color variable. Raises HostTypeMismatch."""

    @abstractmethod
    def set_radius(self, node: SceneNode, radius: float) -> None:
        """Set a static corner radius on all corners."""

    @abstractmethod
    def bind_radius(self, node: SceneNode, handle: str) -> None:
        """Bind all four corner radii to a numeric variable. Raises HostTypeMismatch."""
