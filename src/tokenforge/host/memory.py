"""
In-memory host platform.

Records every collection, variable, style and node the engine creates
and serialises the result to a plain JSON-compatible scene graph. Used
by the CLI for dry runs and exports, and by the test suite.

Host constraints can be simulated:

- ``max_modes``: adding a mode beyond this count raises HostCapacityError
- ``unavailable_fonts``: ``(family, style)`` pairs that fail to load
- ``rejected_variables``: variable names whose ``set_value`` is rejected
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from tokenforge.core.errors import (
    FontUnavailableError,
    HostCapacityError,
    HostNameConflict,
    HostTypeMismatch,
    HostValueError,
)
from tokenforge.core.ir import RGBA, Collection, EffectDef, Mode, TokenType, TokenValue
from tokenforge.host.base import HostPlatform, SceneNode, VariableAlias

logger = logging.getLogger(__name__)

DEFAULT_MODE_NAME = "Mode 1"


@dataclass
class HostVariable:
    """A variable as stored by the host."""

    id: str
    name: str
    collection_id: str
    type: TokenType
    description: str = ""
    values: dict[str, TokenValue | VariableAlias] = field(default_factory=dict)


@dataclass
class HostStyle:
    id: str
    kind: str  # "TEXT" | "EFFECT" | "PAINT"
    name: str
    props: dict[str, Any] = field(default_factory=dict)


class InMemoryHost(HostPlatform):
    """Recording host that builds an object graph instead of rendering."""

    def __init__(
        self,
        *,
        max_modes: int | None = None,
        unavailable_fonts: Iterable[tuple[str, str]] = (),
        rejected_variables: Iterable[str] = (),
    ) -> None:
        self.max_modes = max_modes
        self.unavailable_fonts = set(unavailable_fonts)
        self.rejected_variables = set(rejected_variables)

        self.collections: dict[str, Collection] = {}
        self.variables: dict[str, HostVariable] = {}
        self.styles: list[HostStyle] = []
        self.page: list[SceneNode] = []
        self.loaded_fonts: list[tuple[str, str]] = []
        self.call_count = 0

        self._ids = itertools.count(1)
        self._nodes: dict[str, SceneNode] = {}
        self._parents: dict[str, str] = {}

    # --------------------------------------------------------------------- #
    # Collections & modes
    # --------------------------------------------------------------------- #

    def create_collection(self, name: str) -> Collection:
        self._touch()
        collection_id = self._next_id("VariableCollection")
        collection = Collection(id=collection_id, name=name)
        collection.modes.append(
            Mode(id=self._next_id("Mode"), name=DEFAULT_MODE_NAME, collection_id=collection_id)
        )
        self.collections[collection_id] = collection
        return collection

    def rename_mode(self, collection: Collection, mode_id: str, name: str) -> Mode:
        self._touch()
        for index, mode in enumerate(collection.modes):
            if mode.id == mode_id:
                renamed = Mode(id=mode.id, name=name, collection_id=collection.id)
                collection.modes[index] = renamed
                return renamed
        raise HostValueError(f"Mode {mode_id} not found in collection '{collection.name}'")

    def add_mode(self, collection: Collection, name: str) -> Mode:
        self._touch()
        if self.max_modes is not None and len(collection.modes) >= self.max_modes:
            raise HostCapacityError(
                f"Limited to {self.max_modes} modes per collection on this plan"
            )
        mode = Mode(id=self._next_id("Mode"), name=name, collection_id=collection.id)
        collection.modes.append(mode)
        return mode

    # --------------------------------------------------------------------- #
    # Variables
    # --------------------------------------------------------------------- #

    def create_variable(self, name: str, collection: Collection, token_type: TokenType) -> str:
        self._touch()
        for existing in self.variables.values():
            if existing.collection_id == collection.id and existing.name == name:
                raise HostNameConflict(
                    f"Variable '{name}' already exists in collection '{collection.name}'"
                )
        handle = self._next_id("VariableID")
        self.variables[handle] = HostVariable(
            id=handle, name=name, collection_id=collection.id, type=token_type
        )
        return handle

    def set_description(self, handle: str, description: str) -> None:
        self._touch()
        self._variable(handle).description = description

    def set_value(self, handle: str, mode_id: str, value: TokenValue) -> None:
        self._touch()
        variable = self._variable(handle)
        if variable.name in self.rejected_variables:
            raise HostValueError(f"Value rejected for '{variable.name}'")
        if not _value_matches(variable.type, value):
            raise HostValueError(
                f"Expected {variable.type.host_type} value for '{variable.name}', "
                f"got {type(value).__name__}"
            )
        variable.values[mode_id] = value

    def set_alias(self, handle: str, mode_id: str, target_handle: str) -> None:
        self._touch()
        variable = self._variable(handle)
        target = self._variable(target_handle)
        if variable.type.host_type != target.type.host_type:
            raise HostTypeMismatch(
                f"Cannot alias {variable.type.host_type} '{variable.name}' "
                f"to {target.type.host_type} '{target.name}'"
            )
        variable.values[mode_id] = VariableAlias(id=target_handle)

    # --------------------------------------------------------------------- #
    # Fonts & styles
    # --------------------------------------------------------------------- #

    async def load_font(self, family: str, style: str) -> None:
        self._touch()
        if (family, style) in self.unavailable_fonts:
            raise FontUnavailableError(f"Font {family} {style} is not available")
        if (family, style) not in self.loaded_fonts:
            self.loaded_fonts.append((family, style))

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
        self._touch()
        return self._add_style(
            "TEXT",
            name,
            fontName={"family": family, "style": style},
            fontSize=font_size,
            lineHeight={"unit": "PERCENT", "value": line_height_percent},
            letterSpacing={"unit": "PERCENT", "value": letter_spacing_percent},
        )

    def create_effect_style(self, name: str, effects: Sequence[EffectDef]) -> str:
        self._touch()
        return self._add_style(
            "EFFECT",
            name,
            effects=[
                {**effect.model_dump(mode="json"), "visible": True, "blendMode": "NORMAL"}
                for effect in effects
            ],
        )

    def create_paint_style(self, name: str, color: RGBA, variable: str | None = None) -> str:
        self._touch()
        if variable is not None:
            self._require_type(variable, "COLOR")
        return self._add_style(
            "PAINT",
            name,
            paints=[_solid(color)],
            boundVariable=variable,
        )

    # --------------------------------------------------------------------- #
    # Nodes
    # --------------------------------------------------------------------- #

    def create_component(self, name: str, width: float, height: float) -> SceneNode:
        return self._add_node("COMPONENT", name, width, height)

    def create_frame(self, name: str, width: float, height: float) -> SceneNode:
        return self._add_node("FRAME", name, width, height)

    def create_text(
        self,
        characters: str,
        *,
        font_size: float,
        family: str | None = None,
        style: str | None = None,
    ) -> SceneNode:
        # Rough text metrics so packing has something to work with
        width = max(len(characters), 1) * font_size * 0.6
        node = self._add_node("TEXT", characters, width, font_size * 1.4)
        node.props["characters"] = characters
        node.props["fontSize"] = font_size
        if style is not None:
            node.props["fontName"] = {"family": family or "Inter", "style": style}
        return node

    def create_section(self, name: str) -> SceneNode:
        return self._add_node("SECTION", name, 100, 100)

    def create_instance(self, component: SceneNode) -> SceneNode:
        node = self._add_node("INSTANCE", component.name, component.width, component.height)
        node.props["mainComponent"] = component.id
        return node

    def append_child(self, parent: SceneNode, child: SceneNode) -> None:
        self._touch()
        self._detach(child)
        parent.children.append(child)
        self._parents[child.id] = parent.id

    def append_to_page(self, node: SceneNode) -> None:
        self._touch()
        self._detach(node)
        self.page.append(node)

    def resize(self, node: SceneNode, width: float, height: float) -> None:
        self._touch()
        node.width = width
        node.height = height

    def combine_as_variants(self, components: Sequence[SceneNode], name: str) -> SceneNode:
        self._touch()
        if not components:
            raise HostValueError("Cannot combine an empty list of components")
        if any(c.type != "COMPONENT" for c in components):
            raise HostTypeMismatch("Only components can be combined as variants")
        right = max(c.right for c in components)
        bottom = max(c.bottom for c in components)
        component_set = self._add_node("COMPONENT_SET", name, right, bottom)
        for component in components:
            self.append_child(component_set, component)
        return component_set

    # --------------------------------------------------------------------- #
    # Paint & variable binding
    # --------------------------------------------------------------------- #

    def set_fill(self, node: SceneNode, color: RGBA) -> None:
        self._touch()
        node.props["fills"] = [_solid(color)]

    def bind_fill(self, node: SceneNode, handle: str, fallback: RGBA) -> None:
        self._touch()
        self._require_type(handle, "COLOR")
        node.props["fills"] = [{**_solid(fallback), "boundVariables": {"color": handle}}]

    def set_stroke(self, node: SceneNode, color: RGBA, weight: float) -> None:
        self._touch()
        node.props["strokes"] = [_solid(color)]
        node.props["strokeWeight"] = weight

    def bind_stroke(self, node: SceneNode, handle: str, fallback: RGBA, weight: float) -> None:
        self._touch()
        self._require_type(handle, "COLOR")
        node.props["strokes"] = [{**_solid(fallback), "boundVariables": {"color": handle}}]
        node.props["strokeWeight"] = weight

    def set_radius(self, node: SceneNode, radius: float) -> None:
        self._touch()
        node.props["cornerRadius"] = radius

    def bind_radius(self, node: SceneNode, handle: str) -> None:
        self._touch()
        self._require_type(handle, "FLOAT")
        node.props["boundVariables"] = {
            **node.props.get("boundVariables", {}),
            **{corner: handle for corner in _CORNERS},
        }

    # --------------------------------------------------------------------- #
    # Queries
    # --------------------------------------------------------------------- #

    def variable_named(self, name: str, collection_name: str) -> HostVariable | None:
        for variable in self.variables.values():
            collection = self.collections[variable.collection_id]
            if variable.name == name and collection.name == collection_name:
                return variable
        return None

    def collection_named(self, name: str) -> Collection | None:
        for collection in self.collections.values():
            if collection.name == name:
                return collection
        return None

    def to_scene(self) -> dict[str, Any]:
        """Serialise everything created so far into a JSON-compatible dict."""
        return {
            "collections": [
                {
                    "id": c.id,
                    "name": c.name,
                    "modes": [{"id": m.id, "name": m.name} for m in c.modes],
                }
                for c in self.collections.values()
            ],
            "variables": [
                {
                    "id": v.id,
                    "name": v.name,
                    "collection": self.collections[v.collection_id].name,
                    "type": v.type.host_type,
                    "description": v.description,
                    "values": {mode: _serialise_value(val) for mode, val in v.values.items()},
                }
                for v in self.variables.values()
            ],
            "styles": [
                {"id": s.id, "kind": s.kind, "name": s.name, **s.props} for s in self.styles
            ],
            "page": [_serialise_node(node) for node in self.page],
        }

    # --------------------------------------------------------------------- #
    # Internal
    # --------------------------------------------------------------------- #

    def _touch(self) -> None:
        self.call_count += 1

    def _next_id(self, kind: str) -> str:
        return f"{kind}:{next(self._ids)}"

    def _variable(self, handle: str) -> HostVariable:
        try:
            return self.variables[handle]
        except KeyError:
            raise HostValueError(f"Unknown variable {handle}") from None

    def _require_type(self, handle: str, host_type: str) -> None:
        variable = self._variable(handle)
        if variable.type.host_type != host_type:
            raise HostTypeMismatch(
                f"Variable '{variable.name}' is {variable.type.host_type}, expected {host_type}"
            )

    def _add_node(self, node_type: str, name: str, width: float, height: float) -> SceneNode:
        self._touch()
        node = SceneNode(
            id=self._next_id(node_type.title()), type=node_type, name=name, width=width, height=height
        )
        self._nodes[node.id] = node
        return node

    def _add_style(self, kind: str, name: str, **props: Any) -> str:
        style = HostStyle(id=self._next_id(f"{kind.title()}Style"), kind=kind, name=name, props=props)
        self.styles.append(style)
        logger.debug("Created %s style %s", kind.lower(), name)
        return style.id

    def _detach(self, node: SceneNode) -> None:
        parent_id = self._parents.pop(node.id, None)
        if parent_id is not None:
            parent = self._nodes[parent_id]
            parent.children = [c for c in parent.children if c is not node]
        self.page = [n for n in self.page if n is not node]


_CORNERS = ("topLeftRadius", "topRightRadius", "bottomLeftRadius", "bottomRightRadius")


def _value_matches(token_type: TokenType, value: TokenValue) -> bool:
    host_type = token_type.host_type
    if host_type == "COLOR":
        return isinstance(value, RGBA)
    if host_type == "FLOAT":
        return isinstance(value, int | float) and not isinstance(value, bool)
    if host_type == "BOOLEAN":
        return isinstance(value, bool)
    return isinstance(value, str)


def _solid(color: RGBA) -> dict[str, Any]:
    return {
        "type": "SOLID",
        "color": {"r": color.r, "g": color.g, "b": color.b},
        "opacity": color.a,
    }


def _serialise_value(value: TokenValue | VariableAlias) -> Any:
    if isinstance(value, VariableAlias):
        return {"type": "VARIABLE_ALIAS", "id": value.id}
    if isinstance(value, RGBA):
        return value.model_dump()
    return value


def _serialise_node(node: SceneNode) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": node.id,
        "type": node.type,
        "name": node.name,
        "x": node.x,
        "y": node.y,
        "width": node.width,
        "height": node.height,
    }
    data.update(node.props)
    if node.children:
        data["children"] = [_serialise_node(child) for child in node.children]
    return data
