"""
Per-component structure builders.

A builder receives an already created, default-sized component node and
fills in its inner structure: sizing, layout hints, token-bound paints,
text, and instances of previously synthesized components. Names without
a registered builder (and builders that fail) get the generic artifact:
token-bound background, border and radius with a text label.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

from tokenforge.core.ir import ComponentCategory, ComponentDefinition
from tokenforge.synth.binding import BindableProperty, TokenBinder, rgb

if TYPE_CHECKING:
    from tokenforge.host.base import HostPlatform, SceneNode


@dataclass
class BuildContext:
    """Everything a builder may read while building one variant."""

    host: HostPlatform
    binder: TokenBinder
    definition: ComponentDefinition
    combo: dict[str, str] = field(default_factory=dict)
    size: tuple[float, float] = (200, 40)
    refs: Mapping[str, SceneNode] = field(default_factory=dict)

    def token(self, prop: BindableProperty, default: str | None = None) -> str | None:
        """Path template for a bindable property, or ``default``."""
        tokens = self.definition.tokens
        if prop in tokens:
            return tokens[prop]
        # camelCase key as written by the DTCG exporter
        camel = _CAMEL_KEYS.get(prop)
        if camel and camel in tokens:
            return tokens[camel]
        return default

    def axis(self, name: str, default: str) -> str:
        return self.combo.get(name, default)

    def instance_of(self, name: str, props: Mapping[str, str]) -> SceneNode | None:
        """
        Instance of a previously synthesized component.

        For a component set, the member whose variant name carries every
        requested ``Axis=value`` pair is used, else its first member.
        """
        source = self.refs.get(name)
        if source is None:
            return None
        if source.type == "COMPONENT_SET":
            members = [c for c in source.children if c.type == "COMPONENT"]
            wanted = [f"{axis}={value}" for axis, value in props.items()]
            for member in members:
                if all(pair in member.name for pair in wanted):
                    return self.host.create_instance(member)
            return self.host.create_instance(members[0]) if members else None
        if source.type == "COMPONENT":
            return self.host.create_instance(source)
        return None


_CAMEL_KEYS: dict[str, str] = {BindableProperty.SUBTLE_FILL: "subtleFill"}

Builder = Callable[["SceneNode", BuildContext], None]


class ComponentKind(StrEnum):
    """Component names with a dedicated builder."""

    BUTTON = "Button"
    INPUT = "Input"
    BADGE = "Badge"
    AVATAR = "Avatar"
    CHIP = "Chip"
    CARD = "Card"
    MODAL = "Modal"


# =============================================================================
# Atoms
# =============================================================================

_BUTTON_HEIGHT = {"xs": 28, "sm": 32, "md": 40, "lg": 48, "xl": 56}
_BUTTON_FONT = {"xs": 11, "sm": 12, "md": 14, "lg": 16, "xl": 18}
_BUTTON_PAD = {"xs": 8, "sm": 12, "md": 16, "lg": 20, "xl": 24}


def build_button(node: SceneNode, ctx: BuildContext) -> None:
    size = ctx.axis("Size", "md")
    height = _BUTTON_HEIGHT.get(size, 40)
    font_size = _BUTTON_FONT.get(size, 14)
    pad = _BUTTON_PAD.get(size, 16)

    ctx.host.resize(node, max(pad * 2 + font_size * 5, 80), height)
    ctx.host.set_properties(node, layoutMode="HORIZONTAL", paddingLeft=pad, paddingRight=pad)
    ctx.binder.fill(node, ctx.token(BindableProperty.FILL), ctx.combo, rgb(0.15, 0.39, 0.92))
    ctx.binder.radius(node, ctx.token(BindableProperty.RADIUS), ctx.combo, 6)
    if ctx.combo.get("State") == "disabled":
        ctx.host.set_properties(node, opacity=0.5)

    label = ctx.binder.text(
        ctx.axis("Variant", "Button"),
        font_size,
        "Semi Bold",
        ctx.token(BindableProperty.TEXT),
        ctx.combo,
        rgb(1, 1, 1),
    )
    ctx.host.append_child(node, label)


def build_input(node: SceneNode, ctx: BuildContext) -> None:
    state = ctx.combo.get("State")
    ctx.host.resize(node, 280, 40)
    ctx.host.set_properties(node, layoutMode="HORIZONTAL", paddingLeft=12, paddingRight=12)
    ctx.binder.fill(
        node,
        ctx.token(BindableProperty.FILL, "semantic/surface/page/default"),
        ctx.combo,
        rgb(1, 1, 1),
    )
    if state == "error":
        ctx.binder.stroke(
            node, "semantic/color/danger/default", ctx.combo, rgb(0.86, 0.15, 0.15), 2
        )
    else:
        ctx.binder.stroke(
            node,
            ctx.token(BindableProperty.BORDER, "semantic/border/default"),
            ctx.combo,
            rgb(0.82, 0.84, 0.87),
            2 if state == "focus" else 1,
        )
    ctx.binder.radius(node, ctx.token(BindableProperty.RADIUS), ctx.combo, 6)
    if state == "disabled":
        ctx.host.set_properties(node, opacity=0.5)

    placeholder = ctx.binder.text(
        "Placeholder text", 14, "Regular", "semantic/text/muted", ctx.combo, rgb(0.6, 0.63, 0.67)
    )
    ctx.host.append_child(node, placeholder)


_BADGE_METRICS = {"sm": (20, 10, 6), "md": (24, 12, 8), "lg": (28, 13, 10)}


def build_badge(node: SceneNode, ctx: BuildContext) -> None:
    height, font_size, pad = _BADGE_METRICS.get(ctx.axis("Size", "md"), (24, 12, 8))
    ctx.host.resize(node, pad * 2 + font_size * 4, height)
    ctx.host.set_properties(node, layoutMode="HORIZONTAL", paddingLeft=pad, paddingRight=pad)
    ctx.host.set_radius(node, 999)
    ctx.binder.fill(node, ctx.token(BindableProperty.FILL), ctx.combo, rgb(0.93, 0.94, 1))
    label = ctx.binder.text(
        ctx.axis("Variant", "Badge"),
        font_size,
        "Medium",
        ctx.token(BindableProperty.TEXT),
        ctx.combo,
        rgb(0.15, 0.15, 0.92),
    )
    ctx.host.append_child(node, label)


_AVATAR_SIZES = {"xs": 24, "sm": 32, "md": 40, "lg": 56}


def build_avatar(node: SceneNode, ctx: BuildContext) -> None:
    dim = _AVATAR_SIZES.get(ctx.axis("Size", "md"), 40)
    ctx.host.resize(node, dim, dim)
    ctx.host.set_radius(node, 8 if ctx.combo.get("Shape") == "square" else dim)
    ctx.host.set_properties(node, layoutMode="HORIZONTAL")
    ctx.binder.fill(node, ctx.token(BindableProperty.FILL), ctx.combo, rgb(0.88, 0.92, 1))
    initials = ctx.binder.text(
        "JD", dim * 0.35, "Semi Bold", ctx.token(BindableProperty.TEXT), ctx.combo,
        rgb(0.15, 0.39, 0.92),
    )
    ctx.host.append_child(node, initials)


def build_chip(node: SceneNode, ctx: BuildContext) -> None:
    ctx.host.resize(node, 80, 32)
    ctx.host.set_properties(node, layoutMode="HORIZONTAL", paddingLeft=12, paddingRight=12)
    ctx.host.set_radius(node, 999)
    ctx.binder.fill(node, ctx.token(BindableProperty.FILL), ctx.combo, rgb(0.96, 0.96, 0.97))
    ctx.binder.stroke(node, ctx.token(BindableProperty.BORDER), ctx.combo, rgb(0.88, 0.89, 0.91))
    label = ctx.binder.text(
        "Chip", 12, "Medium", ctx.token(BindableProperty.TEXT), ctx.combo, rgb(0.2, 0.2, 0.25)
    )
    ctx.host.append_child(node, label)
    if ctx.combo.get("Removable") == "true":
        remove = ctx.binder.text(
            "×", 14, "Regular", "semantic/text/muted", ctx.combo, rgb(0.5, 0.5, 0.55)
        )
        ctx.host.append_child(node, remove)


# =============================================================================
# Organisms
# =============================================================================


def build_card(node: SceneNode, ctx: BuildContext) -> None:
    host, binder, combo = ctx.host, ctx.binder, ctx.combo
    host.resize(node, 320, 200)
    host.set_properties(node, layoutMode="VERTICAL", itemSpacing=0)
    binder.fill(
        node, ctx.token(BindableProperty.FILL, "semantic/surface/card/default"), combo, rgb(1, 1, 1)
    )
    binder.stroke(
        node, ctx.token(BindableProperty.BORDER, "semantic/border/default"), combo,
        rgb(0.88, 0.9, 0.92),
    )
    binder.radius(node, ctx.token(BindableProperty.RADIUS, "component/card/radius"), combo, 12)

    image = host.create_frame("Image", 320, 100)
    binder.fill(
        image,
        ctx.token(BindableProperty.SUBTLE_FILL, "semantic/surface/page/subtle"),
        combo,
        rgb(0.94, 0.95, 0.96),
    )
    host.append_child(node, image)

    content = host.create_frame("Content", 320, 100)
    host.set_properties(content, layoutMode="VERTICAL", itemSpacing=6, padding=16)
    heading = binder.text(
        "Card Title", 16, "Semi Bold", ctx.token(BindableProperty.TEXT), combo,
        rgb(0.06, 0.09, 0.16),
    )
    body = binder.text(
        "Card description with supporting text for context.",
        13,
        "Regular",
        ctx.token(BindableProperty.MUTED, "semantic/text/muted"),
        combo,
        rgb(0.4, 0.42, 0.47),
    )
    host.append_child(content, heading)
    host.append_child(content, body)
    host.append_child(node, content)


def _modal_action(ctx: BuildContext, label: str, variant: str) -> SceneNode:
    """Footer button: a Button instance when available, else a drawn frame."""
    instance = ctx.instance_of("Button", {"Variant": variant, "Size": "md", "State": "default"})
    if instance is not None:
        ctx.host.set_properties(instance, textOverride=label)
        return instance

    frame = ctx.host.create_frame(label, 96, 36)
    ctx.host.set_properties(frame, layoutMode="HORIZONTAL", paddingLeft=16, paddingRight=16)
    ctx.host.set_radius(frame, 6)
    if variant == "primary":
        ctx.binder.fill(frame, "semantic/color/primary/default", ctx.combo, rgb(0.15, 0.39, 0.92))
        text = ctx.binder.text(label, 14, "Medium", None, ctx.combo, rgb(1, 1, 1))
    else:
        ctx.binder.fill(
            frame, "semantic/color/secondary/subtle", ctx.combo, rgb(0.96, 0.97, 0.98)
        )
        ctx.binder.stroke(frame, "semantic/border/default", ctx.combo, rgb(0.88, 0.9, 0.92))
        text = ctx.binder.text(
            label, 14, "Medium", "semantic/text/default", ctx.combo, rgb(0.25, 0.27, 0.32)
        )
    ctx.host.append_child(frame, text)
    return frame


def build_modal(node: SceneNode, ctx: BuildContext) -> None:
    host, binder, combo = ctx.host, ctx.binder, ctx.combo
    host.resize(node, 480, 280)
    host.set_properties(
        node,
        layoutMode="VERTICAL",
        itemSpacing=0,
        effects=[
            {
                "type": "DROP_SHADOW",
                "color": {"r": 0, "g": 0, "b": 0, "a": 0.15},
                "offset": {"x": 0, "y": 8},
                "radius": 32,
                "spread": 0,
            }
        ],
    )
    binder.fill(
        node, ctx.token(BindableProperty.FILL, "semantic/surface/card/default"), combo, rgb(1, 1, 1)
    )
    host.set_radius(node, 12)

    header = host.create_frame("Header", 480, 56)
    host.set_properties(header, layoutMode="HORIZONTAL")
    title = binder.text(
        "Modal Title", 18, "Semi Bold", ctx.token(BindableProperty.TEXT), combo,
        rgb(0.06, 0.09, 0.16),
    )
    close = binder.text("✕", 16, "Regular", "semantic/text/muted", combo, rgb(0.5, 0.52, 0.55))
    host.append_child(header, title)
    host.append_child(header, close)
    host.append_child(node, header)

    body = host.create_frame("Body", 480, 148)
    host.set_properties(body, layoutMode="VERTICAL", paddingLeft=24, paddingRight=24)
    host.append_child(
        body,
        binder.text(
            "This is the modal body content area. Place any content here.",
            14,
            "Regular",
            "semantic/text/muted",
            combo,
            rgb(0.35, 0.37, 0.42),
        ),
    )
    host.append_child(node, body)

    footer = host.create_frame("Footer", 480, 76)
    host.set_properties(footer, layoutMode="HORIZONTAL", primaryAxisAlignItems="MAX", itemSpacing=8)
    host.append_child(footer, _modal_action(ctx, "Cancel", "secondary"))
    host.append_child(footer, _modal_action(ctx, "Confirm", "primary"))
    host.append_child(node, footer)


# =============================================================================
# Generic fallback & registry
# =============================================================================


def build_generic(node: SceneNode, ctx: BuildContext) -> None:
    """Token-bound rectangle with the component name as its label."""
    fill = ctx.token(BindableProperty.FILL)
    if fill:
        ctx.binder.fill(node, fill, ctx.combo, rgb(0.96, 0.97, 0.98))
    radius = ctx.token(BindableProperty.RADIUS)
    if radius:
        ctx.binder.radius(node, radius, ctx.combo, 6)
    border = ctx.token(BindableProperty.BORDER)
    if border:
        ctx.binder.stroke(node, border, ctx.combo, rgb(0.886, 0.91, 0.941))

    font_size = 14 if ctx.definition.category == ComponentCategory.ATOM else 16
    label = ctx.binder.text(
        ctx.definition.name,
        font_size,
        "Medium",
        ctx.token(BindableProperty.TEXT),
        ctx.combo,
        rgb(0.06, 0.09, 0.16),
    )
    ctx.host.append_child(node, label)


BUILDERS: dict[ComponentKind, Builder] = {
    ComponentKind.BUTTON: build_button,
    ComponentKind.INPUT: build_input,
    ComponentKind.BADGE: build_badge,
    ComponentKind.AVATAR: build_avatar,
    ComponentKind.CHIP: build_chip,
    ComponentKind.CARD: build_card,
    ComponentKind.MODAL: build_modal,
}


def builder_for(name: str) -> Builder | None:
    """Dedicated builder for a component name, or None for the generic one."""
    try:
        return BUILDERS[ComponentKind(name)]
    except ValueError:
        return None
