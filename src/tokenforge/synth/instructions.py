"""
"Getting Started" section placed below the component sections.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from tokenforge.core.ir import RGBA
from tokenforge.events import LEVEL_DONE, SynthesisEvents, noop

if TYPE_CHECKING:
    from tokenforge.host.base import HostPlatform, SceneNode
    from tokenforge.synth.fonts import FontRegistry

SECTION_NAME = "Getting Started"
FRAME_WIDTH = 800
FRAME_OFFSET = 60
FRAME_PADDING = 48
ITEM_SPACING = 32

_TITLE_COLOR = RGBA(r=0.06, g=0.09, b=0.16)
_BODY_COLOR = RGBA(r=0.35, g=0.37, b=0.42)

INSTRUCTIONS: tuple[tuple[str, str], ...] = (
    (
        "Using Components",
        "Drag components from the Assets panel into your designs. Each component "
        "supports multiple variants: change Size, Variant and State in the "
        "properties panel.",
    ),
    (
        "Switching Themes",
        "The Semantic and Component collections carry one variable mode per theme. "
        "Select a frame and change the variable mode for both collections to switch "
        "themes. Some plans limit the number of modes per collection.",
    ),
    (
        "Light / Dark Mode",
        'Set the variable mode to "Dark" on both the Semantic and Component '
        "collections. Colors, surfaces, borders and text switch to their dark "
        "equivalents.",
    ),
    (
        "Rebranding / Custom Colors",
        'Open the Semantic collection and change "color/primary/default" (and its '
        "hover and subtle variants). Every component using the primary color "
        "updates. Color styles bound to the same variables are in the Styles panel.",
    ),
    (
        "Component Instances",
        "Organisms such as Card and Modal contain instances of atoms like Button. "
        "Editing the main Button component cascades to every organism using it.",
    ),
    (
        "Variable Collections",
        "Primitives: raw scales for color, spacing and radius (one mode). Semantic: "
        "intent-based tokens that reference primitives. Component: component "
        "tokens that reference semantic tokens.",
    ),
)


def create_instructions_section(
    host: HostPlatform,
    fonts: FontRegistry | None,
    y: float,
    events: SynthesisEvents | None = None,
    entries: Sequence[tuple[str, str]] = INSTRUCTIONS,
    title: str = "Design Tokens: Getting Started",
) -> SceneNode:
    """
    Build the instructions section at ``(0, y)`` and add it to the page.

    Text heights are taken from the host's text nodes; the frame and the
    section grow to fit them.
    """
    events = events or noop()

    def style(name: str) -> str | None:
        return fonts.resolve(name) if fonts else None

    def family(name: str) -> str | None:
        return fonts.family if fonts and style(name) else None

    section = host.create_section(SECTION_NAME)
    frame = host.create_frame("Instructions", FRAME_WIDTH, 10)
    host.set_fill(frame, RGBA(r=1, g=1, b=1))
    host.set_radius(frame, 16)
    host.set_properties(frame, layoutMode="VERTICAL", itemSpacing=ITEM_SPACING, padding=FRAME_PADDING)

    heading = host.create_text(title, font_size=28, family=family("Bold"), style=style("Bold"))
    host.set_fill(heading, _TITLE_COLOR)
    host.append_child(frame, heading)
    content_height = heading.height

    for label, body in entries:
        group = host.create_frame(label, FRAME_WIDTH - 2 * FRAME_PADDING, 10)
        host.set_properties(group, layoutMode="VERTICAL", itemSpacing=8)
        head = host.create_text(
            label, font_size=18, family=family("Semi Bold"), style=style("Semi Bold")
        )
        host.set_fill(head, _TITLE_COLOR)
        text = host.create_text(
            body, font_size=14, family=family("Regular"), style=style("Regular")
        )
        host.set_fill(text, _BODY_COLOR)
        host.set_properties(text, lineHeight={"unit": "PERCENT", "value": 160})
        host.append_child(group, head)
        host.append_child(group, text)
        host.resize(group, group.width, head.height + 8 + text.height)
        host.append_child(frame, group)
        content_height += ITEM_SPACING + group.height

    host.resize(frame, FRAME_WIDTH, content_height + 2 * FRAME_PADDING)
    frame.x = FRAME_OFFSET
    frame.y = FRAME_OFFSET
    host.append_child(section, frame)

    host.resize(section, frame.width + 2 * FRAME_OFFSET, frame.height + 2 * FRAME_OFFSET)
    section.x = 0
    section.y = y
    host.append_to_page(section)

    events.log("Instructions section created", LEVEL_DONE)
    return section
