"""
Section packing.

Groups component artifacts by category and packs each group into an
auto-sized section with a single-pass, row-wrapping heuristic. Sections
are stacked vertically in the declared category order.

The heuristic is deterministic and non-backtracking. It is not an optimal
packer: the goals are non-overlap and reasonable fill, not density.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from tokenforge.layout.types import LayoutBox, Section, SectionLayout

DEFAULT_MAX_ROW_WIDTH = 4000
DEFAULT_PADDING = 80
DEFAULT_GAP = 60
DEFAULT_SECTION_GAP = 120


def pack_section(
    category: str,
    boxes: Sequence[LayoutBox],
    *,
    title: str | None = None,
    max_row_width: float = DEFAULT_MAX_ROW_WIDTH,
    padding: float = DEFAULT_PADDING,
    gap: float = DEFAULT_GAP,
) -> Section:
    """
    Pack ``boxes`` left to right, wrapping into rows, and size the section.

    A new row starts when the next box would cross ``max_row_width`` and
    the current row already holds a box; an oversized box on an empty row
    stays where it is.

    Box positions are relative to the section origin.
    """
    cursor_x = padding
    cursor_y = padding
    row_max_height: float = 0
    rows = 1 if boxes else 0

    for box in boxes:
        if cursor_x > padding and cursor_x + box.width > max_row_width:
            cursor_x = padding
            cursor_y += row_max_height + gap
            row_max_height = 0
            rows += 1

        box.x = cursor_x
        box.y = cursor_y

        cursor_x += box.width + gap
        row_max_height = max(row_max_height, box.height)

    return Section(
        category=category,
        title=title or category,
        children=list(boxes),
        width=max(cursor_x + padding, max_row_width),
        height=cursor_y + row_max_height + padding,
        rows=rows,
    )


def arrange_sections(
    artifacts_by_category: Mapping[str, Sequence[LayoutBox]],
    categories: Sequence[str],
    *,
    titles: Mapping[str, str] | None = None,
    max_row_width: float = DEFAULT_MAX_ROW_WIDTH,
    padding: float = DEFAULT_PADDING,
    gap: float = DEFAULT_GAP,
    section_gap: float = DEFAULT_SECTION_GAP,
    start_y: float = 0,
) -> SectionLayout:
    """
    Pack every non-empty category into a section and stack the sections.

    Args:
        artifacts_by_category: Artifacts grouped by category
        categories: Category order; categories not listed are ignored
        titles: Optional display titles per category
        max_row_width: Row width before wrapping
        padding: Inner section padding
        gap: Gap between artifacts (both axes)
        section_gap: Vertical gap between stacked sections
        start_y: y of the first section

    Returns:
        SectionLayout with positioned sections and the next free y
    """
    titles = titles or {}
    layout = SectionLayout(next_y=start_y)

    for category in categories:
        boxes = artifacts_by_category.get(category) or []
        if not boxes:
            continue

        section = pack_section(
            category,
            boxes,
            title=titles.get(category),
            max_row_width=max_row_width,
            padding=padding,
            gap=gap,
        )
        section.x = 0
        section.y = layout.next_y
        layout.sections.append(section)
        layout.next_y += section.height + section_gap

    return layout
