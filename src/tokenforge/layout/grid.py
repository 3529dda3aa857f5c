"""
Variant grid arrangement.

Places the variants of one component into a uniform, rectangular grid so
that component-set members never overlap regardless of their individual
sizes.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence

from tokenforge.layout.types import GridPlacement, LayoutBox

DEFAULT_GAP = 20
MAX_SINGLE_AXIS_COLUMNS = 6
MIN_COLUMNS = 2


def grid_columns(axes: Mapping[str, Sequence[str]], count: int) -> int:
    """
    Column count heuristic for a variant grid.

    Priority order:
    1. More than one axis: the number of values on the *last* declared axis
    2. Exactly one axis: ``min(len(values), 6)``
    3. Otherwise: ``ceil(sqrt(count))``

    The result is floored at 2.

    Examples:
        >>> grid_columns({"Size": ["sm", "md", "lg"], "State": ["default", "hover"]}, 6)
        2
        >>> grid_columns({"Variant": ["a", "b", "c", "d", "e", "f", "g"]}, 7)
        6
        >>> grid_columns({}, 9)
        3
    """
    names = list(axes)
    if len(names) > 1:
        columns = len(axes[names[-1]])
    elif len(names) == 1:
        columns = min(len(axes[names[0]]), MAX_SINGLE_AXIS_COLUMNS)
    else:
        columns = math.ceil(math.sqrt(count)) if count > 0 else 0
    return max(columns, MIN_COLUMNS)


def arrange_variant_grid(
    boxes: Sequence[LayoutBox],
    axes: Mapping[str, Sequence[str]],
    *,
    gap_x: float = DEFAULT_GAP,
    gap_y: float = DEFAULT_GAP,
    fallback_size: tuple[float, float] = (0, 0),
) -> GridPlacement:
    """
    Position ``boxes`` in place on a uniform grid.

    Every cell is ``maxW x maxH`` across all boxes; box ``i`` lands at
    column ``i % columns`` and row ``i // columns``. A box reporting a zero
    width or height is measured with ``fallback_size`` instead.

    Args:
        boxes: Variant artifacts, default combination first
        axes: Ordered variant axes of the component
        gap_x: Horizontal gap between cells
        gap_y: Vertical gap between cells
        fallback_size: Size used for boxes that report no size

    Returns:
        GridPlacement describing the resulting grid
    """
    columns = grid_columns(axes, len(boxes))
    if not boxes:
        return GridPlacement(columns=columns, rows=0, cell_width=0, cell_height=0, width=0, height=0)

    max_w = max(box.width or fallback_size[0] for box in boxes)
    max_h = max(box.height or fallback_size[1] for box in boxes)

    for index, box in enumerate(boxes):
        col = index % columns
        row = index // columns
        box.x = col * (max_w + gap_x)
        box.y = row * (max_h + gap_y)

    rows = math.ceil(len(boxes) / columns)
    used_columns = min(columns, len(boxes))
    return GridPlacement(
        columns=columns,
        rows=rows,
        cell_width=max_w,
        cell_height=max_h,
        width=used_columns * max_w + (used_columns - 1) * gap_x,
        height=rows * max_h + (rows - 1) * gap_y,
    )


def overlaps(a: LayoutBox, b: LayoutBox) -> bool:
    """True when two boxes share any area (touching edges do not overlap)."""
    return a.x < b.right and b.x < a.right and a.y < b.bottom and b.y < a.bottom


def find_overlaps(boxes: Sequence[LayoutBox]) -> list[tuple[int, int]]:
    """Return index pairs of overlapping boxes."""
    pairs: list[tuple[int, int]] = []
    for i in range(len(boxes)):
        for j in range(i + 1, len(boxes)):
            if overlaps(boxes[i], boxes[j]):
                pairs.append((i, j))
    return pairs
