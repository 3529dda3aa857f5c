"""
Layout packer types.

LayoutBox positions are assigned only by the packer; Section is the
category-grouped container produced by the section pass.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class LayoutBox:
    """Mutable rectangle. ``x``/``y`` are meaningful only after packing."""

    x: float = 0
    y: float = 0
    width: float = 0
    height: float = 0

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height


@dataclass
class GridPlacement:
    """Summary of one variant-grid arrangement."""

    columns: int
    rows: int
    cell_width: float
    cell_height: float
    width: float
    height: float


@dataclass
class Section:
    """A category-grouped, auto-sized container of artifacts."""

    category: str
    title: str
    children: list[LayoutBox] = field(default_factory=list)
    x: float = 0
    y: float = 0
    width: float = 0
    height: float = 0
    rows: int = 0


@dataclass
class SectionLayout:
    """Result of the section pass: stacked sections and the next free y."""

    sections: list[Section] = field(default_factory=list)
    next_y: float = 0
