"""
tokenforge layout packer.

Deterministic placement of synthesized artifacts.

Key components:
- Variant grid arrangement (grid.py)
- Category section packing (sections.py)
"""

from tokenforge.layout.grid import (
    arrange_variant_grid,
    find_overlaps,
    grid_columns,
    overlaps,
)
from tokenforge.layout.sections import arrange_sections, pack_section
from tokenforge.layout.types import GridPlacement, LayoutBox, Section, SectionLayout

__all__ = [
    # Variant grid
    "arrange_variant_grid",
    "grid_columns",
    "overlaps",
    "find_overlaps",
    # Sections
    "arrange_sections",
    "pack_section",
    # Types
    "GridPlacement",
    "LayoutBox",
    "Section",
    "SectionLayout",
]
