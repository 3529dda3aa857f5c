"""
Component catalog IR types.

A ComponentDefinition owns an ordered map of variant axes, the default
combination, and the token path templates its visual properties bind to.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ComponentCategory(StrEnum):
    """Atomic-design category. Declaration order is section order."""

    ATOM = "atom"
    MOLECULE = "molecule"
    ORGANISM = "organism"
    TEMPLATE = "template"

    @property
    def section_title(self) -> str:
        return _CATEGORY_TITLES[self]

    @property
    def default_size(self) -> tuple[float, float]:
        return _CATEGORY_SIZES[self]


_CATEGORY_TITLES: dict[ComponentCategory, str] = {
    ComponentCategory.ATOM: "Atoms",
    ComponentCategory.MOLECULE: "Molecules",
    ComponentCategory.ORGANISM: "Organisms",
    ComponentCategory.TEMPLATE: "Templates",
}

_CATEGORY_SIZES: dict[ComponentCategory, tuple[float, float]] = {
    ComponentCategory.ATOM: (200, 40),
    ComponentCategory.MOLECULE: (320, 120),
    ComponentCategory.ORGANISM: (480, 320),
    ComponentCategory.TEMPLATE: (800, 600),
}

CATEGORY_ORDER: tuple[ComponentCategory, ...] = tuple(ComponentCategory)


class VariantAxis(BaseModel):
    """A named dimension of a component with a finite set of values."""

    model_config = ConfigDict(frozen=True)

    name: str
    values: list[str] = Field(min_length=1)


class ComponentDefinition(BaseModel):
    """
    One catalog entry.

    ``variants`` preserves declaration order; the last axis drives the
    column count of the variant grid. ``tokens`` maps a bindable property
    (fill, text, border, radius, ...) to a path template that may contain
    ``{Axis}`` placeholders.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    category: ComponentCategory = ComponentCategory.ATOM
    variants: dict[str, list[str]] = Field(default_factory=dict)
    default_variant: dict[str, str] = Field(default_factory=dict)
    tokens: dict[str, str] = Field(default_factory=dict)
    description: str = ""

    @model_validator(mode="after")
    def validate_default_variant(self) -> ComponentDefinition:
        """The default must pick exactly one declared value from every axis."""
        for axis, values in self.variants.items():
            if not values:
                raise ValueError(f"Component '{self.name}': axis '{axis}' has no values")
            if axis not in self.default_variant:
                raise ValueError(f"Component '{self.name}': default variant omits axis '{axis}'")
            if self.default_variant[axis] not in values:
                raise ValueError(
                    f"Component '{self.name}': default {axis}="
                    f"'{self.default_variant[axis]}' is not one of {values}"
                )
        extra = set(self.default_variant) - set(self.variants)
        if extra:
            raise ValueError(
                f"Component '{self.name}': default variant names unknown axes {sorted(extra)}"
            )
        return self

    @property
    def axes(self) -> list[VariantAxis]:
        return [VariantAxis(name=name, values=values) for name, values in self.variants.items()]

    @property
    def has_variants(self) -> bool:
        return bool(self.variants)

    @property
    def product_size(self) -> int:
        """Size of the full cartesian product of all axes (1 when there are none)."""
        total = 1
        for values in self.variants.values():
            total *= len(values)
        return total
