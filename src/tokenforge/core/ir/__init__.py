"""
tokenforge Intermediate Representation (IR) types.

Token payload, component catalog, and host-record types, re-exported
from one place.
"""

from .components import (
    CATEGORY_ORDER,
    ComponentCategory,
    ComponentDefinition,
    VariantAxis,
)
from .tokens import (
    LOOKUP_PREFIXES,
    NEUTRAL_GRAY,
    RGBA,
    ColorStyleDef,
    EffectDef,
    EffectStyleDef,
    Offset,
    OverrideValue,
    StageOptions,
    TextStyleDef,
    ThemeOverrideSet,
    Tier,
    TierVariables,
    TokenDefinition,
    TokenPayload,
    TokenType,
    TokenValue,
    typed_default,
)
from .variables import Collection, Mode, ResolvedVariable

__all__ = [
    # Components
    "CATEGORY_ORDER",
    "ComponentCategory",
    "ComponentDefinition",
    "VariantAxis",
    # Tokens
    "LOOKUP_PREFIXES",
    "NEUTRAL_GRAY",
    "RGBA",
    "Tier",
    "TierVariables",
    "TokenDefinition",
    "TokenPayload",
    "TokenType",
    "TokenValue",
    "typed_default",
    # Themes
    "OverrideValue",
    "ThemeOverrideSet",
    # Styles
    "ColorStyleDef",
    "EffectDef",
    "EffectStyleDef",
    "Offset",
    "TextStyleDef",
    # Options
    "StageOptions",
    # Host records
    "Collection",
    "Mode",
    "ResolvedVariable",
]
