"""
Token IR types for the three-tier token payload.

Defines the read-only input structure consumed by the synthesis engine:
tier variable lists, theme override sets, and style definitions.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..colors import parse_color
from .components import ComponentDefinition

# =============================================================================
# Enums
# =============================================================================


class Tier(StrEnum):
    """Token dependency tier. Declaration order is resolution order."""

    PRIMITIVES = "primitives"
    SEMANTIC = "semantic"
    COMPONENT = "component"

    @property
    def collection_name(self) -> str:
        return _COLLECTION_NAMES[self]

    @property
    def prefix(self) -> str:
        """Key prefix used for collection-qualified Symbol Table entries."""
        return self.value


_COLLECTION_NAMES: dict[Tier, str] = {
    Tier.PRIMITIVES: "Primitives",
    Tier.SEMANTIC: "Semantic",
    Tier.COMPONENT: "Component",
}

# Resolution order for unqualified alias lookups (first hit wins)
LOOKUP_PREFIXES: tuple[str, ...] = ("component", "semantic", "primitives")


class TokenType(StrEnum):
    """Declared type of a token definition."""

    COLOR = "color"
    DIMENSION = "dimension"
    NUMBER = "number"
    FONT_WEIGHT = "fontWeight"
    STRING = "string"
    BOOLEAN = "boolean"

    @property
    def host_type(self) -> str:
        """Variable type name used by the host platform."""
        return _HOST_TYPES[self]

    @property
    def is_numeric(self) -> bool:
        return self.host_type == "FLOAT"


_HOST_TYPES: dict[TokenType, str] = {
    TokenType.COLOR: "COLOR",
    TokenType.DIMENSION: "FLOAT",
    TokenType.NUMBER: "FLOAT",
    TokenType.FONT_WEIGHT: "FLOAT",
    TokenType.STRING: "STRING",
    TokenType.BOOLEAN: "BOOLEAN",
}

# Host type names accepted in payloads produced for the host directly
_HOST_TYPE_ALIASES: dict[str, TokenType] = {
    "COLOR": TokenType.COLOR,
    "FLOAT": TokenType.NUMBER,
    "STRING": TokenType.STRING,
    "BOOLEAN": TokenType.BOOLEAN,
}


# =============================================================================
# Values
# =============================================================================


class RGBA(BaseModel):
    """Color with 0-1 channel values."""

    model_config = ConfigDict(frozen=True)

    r: float = Field(ge=0.0, le=1.0)
    g: float = Field(ge=0.0, le=1.0)
    b: float = Field(ge=0.0, le=1.0)
    a: float = Field(default=1.0, ge=0.0, le=1.0)

    def to_hex(self) -> str:
        channels = (self.r, self.g, self.b)
        return "#" + "".join(f"{round(c * 255):02x}" for c in channels)


TokenValue = RGBA | bool | int | float | str

NEUTRAL_GRAY = RGBA(r=0.5, g=0.5, b=0.5, a=1.0)


def _coerce_color_value(data: dict[str, Any]) -> dict[str, Any]:
    """Turn a hex/rgba string value into channel values when typed as a color."""
    if data.get("type") in ("color", "COLOR") and isinstance(data.get("value"), str):
        parsed = parse_color(data["value"])
        if parsed is not None:
            data["value"] = parsed
    return data


def typed_default(token_type: TokenType) -> TokenValue:
    """Value substituted when an alias cannot be bound.

    Mid-gray for colors, numeric zero for numeric types. String and
    boolean tokens get their own empty values because the host rejects
    a number for them.
    """
    if token_type == TokenType.COLOR:
        return NEUTRAL_GRAY
    if token_type == TokenType.STRING:
        return ""
    if token_type == TokenType.BOOLEAN:
        return False
    return 0


# =============================================================================
# Token definitions
# =============================================================================


class TokenDefinition(BaseModel):
    """One leaf token. Exactly one of value/alias_path is meaningful."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(min_length=1)
    type: TokenType
    value: TokenValue | None = None
    alias_path: str | None = None
    description: str = ""

    @model_validator(mode="before")
    @classmethod
    def normalise_input(cls, data: Any) -> Any:
        """Accept the legacy ``alias`` key and CSS color strings."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if "alias" in data and "alias_path" not in data:
            data["alias_path"] = data.pop("alias")
        return _coerce_color_value(data)

    @field_validator("type", mode="before")
    @classmethod
    def accept_host_type_names(cls, v: Any) -> Any:
        if isinstance(v, str) and v in _HOST_TYPE_ALIASES:
            return _HOST_TYPE_ALIASES[v]
        return v

    @property
    def is_alias(self) -> bool:
        return self.alias_path is not None


def _definitions_from_mapping(data: Any) -> Any:
    """Accept the ``{path: {type, value|alias}}`` mapping form as well as a list."""
    if isinstance(data, dict):
        return [{"path": path, **body} for path, body in data.items()]
    return data


class TierVariables(BaseModel):
    """Token definitions grouped by tier, in resolution order."""

    model_config = ConfigDict(frozen=True)

    primitives: list[TokenDefinition] = Field(default_factory=list)
    semantic: list[TokenDefinition] = Field(default_factory=list)
    component: list[TokenDefinition] = Field(default_factory=list)

    @field_validator("primitives", "semantic", "component", mode="before")
    @classmethod
    def accept_mapping(cls, v: Any) -> Any:
        return _definitions_from_mapping(v)

    def for_tier(self, tier: Tier) -> list[TokenDefinition]:
        return list(getattr(self, tier.value))

    @property
    def total(self) -> int:
        return len(self.primitives) + len(self.semantic) + len(self.component)


# =============================================================================
# Theme overrides
# =============================================================================


class OverrideValue(BaseModel):
    """A single override entry. A missing value means "nothing to apply"."""

    model_config = ConfigDict(frozen=True)

    value: TokenValue | None = None
    type: TokenType | None = None

    @model_validator(mode="before")
    @classmethod
    def normalise_input(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return _coerce_color_value(dict(data))
        return data

    @field_validator("type", mode="before")
    @classmethod
    def accept_host_type_names(cls, v: Any) -> Any:
        if isinstance(v, str) and v in _HOST_TYPE_ALIASES:
            return _HOST_TYPE_ALIASES[v]
        return v


class ThemeOverrideSet(BaseModel):
    """Sparse per-theme overrides keyed by collection-qualified path."""

    model_config = ConfigDict(frozen=True)

    theme_key: str = ""
    label: str = ""
    description: str = ""
    overrides: dict[str, OverrideValue] = Field(default_factory=dict)

    def for_prefix(self, prefix: str) -> dict[str, OverrideValue]:
        marker = f"{prefix}/"
        return {k: v for k, v in self.overrides.items() if k.startswith(marker)}


# =============================================================================
# Styles
# =============================================================================


class TextStyleDef(BaseModel):
    """Named text style."""

    model_config = ConfigDict(frozen=True)

    name: str
    font_family: str = "Inter"
    font_size: float = 16
    font_weight: int = 400
    line_height: float = 1.5
    letter_spacing: float = 0.0


class Offset(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: float = 0
    y: float = 0


class EffectDef(BaseModel):
    """One shadow layer of an effect style."""

    model_config = ConfigDict(frozen=True)

    type: str = "DROP_SHADOW"
    color: RGBA = Field(default_factory=lambda: RGBA(r=0, g=0, b=0, a=0.1))
    offset: Offset = Field(default_factory=Offset)
    radius: float = 0
    spread: float = 0

    @field_validator("type")
    @classmethod
    def validate_type(cls, v: str) -> str:
        if v not in ("DROP_SHADOW", "INNER_SHADOW"):
            raise ValueError(f"Unsupported effect type '{v}'")
        return v


class EffectStyleDef(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    effects: list[EffectDef] = Field(default_factory=list)


class ColorStyleDef(BaseModel):
    """Paint style bound to a semantic variable, with a static fallback."""

    model_config = ConfigDict(frozen=True)

    name: str
    variable_path: str
    fallback: RGBA = NEUTRAL_GRAY


# =============================================================================
# Payload & options
# =============================================================================


class StageOptions(BaseModel):
    """Which pipeline stages to run."""

    model_config = ConfigDict(frozen=True)

    variables: bool = True
    text_styles: bool = True
    effect_styles: bool = True
    components: bool = True


class TokenPayload(BaseModel):
    """Complete synthesis input."""

    model_config = ConfigDict(frozen=True)

    variables: TierVariables = Field(default_factory=TierVariables)
    themes: dict[str, ThemeOverrideSet] = Field(default_factory=dict)
    text_styles: list[TextStyleDef] = Field(default_factory=list)
    effect_styles: list[EffectStyleDef] = Field(default_factory=list)
    color_styles: list[ColorStyleDef] = Field(default_factory=list)
    components: list[ComponentDefinition] = Field(default_factory=list)
    meta: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def key_themes(cls, data: Any) -> Any:
        """Default each theme's ``theme_key`` to its key in the mapping."""
        if isinstance(data, dict) and isinstance(data.get("themes"), dict):
            themes = {}
            for key, body in data["themes"].items():
                if isinstance(body, dict) and not body.get("theme_key"):
                    body = {**body, "theme_key": key}
                themes[key] = body
            data = {**data, "themes": themes}
        return data
