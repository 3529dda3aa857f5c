"""
W3C Design Token Community Group (DTCG) token tree → synthesis payload.

Reads DTCG token trees for the three tiers plus theme presets and produces
a TokenPayload. See: https://design-tokens.github.io/community-group/format/

Conventions:
- The first path segment of every leaf is the tier (``primitive``,
  ``semantic``, ``component``) and is dropped from the variable path.
- References (``{semantic.color.primary.default}``) become aliases to
  ``semantic/color/primary/default``; the ``primitive`` tier is addressed
  as ``primitives``.
- Only color, dimension, number and fontWeight tokens become variables.
  Shadows, gradients, font families and the like are skipped.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .colors import parse_color, parse_dimension
from .errors import make_payload_error
from .ir import (
    RGBA,
    OverrideValue,
    ThemeOverrideSet,
    TokenDefinition,
    TokenPayload,
    TokenType,
)
from .payload import parse_payload

logger = logging.getLogger(__name__)

PRIMITIVE_REF_PREFIX = "primitive"

_SUPPORTED_TYPES: dict[str, TokenType] = {
    "color": TokenType.COLOR,
    "dimension": TokenType.DIMENSION,
    "number": TokenType.NUMBER,
    "fontWeight": TokenType.FONT_WEIGHT,
}

DARK_THEME_LABEL = "Dark"
DARK_THEME_DESCRIPTION = "Standard dark mode"


@dataclass(frozen=True)
class DtcgToken:
    """A leaf of a DTCG tree with its inherited ``$type``."""

    path: tuple[str, ...]
    value: Any
    type: str | None = None
    description: str = ""


# =============================================================================
# Tree helpers
# =============================================================================


def walk_tokens(
    tree: Mapping[str, Any],
    path: tuple[str, ...] = (),
    inherited_type: str | None = None,
) -> list[DtcgToken]:
    """
    Collect leaf tokens in document order.

    A leaf is any mapping with a ``$value`` key. Groups may carry a
    ``$type`` which their descendants inherit unless they set their own.
    """
    tokens: list[DtcgToken] = []
    for key, node in tree.items():
        if key.startswith("$") or not isinstance(node, Mapping):
            continue
        if "$value" in node:
            tokens.append(
                DtcgToken(
                    path=(*path, key),
                    value=node["$value"],
                    type=node.get("$type") or inherited_type,
                    description=node.get("$description") or "",
                )
            )
        else:
            tokens.extend(
                walk_tokens(node, (*path, key), node.get("$type") or inherited_type)
            )
    return tokens


def is_reference(value: Any) -> bool:
    """True for a DTCG alias like ``{primitive.color.blue.600}``."""
    return isinstance(value, str) and value.startswith("{") and value.endswith("}")


def ref_to_path(ref: str) -> str:
    """
    Convert a DTCG reference into a collection-qualified variable path.

    >>> ref_to_path("{primitive.color.blue.600}")
    'primitives/color/blue/600'
    >>> ref_to_path("{semantic.color.primary.default}")
    'semantic/color/primary/default'
    """
    parts = ref[1:-1].split(".")
    if parts and parts[0] == PRIMITIVE_REF_PREFIX:
        parts[0] = "primitives"
    return "/".join(parts)


def token_type_for(dtcg_type: str | None) -> TokenType | None:
    """Variable type for a DTCG ``$type``; None for types that are not variables."""
    if dtcg_type is None:
        return None
    return _SUPPORTED_TYPES.get(dtcg_type)


def _literal(token_type: TokenType, raw: Any) -> RGBA | float | None:
    if token_type == TokenType.COLOR:
        channels = parse_color(raw)
        return RGBA(**channels) if channels is not None else None
    return parse_dimension(raw)


# =============================================================================
# Tiers
# =============================================================================


def tier_definitions(
    trees: Iterable[Mapping[str, Any]], *, allow_aliases: bool = True
) -> list[TokenDefinition]:
    """
    Build the token definitions of one tier.

    Each tree is walked in order; the leading tier segment of each leaf
    path is dropped. A later leaf with the same path replaces the earlier
    one. Unsupported types and unparseable literals are skipped.
    """
    definitions: dict[str, TokenDefinition] = {}
    for tree in trees:
        for token in walk_tokens(tree):
            token_type = token_type_for(token.type)
            if token_type is None or len(token.path) < 2:
                continue
            path = "/".join(token.path[1:])

            if allow_aliases and is_reference(token.value):
                definitions[path] = TokenDefinition(
                    path=path,
                    type=token_type,
                    alias_path=ref_to_path(token.value),
                    description=token.description,
                )
                continue

            value = _literal(token_type, token.value)
            if value is None:
                logger.debug("Skipping %s: cannot parse %r", path, token.value)
                continue
            definitions[path] = TokenDefinition(
                path=path, type=token_type, value=value, description=token.description
            )
    return list(definitions.values())


# =============================================================================
# Themes
# =============================================================================


def build_theme_overrides(presets: Mapping[str, Mapping[str, Any]]) -> dict[str, ThemeOverrideSet]:
    """
    Convert theme presets into override sets.

    A preset is ``{label, description, overrides: {"semantic.a.b": value}}``.
    Values that parse as colors or dimensions are kept; anything else
    (gradients, shadow strings) is dropped. Primitive-tier overrides are
    dropped with a warning because the Primitives collection has a
    single mode.
    """
    themes: dict[str, ThemeOverrideSet] = {}
    for key, preset in presets.items():
        overrides: dict[str, OverrideValue] = {}
        primitive_skipped = 0
        for dotted, raw in (preset.get("overrides") or {}).items():
            tier, _, rest = dotted.partition(".")
            if not rest:
                continue
            if tier in (PRIMITIVE_REF_PREFIX, "primitives"):
                primitive_skipped += 1
                continue
            full_path = f"{tier}/{rest.replace('.', '/')}"

            channels = parse_color(raw)
            if channels is not None:
                overrides[full_path] = OverrideValue(value=RGBA(**channels), type=TokenType.COLOR)
                continue
            number = parse_dimension(raw)
            if number is not None:
                overrides[full_path] = OverrideValue(value=number, type=TokenType.NUMBER)

        if primitive_skipped:
            logger.warning(
                "%s: skipped %d primitive override(s) (Primitives has a single mode)",
                key,
                primitive_skipped,
            )
        themes[key] = ThemeOverrideSet(
            theme_key=key,
            label=preset.get("label", key),
            description=preset.get("description", ""),
            overrides=overrides,
        )
    return themes


def build_dark_overrides(
    dark_tree: Mapping[str, Any], primitives: Iterable[TokenDefinition]
) -> dict[str, OverrideValue]:
    """
    Dark-mode overrides from a semantic ``dark`` namespace.

    ``semantic.color.dark.primary.default`` overrides
    ``semantic/color/primary/default``. References to primitives are
    resolved to the primitive's literal value.
    """
    literals = {d.path: d for d in primitives if d.value is not None}
    overrides: dict[str, OverrideValue] = {}

    for token in walk_tokens(dark_tree):
        parts = token.path[1:]
        if len(parts) < 3 or parts[1] != "dark":
            continue
        target = "semantic/" + "/".join((parts[0], *parts[2:]))

        if is_reference(token.value):
            ref = ref_to_path(token.value).removeprefix("primitives/")
            resolved = literals.get(ref)
            if resolved is not None:
                overrides[target] = OverrideValue(value=resolved.value, type=resolved.type)
        else:
            channels = parse_color(token.value)
            if channels is not None:
                overrides[target] = OverrideValue(value=RGBA(**channels), type=TokenType.COLOR)
    return overrides


# =============================================================================
# Payload
# =============================================================================


def transform_token_tree(
    primitives: Iterable[Mapping[str, Any]],
    semantic: Iterable[Mapping[str, Any]],
    component: Iterable[Mapping[str, Any]],
    themes: Mapping[str, Mapping[str, Any]] | None = None,
    *,
    dark: Mapping[str, Any] | None = None,
    catalog: Mapping[str, Any] | None = None,
) -> TokenPayload:
    """
    Build a synthesis payload from DTCG trees.

    Args:
        primitives: Primitive-tier trees (literals only)
        semantic: Semantic-tier trees
        component: Component-tier trees
        themes: Theme presets keyed by theme key
        dark: Optional tree holding the semantic ``dark`` namespace
        catalog: Optional ``{components, textStyles, effectStyles, colorStyles}``

    Returns:
        TokenPayload with ``meta.stats`` filled in
    """
    primitive_defs = tier_definitions(primitives, allow_aliases=False)
    semantic_defs = tier_definitions(semantic)
    component_defs = tier_definitions(component)

    theme_sets = build_theme_overrides(themes or {})
    if dark is not None:
        dark_overrides = build_dark_overrides(dark, primitive_defs)
        existing = theme_sets.get("dark")
        theme_sets["dark"] = ThemeOverrideSet(
            theme_key="dark",
            label=existing.label if existing else DARK_THEME_LABEL,
            description=existing.description if existing else DARK_THEME_DESCRIPTION,
            overrides={**(existing.overrides if existing else {}), **dark_overrides},
        )

    catalog = dict(catalog or {})
    data: dict[str, Any] = {
        "variables": {
            "primitives": [d.model_dump() for d in primitive_defs],
            "semantic": [d.model_dump() for d in semantic_defs],
            "component": [d.model_dump() for d in component_defs],
        },
        "themes": {key: theme.model_dump() for key, theme in theme_sets.items()},
        **{key: value for key, value in catalog.items() if key != "meta"},
    }
    payload = parse_payload(data)

    stats = {
        "primitiveVars": len(primitive_defs),
        "semanticVars": len(semantic_defs),
        "componentVars": len(component_defs),
        "totalVars": len(primitive_defs) + len(semantic_defs) + len(component_defs),
        "themes": len(theme_sets),
        "textStyles": len(payload.text_styles),
        "effectStyles": len(payload.effect_styles),
        "colorStyles": len(payload.color_styles),
        "components": len(payload.components),
    }
    return payload.model_copy(update={"meta": {"generator": "tokenforge-transform", "stats": stats}})


def _read_tree(path: Path) -> dict[str, Any]:
    try:
        if path.suffix.lower() in (".yaml", ".yml"):
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        else:
            data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise make_payload_error(f"Cannot read token file: {e}", file=path) from e
    if not isinstance(data, dict):
        raise make_payload_error("Token file must contain a mapping", file=path)
    return data


def _read_dir(directory: Path) -> list[dict[str, Any]]:
    if not directory.is_dir():
        return []
    return [_read_tree(path) for path in sorted(directory.glob("*.json"))]


def load_token_dir(tokens_dir: Path) -> TokenPayload:
    """
    Transform a DTCG token directory.

    Layout::

        tokens/
          primitives/*.json
          semantic/*.json      (dark.json also feeds the "dark" theme)
          components/*.json
          themes/*.json        (one preset per file, keyed by file stem)
          catalog.json|yaml    (optional components and style definitions)

    Raises:
        PayloadError: If the directory is missing or a file cannot be read
    """
    if not tokens_dir.is_dir():
        raise make_payload_error(f"Token directory not found: {tokens_dir}")

    themes = {
        path.stem: _read_tree(path) for path in sorted((tokens_dir / "themes").glob("*.json"))
    }
    dark_file = tokens_dir / "semantic" / "dark.json"
    dark = _read_tree(dark_file) if dark_file.is_file() else None

    catalog = None
    for name in ("catalog.json", "catalog.yaml", "catalog.yml"):
        candidate = tokens_dir / name
        if candidate.is_file():
            catalog = _read_tree(candidate)
            break

    payload = transform_token_tree(
        _read_dir(tokens_dir / "primitives"),
        _read_dir(tokens_dir / "semantic"),
        _read_dir(tokens_dir / "components"),
        themes,
        dark=dark,
        catalog=catalog,
    )
    logger.info(
        "Transformed %s: %d variables, %d themes",
        tokens_dir,
        payload.variables.total,
        len(payload.themes),
    )
    return payload
