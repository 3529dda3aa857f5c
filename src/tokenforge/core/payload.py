"""
Token payload loading.

Reads a synthesis payload from JSON or YAML and validates it into a
TokenPayload. Payloads written for the host plugin use camelCase keys
(``textStyles``, ``defaultVariant``, ``fontWeight``...); these are
normalised to the snake_case field names before validation.

The package ships a default payload at ``tokenforge/data/bundled_tokens.json``
which is used when no payload is supplied.
"""

from __future__ import annotations

import json
import logging
from importlib import resources
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .errors import DefinitionError, make_payload_error
from .ir import ComponentDefinition, TokenPayload

logger = logging.getLogger(__name__)

BUNDLED_PAYLOAD = "bundled_tokens.json"

# camelCase key → field name, applied to every mapping except token bodies
_KEY_ALIASES: dict[str, str] = {
    "textStyles": "text_styles",
    "effectStyles": "effect_styles",
    "colorStyles": "color_styles",
    "defaultVariant": "default_variant",
    "aliasPath": "alias_path",
    "fontFamily": "font_family",
    "fontSize": "font_size",
    "fontWeight": "font_weight",
    "lineHeight": "line_height",
    "letterSpacing": "letter_spacing",
    "variablePath": "variable_path",
    "themeKey": "theme_key",
}

# Mappings whose keys are data (token paths, axis names, theme keys), not fields
_DATA_KEYED = {
    "primitives",
    "semantic",
    "component",
    "themes",
    "overrides",
    "variants",
    "default_variant",
    "tokens",
}


def _normalise_keys(data: Any, parent: str | None = None) -> Any:
    if isinstance(data, list):
        return [_normalise_keys(item) for item in data]
    if not isinstance(data, dict):
        return data

    normalised: dict[str, Any] = {}
    for key, value in data.items():
        name = key if parent in _DATA_KEYED else _KEY_ALIASES.get(key, key)
        if parent in _DATA_KEYED:
            # Values of data-keyed mappings are themselves field mappings
            normalised[name] = _normalise_keys(value, None) if isinstance(value, dict) else value
        else:
            normalised[name] = _normalise_keys(value, name)
    return normalised


def parse_payload(data: Any, source: Path | None = None) -> TokenPayload:
    """
    Validate raw payload data.

    Raises:
        PayloadError: If the data is not a mapping or fails validation
    """
    if not isinstance(data, dict):
        raise make_payload_error("Token payload must be a mapping", file=source)
    try:
        return TokenPayload.model_validate(_normalise_keys(data))
    except ValidationError as e:
        first = e.errors()[0] if e.errors() else {}
        pointer = ".".join(str(part) for part in first.get("loc", ())) or None
        raise make_payload_error(
            f"Invalid token payload: {e.error_count()} validation error(s)\n{e}",
            file=source,
            pointer=pointer,
        ) from e


def load_payload(path: Path) -> TokenPayload:
    """Load a ``.json``, ``.yaml`` or ``.yml`` payload file.

    Args:
        path: Payload file

    Returns:
        Validated TokenPayload

    Raises:
        PayloadError: If the file is missing, unreadable or invalid
    """
    if not path.exists():
        raise make_payload_error(f"Payload not found: {path}")

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise make_payload_error(f"Cannot read payload: {e}", file=path) from e

    suffix = path.suffix.lower()
    try:
        if suffix in (".yaml", ".yml"):
            data = yaml.safe_load(content)
        elif suffix == ".json":
            data = json.loads(content)
        else:
            raise make_payload_error(
                f"Unsupported payload format '{suffix}' (expected .json, .yaml or .yml)",
                file=path,
            )
    except yaml.YAMLError as e:
        raise make_payload_error(f"Invalid YAML: {e}", file=path) from e
    except json.JSONDecodeError as e:
        raise make_payload_error(
            f"Invalid JSON: {e.msg}", file=path, pointer=f"line {e.lineno}"
        ) from e

    if not data:
        raise make_payload_error("Empty payload", file=path)

    payload = parse_payload(data, source=path)
    logger.debug(
        "Loaded payload %s: %d variables, %d components",
        path,
        payload.variables.total,
        len(payload.components),
    )
    return payload


def bundled_payload() -> TokenPayload | None:
    """The payload shipped with the package, or None when it is absent."""
    try:
        bundled = resources.files("tokenforge").joinpath("data").joinpath(BUNDLED_PAYLOAD)
        content = bundled.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.debug("No bundled payload available")
        return None
    return parse_payload(json.loads(content))


def find_component(payload: TokenPayload, name: str) -> ComponentDefinition:
    """
    Look up a component definition by name.

    Raises:
        DefinitionError: If the payload has no component with that name
    """
    for component in payload.components:
        if component.name == name:
            return component
    known = ", ".join(c.name for c in payload.components) or "none"
    raise DefinitionError(f"No component named '{name}' (available: {known})")


def dump_payload(payload: TokenPayload, path: Path) -> Path:
    """Write a payload as JSON (``.json``) or YAML (anything else)."""
    data = payload.model_dump(mode="json", exclude_none=True)
    if path.suffix.lower() == ".json":
        path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    else:
        path.write_text(
            yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True),
            encoding="utf-8",
        )
    return path
