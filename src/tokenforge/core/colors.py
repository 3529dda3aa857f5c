"""
Color and dimension parsing for token values.

Converts CSS-ish token strings into host values:

- ``#rgb`` / ``#rrggbb`` / ``#rrggbbaa`` hex colors
- ``rgb(r, g, b)`` / ``rgba(r, g, b, a)`` functional colors
- ``16``, ``16px``, ``1.5rem`` dimensions (1rem = 16px)

Channel values are normalised to the 0-1 range used by the host.
"""

from __future__ import annotations

import re
from typing import Any

REM_PX = 16.0

_RGBA_RE = re.compile(
    r"rgba?\(\s*([\d.]+)\s*,\s*([\d.]+)\s*,\s*([\d.]+)\s*(?:,\s*([\d.]+))?\s*\)"
)
_DIMENSION_RE = re.compile(r"^(-?[\d.]+)\s*(px|rem)?$")
_HEX_RE = re.compile(r"^[0-9a-fA-F]+$")


def hex_to_rgba(value: str) -> dict[str, float] | None:
    """Parse a hex color into an RGBA channel dict, or None if malformed."""
    hex_str = value.lstrip("#")
    if len(hex_str) == 3:
        hex_str = "".join(ch * 2 for ch in hex_str)
    if len(hex_str) not in (6, 8) or not _HEX_RE.match(hex_str):
        return None

    n = int(hex_str[:6], 16)
    alpha = int(hex_str[6:8], 16) / 255 if len(hex_str) == 8 else 1.0
    return {
        "r": ((n >> 16) & 255) / 255,
        "g": ((n >> 8) & 255) / 255,
        "b": (n & 255) / 255,
        "a": alpha,
    }


def rgb_function_to_rgba(value: str) -> dict[str, float] | None:
    """Parse ``rgb()``/``rgba()`` notation into an RGBA channel dict."""
    match = _RGBA_RE.search(value)
    if not match:
        return None
    return {
        "r": min(float(match.group(1)) / 255, 1.0),
        "g": min(float(match.group(2)) / 255, 1.0),
        "b": min(float(match.group(3)) / 255, 1.0),
        "a": float(match.group(4)) if match.group(4) is not None else 1.0,
    }


def parse_color(value: Any) -> dict[str, float] | None:
    """Parse a hex or rgb()/rgba() color string. Non-strings yield None."""
    if not isinstance(value, str):
        return None
    value = value.strip()
    if value.startswith("#"):
        return hex_to_rgba(value)
    if value.startswith("rgb"):
        return rgb_function_to_rgba(value)
    return None


def parse_dimension(value: Any) -> float | None:
    """Parse a px/rem dimension (or a bare number) into pixels."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return float(value)
    if not isinstance(value, str):
        return None
    match = _DIMENSION_RE.match(value.strip())
    if not match:
        return None
    try:
        number = float(match.group(1))
    except ValueError:
        return None
    if match.group(2) == "rem":
        return number * REM_PX
    return number
