"""
tokenforge - design-token and component synthesis.

Compiles a three-tier token payload and a component catalog into
variable collections, styles and positioned components on a host
design tool.
"""

from __future__ import annotations

import re
from importlib.metadata import version as _metadata_version
from pathlib import Path as _Path

# Re-export commonly used types for convenience
from .core import ir
from .core.errors import HostError, ManifestError, PayloadError, TokenforgeError
from .events import SynthesisEvents
from .synth.pipeline import SynthesisStats, run_synthesis, synthesize


def _get_version() -> str:
    """Get version from pyproject.toml (editable) or importlib.metadata (installed)."""
    # In editable mode, read directly from pyproject.toml for live updates
    pyproject = _Path(__file__).parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        content = pyproject.read_text()
        if match := re.search(r'^version\s*=\s*["\']([^"\']+)["\']', content, re.MULTILINE):
            return match.group(1)

    # Fall back to installed metadata
    try:
        return _metadata_version("tokenforge")
    except Exception:
        return "0.0.0"


__version__ = _get_version()

__all__ = [
    "__version__",
    "ir",
    "TokenforgeError",
    "PayloadError",
    "ManifestError",
    "HostError",
    "SynthesisEvents",
    "SynthesisStats",
    "run_synthesis",
    "synthesize",
]
