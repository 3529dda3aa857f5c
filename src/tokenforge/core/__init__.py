"""Core tokenforge functionality: IR, payload loading, Symbol Table, variables, overrides, variants."""

from . import ir
from .errors import (
    DefinitionError,
    ErrorContext,
    HostError,
    ManifestError,
    PayloadError,
    TokenforgeError,
)
from .manifest import ForgeManifest, find_manifest, load_manifest
from .modes import create_collection
from .overrides import OverrideResult, apply_overrides, apply_theme_overrides
from .payload import bundled_payload, find_component, load_payload, parse_payload
from .resolver import ResolveReport, create_variables
from .symbols import SymbolTable
from .variants import TruncationPolicy, generate_combinations, variant_set

__all__ = [
    "ir",
    # Errors
    "TokenforgeError",
    "PayloadError",
    "ManifestError",
    "DefinitionError",
    "HostError",
    "ErrorContext",
    # Configuration & payload
    "ForgeManifest",
    "load_manifest",
    "find_manifest",
    "load_payload",
    "parse_payload",
    "bundled_payload",
    "find_component",
    # Engine
    "SymbolTable",
    "create_collection",
    "create_variables",
    "ResolveReport",
    "apply_overrides",
    "apply_theme_overrides",
    "OverrideResult",
    "generate_combinations",
    "variant_set",
    "TruncationPolicy",
]
