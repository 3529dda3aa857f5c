"""
Symbol Table for token synthesis.

Maps token paths to the variables created for them. One table is owned
per synthesis run and passed explicitly to every stage; the Resolver and
Override stages write to it, everything downstream only reads.

Every variable is registered under two keys:

- its bare path (``color/primary/default``)
- its collection-qualified path (``semantic/color/primary/default``)

The table also records what each variable holds per mode (a literal or
an alias to another variable) so that concrete values can be resolved
for any (path, mode) pair without asking the host.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from .ir import LOOKUP_PREFIXES, Collection, ResolvedVariable, TokenValue, typed_default

logger = logging.getLogger(__name__)

# Alias chains longer than this are treated as cycles
MAX_ALIAS_DEPTH = 32


class SymbolTable:
    """Append-only path → variable registry with per-mode value bookkeeping."""

    def __init__(self) -> None:
        self._entries: dict[str, ResolvedVariable] = {}
        self._collections: dict[str, Collection] = {}
        self._values: dict[str, dict[str, TokenValue | ResolvedVariable]] = {}
        self.fallback_count = 0

    # --------------------------------------------------------------------- #
    # Registration
    # --------------------------------------------------------------------- #

    def register_collection(self, collection: Collection) -> None:
        """Make a collection's modes known for per-mode resolution."""
        self._collections[collection.id] = collection

    def register(self, variable: ResolvedVariable) -> None:
        """Register under the bare and the collection-qualified path.

        A later registration of the same key supersedes the earlier one;
        entries are never removed.
        """
        self._entries[variable.path] = variable
        self._entries[variable.qualified_path] = variable
        self._values.setdefault(variable.handle, {})

    def record_value(self, variable: ResolvedVariable, mode_id: str, value: TokenValue) -> None:
        self._values.setdefault(variable.handle, {})[mode_id] = value

    def record_alias(
        self, variable: ResolvedVariable, mode_id: str, target: ResolvedVariable
    ) -> None:
        self._values.setdefault(variable.handle, {})[mode_id] = target

    def note_fallback(self) -> None:
        """Count one typed-default substitution (aggregate only, never logged per item)."""
        self.fallback_count += 1

    # --------------------------------------------------------------------- #
    # Lookup
    # --------------------------------------------------------------------- #

    def get(self, key: str) -> ResolvedVariable | None:
        """Exact-key lookup, no prefix search."""
        return self._entries.get(key)

    def lookup(self, path: str) -> ResolvedVariable | None:
        """
        Resolve a token path.

        Lookup order: the raw key, then ``component/``, ``semantic/`` and
        ``primitives/`` prefixed keys. The first hit wins.
        """
        found = self._entries.get(path)
        if found is not None:
            return found
        for prefix in LOOKUP_PREFIXES:
            found = self._entries.get(f"{prefix}/{path}")
            if found is not None:
                return found
        return None

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def paths(self) -> list[str]:
        return list(self._entries)

    def variables(self) -> list[ResolvedVariable]:
        """Distinct registered variables, in registration order."""
        seen: dict[str, ResolvedVariable] = {}
        for variable in self._entries.values():
            seen.setdefault(variable.handle, variable)
        return list(seen.values())

    @property
    def is_empty(self) -> bool:
        return not self._entries

    # --------------------------------------------------------------------- #
    # Value resolution
    # --------------------------------------------------------------------- #

    def raw_value(
        self, variable: ResolvedVariable, mode_name: str | None = None
    ) -> TokenValue | ResolvedVariable | None:
        """What the variable holds for a mode, following the host's fallback rule.

        A mode that was never set falls back to the collection's default
        mode. A mode name the collection does not have also resolves
        against the default mode.
        """
        values = self._values.get(variable.handle, {})
        collection = self._collections.get(variable.collection_id)
        if collection is None or not collection.modes:
            return next(iter(values.values()), None)

        default_id = collection.default_mode.id
        mode = collection.mode_named(mode_name) if mode_name else None
        if mode is not None and mode.id in values:
            return values[mode.id]
        return values.get(default_id)

    def resolve_value(
        self, path_or_variable: str | ResolvedVariable, mode_name: str | None = None
    ) -> TokenValue | None:
        """
        Resolve a concrete value for a (path, mode) pair.

        Aliases are followed through the target's collection using the
        same mode name. Returns None only for an unknown path; a cycle or
        a variable with no recorded value yields its typed default.
        """
        if isinstance(path_or_variable, str):
            variable = self.lookup(path_or_variable)
            if variable is None:
                return None
        else:
            variable = path_or_variable

        current = variable
        for _ in range(MAX_ALIAS_DEPTH):
            held = self.raw_value(current, mode_name)
            if held is None:
                return typed_default(current.type)
            if not isinstance(held, ResolvedVariable):
                return held
            current = held

        logger.debug("Alias chain too deep for %s, using typed default", variable.path)
        return typed_default(variable.type)
