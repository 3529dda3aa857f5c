"""
Variable Resolver.

Walks one tier's token definitions in input order, creates a host
variable per definition, and sets its default-mode value: either a
literal, or an alias to a variable created by an earlier tier.

Tiers must be processed in dependency order (Primitives, Semantic,
Component). Any alias a later tier references then already exists in the
Symbol Table, so no topological sort is needed.

Failure handling:
- Name collision within a collection: skipped silently
- Alias not found / type mismatch: typed default substituted, counted
- Literal rejected by the host: typed default substituted, counted
- Typed default rejected as well: variable kept with no value, counted
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .errors import HostError, HostNameConflict
from .ir import Collection, ResolvedVariable, Tier, TokenDefinition, typed_default
from .symbols import SymbolTable

if TYPE_CHECKING:
    from tokenforge.host.base import HostPlatform

logger = logging.getLogger(__name__)


@dataclass
class ResolveReport:
    """Aggregate outcome of one tier's variable creation."""

    tier: Tier
    created: dict[str, ResolvedVariable] = field(default_factory=dict)
    skipped_conflicts: int = 0
    aliases_bound: int = 0
    fallbacks: list[str] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.created)


def create_variables(
    host: HostPlatform,
    collection: Collection,
    definitions: Sequence[TokenDefinition],
    mode_id: str,
    symbols: SymbolTable,
    tier: Tier,
) -> ResolveReport:
    """
    Create one variable per definition and register it in ``symbols``.

    Args:
        host: Host platform
        collection: Target collection (already holds its modes)
        definitions: Token definitions of this tier, in input order
        mode_id: Mode whose value is set (the collection's default mode)
        symbols: Shared Symbol Table, read for aliases and written with results
        tier: Tier of ``collection``; drives the qualified registration key

    Returns:
        ResolveReport; ``report.created`` maps path to ResolvedVariable
    """
    report = ResolveReport(tier=tier)
    symbols.register_collection(collection)

    for definition in definitions:
        try:
            handle = host.create_variable(definition.path, collection, definition.type)
        except HostNameConflict:
            # Later tiers reuse leaf names under other collections; a clash
            # inside one collection is expected and not reported
            report.skipped_conflicts += 1
            continue

        variable = ResolvedVariable(
            path=definition.path,
            collection_name=collection.name,
            collection_id=collection.id,
            tier=tier,
            handle=handle,
            type=definition.type,
        )

        if definition.description:
            host.set_description(handle, definition.description)

        if definition.alias_path is not None:
            if _bind_alias(host, variable, definition.alias_path, mode_id, symbols):
                report.aliases_bound += 1
            else:
                _set_fallback(host, variable, mode_id, symbols)
                report.fallbacks.append(definition.path)
        elif definition.value is not None:
            try:
                host.set_value(handle, mode_id, definition.value)
                symbols.record_value(variable, mode_id, definition.value)
            except HostError as e:
                logger.debug("Literal rejected for %s: %s", definition.path, e.message)
                _set_fallback(host, variable, mode_id, symbols)
                report.fallbacks.append(definition.path)

        report.created[definition.path] = variable
        symbols.register(variable)

    logger.debug(
        "%s: %d created, %d conflicts, %d fallbacks",
        collection.name,
        report.count,
        report.skipped_conflicts,
        len(report.fallbacks),
    )
    return report


def _bind_alias(
    host: HostPlatform,
    variable: ResolvedVariable,
    alias_path: str,
    mode_id: str,
    symbols: SymbolTable,
) -> bool:
    """Bind ``variable`` to the alias target. False when unresolved or mismatched."""
    target = symbols.lookup(alias_path)
    if target is None:
        return False
    try:
        host.set_alias(variable.handle, mode_id, target.handle)
    except HostError as e:
        logger.debug("Alias %s -> %s refused: %s", variable.path, alias_path, e.message)
        return False
    symbols.record_alias(variable, mode_id, target)
    return True


def _set_fallback(
    host: HostPlatform, variable: ResolvedVariable, mode_id: str, symbols: SymbolTable
) -> None:
    """Set the typed default. A host refusing it leaves the mode unset."""
    fallback = typed_default(variable.type)
    symbols.note_fallback()
    try:
        host.set_value(variable.handle, mode_id, fallback)
    except HostError as e:
        logger.debug("Fallback rejected for %s: %s", variable.path, e.message)
        return
    symbols.record_value(variable, mode_id, fallback)
