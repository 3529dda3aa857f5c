"""
Variant Combination Generator.

Enumerates the cartesian product of a component's variant axes, bounded
by a cap. Two truncation policies are available:

- traversal: declared-order generation, stopped at the cap
- nearest_to_default: candidates generated by how many axes differ from
  the default combination (ties keep traversal order), stopped at the cap

Combinations are plain ordered dicts ``{axis: value}`` whose key order
follows the declared axis order.
"""

from __future__ import annotations

import heapq
import itertools
from collections.abc import Iterator, Mapping, Sequence
from enum import StrEnum

VariantCombination = dict[str, str]

DEFAULT_VARIANT_CAP = 24


class TruncationPolicy(StrEnum):
    """Which combinations survive when the product exceeds the cap."""

    TRAVERSAL = "traversal"
    NEAREST_TO_DEFAULT = "nearest_to_default"


def _product(axes: Mapping[str, Sequence[str]]) -> Iterator[VariantCombination]:
    names = list(axes)
    for values in itertools.product(*(axes[name] for name in names)):
        yield dict(zip(names, values, strict=True))


def _deviations(
    axes: Mapping[str, Sequence[str]],
    default: Mapping[str, str],
    changed: frozenset[str],
) -> Iterator[VariantCombination]:
    """Combinations differing from ``default`` on exactly the ``changed`` axes."""
    choices = [
        [v for v in values if v != default.get(name)] if name in changed else [default[name]]
        for name, values in axes.items()
    ]
    names = list(axes)
    for values in itertools.product(*choices):
        yield dict(zip(names, values, strict=True))


def _by_distance(
    axes: Mapping[str, Sequence[str]], default: Mapping[str, str]
) -> Iterator[VariantCombination]:
    """
    Lazily yield combinations level by level: distance 0, then 1, ...

    Each level merges one stream per set of changed axes. Every stream is
    already in traversal order, so the merge keeps traversal order within
    the level without materialising it.
    """
    positions = {
        name: {value: i for i, value in reversed(list(enumerate(values)))}
        for name, values in axes.items()
    }

    def traversal_key(combo: VariantCombination) -> tuple[int, ...]:
        return tuple(positions[name][combo[name]] for name in axes)

    # Axes whose default is not one of their values differ on every combination
    forced = [name for name, values in axes.items() if default.get(name) not in values]
    optional = [name for name in axes if name not in forced]

    for extra in range(len(optional) + 1):
        streams = [
            _deviations(axes, default, frozenset((*forced, *subset)))
            for subset in itertools.combinations(optional, extra)
        ]
        yield from heapq.merge(*streams, key=traversal_key)


def distance(combo: Mapping[str, str], default: Mapping[str, str]) -> int:
    """Number of axes on which ``combo`` differs from ``default``."""
    return sum(1 for axis, value in combo.items() if default.get(axis) != value)


def is_default(combo: Mapping[str, str], default: Mapping[str, str]) -> bool:
    """True when every axis value equals the default's value."""
    return all(default.get(axis) == value for axis, value in combo.items())


def combination_name(combo: Mapping[str, str]) -> str:
    """Host variant name, e.g. ``"Size=md, State=default"``."""
    return ", ".join(f"{axis}={value}" for axis, value in combo.items())


def generate_combinations(
    axes: Mapping[str, Sequence[str]],
    default_combo: Mapping[str, str] | None = None,
    cap: int = DEFAULT_VARIANT_CAP,
    policy: TruncationPolicy = TruncationPolicy.TRAVERSAL,
) -> list[VariantCombination]:
    """
    Generate up to ``cap`` combinations over ``axes``.

    Args:
        axes: Ordered axis name → values
        default_combo: Default combination; required for nearest_to_default
        cap: Maximum number of combinations returned
        policy: Truncation policy

    Returns:
        List of combinations; ``[]`` for empty axes or a non-positive cap

    >>> generate_combinations({"Size": ["sm", "md"], "State": ["on", "off"]}, cap=3)
    [{'Size': 'sm', 'State': 'on'}, {'Size': 'sm', 'State': 'off'}, {'Size': 'md', 'State': 'on'}]
    """
    if not axes or cap <= 0:
        return []

    if policy == TruncationPolicy.TRAVERSAL:
        return list(itertools.islice(_product(axes), cap))

    if default_combo is None:
        raise ValueError("nearest_to_default truncation needs a default combination")
    return list(itertools.islice(_by_distance(axes, default_combo), cap))


def variant_set(
    axes: Mapping[str, Sequence[str]],
    default_combo: Mapping[str, str],
    cap: int = DEFAULT_VARIANT_CAP,
    policy: TruncationPolicy = TruncationPolicy.TRAVERSAL,
) -> list[VariantCombination]:
    """
    The combinations a component set is built from.

    The default comes first and appears exactly once; generated
    combinations equal to it are dropped. The total never exceeds ``cap``.
    """
    if not axes or cap <= 0:
        return []

    default = {axis: default_combo[axis] for axis in axes}
    combos = [default]
    for combo in generate_combinations(axes, default, cap, policy):
        if len(combos) >= cap:
            break
        if not is_default(combo, default):
            combos.append(combo)
    return combos
