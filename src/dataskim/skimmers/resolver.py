"""Resolve the concrete skimmers for a column.

Per-call overrides are total replacements for their type, matching the
registry's replace semantics. Anything else comes from the registry,
including the catch-all fallback.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping

from dataskim.core.errors import SpecError
from dataskim.core.logging import get_logger
from dataskim.core.models import ColumnType, type_name
from dataskim.skimmers.registry import TypeRegistry, get_default_registry
from dataskim.skimmers.spec import SkimmerSpec

logger = get_logger(__name__)

# Mapping of type -> spec, or a function returning a spec (or None) for a type
Overrides = Mapping[ColumnType, SkimmerSpec] | Callable[[ColumnType], SkimmerSpec | None]


def override_for(overrides: Overrides | None, column_type: ColumnType) -> SkimmerSpec | None:
    """Get the caller-supplied spec for a type, if any."""
    if overrides is None:
        return None
    if isinstance(overrides, Mapping):
        normalized = {type_name(k): v for k, v in overrides.items()}
        return normalized.get(type_name(column_type))
    return overrides(type_name(column_type))


def resolve_skimmers(
    column_type: ColumnType,
    registry: TypeRegistry | None = None,
    overrides: Overrides | None = None,
    charts: bool = True,
) -> SkimmerSpec:
    """Get the ordered statistics to run for a column of this type.

    Args:
        column_type: The column's declared type
        registry: Registry to consult (default: process-wide registry)
        overrides: Call-local specs that replace the registry's entry
        charts: When False, inline graphics are dropped

    Returns:
        The SkimmerSpec to execute
    """
    column_type = type_name(column_type)
    spec = override_for(overrides, column_type)
    if spec is None:
        registry = registry or get_default_registry()
        if not registry.is_registered(column_type):
            logger.info(
                "skimmer_fallback",
                column_type=column_type,
                catch_all=registry.catch_all,
            )
        spec = registry.lookup(column_type)
    elif not isinstance(spec, SkimmerSpec):
        raise SpecError(f"Override for '{column_type}' must be a SkimmerSpec, got {type(spec)}")
    return spec if charts else spec.without_charts()
