"""Type registry mapping column types to their default skimmers.

The registry is process-wide mutable state. Register types at setup time,
then summarize; concurrent writers must be serialized by the caller.

Usage:
    from dataskim.skimmers import SkimmerSpec, register_skimmers

    # Replace (never merge) the skimmers for a custom type
    register_skimmers("currency", SkimmerSpec.of(total=total, mean=mean))

    # Compose explicitly to keep the defaults
    register_skimmers("numeric", get_default_skimmers("numeric").extend(extra))
"""

from __future__ import annotations

from dataclasses import dataclass, field

from dataskim.core.errors import RegistryError
from dataskim.core.logging import get_logger
from dataskim.core.models import ColumnType, type_name
from dataskim.skimmers.spec import SkimmerSpec

logger = get_logger(__name__)


@dataclass
class TypeRegistry:
    """Mapping from column type to SkimmerSpec with a catch-all type.

    Lookups never fail: a type without an entry resolves to the spec
    registered for ``catch_all``.
    """

    specs: dict[ColumnType, SkimmerSpec] = field(default_factory=dict)
    catch_all: ColumnType = "character"

    def register(self, column_type: ColumnType, spec: SkimmerSpec) -> None:
        """Register a spec, replacing any existing one for the type.

        Args:
            column_type: Column type name
            spec: Statistics for the type, used as-is
        """
        if not isinstance(column_type, str) or not column_type:
            raise RegistryError(f"Column type must be a non-empty string, got {column_type!r}")
        column_type = type_name(column_type)
        if not isinstance(spec, SkimmerSpec):
            raise RegistryError(f"Expected SkimmerSpec for '{column_type}', got {type(spec)}")
        replaced = column_type in self.specs
        self.specs[column_type] = spec
        logger.debug(
            "skimmers_registered",
            column_type=column_type,
            statistics=spec.names(),
            replaced=replaced,
        )

    def unregister(self, column_type: ColumnType) -> None:
        """Remove a type. The catch-all type cannot be removed."""
        column_type = type_name(column_type)
        if column_type == self.catch_all:
            raise RegistryError(f"Cannot unregister catch-all type '{column_type}'")
        self.specs.pop(column_type, None)

    def is_registered(self, column_type: ColumnType) -> bool:
        return type_name(column_type) in self.specs

    def lookup(self, column_type: ColumnType) -> SkimmerSpec:
        """Get the spec for a type, falling back to the catch-all spec.

        Args:
            column_type: Column type name

        Returns:
            Registered spec, or the catch-all type's spec on a miss
        """
        spec = self.specs.get(type_name(column_type))
        if spec is not None:
            return spec
        fallback = self.specs.get(self.catch_all)
        if fallback is None:
            raise RegistryError(f"Catch-all type '{self.catch_all}' has no registered skimmers")
        return fallback

    def list_types(self) -> set[ColumnType]:
        return set(self.specs)

    def statistic_names(self) -> dict[ColumnType, list[str]]:
        """Get statistic names per registered type, in output order."""
        return {column_type: spec.names() for column_type, spec in self.specs.items()}

    def copy(self) -> TypeRegistry:
        """Independent registry with the same entries."""
        return TypeRegistry(specs=dict(self.specs), catch_all=self.catch_all)


def builtin_registry() -> TypeRegistry:
    """Create a registry populated with the built-in skimmers."""
    from dataskim.skimmers.statistics import CATCH_ALL_TYPE, DEFAULT_SKIMMERS

    registry = TypeRegistry(catch_all=CATCH_ALL_TYPE)
    for column_type, spec in DEFAULT_SKIMMERS.items():
        registry.register(column_type, spec)
    return registry


# Global registry instance
_default_registry: TypeRegistry | None = None


def get_default_registry() -> TypeRegistry:
    """Get the process-wide registry.

    Creates and populates the registry on first call.
    """
    global _default_registry
    if _default_registry is None:
        _default_registry = builtin_registry()
    return _default_registry


def reset_default_registry() -> TypeRegistry:
    """Discard all registrations and restore the built-in skimmers."""
    global _default_registry
    _default_registry = builtin_registry()
    return _default_registry


def register_skimmers(
    column_type: ColumnType,
    spec: SkimmerSpec,
    registry: TypeRegistry | None = None,
) -> None:
    """Register skimmers for a type in the default (or given) registry."""
    (registry or get_default_registry()).register(column_type, spec)


def get_default_skimmers(
    column_type: ColumnType, registry: TypeRegistry | None = None
) -> SkimmerSpec:
    """Get the spec a column of this type would use."""
    return (registry or get_default_registry()).lookup(column_type)


def get_default_skimmer_names(
    registry: TypeRegistry | None = None,
) -> dict[ColumnType, list[str]]:
    return (registry or get_default_registry()).statistic_names()
