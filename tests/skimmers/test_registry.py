"""Tests for the type registry."""

import pytest

from dataskim.core.errors import RegistryError
from dataskim.core.models import BuiltinType
from dataskim.skimmers import (
    SkimmerSpec,
    TypeRegistry,
    get_default_registry,
    get_default_skimmer_names,
    get_default_skimmers,
    register_skimmers,
    reset_default_registry,
)
from dataskim.skimmers.statistics import mean, n_missing


def total(values):
    return float(values.sum())


class TestTypeRegistry:
    """Tests for TypeRegistry."""

    def test_builtin_types_registered(self, registry: TypeRegistry):
        """Every built-in type has default skimmers."""
        assert {t.value for t in BuiltinType} <= registry.list_types()
        assert registry.catch_all == "character"

    def test_register_replaces(self, registry: TypeRegistry):
        """Registering a type again replaces its spec entirely."""
        spec = SkimmerSpec.of(total=total, n_missing=n_missing)
        registry.register("numeric", spec)

        assert registry.lookup("numeric") is spec
        assert registry.lookup("numeric").names() == ["total", "n_missing"]

    def test_register_twice_last_writer_wins(self, registry: TypeRegistry):
        """The second registration does not merge with the first."""
        registry.register("currency", SkimmerSpec.of(total=total))
        registry.register("currency", SkimmerSpec.of(mean=mean))

        assert registry.lookup("currency").names() == ["mean"]

    def test_lookup_miss_returns_catch_all(self, registry: TypeRegistry):
        """Unregistered types fall back to the catch-all spec."""
        assert registry.lookup("geometry") is registry.lookup("character")
        assert registry.is_registered("geometry") is False

    def test_enum_and_string_are_equivalent(self, registry: TypeRegistry):
        """BuiltinType members and their string values address the same entry."""
        spec = SkimmerSpec.of(total=total)
        registry.register(BuiltinType.NUMERIC, spec)

        assert registry.lookup("numeric") is spec
        assert registry.is_registered(BuiltinType.NUMERIC)

    def test_unregister(self, registry: TypeRegistry):
        """Unregistered types fall back to the catch-all."""
        registry.unregister("list")
        assert registry.is_registered("list") is False
        assert registry.lookup("list") is registry.lookup("character")

    def test_cannot_unregister_catch_all(self, registry: TypeRegistry):
        """The catch-all type always stays registered."""
        with pytest.raises(RegistryError):
            registry.unregister("character")

    def test_empty_registry_without_catch_all(self):
        """A registry without catch-all skimmers reports the misconfiguration."""
        with pytest.raises(RegistryError, match="Catch-all"):
            TypeRegistry().lookup("numeric")

    def test_register_rejects_non_spec(self, registry: TypeRegistry):
        """Only SkimmerSpec instances can be registered."""
        with pytest.raises(RegistryError):
            registry.register("numeric", {"total": total})

    def test_statistic_names(self, registry: TypeRegistry):
        """Statistic names are listed per type in output order."""
        names = registry.statistic_names()
        assert names["numeric"] == [
            "n_missing",
            "complete_rate",
            "mean",
            "sd",
            "p0",
            "p25",
            "p50",
            "p75",
            "p100",
            "hist",
        ]
        assert names["factor"] == [
            "n_missing",
            "complete_rate",
            "ordered",
            "n_unique",
            "top_counts",
        ]

    def test_copy_is_independent(self, registry: TypeRegistry):
        """Changes to a copy do not affect the original."""
        copy = registry.copy()
        copy.register("numeric", SkimmerSpec.of(total=total))

        assert registry.lookup("numeric").names()[0] == "n_missing"


class TestDefaultRegistry:
    """Tests for the process-wide registry helpers."""

    def test_singleton(self):
        """The default registry is created once."""
        assert get_default_registry() is get_default_registry()

    def test_register_skimmers(self):
        """register_skimmers() writes to the default registry."""
        register_skimmers("currency", SkimmerSpec.of(total=total))

        assert get_default_skimmers("currency").names() == ["total"]
        assert get_default_skimmer_names()["currency"] == ["total"]

    def test_reset_restores_builtins(self):
        """reset_default_registry() drops custom registrations."""
        register_skimmers("numeric", SkimmerSpec.of(total=total))
        reset_default_registry()

        assert "total" not in get_default_skimmers("numeric")
        assert "mean" in get_default_skimmers("numeric")

    def test_explicit_registry_argument(self, registry: TypeRegistry):
        """Helpers accept an explicit registry and leave the default alone."""
        register_skimmers("currency", SkimmerSpec.of(total=total), registry=registry)

        assert get_default_skimmers("currency", registry=registry).names() == ["total"]
        assert get_default_registry().is_registered("currency") is False
