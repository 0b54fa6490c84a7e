"""Tests for skimmer resolution."""

import pytest
from structlog.testing import capture_logs

from dataskim.core.errors import SpecError
from dataskim.core.models import BuiltinType
from dataskim.skimmers import SkimmerSpec, TypeRegistry, resolve_skimmers
from dataskim.skimmers.resolver import override_for


def total(values):
    return float(values.sum())


class TestOverrideFor:
    """Tests for reading caller overrides."""

    def test_none(self):
        assert override_for(None, "numeric") is None

    def test_mapping_with_enum_keys(self):
        """Enum keys match plain type names."""
        spec = SkimmerSpec.of(total=total)
        assert override_for({BuiltinType.NUMERIC: spec}, "numeric") is spec
        assert override_for({BuiltinType.NUMERIC: spec}, "character") is None

    def test_callable(self):
        """Callables receive the plain type name."""
        spec = SkimmerSpec.of(total=total)
        seen = []

        def overrides(column_type):
            seen.append(column_type)
            return spec if column_type == "numeric" else None

        assert override_for(overrides, BuiltinType.NUMERIC) is spec
        assert seen == ["numeric"]


class TestResolveSkimmers:
    """Tests for resolve_skimmers()."""

    def test_registered_type(self, registry: TypeRegistry):
        """Registered types get their registry spec."""
        spec = resolve_skimmers("numeric", registry)
        assert spec is registry.lookup("numeric")

    def test_override_replaces_registry(self, registry: TypeRegistry):
        """An override is used exclusively, with no base statistics added."""
        spec = resolve_skimmers("numeric", registry, overrides={"numeric": SkimmerSpec.of(t=total)})
        assert spec.names() == ["t"]

    def test_callable_returning_none_falls_back(self, registry: TypeRegistry):
        """A callable override may decline a type."""
        spec = resolve_skimmers("factor", registry, overrides=lambda column_type: None)
        assert spec is registry.lookup("factor")

    def test_unregistered_type_uses_catch_all(self, registry: TypeRegistry, debug_logging):
        """Unregistered types resolve to the catch-all and log the fallback."""
        with capture_logs() as logs:
            spec = resolve_skimmers("geometry", registry)

        assert spec is registry.lookup("character")
        fallback = [log for log in logs if log["event"] == "skimmer_fallback"]
        assert len(fallback) == 1
        assert fallback[0]["column_type"] == "geometry"
        assert fallback[0]["catch_all"] == "character"

    def test_charts_dropped(self, registry: TypeRegistry):
        """charts=False removes chart statistics only."""
        spec = resolve_skimmers("numeric", registry, charts=False)
        assert "hist" not in spec
        assert spec.names()[-1] == "p100"

    def test_default_registry(self):
        """The process-wide registry is used when none is given."""
        assert "mean" in resolve_skimmers("numeric")

    def test_invalid_override(self, registry: TypeRegistry):
        """Overrides must be SkimmerSpec instances."""
        with pytest.raises(SpecError, match="numeric"):
            resolve_skimmers("numeric", registry, overrides={"numeric": [total]})
