"""Skimmers: statistic specs, the type registry and resolution.

Usage:
    from dataskim.skimmers import (
        SkimmerSpec,
        Statistic,
        get_default_registry,
        register_skimmers,
    )

    register_skimmers("currency", SkimmerSpec.of(n_missing=n_missing, total=total))
    spec = get_default_registry().lookup("currency")
"""

from dataskim.skimmers.registry import (
    TypeRegistry,
    builtin_registry,
    get_default_registry,
    get_default_skimmer_names,
    get_default_skimmers,
    register_skimmers,
    reset_default_registry,
)
from dataskim.skimmers.resolver import Overrides, resolve_skimmers
from dataskim.skimmers.spec import SkimmerSpec, Statistic, StatisticFn
from dataskim.skimmers.statistics import (
    BASE_SKIMMERS,
    CATCH_ALL_TYPE,
    DEFAULT_SKIMMERS,
    hist_counts,
    line_graph,
    quantiles,
    with_base,
)

__all__ = [
    # Specs
    "SkimmerSpec",
    "Statistic",
    "StatisticFn",
    # Registry
    "TypeRegistry",
    "builtin_registry",
    "get_default_registry",
    "get_default_skimmer_names",
    "get_default_skimmers",
    "register_skimmers",
    "reset_default_registry",
    # Resolution
    "Overrides",
    "resolve_skimmers",
    # Defaults
    "BASE_SKIMMERS",
    "CATCH_ALL_TYPE",
    "DEFAULT_SKIMMERS",
    "hist_counts",
    "line_graph",
    "quantiles",
    "with_base",
]
