"""Entry points: skim(), skim_without_charts() and skim_with().

Usage:
    import pandas as pd
    from dataskim import skim, skim_with, SkimmerSpec

    result = skim(df)
    result.to_wide_frame()

    # Grouped: one set of statistics per group, first-seen group order
    skim(df.groupby("region"))
    skim(df, group_by=["region"])

    # Call-local customization, the global registry is untouched
    skim_iqr = skim_with(numeric=SkimmerSpec.of(iqr=iqr))
    skim_iqr(df)
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any

from dataskim.assemble import CancelCheck, assemble
from dataskim.core.config import get_settings
from dataskim.core.models import ColumnType, type_name
from dataskim.result import SkimResult
from dataskim.skimmers.registry import TypeRegistry, get_default_registry
from dataskim.skimmers.resolver import Overrides, override_for
from dataskim.skimmers.spec import SkimmerSpec, Statistic, StatisticFn
from dataskim.sources import as_source

SpecLike = SkimmerSpec | Mapping[str, Statistic | StatisticFn]


def skim(
    data: Any,
    *columns: str,
    group_by: Sequence[str] | None = None,
    levels: Iterable[Any] | None = None,
    overrides: Overrides | None = None,
    registry: TypeRegistry | None = None,
    charts: bool = True,
    cancel: CancelCheck | None = None,
    max_workers: int | None = None,
    name: str | None = None,
) -> SkimResult:
    """Summarize a table with statistics chosen by each column's type.

    Args:
        data: pandas DataFrame, DataFrameGroupBy, or any DataSource
        *columns: Only summarize these columns (default: all)
        group_by: Grouping columns (default: the data's own grouping)
        levels: Group keys to report even when no row has them
        overrides: Call-local skimmers per type, replacing the registry's
        registry: Type registry (default: process-wide registry)
        charts: Include inline histograms
        cancel: Event or callable checked between columns
        max_workers: Thread pool size (default: settings.max_workers)
        name: Name reported in the result metadata

    Returns:
        SkimResult
    """
    source = as_source(data, name=name)
    if max_workers is None:
        max_workers = get_settings().max_workers
    return assemble(
        source,
        registry=registry,
        overrides=overrides,
        group_by=group_by,
        levels=levels,
        columns=list(columns) if columns else None,
        charts=charts,
        cancel=cancel,
        max_workers=max_workers,
    )


def skim_without_charts(data: Any, *columns: str, **kwargs: Any) -> SkimResult:
    """skim() without inline graphics."""
    return skim(data, *columns, charts=False, **kwargs)


def _as_spec(spec: SpecLike) -> SkimmerSpec:
    if isinstance(spec, SkimmerSpec):
        return spec
    return SkimmerSpec.of(**spec)


def skim_with(
    append: bool = True,
    registry: TypeRegistry | None = None,
    **specs: SpecLike,
) -> Callable[..., SkimResult]:
    """Build a skim function with custom skimmers for some types.

    Args:
        append: Compose each spec onto the type's registered skimmers
            (same-named statistics are replaced); when False the given
            spec is used alone
        registry: Registry the defaults are taken from at call time
        **specs: Column type name -> SkimmerSpec or mapping of functions

    Returns:
        A function with skim()'s signature
    """
    custom: dict[ColumnType, SkimmerSpec] = {
        type_name(column_type): _as_spec(spec) for column_type, spec in specs.items()
    }

    def custom_skim(data: Any, *columns: str, **kwargs: Any) -> SkimResult:
        caller_overrides = kwargs.pop("overrides", None)
        # A registry passed to this call wins over the one given to skim_with
        call_registry = kwargs.pop("registry", None) or registry or get_default_registry()

        def combined(column_type: ColumnType) -> SkimmerSpec | None:
            spec = override_for(caller_overrides, column_type)
            if spec is not None:
                return spec
            spec = custom.get(column_type)
            if spec is None or not append:
                return spec
            return call_registry.lookup(column_type).extend(spec)

        return skim(data, *columns, overrides=combined, registry=call_registry, **kwargs)

    custom_skim.__doc__ = f"skim() with custom skimmers for: {', '.join(custom) or 'none'}"
    return custom_skim
