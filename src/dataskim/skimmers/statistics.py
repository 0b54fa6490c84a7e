"""Built-in statistic functions and default skimmers per column type.

Every function takes the full column (a pandas Series, missing entries
included) and handles missing values itself. On empty input, counts return
0 and location/spread statistics return NaN (or NaT for temporal columns).

Default skimmers:
- all types: n_missing, complete_rate
- numeric: mean, sd, p0, p25, p50, p75, p100, hist
- character: min, max, empty, n_unique, whitespace
- factor: ordered, n_unique, top_counts
- logical: mean, count
- date / datetime / timedelta: min, max, median, n_unique
- list: n_unique, min_length, max_length
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Sequence
from typing import Any

import numpy as np
import pandas as pd

from dataskim.core.config import get_settings
from dataskim.core.models import BuiltinType
from dataskim.skimmers.spec import SkimmerSpec, Statistic
from dataskim.sparkline import (
    histogram_counts,
    inline_hist,
    render_linegraph,
    render_top_counts,
    sorted_counts,
)

# =============================================================================
# Shared helpers
# =============================================================================


def _numeric(values: pd.Series) -> pd.Series:
    """Present values as floats."""
    return pd.to_numeric(values, errors="coerce").astype(float).dropna()


def _strings(values: pd.Series) -> pd.Series:
    return values.dropna().astype(str)


def _temporal(values: pd.Series) -> pd.Series:
    if pd.api.types.is_datetime64_any_dtype(values) or pd.api.types.is_timedelta64_dtype(values):
        return values.dropna()
    return pd.to_datetime(values, errors="coerce").dropna()


def _holds_dates(values: pd.Series) -> bool:
    """True for object columns whose present values are all plain dates."""
    if values.dtype != object:
        return False
    present = values.dropna()
    return not present.empty and bool(
        present.map(lambda v: isinstance(v, dt.date) and not isinstance(v, dt.datetime)).all()
    )


def _restore_date(value: Any, values: pd.Series) -> Any:
    """Return python dates for columns that hold python dates."""
    if pd.isna(value) or not _holds_dates(values):
        return value
    return value.date()


# =============================================================================
# Base statistics (every type)
# =============================================================================


def n_missing(values: pd.Series) -> int:
    return int(values.isna().sum())


def complete_rate(values: pd.Series) -> float:
    if len(values) == 0:
        return float("nan")
    return 1.0 - n_missing(values) / len(values)


def n_unique(values: pd.Series) -> int:
    """Number of distinct present values."""
    return int(values.dropna().nunique())


# =============================================================================
# Numeric
# =============================================================================


def mean(values: pd.Series) -> float:
    present = _numeric(values)
    return float(present.mean()) if not present.empty else float("nan")


def sd(values: pd.Series) -> float:
    """Sample standard deviation (ddof=1); NaN with fewer than two values."""
    present = _numeric(values)
    return float(present.std(ddof=1)) if len(present) > 1 else float("nan")


def _quantile(q: float):
    def quantile(values: pd.Series) -> float:
        present = _numeric(values)
        return float(present.quantile(q)) if not present.empty else float("nan")

    quantile.__name__ = f"p{round(q * 100)}"
    return quantile


p0 = _quantile(0.0)
p25 = _quantile(0.25)
p50 = _quantile(0.5)
p75 = _quantile(0.75)
p100 = _quantile(1.0)


def hist(values: pd.Series) -> str:
    """Inline histogram of the present values."""
    return inline_hist(_numeric(values), get_settings().histogram_bins)


def quantiles(probs: Sequence[float], name: str = "quantiles") -> Statistic:
    """Vector statistic returning one quantile per probability."""
    probs = list(probs)

    def compute(values: pd.Series) -> list[float]:
        present = _numeric(values)
        if present.empty:
            return [float("nan")] * len(probs)
        return [float(v) for v in present.quantile(probs)]

    return Statistic(name=name, fn=compute, size=len(probs))


def hist_counts(bins: int, name: str = "hist_counts") -> Statistic:
    """Vector statistic returning the raw histogram bin counts."""

    def compute(values: pd.Series) -> list[int]:
        counts = histogram_counts(_numeric(values), bins)
        return [0] * bins if counts is None else [int(c) for c in counts]

    return Statistic(name=name, fn=compute, size=bins)


def line_graph(values: pd.Series) -> str:
    """Inline line graph of the values in row order.

    Not a default; meant for custom skimmers of ordered series, e.g.
    Statistic("trend", line_graph, chart=True).
    """
    return render_linegraph(_numeric(values))


# =============================================================================
# Character
# =============================================================================


def min_length(values: pd.Series) -> float:
    lengths = _strings(values).str.len()
    return int(lengths.min()) if not lengths.empty else float("nan")


def max_length(values: pd.Series) -> float:
    lengths = _strings(values).str.len()
    return int(lengths.max()) if not lengths.empty else float("nan")


def empty(values: pd.Series) -> int:
    """Number of empty strings."""
    return int((_strings(values) == "").sum())


def whitespace(values: pd.Series) -> int:
    """Number of non-empty strings made only of whitespace."""
    return int(_strings(values).str.fullmatch(r"\s+").sum())


def n_unique_text(values: pd.Series) -> int:
    return int(_strings(values).nunique())


# =============================================================================
# Factor / logical
# =============================================================================


def ordered(values: pd.Series) -> bool:
    dtype = values.dtype
    return bool(isinstance(dtype, pd.CategoricalDtype) and dtype.ordered)


def top_counts(values: pd.Series) -> str:
    settings = get_settings()
    return render_top_counts(
        sorted_counts(values),
        max_levels=settings.top_counts_max_levels,
        max_char=settings.top_counts_max_char,
    )


def logical_mean(values: pd.Series) -> float:
    """Proportion of present values that are true."""
    present = values.dropna()
    return float(present.astype(bool).mean()) if not present.empty else float("nan")


def logical_count(values: pd.Series) -> str:
    present = values.dropna().astype(bool)
    counts = [("TRUE" if label else "FALSE", n) for label, n in sorted_counts(present)]
    return render_top_counts(counts, max_levels=2, max_char=3)


# =============================================================================
# Temporal
# =============================================================================


def temporal_min(values: pd.Series) -> Any:
    present = _temporal(values)
    return _restore_date(present.min(), values) if not present.empty else pd.NaT


def temporal_max(values: pd.Series) -> Any:
    present = _temporal(values)
    return _restore_date(present.max(), values) if not present.empty else pd.NaT


def temporal_median(values: pd.Series) -> Any:
    present = _temporal(values)
    return _restore_date(present.median(), values) if not present.empty else pd.NaT


def temporal_n_unique(values: pd.Series) -> int:
    return int(_temporal(values).nunique())


# =============================================================================
# List-valued
# =============================================================================


def _lists(values: pd.Series) -> pd.Series:
    return values[values.map(lambda v: isinstance(v, list | tuple | np.ndarray))]


def list_n_unique(values: pd.Series) -> int:
    return len({tuple(v) for v in _lists(values)})


def list_min_length(values: pd.Series) -> float:
    lengths = _lists(values).map(len)
    return int(lengths.min()) if not lengths.empty else float("nan")


def list_max_length(values: pd.Series) -> float:
    lengths = _lists(values).map(len)
    return int(lengths.max()) if not lengths.empty else float("nan")


# =============================================================================
# Default skimmers
# =============================================================================

BASE_SKIMMERS = SkimmerSpec.of(n_missing=n_missing, complete_rate=complete_rate)


def with_base(spec: SkimmerSpec) -> SkimmerSpec:
    """Prefix a spec with the base statistics every type reports."""
    return BASE_SKIMMERS.extend(spec)


_TEMPORAL = SkimmerSpec.of(
    min=temporal_min,
    max=temporal_max,
    median=temporal_median,
    n_unique=temporal_n_unique,
)

DEFAULT_SKIMMERS: dict[str, SkimmerSpec] = {
    BuiltinType.NUMERIC.value: with_base(
        SkimmerSpec.of(
            mean=mean,
            sd=sd,
            p0=p0,
            p25=p25,
            p50=p50,
            p75=p75,
            p100=p100,
            hist=Statistic("hist", hist, chart=True),
        )
    ),
    BuiltinType.CHARACTER.value: with_base(
        SkimmerSpec.of(
            min=min_length,
            max=max_length,
            empty=empty,
            n_unique=n_unique_text,
            whitespace=whitespace,
        )
    ),
    BuiltinType.FACTOR.value: with_base(
        SkimmerSpec.of(ordered=ordered, n_unique=n_unique, top_counts=top_counts)
    ),
    BuiltinType.LOGICAL.value: with_base(SkimmerSpec.of(mean=logical_mean, count=logical_count)),
    BuiltinType.DATE.value: with_base(_TEMPORAL),
    BuiltinType.DATETIME.value: with_base(_TEMPORAL),
    BuiltinType.TIMEDELTA.value: with_base(_TEMPORAL),
    BuiltinType.LIST.value: with_base(
        SkimmerSpec.of(
            n_unique=list_n_unique,
            min_length=list_min_length,
            max_length=list_max_length,
        )
    ),
}

# Columns of unregistered types are skimmed as text
CATCH_ALL_TYPE = BuiltinType.CHARACTER.value
