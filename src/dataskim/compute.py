"""Run a resolved skimmer spec over one column's values.

Each statistic is isolated: an exception, or a value that does not match
the statistic's declared shape, becomes a StatisticFailure for that
statistic only. The other statistics on the column still run.
"""

from __future__ import annotations

import datetime as dt
import numbers
from collections.abc import Mapping, Sequence
from typing import Any

import numpy as np
import pandas as pd

from dataskim.core.logging import get_logger
from dataskim.core.models import StatisticFailure
from dataskim.skimmers.spec import SkimmerSpec, Statistic

logger = get_logger(__name__)

_SCALAR_TYPES = (
    str,
    bool,
    numbers.Number,
    dt.date,
    dt.time,
    dt.timedelta,
    np.generic,
    pd.Timestamp,
    pd.Timedelta,
    pd.Period,
)


class MalformedResultError(ValueError):
    """A statistic returned a value that does not match its declared shape."""


def _is_scalar_value(value: Any) -> bool:
    if value is None or value is pd.NaT or value is pd.NA:
        return True
    if isinstance(value, np.ndarray):
        return value.ndim == 0
    return isinstance(value, _SCALAR_TYPES)


def validate_result(statistic: Statistic, value: Any) -> Any:
    """Check a statistic's return value against its declared shape.

    Args:
        statistic: The statistic that produced the value
        value: Raw return value

    Returns:
        The value, with vectors normalized to a tuple of floats

    Raises:
        MalformedResultError: Wrong arity or non-numeric vector elements
    """
    if not statistic.is_vector:
        if not _is_scalar_value(value):
            raise MalformedResultError(
                f"'{statistic.name}' must return a scalar, got {type(value).__name__}"
            )
        if isinstance(value, np.ndarray):
            return value.item()
        return value

    if isinstance(value, str | bytes | Mapping) or not isinstance(
        value, Sequence | np.ndarray | pd.Series
    ):
        raise MalformedResultError(
            f"'{statistic.name}' must return a vector of {statistic.size}, "
            f"got {type(value).__name__}"
        )
    arr = np.asarray(value)
    if arr.ndim != 1 or arr.shape[0] != statistic.size:
        raise MalformedResultError(
            f"'{statistic.name}' must return {statistic.size} values, got shape {arr.shape}"
        )
    if not (np.issubdtype(arr.dtype, np.number) or np.issubdtype(arr.dtype, np.bool_)):
        raise MalformedResultError(f"'{statistic.name}' returned non-numeric values")
    return tuple(float(v) for v in arr)


def compute_statistic(statistic: Statistic, values: pd.Series) -> Any:
    """Compute one statistic, returning a StatisticFailure instead of raising."""
    try:
        return validate_result(statistic, statistic(values))
    except Exception as e:
        logger.warning(
            "statistic_failed",
            statistic=statistic.name,
            error_type=type(e).__name__,
            error=str(e),
        )
        return StatisticFailure.from_exception(statistic.name, e)


def compute_statistics(spec: SkimmerSpec, values: pd.Series) -> dict[str, Any]:
    """Compute every statistic in a spec, in insertion order.

    Args:
        spec: Resolved skimmers for the column
        values: Column values, missing entries included

    Returns:
        Mapping of statistic name to value or StatisticFailure
    """
    return {name: compute_statistic(statistic, values) for name, statistic in spec.items()}


def count_failures(results: Mapping[str, Any]) -> int:
    return sum(1 for value in results.values() if isinstance(value, StatisticFailure))
