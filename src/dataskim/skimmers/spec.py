"""Statistic and SkimmerSpec definitions.

A SkimmerSpec is an ordered, immutable mapping from statistic name to
Statistic. Insertion order defines the output order for a column type.

Usage:
    spec = SkimmerSpec.of(
        n_missing=n_missing,
        mean=mean,
        quantiles=Statistic("quantiles", quantiles, size=3),
    )
    custom = spec.without("quantiles").extend(SkimmerSpec.of(iqr=iqr))
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass, replace
from typing import Any

import pandas as pd

from dataskim.core.errors import SpecError

StatisticFn = Callable[[pd.Series], Any]


@dataclass(frozen=True)
class Statistic:
    """One named statistic function.

    The result shape is declared here, at registration time:
    size=None means the function returns a single scalar, size=N means it
    returns a fixed-size numeric vector of length N.

    Attributes:
        name: Statistic name, unique within a spec
        fn: Function from column values to the statistic value
        size: None for scalars, vector length otherwise
        chart: True for inline graphics dropped by skim_without_charts
    """

    name: str
    fn: StatisticFn
    size: int | None = None
    chart: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise SpecError(f"Statistic name must be a non-empty string, got {self.name!r}")
        if not callable(self.fn):
            raise SpecError(f"Statistic '{self.name}' function is not callable")
        if self.size is not None and (not isinstance(self.size, int) or self.size < 1):
            raise SpecError(f"Statistic '{self.name}' size must be a positive int or None")

    @property
    def is_vector(self) -> bool:
        return self.size is not None

    def __call__(self, values: pd.Series) -> Any:
        return self.fn(values)


def _as_statistic(name: str, value: Statistic | StatisticFn) -> Statistic:
    if isinstance(value, Statistic):
        return value if value.name == name else replace(value, name=name)
    return Statistic(name=name, fn=value)


class SkimmerSpec(Mapping[str, Statistic]):
    """Ordered set of named statistics for one column type."""

    __slots__ = ("_statistics",)

    def __init__(self, statistics: Iterable[Statistic] = ()):
        ordered: dict[str, Statistic] = {}
        for stat in statistics:
            if not isinstance(stat, Statistic):
                raise SpecError(f"Expected Statistic, got {type(stat).__name__}")
            if stat.name in ordered:
                raise SpecError(f"Duplicate statistic name '{stat.name}'")
            ordered[stat.name] = stat
        self._statistics = ordered

    @classmethod
    def of(cls, **functions: Statistic | StatisticFn) -> SkimmerSpec:
        """Build a spec from keyword functions, keeping argument order."""
        return cls(_as_statistic(name, value) for name, value in functions.items())

    def __getitem__(self, name: str) -> Statistic:
        return self._statistics[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._statistics)

    def __len__(self) -> int:
        return len(self._statistics)

    def __repr__(self) -> str:
        return f"SkimmerSpec({', '.join(self._statistics)})"

    def names(self) -> list[str]:
        return list(self._statistics)

    def statistics(self) -> list[Statistic]:
        return list(self._statistics.values())

    def extend(self, other: SkimmerSpec | Mapping[str, Statistic | StatisticFn]) -> SkimmerSpec:
        """Compose with another spec.

        Statistics in ``other`` replace same-named ones in place; new names
        are appended in ``other``'s order.
        """
        incoming = {name: _as_statistic(name, value) for name, value in other.items()}
        merged = [incoming.pop(name, stat) for name, stat in self._statistics.items()]
        merged.extend(incoming.values())
        return SkimmerSpec(merged)

    def without(self, *names: str) -> SkimmerSpec:
        """Drop the named statistics."""
        unknown = [n for n in names if n not in self._statistics]
        if unknown:
            raise SpecError(f"Unknown statistics: {', '.join(unknown)}")
        return SkimmerSpec(s for n, s in self._statistics.items() if n not in names)

    def only(self, *names: str) -> SkimmerSpec:
        """Keep the named statistics, in the given order."""
        unknown = [n for n in names if n not in self._statistics]
        if unknown:
            raise SpecError(f"Unknown statistics: {', '.join(unknown)}")
        return SkimmerSpec(self._statistics[n] for n in names)

    def without_charts(self) -> SkimmerSpec:
        return SkimmerSpec(s for s in self._statistics.values() if not s.chart)
