"""Partition a data source's rows by grouping columns.

Groups are ordered by first appearance of their key in the data (not
sorted), so repeated runs over the same input give the same order.
Missing grouping values form their own group.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np
import pandas as pd

from dataskim.core.errors import DataSourceError, GroupingError
from dataskim.core.logging import get_logger
from dataskim.core.models import GroupKey
from dataskim.sources import DataSource

logger = get_logger(__name__)


@dataclass(frozen=True, eq=False)
class Group:
    """A group key and the row positions belonging to it."""

    key: GroupKey
    positions: np.ndarray

    def __len__(self) -> int:
        return len(self.positions)

    def take(self, values: pd.Series) -> pd.Series:
        """Select this group's rows from a column, re-indexed from zero."""
        return values.iloc[self.positions].reset_index(drop=True)


def _key_value(value: Any) -> Any:
    """Python scalar for a grouping value; all missing markers become None."""
    if value is None or (not isinstance(value, list | tuple) and pd.isna(value)):
        return None
    if isinstance(value, np.generic):
        return value.item()
    return value


def _as_key(level: Any) -> GroupKey:
    if isinstance(level, tuple):
        return tuple(_key_value(v) for v in level)
    return (_key_value(level),)


def group_rows(
    source: DataSource,
    group_by: Sequence[str] | None = None,
    levels: Iterable[Any] | None = None,
) -> list[Group]:
    """Split a source's rows into groups.

    Args:
        source: Data source to partition
        group_by: Grouping columns (default: the source's own group keys)
        levels: Keys to include even when no row matches them; such
            groups are empty and appended after the observed keys

    Returns:
        Groups in first-appearance order; a single group with key () when
        there are no grouping columns
    """
    keys = tuple(group_by) if group_by is not None else tuple(source.group_keys())
    n_rows = source.row_count()
    if not keys:
        return [Group(key=(), positions=np.arange(n_rows))]

    by_name = {column.name: column for column in source.columns()}
    missing = [key for key in keys if key not in by_name]
    if missing:
        raise GroupingError(f"Grouping columns not found: {', '.join(missing)}")

    key_frame = pd.DataFrame(
        {i: by_name[key].values().reset_index(drop=True) for i, key in enumerate(keys)}
    )
    if len(key_frame) != n_rows:
        raise DataSourceError(
            f"Grouping columns have {len(key_frame)} rows, source reports {n_rows}"
        )

    groups: list[Group] = []
    if n_rows:
        try:
            codes = (
                key_frame.groupby(list(key_frame.columns), sort=False, dropna=False, observed=True)
                .ngroup()
                .to_numpy()
            )
        except TypeError as e:
            raise GroupingError(f"Grouping values must be hashable: {e}") from e
        for code in range(int(codes.max()) + 1):
            positions = np.flatnonzero(codes == code)
            first = int(positions[0])
            key = tuple(_key_value(key_frame.iat[first, j]) for j in range(len(keys)))
            groups.append(Group(key=key, positions=positions))

    if levels is not None:
        seen = {group.key for group in groups}
        for level in levels:
            key = _as_key(level)
            if len(key) != len(keys):
                raise GroupingError(f"Level {level!r} does not match grouping columns {keys}")
            if key not in seen:
                seen.add(key)
                groups.append(Group(key=key, positions=np.array([], dtype=np.intp)))

    logger.debug("rows_grouped", group_by=list(keys), groups=len(groups), rows=n_rows)
    return groups
