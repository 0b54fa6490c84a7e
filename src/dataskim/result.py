"""The assembled summary of one skim() call.

The long form, one StatRow per (group, variable, statistic), is the
canonical representation. Wide tables are derived views keyed by
(group, variable) rows and type-namespaced statistic columns; cells for
statistics a variable's type does not have are left unset (NaN).
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from typing import Any, overload

import pandas as pd

from dataskim.core.models import ColumnType, SkimMetadata, StatRow

VARIABLE_COLUMN = "skim_variable"
TYPE_COLUMN = "skim_type"
STAT_COLUMN = "stat"
VALUE_COLUMN = "value"


def _unique(items: Iterable[Any]) -> list[Any]:
    return list(dict.fromkeys(items))


def long_frame(rows: Sequence[StatRow], group_by: Sequence[str]) -> pd.DataFrame:
    records = [
        {
            **dict(zip(group_by, row.group, strict=True)),
            VARIABLE_COLUMN: row.variable,
            TYPE_COLUMN: row.column_type,
            STAT_COLUMN: row.statistic,
            VALUE_COLUMN: row.value,
        }
        for row in rows
    ]
    columns = [*group_by, VARIABLE_COLUMN, TYPE_COLUMN, STAT_COLUMN, VALUE_COLUMN]
    return pd.DataFrame.from_records(records, columns=columns)


def wide_frame(rows: Sequence[StatRow], group_by: Sequence[str], namespaced: bool) -> pd.DataFrame:
    """Reshape rows to one record per (group, variable).

    Args:
        rows: Long-form rows
        group_by: Names of the grouping columns
        namespaced: Name statistic columns "type.statistic" (mixed types)
            or just "statistic" (single type). Plain names that clash with
            a grouping, type or variable column are namespaced anyway

    Returns:
        Wide DataFrame; absent statistics are NaN, never zero
    """
    reserved = {TYPE_COLUMN, VARIABLE_COLUMN, *group_by}
    records: dict[tuple[Any, str], dict[str, Any]] = {}
    stat_columns: list[str] = []
    for row in rows:
        record = records.get((row.group, row.variable))
        if record is None:
            record = {
                **dict(zip(group_by, row.group, strict=True)),
                TYPE_COLUMN: row.column_type,
                VARIABLE_COLUMN: row.variable,
            }
            records[(row.group, row.variable)] = record
        column = row.column_name if namespaced or row.statistic in reserved else row.statistic
        if column not in stat_columns:
            stat_columns.append(column)
        record[column] = row.value

    columns = [TYPE_COLUMN, VARIABLE_COLUMN, *group_by, *stat_columns]
    return pd.DataFrame.from_records(list(records.values()), columns=columns)


class SkimResult(Sequence[StatRow]):
    """Immutable long-form summary plus metadata.

    Attributes:
        metadata: Row/column counts, grouping keys and type frequencies
            (a copy; the result itself never changes)
    """

    def __init__(self, rows: Iterable[StatRow], metadata: SkimMetadata):
        self._rows = tuple(rows)
        self._metadata = metadata.model_copy(deep=True)

    @overload
    def __getitem__(self, index: int) -> StatRow: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[StatRow, ...]: ...

    def __getitem__(self, index: int | slice) -> StatRow | tuple[StatRow, ...]:
        return self._rows[index]

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[StatRow]:
        return iter(self._rows)

    def __repr__(self) -> str:
        return (
            f"SkimResult(data={self._metadata.data_name!r}, rows={self._metadata.n_rows}, "
            f"columns={self._metadata.n_columns}, types={list(self._metadata.column_types)}, "
            f"stat_rows={len(self._rows)})"
        )

    @property
    def metadata(self) -> SkimMetadata:
        return self._metadata.model_copy(deep=True)

    @property
    def rows(self) -> tuple[StatRow, ...]:
        return self._rows

    @property
    def group_by(self) -> list[str]:
        return list(self._metadata.group_by)

    def column_types(self) -> list[ColumnType]:
        """Distinct column types in first-seen order."""
        return list(self._metadata.column_types)

    def variables(self) -> list[str]:
        return _unique(row.variable for row in self._rows)

    def groups(self) -> list[tuple[Any, ...]]:
        return _unique(row.group for row in self._rows)

    def failures(self) -> list[StatRow]:
        """Rows whose statistic failed."""
        return [row for row in self._rows if row.failed]

    def get(self, variable: str, statistic: str, group: tuple[Any, ...] = ()) -> Any:
        """Look up one statistic value.

        Raises:
            KeyError: No such (group, variable, statistic)
        """
        for row in self._rows:
            if row.variable == variable and row.statistic == statistic and row.group == group:
                return row.value
        raise KeyError((group, variable, statistic))

    def to_long_frame(self) -> pd.DataFrame:
        return long_frame(self._rows, self.group_by)

    def to_wide_frame(self) -> pd.DataFrame:
        """Wide view with "type.statistic" columns."""
        return wide_frame(self._rows, self.group_by, namespaced=True)

    def summary(self) -> dict[str, Any]:
        return self._metadata.model_dump(mode="json")
