"""Read-only views splitting a SkimResult by column type.

Nothing here recomputes statistics; every view is derived from the rows
of an existing result, which is never modified.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

import pandas as pd

from dataskim.core.errors import SpecError, YankNotFoundError
from dataskim.core.models import ColumnType, SkimMetadata, StatRow, type_name
from dataskim.result import SkimResult, long_frame, wide_frame


@dataclass(frozen=True)
class SkimTable:
    """The rows of one column type, with un-namespaced statistic columns."""

    column_type: ColumnType
    rows: tuple[StatRow, ...]
    metadata: SkimMetadata

    def __len__(self) -> int:
        """Number of (group, variable) records."""
        return len({(row.group, row.variable) for row in self.rows})

    @property
    def group_by(self) -> list[str]:
        return list(self.metadata.group_by)

    def variables(self) -> list[str]:
        return list(dict.fromkeys(row.variable for row in self.rows))

    def statistics(self) -> list[str]:
        return list(dict.fromkeys(row.statistic for row in self.rows))

    def to_frame(self) -> pd.DataFrame:
        return wide_frame(self.rows, self.group_by, namespaced=False)

    def to_long_frame(self) -> pd.DataFrame:
        return long_frame(self.rows, self.group_by)


def partition(result: SkimResult) -> dict[ColumnType, SkimTable]:
    """Split a result into one table per column type, in first-seen order.

    Every summarized type gets a table, including types whose resolved
    skimmers were empty.
    """
    by_type: dict[ColumnType, list[StatRow]] = {t: [] for t in result.column_types()}
    for row in result:
        by_type.setdefault(row.column_type, []).append(row)
    return {
        column_type: SkimTable(column_type, tuple(rows), result.metadata)
        for column_type, rows in by_type.items()
    }


def yank(result: SkimResult, column_type: ColumnType) -> SkimTable:
    """Get the table for one column type.

    Raises:
        YankNotFoundError: No column of that type was summarized
    """
    column_type = type_name(column_type)
    if column_type not in result.column_types():
        raise YankNotFoundError(column_type, result.column_types())
    rows = tuple(row for row in result if row.column_type == column_type)
    return SkimTable(column_type, rows, result.metadata)


def bind(tables: Mapping[ColumnType, SkimTable] | Iterable[SkimTable]) -> SkimResult:
    """Reassemble partitioned tables into a single result."""
    table_list = list(tables.values()) if isinstance(tables, Mapping) else list(tables)
    if not table_list:
        raise ValueError("bind() needs at least one table")
    rows = tuple(row for table in table_list for row in table.rows)
    column_types = tuple(dict.fromkeys(table.column_type for table in table_list))
    frequency = {
        table.column_type: table.metadata.type_frequency.get(table.column_type, 0)
        for table in table_list
    }
    metadata = table_list[0].metadata.model_copy(
        update={"column_types": column_types, "type_frequency": frequency}
    )
    return SkimResult(rows, metadata)


def focus(result: SkimResult, *statistics: str) -> SkimResult:
    """Keep only the named statistics.

    Names may be plain ("mean", applies to every type that has it) or
    namespaced ("numeric.mean").

    Raises:
        SpecError: A name matches no statistic in the result
    """
    present = {row.statistic for row in result} | {row.column_name for row in result}
    unknown = [name for name in statistics if name not in present]
    if unknown:
        raise SpecError(f"Unknown statistics: {', '.join(unknown)}")
    wanted = set(statistics)
    rows = [row for row in result if row.statistic in wanted or row.column_name in wanted]
    return SkimResult(rows, result.metadata)
