"""Data sources consumed by the summary engine.

The engine only needs three things from a table: its columns (each with a
name, a column type and a way to read its values), its row count, and the
columns it is currently grouped by. Adapters are provided for pandas
DataFrames (and DataFrameGroupBy objects) and DuckDB tables.
"""

from __future__ import annotations

import datetime as dt
import numbers
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from functools import partial
from typing import Any, Protocol, runtime_checkable

import duckdb
import numpy as np
import pandas as pd

from dataskim.core.errors import DataSourceError, GroupingError
from dataskim.core.models import BuiltinType, ColumnType, type_name


@dataclass(frozen=True)
class Column:
    """One column of a data source."""

    name: str
    column_type: ColumnType
    accessor: Callable[[], pd.Series]

    def values(self) -> pd.Series:
        return self.accessor()


@runtime_checkable
class DataSource(Protocol):
    """Read-only tabular data consumed by skim()."""

    name: str | None

    def columns(self) -> Sequence[Column]: ...

    def row_count(self) -> int: ...

    def group_keys(self) -> tuple[str, ...]: ...


# =============================================================================
# Type inference
# =============================================================================


def _infer_object_type(values: pd.Series) -> ColumnType:
    """Infer the type of an object column from its present values."""
    present = values.dropna()
    if present.empty:
        return BuiltinType.CHARACTER.value

    def all_of(predicate: Callable[[Any], bool]) -> bool:
        return bool(present.map(predicate).all())

    if all_of(lambda v: isinstance(v, bool | np.bool_)):
        return BuiltinType.LOGICAL.value
    if all_of(lambda v: isinstance(v, dt.datetime)):
        return BuiltinType.DATETIME.value
    if all_of(lambda v: isinstance(v, dt.date)):
        return BuiltinType.DATE.value
    if all_of(lambda v: isinstance(v, dt.timedelta)):
        return BuiltinType.TIMEDELTA.value
    if all_of(lambda v: isinstance(v, list | tuple | np.ndarray)):
        return BuiltinType.LIST.value
    if all_of(lambda v: isinstance(v, numbers.Real) and not isinstance(v, bool)):
        return BuiltinType.NUMERIC.value
    return BuiltinType.CHARACTER.value


def infer_column_type(values: pd.Series) -> ColumnType:
    """Map a pandas Series to a column type.

    Args:
        values: Column values

    Returns:
        Column type name; complex and period columns get their own
        (unregistered) types and are skimmed by the catch-all
    """
    dtype = values.dtype
    if pd.api.types.is_bool_dtype(dtype):
        return BuiltinType.LOGICAL.value
    if isinstance(dtype, pd.CategoricalDtype):
        return BuiltinType.FACTOR.value
    if pd.api.types.is_datetime64_any_dtype(dtype):
        return BuiltinType.DATETIME.value
    if pd.api.types.is_timedelta64_dtype(dtype):
        return BuiltinType.TIMEDELTA.value
    if isinstance(dtype, pd.PeriodDtype):
        return "period"
    if pd.api.types.is_complex_dtype(dtype):
        return "complex"
    if pd.api.types.is_numeric_dtype(dtype):
        return BuiltinType.NUMERIC.value
    if pd.api.types.is_string_dtype(dtype) and dtype != object:
        return BuiltinType.CHARACTER.value
    return _infer_object_type(values)


# DuckDB type name -> column type
_DUCKDB_NUMERIC = {
    "TINYINT",
    "SMALLINT",
    "INTEGER",
    "BIGINT",
    "HUGEINT",
    "UTINYINT",
    "USMALLINT",
    "UINTEGER",
    "UBIGINT",
    "UHUGEINT",
    "FLOAT",
    "REAL",
    "DOUBLE",
}


def duckdb_column_type(sql_type: str) -> ColumnType:
    """Map a DuckDB column type to a column type.

    Types without a built-in counterpart (TIME, BLOB, UUID, STRUCT, ...)
    map to their lower-cased base name and are skimmed by the catch-all.
    """
    sql_type = sql_type.strip().upper()
    if sql_type.endswith("]") or sql_type.startswith("LIST"):
        return BuiltinType.LIST.value
    base = sql_type.split("(", 1)[0].strip()
    if base in _DUCKDB_NUMERIC or base == "DECIMAL":
        return BuiltinType.NUMERIC.value
    if base == "BOOLEAN":
        return BuiltinType.LOGICAL.value
    if base == "DATE":
        return BuiltinType.DATE.value
    if base.startswith("TIMESTAMP"):
        return BuiltinType.DATETIME.value
    if base == "INTERVAL":
        return BuiltinType.TIMEDELTA.value
    if base == "ENUM":
        return BuiltinType.FACTOR.value
    if base == "VARCHAR":
        return BuiltinType.CHARACTER.value
    return base.lower()


# =============================================================================
# Adapters
# =============================================================================


class PandasSource:
    """DataSource over a pandas DataFrame.

    Column types are inferred from dtypes unless given explicitly.
    """

    def __init__(
        self,
        frame: pd.DataFrame,
        name: str | None = None,
        types: Mapping[str, ColumnType] | None = None,
        group_by: Iterable[str] = (),
    ):
        if not isinstance(frame, pd.DataFrame):
            raise DataSourceError(f"Expected a pandas DataFrame, got {type(frame).__name__}")
        self.frame = frame
        self.name = name
        self.types = {str(k): type_name(v) for k, v in (types or {}).items()}
        self._group_by = tuple(group_by)

        labels = [str(c) for c in frame.columns]
        missing = [key for key in self._group_by if key not in labels]
        if missing:
            raise GroupingError(f"Grouping columns not found: {', '.join(missing)}")

    def _series(self, position: int) -> pd.Series:
        return self.frame.iloc[:, position]

    def columns(self) -> list[Column]:
        columns = []
        for position, label in enumerate(self.frame.columns):
            name = str(label)
            series = self._series(position)
            column_type = self.types.get(name) or infer_column_type(series)
            columns.append(
                Column(
                    name=name,
                    column_type=column_type,
                    accessor=partial(self._series, position),
                )
            )
        return columns

    def row_count(self) -> int:
        return len(self.frame)

    def group_keys(self) -> tuple[str, ...]:
        return self._group_by

    def group_by(self, *keys: str) -> PandasSource:
        """Get a copy of this source grouped by the given columns."""
        return PandasSource(self.frame, name=self.name, types=self.types, group_by=keys)


class DuckDBSource(PandasSource):
    """DataSource over a DuckDB table or view.

    Column types come from the table's declared DuckDB types, then the
    table is materialized as a DataFrame.
    """

    def __init__(
        self,
        conn: duckdb.DuckDBPyConnection,
        table: str,
        group_by: Iterable[str] = (),
    ):
        try:
            described = conn.execute(f'DESCRIBE "{table}"').fetchall()
            frame = conn.execute(f'SELECT * FROM "{table}"').df()
        except duckdb.Error as e:
            raise DataSourceError(f"Cannot read DuckDB table '{table}': {e}") from e

        types = {row[0]: duckdb_column_type(row[1]) for row in described}
        super().__init__(frame, name=table, types=types, group_by=group_by)
        self.sql_types = {row[0]: row[1] for row in described}


def as_source(data: Any, name: str | None = None) -> DataSource:
    """Coerce supported inputs to a DataSource.

    Accepts a DataSource, a pandas DataFrame or a DataFrameGroupBy.
    """
    if isinstance(data, pd.DataFrame):
        return PandasSource(data, name=name)
    if isinstance(data, pd.api.typing.DataFrameGroupBy):
        keys = data.keys
        if not isinstance(keys, list | tuple):
            keys = [keys]
        if not all(isinstance(k, str) for k in keys):
            raise GroupingError("Only column-name grouping keys are supported")
        return PandasSource(data.obj, name=name, group_by=keys)
    if isinstance(data, DataSource):
        return data
    raise DataSourceError(f"Unsupported data source: {type(data).__name__}")
