"""Core data models used across all modules.

This module defines the fundamental data structures that form the
contract between the registry, the computer and the assembler.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# A column's semantic kind. Built-in kinds are listed in BuiltinType; any other
# string registered in a TypeRegistry is equally valid.
ColumnType = str

# Ordered tuple of grouping-column values; () means no grouping.
GroupKey = tuple[Any, ...]


class BuiltinType(str, Enum):
    """Column types with default skimmers."""

    NUMERIC = "numeric"
    CHARACTER = "character"
    FACTOR = "factor"
    LOGICAL = "logical"
    DATE = "date"
    DATETIME = "datetime"
    TIMEDELTA = "timedelta"
    LIST = "list"


@dataclass(frozen=True)
class StatisticFailure:
    """Error marker stored in place of a statistic value.

    Never equal to a number and never coerced to zero, so partial failures
    stay visible in every view of a result.
    """

    statistic: str
    error_type: str
    message: str = ""

    @classmethod
    def from_exception(cls, statistic: str, exc: BaseException) -> StatisticFailure:
        return cls(statistic=statistic, error_type=type(exc).__name__, message=str(exc))

    def __str__(self) -> str:
        return f"<error: {self.error_type}>"


@dataclass(frozen=True)
class StatRow:
    """One (group, variable, type, statistic, value) output fact."""

    group: GroupKey
    variable: str
    column_type: ColumnType
    statistic: str
    value: Any

    @property
    def failed(self) -> bool:
        return isinstance(self.value, StatisticFailure)

    @property
    def column_name(self) -> str:
        """Type-namespaced statistic name used as a wide-table column."""
        return f"{self.column_type}.{self.statistic}"


class SkimMetadata(BaseModel):
    """Summary-level facts about one summarization call."""

    model_config = ConfigDict(frozen=True)

    data_name: str | None = None
    n_rows: int
    n_columns: int
    group_by: tuple[str, ...] = ()
    column_types: tuple[str, ...] = ()
    type_frequency: dict[str, int] = Field(default_factory=dict)


def type_name(column_type: ColumnType | Enum) -> str:
    """Normalize a column type (plain string or str-enum member) to its name."""
    if isinstance(column_type, Enum):
        return str(column_type.value)
    return column_type
