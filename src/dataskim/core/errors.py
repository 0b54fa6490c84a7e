"""Exception hierarchy.

Only structural problems raise. A statistic that fails on a column is
recorded as a StatisticFailure value in the result instead.
"""


class SkimError(Exception):
    """Base class for all dataskim errors."""


class RegistryError(SkimError):
    """Invalid operation on a TypeRegistry."""


class SpecError(SkimError, ValueError):
    """Invalid statistic or skimmer spec definition."""


class DataSourceError(SkimError):
    """The data source cannot be enumerated or read."""


class GroupingError(DataSourceError):
    """Grouping columns are missing or invalid."""


class SkimCancelledError(SkimError):
    """Summarization was cancelled between columns or groups."""


class YankNotFoundError(SkimError, KeyError):
    """Requested column type is not present in a result."""

    def __init__(self, column_type: str, available: list[str]):
        self.column_type = column_type
        self.available = available
        super().__init__(
            f"No columns of type '{column_type}' in result. "
            f"Available types: {', '.join(available) or 'none'}"
        )

    def __str__(self) -> str:
        return str(self.args[0])
