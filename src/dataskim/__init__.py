"""dataskim: type-aware summary statistics for tabular data.

Every column gets the statistics registered for its type; the per-type
results are merged into one long-form table of
(group, variable, type, statistic, value) rows.
"""

from dataskim.core import (
    BuiltinType,
    DataSourceError,
    GroupingError,
    RegistryError,
    SkimCancelledError,
    SkimError,
    SkimMetadata,
    SpecError,
    StatisticFailure,
    StatRow,
    YankNotFoundError,
)
from dataskim.grouping import Group, group_rows
from dataskim.result import SkimResult
from dataskim.skim import skim, skim_with, skim_without_charts
from dataskim.skimmers import (
    SkimmerSpec,
    Statistic,
    TypeRegistry,
    get_default_registry,
    get_default_skimmer_names,
    get_default_skimmers,
    register_skimmers,
    reset_default_registry,
)
from dataskim.sources import (
    Column,
    DataSource,
    DuckDBSource,
    PandasSource,
    as_source,
)
from dataskim.views import SkimTable, bind, focus, partition, yank

__all__ = [
    # Entry points
    "skim",
    "skim_with",
    "skim_without_charts",
    # Registry and specs
    "SkimmerSpec",
    "Statistic",
    "TypeRegistry",
    "get_default_registry",
    "get_default_skimmer_names",
    "get_default_skimmers",
    "register_skimmers",
    "reset_default_registry",
    # Results and views
    "SkimMetadata",
    "SkimResult",
    "SkimTable",
    "StatRow",
    "StatisticFailure",
    "bind",
    "focus",
    "partition",
    "yank",
    # Data sources
    "BuiltinType",
    "Column",
    "DataSource",
    "DuckDBSource",
    "PandasSource",
    "as_source",
    "Group",
    "group_rows",
    # Errors
    "DataSourceError",
    "GroupingError",
    "RegistryError",
    "SkimCancelledError",
    "SkimError",
    "SpecError",
    "YankNotFoundError",
]
