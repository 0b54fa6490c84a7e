"""Core module - configuration, logging, errors and shared models."""

from dataskim.core.config import Settings, get_settings
from dataskim.core.errors import (
    DataSourceError,
    GroupingError,
    RegistryError,
    SkimCancelledError,
    SkimError,
    SpecError,
    YankNotFoundError,
)
from dataskim.core.models import (
    BuiltinType,
    ColumnType,
    GroupKey,
    SkimMetadata,
    StatisticFailure,
    StatRow,
)

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Errors
    "DataSourceError",
    "GroupingError",
    "RegistryError",
    "SkimCancelledError",
    "SkimError",
    "SpecError",
    "YankNotFoundError",
    # Models
    "BuiltinType",
    "ColumnType",
    "GroupKey",
    "SkimMetadata",
    "StatisticFailure",
    "StatRow",
]
