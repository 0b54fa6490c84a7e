"""Shared pytest fixtures for all tests."""

import datetime as dt

import duckdb
import pandas as pd
import pytest

from dataskim.core.config import get_settings
from dataskim.core.logging import configure_logging
from dataskim.skimmers import TypeRegistry, builtin_registry, reset_default_registry


@pytest.fixture(autouse=True)
def default_registry() -> TypeRegistry:
    """Fresh process-wide registry for every test.

    Registrations made by one test never leak into another.
    """
    registry = reset_default_registry()
    yield registry
    reset_default_registry()


@pytest.fixture(autouse=True)
def fresh_settings():
    """Re-read settings from the environment for every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def registry() -> TypeRegistry:
    """Independent registry with the built-in skimmers."""
    return builtin_registry()


@pytest.fixture
def debug_logging():
    """Let info/debug events through for log capture."""
    configure_logging(log_level="DEBUG")
    yield
    configure_logging()


@pytest.fixture
def numbers_frame() -> pd.DataFrame:
    """One numeric column with a missing value."""
    return pd.DataFrame({"x": [1.0, 2.0, 3.0, None]})


@pytest.fixture
def mixed_frame() -> pd.DataFrame:
    """Frame with one column of each common type."""
    return pd.DataFrame(
        {
            "amount": [10.0, 20.0, None, 40.0, 50.0, 60.0],
            "count": [1, 2, 3, 4, 5, 6],
            "name": ["ann", "bob", "", "dan", None, "eve"],
            "region": pd.Categorical(["eu", "us", "eu", "eu", "apac", "us"]),
            "active": [True, False, True, True, False, True],
            "signup": pd.to_datetime(
                ["2024-01-01", "2024-02-01", "2024-03-01", None, "2024-05-01", "2024-06-01"]
            ),
            "birthday": [
                dt.date(1990, 1, 1),
                dt.date(1985, 6, 15),
                None,
                dt.date(2000, 12, 31),
                dt.date(1970, 3, 3),
                dt.date(1995, 7, 7),
            ],
        }
    )


@pytest.fixture
def grouped_frame() -> pd.DataFrame:
    """Three rows in two groups, A twice and B once."""
    return pd.DataFrame({"key": ["A", "B", "A"], "x": [1.0, 5.0, 3.0]})


@pytest.fixture
def duckdb_conn():
    """Create an in-memory DuckDB connection for testing."""
    conn = duckdb.connect(":memory:")
    yield conn
    conn.close()
