"""Assemble per-column statistics into one long-form SkimResult.

For every group and every non-grouping column: resolve the column's
skimmers, compute them over the group's rows and emit one StatRow per
statistic, tagged with the column's type. Rows are never padded or aligned
across types, so the result has exactly
sum(groups x columns x len(resolved spec)) rows.
"""

from __future__ import annotations

import contextvars
import threading
import time
from collections import Counter
from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any

from dataskim.compute import compute_statistics, count_failures
from dataskim.core.errors import DataSourceError, SkimCancelledError, SkimError
from dataskim.core.logging import (
    end_skim_metrics,
    get_logger,
    increment_statistics,
    log_context,
    record_columns_processed,
    record_groups_processed,
    record_operation_timing,
    start_skim_metrics,
)
from dataskim.core.models import SkimMetadata, StatRow
from dataskim.grouping import Group, group_rows
from dataskim.result import SkimResult
from dataskim.skimmers.registry import TypeRegistry
from dataskim.skimmers.resolver import Overrides, resolve_skimmers
from dataskim.skimmers.spec import SkimmerSpec
from dataskim.sources import Column, DataSource

logger = get_logger(__name__)

# A threading.Event, or any callable returning True once work should stop
CancelCheck = threading.Event | Callable[[], bool]


def _is_cancelled(cancel: CancelCheck | None) -> bool:
    if cancel is None:
        return False
    if isinstance(cancel, threading.Event):
        return cancel.is_set()
    return bool(cancel())


def _enumerate_columns(source: DataSource) -> list[Column]:
    try:
        columns = list(source.columns())
    except SkimError:
        raise
    except Exception as e:
        raise DataSourceError(f"Cannot enumerate columns: {e}") from e

    # Variable names key every StatRow, so they must be unique
    counts = Counter(c.name for c in columns)
    duplicated = [name for name, n in counts.items() if n > 1]
    if duplicated:
        raise DataSourceError(f"Duplicate column names: {', '.join(duplicated)}")
    return columns


def _select_columns(
    columns: list[Column], group_by: Sequence[str], selected: Sequence[str] | None
) -> list[Column]:
    candidates = [c for c in columns if c.name not in group_by]
    if selected is None:
        return candidates
    by_name = {c.name: c for c in candidates}
    unknown = [name for name in selected if name not in by_name]
    if unknown:
        raise DataSourceError(f"Columns not found: {', '.join(unknown)}")
    return [by_name[name] for name in dict.fromkeys(selected)]


def skim_column(
    group: Group, column: Column, spec: SkimmerSpec
) -> tuple[list[StatRow], float]:
    """Compute one column's statistics within one group.

    Returns:
        The StatRows in spec order, and the elapsed seconds
    """
    start = time.perf_counter()
    values = group.take(column.values())
    results = compute_statistics(spec, values)
    rows = [
        StatRow(
            group=group.key,
            variable=column.name,
            column_type=column.column_type,
            statistic=name,
            value=value,
        )
        for name, value in results.items()
    ]
    return rows, time.perf_counter() - start


def _run_sequential(
    units: Iterable[tuple[Group, Column, SkimmerSpec]], cancel: CancelCheck | None
) -> list[tuple[list[StatRow], float]]:
    outputs = []
    for group, column, spec in units:
        if _is_cancelled(cancel):
            raise SkimCancelledError(f"Cancelled before column '{column.name}'")
        outputs.append(skim_column(group, column, spec))
    return outputs


def _run_parallel(
    units: list[tuple[Group, Column, SkimmerSpec]],
    cancel: CancelCheck | None,
    max_workers: int,
) -> list[tuple[list[StatRow], float]]:
    outputs = []
    with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="dataskim") as pool:
        # Each worker runs in a copy of the caller's context so log_context applies
        futures: list[Future[Any]] = [
            pool.submit(contextvars.copy_context().run, skim_column, *unit) for unit in units
        ]
        for future, (_, column, _) in zip(futures, units, strict=True):
            if _is_cancelled(cancel):
                for pending in futures:
                    pending.cancel()
                raise SkimCancelledError(f"Cancelled before column '{column.name}'")
            outputs.append(future.result())
    return outputs


def assemble(
    source: DataSource,
    registry: TypeRegistry | None = None,
    overrides: Overrides | None = None,
    group_by: Sequence[str] | None = None,
    levels: Iterable[Any] | None = None,
    columns: Sequence[str] | None = None,
    charts: bool = True,
    cancel: CancelCheck | None = None,
    max_workers: int | None = None,
) -> SkimResult:
    """Summarize every column of a data source.

    Args:
        source: Data source to summarize
        registry: Type registry (default: process-wide registry)
        overrides: Call-local skimmers replacing the registry's per type
        group_by: Grouping columns (default: the source's group keys)
        levels: Group keys to report even when they have no rows
        columns: Restrict the summary to these columns, in this order
        charts: Include inline graphics
        cancel: Checked between (group, column) units
        max_workers: Compute units in a thread pool of this size

    Returns:
        SkimResult with one StatRow per (group, column, statistic)

    Raises:
        DataSourceError: Columns cannot be enumerated or selected
        GroupingError: Grouping columns are missing
        SkimCancelledError: ``cancel`` was set during the run
    """
    data_name = source.name
    metrics = start_skim_metrics(data_name or "")
    try:
        with log_context(data=data_name):
            all_columns = _enumerate_columns(source)
            keys = tuple(group_by) if group_by is not None else tuple(source.group_keys())
            groups = group_rows(source, keys, levels)
            skimmed = _select_columns(all_columns, keys, columns)

            # Resolve once per column; every group shares the same spec
            specs = [
                resolve_skimmers(c.column_type, registry, overrides, charts) for c in skimmed
            ]
            units = [(g, c, spec) for g in groups for c, spec in zip(skimmed, specs, strict=True)]

            logger.info(
                "skim_started",
                rows=source.row_count(),
                columns=len(skimmed),
                groups=len(groups),
            )

            if max_workers and max_workers > 1 and len(units) > 1:
                outputs = _run_parallel(units, cancel, max_workers)
            else:
                outputs = _run_sequential(units, cancel)

            rows: list[StatRow] = []
            for (_, column, _), (unit_rows, elapsed) in zip(units, outputs, strict=True):
                rows.extend(unit_rows)
                failed = count_failures({row.statistic: row.value for row in unit_rows})
                increment_statistics(computed=len(unit_rows) - failed, failed=failed)
                record_operation_timing(column.column_type, elapsed)
            record_groups_processed(len(groups))
            record_columns_processed(len(skimmed))

            column_types = tuple(dict.fromkeys(c.column_type for c in skimmed))
            metadata = SkimMetadata(
                data_name=data_name,
                n_rows=source.row_count(),
                n_columns=len(all_columns),
                group_by=keys,
                column_types=column_types,
                type_frequency={
                    t: sum(1 for c in skimmed if c.column_type == t) for t in column_types
                },
            )
            logger.info("skim_completed", stat_rows=len(rows), **metrics.to_dict())
            return SkimResult(rows, metadata)
    finally:
        end_skim_metrics()
