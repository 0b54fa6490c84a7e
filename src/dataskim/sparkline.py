"""Compact inline graphics for distribution summaries.

Histograms are rendered from pre-computed bin counts: each bin's count,
relative to the largest bin, is mapped monotonically onto a small set of
block glyphs. The output length equals the number of bins regardless of the
data's scale.

Categorical distributions are rendered as "label: count" pairs ordered by
descending frequency, ties kept in first-seen order.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

import numpy as np
import pandas as pd

from dataskim.core.config import get_settings

# Lowest to highest relative magnitude
SPARK_LEVELS = "▁▂▃▅▇"
LINE_LEVELS = "⣀⣄⣤⣦⣶⣷⣿"

# Rendered when there is nothing to draw (all-missing or empty input)
NO_DATA = " "


def histogram_counts(values: pd.Series | Sequence[float], bins: int) -> np.ndarray | None:
    """Bin the present, finite values of a numeric column.

    Args:
        values: Numeric values, possibly containing missing entries
        bins: Number of equal-width bins

    Returns:
        Array of ``bins`` counts, or None when no finite values are present
    """
    arr = pd.to_numeric(pd.Series(values, dtype="object"), errors="coerce").to_numpy(dtype=float)
    finite = arr[np.isfinite(arr)]
    if finite.size == 0:
        return None
    # Zero-variance input falls into one bin of the (v - 0.5, v + 0.5) range
    counts, _ = np.histogram(finite, bins=bins)
    return counts


def _levels(relative: np.ndarray, glyphs: str) -> str:
    idx = np.minimum((relative * len(glyphs)).astype(int), len(glyphs) - 1)
    return "".join(glyphs[i] for i in idx)


def render_histogram(counts: Sequence[float] | np.ndarray | None) -> str:
    """Render bin counts as a fixed-width glyph string.

    Args:
        counts: Non-negative bin counts

    Returns:
        One glyph per bin, or NO_DATA for empty input
    """
    if counts is None:
        return NO_DATA
    arr = np.nan_to_num(np.asarray(counts, dtype=float), nan=0.0)
    if arr.size == 0:
        return NO_DATA
    if np.any(arr < 0):
        raise ValueError("Histogram counts must be non-negative")
    peak = arr.max()
    if peak == 0:
        return SPARK_LEVELS[0] * arr.size
    return _levels(arr / peak, SPARK_LEVELS)


def inline_hist(values: pd.Series, bins: int) -> str:
    """Bin a numeric column and render it as a sparkline."""
    return render_histogram(histogram_counts(values, bins))


def sorted_counts(values: pd.Series) -> list[tuple[Any, int]]:
    """Count present values, most frequent first, ties in first-seen order."""
    present = values.dropna()
    if present.empty:
        return []
    counts = present.value_counts(sort=False, dropna=True)
    ranked = [(label, int(counts[label])) for label in pd.unique(present)]
    # list.sort is stable, so equal counts keep first-seen order
    ranked.sort(key=lambda item: -item[1])
    return ranked


def render_top_counts(
    counts: Mapping[Any, int] | Iterable[tuple[Any, int]],
    max_levels: int = 4,
    max_char: int = 3,
) -> str:
    """Render the most frequent categories as "lab: n, lab: n".

    Args:
        counts: Label to count, in first-seen order
        max_levels: Number of categories shown
        max_char: Characters kept from each label

    Returns:
        Summary string, or NO_DATA when there are no categories
    """
    items = list(counts.items()) if isinstance(counts, Mapping) else list(counts)
    items = [(label, n) for label, n in items if n > 0]
    if not items:
        return NO_DATA
    items.sort(key=lambda item: -item[1])
    return ", ".join(f"{str(label)[:max_char]}: {n}" for label, n in items[:max_levels])


def render_linegraph(values: pd.Series | Sequence[float], length: int | None = None) -> str:
    """Render a sequence as a fixed-length line sparkline.

    The series is resampled to ``length`` points (default:
    settings.linegraph_length) by linear interpolation and scaled between
    its minimum and maximum.
    """
    if length is None:
        length = get_settings().linegraph_length
    arr = pd.to_numeric(pd.Series(values, dtype="object"), errors="coerce").to_numpy(dtype=float)
    arr = arr[np.isfinite(arr)]
    if arr.size == 0:
        return NO_DATA
    if arr.size == 1:
        return LINE_LEVELS[0] * length
    positions = np.linspace(0, arr.size - 1, num=length)
    resampled = np.interp(positions, np.arange(arr.size), arr)
    spread = resampled.max() - resampled.min()
    if spread == 0:
        return LINE_LEVELS[0] * length
    return _levels((resampled - resampled.min()) / spread, LINE_LEVELS)
