"""Tests for inline graphics."""

import numpy as np
import pandas as pd
import pytest

from dataskim.sparkline import (
    LINE_LEVELS,
    NO_DATA,
    SPARK_LEVELS,
    histogram_counts,
    inline_hist,
    render_histogram,
    render_linegraph,
    render_top_counts,
    sorted_counts,
)


class TestRenderHistogram:
    """Tests for render_histogram()."""

    def test_relative_heights(self):
        """Counts map monotonically onto the glyph levels."""
        assert render_histogram([0, 1, 2, 4]) == "▁▂▃▇"

    def test_scale_independent(self):
        """Only relative magnitudes matter."""
        assert render_histogram([0, 10, 20, 40]) == render_histogram([0, 1, 2, 4])

    def test_length_equals_bins(self):
        assert len(render_histogram(np.arange(13))) == 13

    def test_monotone(self):
        rendered = render_histogram(list(range(10)))
        ranks = [SPARK_LEVELS.index(glyph) for glyph in rendered]
        assert ranks == sorted(ranks)

    def test_no_data(self):
        assert render_histogram(None) == NO_DATA
        assert render_histogram([]) == NO_DATA

    def test_all_zero(self):
        assert render_histogram([0, 0, 0]) == SPARK_LEVELS[0] * 3

    def test_negative_counts_rejected(self):
        with pytest.raises(ValueError):
            render_histogram([1, -1])


class TestHistogramCounts:
    """Tests for binning."""

    def test_missing_and_infinite_ignored(self):
        counts = histogram_counts(pd.Series([1.0, None, np.inf, 2.0]), bins=2)
        assert counts.tolist() == [1, 1]

    def test_nothing_to_bin(self):
        assert histogram_counts(pd.Series([None, np.nan]), bins=4) is None
        assert inline_hist(pd.Series([], dtype=float), bins=4) == NO_DATA

    def test_constant_values(self):
        """Zero-variance input still yields the requested number of bins."""
        counts = histogram_counts([5.0, 5.0, 5.0], bins=4)
        assert len(counts) == 4
        assert counts.sum() == 3


class TestTopCounts:
    """Tests for categorical count rendering."""

    def test_sorted_counts_ties_first_seen(self):
        assert sorted_counts(pd.Series(["x", "y", "y", "x", "z", None])) == [
            ("x", 2),
            ("y", 2),
            ("z", 1),
        ]

    def test_render_truncates_labels(self):
        assert render_top_counts({"apple": 3, "banana": 2}) == "app: 3, ban: 2"

    def test_render_limits_levels(self):
        counts = [(label, 1) for label in "abcdef"]
        assert render_top_counts(counts, max_levels=2) == "a: 1, b: 1"

    def test_zero_counts_dropped(self):
        assert render_top_counts({"a": 0, "b": 1}) == "b: 1"

    def test_empty(self):
        assert render_top_counts({}) == NO_DATA
        assert sorted_counts(pd.Series([], dtype=object)) == []


class TestRenderLinegraph:
    """Tests for render_linegraph()."""

    def test_rising(self):
        rendered = render_linegraph([1, 2, 3, 4], length=4)
        assert rendered[0] == LINE_LEVELS[0]
        assert rendered[-1] == LINE_LEVELS[-1]
        assert len(rendered) == 4

    def test_resampled_length(self):
        assert len(render_linegraph(range(100), length=10)) == 10

    def test_flat(self):
        assert render_linegraph([3, 3, 3], length=5) == LINE_LEVELS[0] * 5

    def test_no_data(self):
        assert render_linegraph([None, np.nan], length=5) == NO_DATA

    def test_default_length(self):
        """Without an explicit length the configured default is used."""
        assert len(render_linegraph([1, 5, 2])) == 16
