"""Tests for row grouping."""

import numpy as np
import pandas as pd
import pytest

from dataskim.core.errors import GroupingError
from dataskim.grouping import group_rows
from dataskim.sources import PandasSource


class TestGroupRows:
    """Tests for group_rows()."""

    def test_ungrouped(self, numbers_frame):
        """Without grouping columns all rows form one group with key ()."""
        groups = group_rows(PandasSource(numbers_frame))

        assert len(groups) == 1
        assert groups[0].key == ()
        assert groups[0].positions.tolist() == [0, 1, 2, 3]

    def test_first_appearance_order(self):
        """Groups are ordered by first appearance, not sorted."""
        frame = pd.DataFrame({"key": ["B", "A", "B"], "x": [1, 2, 3]})
        groups = group_rows(PandasSource(frame), ["key"])

        assert [g.key for g in groups] == [("B",), ("A",)]
        assert groups[0].positions.tolist() == [0, 2]

    def test_source_group_keys_used_by_default(self, grouped_frame):
        groups = group_rows(PandasSource(grouped_frame, group_by=["key"]))

        assert [g.key for g in groups] == [("A",), ("B",)]
        assert [len(g) for g in groups] == [2, 1]

    def test_take_reindexes(self, grouped_frame):
        """Group values are re-indexed from zero."""
        groups = group_rows(PandasSource(grouped_frame), ["key"])
        values = groups[1].take(grouped_frame["x"])

        assert values.tolist() == [5.0]
        assert values.index.tolist() == [0]

    def test_missing_keys_form_a_group(self):
        """NaN and None grouping values share one group keyed by None."""
        frame = pd.DataFrame({"key": ["a", None, "a", np.nan], "x": [1, 2, 3, 4]})
        groups = {g.key: g.positions.tolist() for g in group_rows(PandasSource(frame), ["key"])}

        assert groups == {("a",): [0, 2], (None,): [1, 3]}

    def test_numeric_keys_are_python_scalars(self):
        frame = pd.DataFrame({"year": [2020, 2021, 2020], "x": [1, 2, 3]})
        keys = [g.key for g in group_rows(PandasSource(frame), ["year"])]

        assert keys == [(2020,), (2021,)]
        assert type(keys[0][0]) is int

    def test_multiple_keys(self):
        frame = pd.DataFrame(
            {"a": ["x", "x", "y", "x"], "b": [1, 2, 1, 1], "v": [0.1, 0.2, 0.3, 0.4]}
        )
        groups = group_rows(PandasSource(frame), ["a", "b"])

        assert [g.key for g in groups] == [("x", 1), ("x", 2), ("y", 1)]
        assert groups[0].positions.tolist() == [0, 3]

    def test_levels_add_empty_groups(self, grouped_frame):
        """Enumerated levels with no rows are appended as empty groups."""
        groups = group_rows(PandasSource(grouped_frame), ["key"], levels=["C", "A"])

        assert [g.key for g in groups] == [("A",), ("B",), ("C",)]
        assert len(groups[2]) == 0

    def test_level_arity_mismatch(self, grouped_frame):
        with pytest.raises(GroupingError):
            group_rows(PandasSource(grouped_frame), ["key"], levels=[("A", 1)])

    def test_unknown_grouping_column(self, grouped_frame):
        with pytest.raises(GroupingError, match="region"):
            group_rows(PandasSource(grouped_frame), ["region"])

    def test_empty_source(self):
        """An empty grouped source has no groups."""
        frame = pd.DataFrame({"key": pd.Series([], dtype=object), "x": pd.Series([], dtype=float)})
        assert group_rows(PandasSource(frame), ["key"]) == []

    def test_unhashable_values(self):
        frame = pd.DataFrame({"key": [[1], [2]], "x": [1, 2]})
        with pytest.raises(GroupingError, match="hashable"):
            group_rows(PandasSource(frame), ["key"])
