import math

import pandas as pd
import pytest

from listings.errors import FieldNotFound
from listings.services.aggregation import (
    group_summaries,
    group_summarize,
    sort_descending,
    summarize_groups,
)


def _scenario() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "state": ["CA", "CA", "TX"],
            "price": [100.0, 300.0, 200.0],
            "house_size": [1000.0, 3000.0, 1500.0],
        }
    )


def test_mean_per_state():
    result = group_summarize(_scenario(), "state", "price", "mean")
    assert dict(zip(result["state"], result["value"])) == {"CA": 200.0, "TX": 200.0}


def test_tie_keeps_first_appearance_after_descending_sort():
    result = sort_descending(group_summarize(_scenario(), "state", "price", "mean"), "value")
    assert result["state"].tolist() == ["CA", "TX"]

    flipped = _scenario().iloc[[2, 0, 1]]
    result = sort_descending(group_summarize(flipped, "state", "price", "mean"), "value")
    assert result["state"].tolist() == ["TX", "CA"]


def test_descending_sort_ranks_and_puts_missing_last():
    frame = pd.DataFrame({"state": ["A", "B", "C", "D"], "avg_price": [1.0, math.nan, 3.0, 2.0]})
    assert sort_descending(frame, "avg_price")["state"].tolist() == ["C", "D", "A", "B"]


def test_groups_partition_the_table():
    table = pd.DataFrame(
        {
            "state": ["CA", "TX", None, "CA", "NY", None, "TX"],
            "price": [1.0, 2.0, 3.0, None, 5.0, 6.0, 7.0],
        }
    )
    counts = group_summarize(table, "state", "price", "count")
    assert counts["value"].sum() == len(table.index)
    assert counts["state"].is_unique
    assert len(counts.index) == 4


def test_missing_values_are_skipped_but_rows_stay_in_group():
    table = pd.DataFrame({"state": ["CA", "CA", "CA"], "price": [100.0, None, 300.0]})
    mean = group_summarize(table, "state", "price", "mean")
    count = group_summarize(table, "state", "price", "count")
    assert mean["value"].tolist() == [200.0]
    assert count["value"].tolist() == [3]


def test_keys_are_case_sensitive():
    table = pd.DataFrame({"state": ["Texas", "texas"], "price": [1.0, 3.0]})
    result = group_summarize(table, "state", "price", "mean")
    assert result["state"].tolist() == ["Texas", "texas"]


def test_median_reducer():
    table = pd.DataFrame({"status": ["sold", "sold", "sold"], "house_size": [900.0, 1500.0, 1200.0]})
    result = group_summarize(table, "status", "house_size", "median")
    assert result["value"].tolist() == [1200.0]


def test_count_includes_rows_with_missing_values():
    table = pd.DataFrame({"state": ["CA", "CA", "TX"], "price": [None, 300.0, None]})
    result = group_summarize(table, "state", "price", "count")
    assert result["value"].tolist() == [2, 1]


def test_count_still_requires_value_field():
    with pytest.raises(FieldNotFound):
        group_summarize(_scenario(), "state", "not_a_column", "count")


def test_unknown_fields_raise_field_not_found():
    with pytest.raises(FieldNotFound):
        group_summarize(_scenario(), "county", "price", "mean")
    with pytest.raises(KeyError):
        group_summarize(_scenario(), "state", "cost", "mean")


def test_unknown_reducer_is_rejected():
    with pytest.raises(ValueError):
        group_summarize(_scenario(), "state", "price", "max")


def test_summarize_groups_columns():
    summary = summarize_groups(_scenario(), "state")
    ca = summary[summary["state"] == "CA"].iloc[0]
    assert ca["avg_price"] == 200.0
    assert ca["median_size"] == 2000.0
    assert ca["count"] == 2


def test_group_summaries_are_sorted_models():
    rows = group_summaries(
        pd.DataFrame(
            {
                "state": ["TX", "NY", "CA", "NY"],
                "price": [200.0, 900.0, 600.0, 100.0],
                "house_size": [1000.0, 800.0, 1200.0, 600.0],
            }
        ),
        "state",
    )
    assert [row.key for row in rows] == ["CA", "NY", "TX"]
    assert rows[1].avg_price == 500.0
    assert rows[1].median_size == 700.0
    assert sum(row.count for row in rows) == 4
