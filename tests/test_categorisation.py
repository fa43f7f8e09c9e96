"""Unit tests for category totals, percentage shares and display rows."""

from __future__ import annotations

import pytest

from analytics.categorisation import (
    build_category_breakdown,
    build_category_rows,
    compute_category_totals,
    summarize_categories,
)
from analytics.filtering import filter_by_category
from analytics.normalization import empty_transactions, normalize_transactions
from core.models import CategoryTotal


def _rows_by_category(rows):
    return {row["category"]: row for row in rows}


def test_scenario_percent_shares(scenario_transactions):
    summary = summarize_categories(normalize_transactions(scenario_transactions))

    rows = _rows_by_category(summary["rows"])
    assert summary["total_sum"] == pytest.approx(60.0)
    assert rows["Food"]["actual_percent"] == pytest.approx(83.333, abs=0.01)
    assert rows["Rent"]["actual_percent"] == pytest.approx(16.667, abs=0.01)
    assert rows["Food"]["percent_label"] == 83
    assert summary["projected_total"] == 0


def test_projected_only_category_is_flagged():
    actual = normalize_transactions([{"date": "2024-01-01", "amount": 200, "category": "Rent"}])
    projected = normalize_transactions([{"date": "2024-01-20", "amount": 50, "category": "Travel"}])

    summary = summarize_categories(actual, projected)

    travel = _rows_by_category(summary["rows"])["Travel"]
    assert summary["total_sum"] == pytest.approx(200.0)
    assert travel["actual"] == 0
    assert travel["actual_percent"] == 0
    assert travel["combined_percent"] == pytest.approx(25.0)
    assert travel["percent_label"] == 25
    assert travel["projected_only"] is True
    assert _rows_by_category(summary["rows"])["Rent"]["projected_only"] is False


def test_projected_amounts_never_change_the_denominator(scenario_transactions, projected_transactions):
    actual = normalize_transactions(scenario_transactions)
    projected = normalize_transactions(projected_transactions)

    totals, total_sum = compute_category_totals(actual, projected)

    assert total_sum == pytest.approx(60.0)
    assert totals["Food"] == CategoryTotal(actual=50.0, projected=25.0)
    assert totals["Travel"] == CategoryTotal(actual=0.0, projected=15.0)


def test_percentages_are_ordered_and_sum_to_one_hundred(scenario_transactions, projected_transactions):
    summary = summarize_categories(
        normalize_transactions(scenario_transactions),
        normalize_transactions(projected_transactions),
    )

    for row in summary["rows"]:
        assert 0 <= row["actual_percent"] <= row["combined_percent"]
    assert sum(row["actual_percent"] for row in summary["rows"]) == pytest.approx(100.0)


def test_rows_are_sorted_by_name_ignoring_case_and_accents():
    totals = {
        "banana": CategoryTotal(1.0, 0.0),
        "Éclair": CategoryTotal(1.0, 0.0),
        "Apple": CategoryTotal(1.0, 0.0),
        "cherry": CategoryTotal(1.0, 0.0),
    }

    rows = build_category_rows(totals, 4.0)

    assert [row["category"] for row in rows] == ["Apple", "banana", "cherry", "Éclair"]


def test_percent_label_rounds_half_up():
    rows = _rows_by_category(
        build_category_rows({"A": CategoryTotal(1.0, 0.0), "B": CategoryTotal(7.0, 0.0)}, 8.0)
    )

    assert rows["A"]["percent_label"] == 13
    assert rows["B"]["percent_label"] == 88


def test_zero_total_falls_back_to_actual_percent():
    rows = build_category_rows({"Refunds": CategoryTotal(0.0, 30.0)}, 0.0)

    assert rows[0]["actual_percent"] == 0
    assert rows[0]["combined_percent"] == 0
    assert rows[0]["percent_label"] == 0
    assert rows[0]["projected_only"] is True


def test_category_filter_round_trip(scenario_transactions):
    normalized = normalize_transactions(scenario_transactions)

    totals, total_sum = compute_category_totals(filter_by_category(normalized, "Food"))

    assert list(totals) == ["Food"]
    assert totals["Food"].actual == pytest.approx(50.0)
    assert total_sum == pytest.approx(50.0)


def test_criticality_filters_projected_feed(scenario_transactions, projected_transactions):
    summary = summarize_categories(
        normalize_transactions(scenario_transactions),
        normalize_transactions(projected_transactions),
        criticality="essential",
    )

    assert summary["projected_total"] == pytest.approx(30.0)
    assert "Travel" not in summary["totals"]
    assert summary["totals"]["Rent"].projected == pytest.approx(5.0)


def test_totals_are_read_only(scenario_transactions):
    totals, _ = compute_category_totals(normalize_transactions(scenario_transactions))

    with pytest.raises(TypeError):
        totals["Food"] = CategoryTotal(0.0, 0.0)  # type: ignore[index]


def test_empty_sets_produce_no_rows():
    summary = summarize_categories(empty_transactions(), empty_transactions())

    assert summary["rows"] == []
    assert summary["total_sum"] == 0
    assert build_category_breakdown(summary["rows"]).empty


def test_breakdown_frame_mirrors_rows(scenario_transactions):
    summary = summarize_categories(normalize_transactions(scenario_transactions))

    breakdown = build_category_breakdown(summary["rows"])

    assert breakdown["Category"].tolist() == ["Food", "Rent"]
    assert breakdown.loc[0, "Actual"] == pytest.approx(50.0)
    assert "PercentLabel" in breakdown.columns


def test_summary_carries_breakdown_frame(scenario_transactions, projected_transactions):
    summary = summarize_categories(
        normalize_transactions(scenario_transactions),
        normalize_transactions(projected_transactions),
    )

    breakdown = summary["breakdown"]
    assert breakdown["Category"].tolist() == [row["category"] for row in summary["rows"]]
    assert breakdown["PercentLabel"].tolist() == [row["percent_label"] for row in summary["rows"]]
    assert breakdown["ProjectedOnly"].tolist() == [row["projected_only"] for row in summary["rows"]]
