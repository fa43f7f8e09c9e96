"""Analytics helpers shared across StatementSpend services."""

from analytics.categorisation import (
    build_category_breakdown,
    build_category_rows,
    category_sort_key,
    compute_category_totals,
    compute_projected_total,
    summarize_categories,
)
from analytics.filtering import filter_by_category, filter_by_criticality, merge_transaction_sets
from analytics.normalization import (
    DATE_FIELDS,
    empty_transactions,
    normalize_transactions,
    parse_transaction_date,
)
from analytics.weekly import (
    bucketize_weeks,
    compute_weekly_average,
    empty_aggregation,
    snap_to_statement_week,
    weeks_for_average,
)

__all__ = [
    "build_category_breakdown",
    "build_category_rows",
    "category_sort_key",
    "compute_category_totals",
    "compute_projected_total",
    "summarize_categories",
    "filter_by_category",
    "filter_by_criticality",
    "merge_transaction_sets",
    "DATE_FIELDS",
    "empty_transactions",
    "normalize_transactions",
    "parse_transaction_date",
    "bucketize_weeks",
    "compute_weekly_average",
    "empty_aggregation",
    "snap_to_statement_week",
    "weeks_for_average",
]
