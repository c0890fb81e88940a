"""Derivation engine package."""

from fintrack.derivations.engine import (
    bill_action_label,
    budget_level,
    budget_percentage,
    budget_status_label,
    compute_asset_performance,
    compute_asset_performances,
    compute_budget_progress,
    compute_category_breakdown,
    compute_daily_flow,
    compute_portfolio_stats,
    compute_totals,
    filter_transactions,
    format_amount,
    format_performance,
    recent_transactions,
)

__all__ = [
    "bill_action_label",
    "budget_level",
    "budget_percentage",
    "budget_status_label",
    "compute_asset_performance",
    "compute_asset_performances",
    "compute_budget_progress",
    "compute_category_breakdown",
    "compute_daily_flow",
    "compute_portfolio_stats",
    "compute_totals",
    "filter_transactions",
    "format_amount",
    "format_performance",
    "recent_transactions",
]
