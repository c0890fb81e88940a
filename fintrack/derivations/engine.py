"""
Derivation Engine

Pure functions from the stored collections to the numbers and series the
dashboard shows. No function here keeps state or performs I/O, so every
call with the same inputs returns the same output.

Zero denominators are special-cased everywhere:
- budget percentage with a zero limit is 0
- portfolio percentage with nothing invested is 0
- per-asset performance with a zero purchase price is None ("N/A")
"""

import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional, Sequence

from fintrack.models.categories import category_color
from fintrack.models.derived import (
    AssetPerformance,
    BudgetLevel,
    BudgetProgress,
    CategoryTotal,
    DailyFlow,
    PortfolioStats,
    TransactionTotals,
)
from fintrack.models.records import (
    Bill,
    Budget,
    Investment,
    Transaction,
    TransactionType,
)


ZERO = Decimal(0)
HUNDRED = Decimal(100)

DAY_LABEL_FORMAT = "%b %d"

# Budget bar thresholds, in percent
WARNING_THRESHOLD = Decimal(70)
DANGER_THRESHOLD = Decimal(90)


def _sum_amounts(transactions: Iterable[Transaction], kind: TransactionType) -> Decimal:
    return sum((t.amount for t in transactions if t.type == kind), ZERO)


# =============================================================================
# TRANSACTIONS
# =============================================================================

def compute_totals(transactions: Sequence[Transaction]) -> TransactionTotals:
    """Income, expenses and balance (income minus expenses)."""
    income = _sum_amounts(transactions, TransactionType.INCOME)
    expenses = _sum_amounts(transactions, TransactionType.EXPENSE)
    return TransactionTotals(
        balance=income - expenses,
        income=income,
        expenses=expenses,
    )


def compute_daily_flow(
    transactions: Sequence[Transaction],
    today: Optional[datetime.date] = None,
    days: int = 7,
) -> list[DailyFlow]:
    """
    Income and expense per day for the ``days`` days ending today.

    Oldest day first. Buckets are keyed by full calendar date, so the
    same month/day in different years never collide.
    """
    today = today or datetime.date.today()
    window = [today - datetime.timedelta(days=offset) for offset in range(days - 1, -1, -1)]

    income = {day: ZERO for day in window}
    expense = {day: ZERO for day in window}
    for t in transactions:
        if t.date not in income:
            continue
        if t.type == TransactionType.INCOME:
            income[t.date] += t.amount
        else:
            expense[t.date] += t.amount

    return [
        DailyFlow(
            day=day,
            label=day.strftime(DAY_LABEL_FORMAT),
            income=income[day],
            expense=expense[day],
        )
        for day in window
    ]


def compute_category_breakdown(transactions: Sequence[Transaction]) -> list[CategoryTotal]:
    """
    Expense totals grouped by category string.

    Categories appear in the order they are first seen; categories
    without spend are not listed.
    """
    totals: dict[str, Decimal] = {}
    for t in transactions:
        if t.type != TransactionType.EXPENSE:
            continue
        totals[t.category] = totals.get(t.category, ZERO) + t.amount

    return [
        CategoryTotal(category=name, total=total, color=category_color(name))
        for name, total in totals.items()
    ]


def filter_transactions(
    transactions: Sequence[Transaction],
    query: str = "",
) -> list[Transaction]:
    """
    Transactions whose description or category contains ``query``
    (case-insensitive), newest date first.

    The sort is stable, so same-day transactions keep their stored order.
    """
    needle = (query or "").lower()
    matches = [
        t for t in transactions
        if needle in t.description.lower() or needle in t.category.lower()
    ]
    return sorted(matches, key=lambda t: t.date, reverse=True)


def recent_transactions(
    transactions: Sequence[Transaction],
    query: str = "",
    limit: int = 5,
) -> list[Transaction]:
    """First rows of the filtered view, for the overview panel."""
    return filter_transactions(transactions, query)[:limit]


def format_amount(transaction: Transaction) -> str:
    """Signed currency string, e.g. "+$1,200.00" or "-$40.00"."""
    sign = "+" if transaction.type == TransactionType.INCOME else "-"
    return f"{sign}${transaction.amount:,.2f}"


# =============================================================================
# BUDGETS
# =============================================================================

def budget_percentage(spent: Decimal, limit: Decimal) -> Decimal:
    """spent / limit as a percentage in [0, 100]; 0 when limit <= 0."""
    if limit <= 0:
        return ZERO
    return max(min(spent / limit * HUNDRED, HUNDRED), ZERO)


def compute_budget_progress(
    budgets: Sequence[Budget],
    transactions: Sequence[Transaction],
) -> list[BudgetProgress]:
    """
    Spend against every budget.

    Budgets sharing a category are each reported against the full spend
    for that category; they are not merged.
    """
    spent_by_category: dict[str, Decimal] = {}
    for t in transactions:
        if t.type == TransactionType.EXPENSE:
            spent_by_category[t.category] = spent_by_category.get(t.category, ZERO) + t.amount

    progress = []
    for budget in budgets:
        spent = spent_by_category.get(budget.category, ZERO)
        progress.append(BudgetProgress(
            budget=budget,
            spent=spent,
            percentage=budget_percentage(spent, budget.limit),
        ))
    return progress


def budget_level(progress: BudgetProgress) -> BudgetLevel:
    if progress.percentage > DANGER_THRESHOLD:
        return BudgetLevel.DANGER
    if progress.percentage > WARNING_THRESHOLD:
        return BudgetLevel.WARNING
    return BudgetLevel.OK


def budget_status_label(progress: BudgetProgress) -> str:
    """Return "Over budget!" or e.g. "60% remaining"."""
    if progress.limit <= 0:
        return "No limit set"
    if progress.is_over_budget:
        return "Over budget!"
    remaining = (HUNDRED - progress.percentage).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return f"{remaining}% remaining"


# =============================================================================
# INVESTMENTS
# =============================================================================

def compute_portfolio_stats(investments: Sequence[Investment]) -> PortfolioStats:
    total_invested = sum((inv.invested_value for inv in investments), ZERO)
    current_value = sum((inv.current_value for inv in investments), ZERO)
    profit_loss = current_value - total_invested

    if total_invested > 0:
        percentage = profit_loss / total_invested * HUNDRED
    else:
        percentage = ZERO

    return PortfolioStats(
        total_invested=total_invested,
        current_value=current_value,
        profit_loss=profit_loss,
        profit_loss_percentage=percentage,
    )


def compute_asset_performance(investment: Investment) -> Optional[Decimal]:
    """Percentage change from purchase price; None if it was bought for 0."""
    if investment.purchase_price == 0:
        return None
    change = investment.current_price - investment.purchase_price
    return change / investment.purchase_price * HUNDRED


def compute_asset_performances(investments: Sequence[Investment]) -> list[AssetPerformance]:
    return [
        AssetPerformance(investment=inv, performance=compute_asset_performance(inv))
        for inv in investments
    ]


def format_performance(performance: Optional[Decimal]) -> str:
    """Return "+50.00%", "-12.50%" or "N/A"."""
    if performance is None:
        return "N/A"
    return f"{performance:+.2f}%"


# =============================================================================
# BILLS
# =============================================================================

def bill_action_label(bill: Bill) -> str:
    return "Mark as Unpaid" if bill.is_paid else "Mark as Paid"
