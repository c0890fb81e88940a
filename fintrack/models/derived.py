"""
Derived value models.

Everything in this module is computed from the stored collections by
fintrack.derivations and is NEVER persisted. Recomputing from source on
every read means these values cannot drift from their inputs.
"""

import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from fintrack.models.records import Budget, Investment


class BudgetLevel(str, Enum):
    """How close a budget is to its limit."""
    OK = "ok"
    WARNING = "warning"  # above 70%
    DANGER = "danger"    # above 90%


class Derived(BaseModel):
    model_config = ConfigDict(frozen=True)


class TransactionTotals(Derived):
    """Headline numbers for the dashboard cards."""

    balance: Decimal = Decimal(0)
    income: Decimal = Decimal(0)
    expenses: Decimal = Decimal(0)


class DailyFlow(Derived):
    """One point of the income/expense time series."""

    day: datetime.date
    label: str = Field(..., description='Display label, e.g. "Oct 19"')
    income: Decimal = Decimal(0)
    expense: Decimal = Decimal(0)


class CategoryTotal(Derived):
    """Expense total for one category string (pie chart slice)."""

    category: str
    total: Decimal
    color: str


class BudgetProgress(Derived):
    """A budget together with its derived spend."""

    budget: Budget
    spent: Decimal
    percentage: Decimal = Field(
        ...,
        ge=0,
        le=100,
        description="spent / limit as a percentage, clamped to 100"
    )

    @property
    def category(self) -> str:
        return self.budget.category

    @property
    def limit(self) -> Decimal:
        return self.budget.limit

    @property
    def is_over_budget(self) -> bool:
        return self.percentage >= 100


class PortfolioStats(Derived):
    """Aggregate profit/loss across all holdings."""

    total_invested: Decimal = Decimal(0)
    current_value: Decimal = Decimal(0)
    profit_loss: Decimal = Decimal(0)
    profit_loss_percentage: Decimal = Decimal(0)


class AssetPerformance(Derived):
    """
    Per-holding gain or loss.

    ``performance`` is None when the purchase price is zero, since the
    percentage is undefined in that case.
    """

    investment: Investment
    performance: Optional[Decimal] = None

    @property
    def is_gain(self) -> bool:
        return self.performance is not None and self.performance >= 0
