"""
Data Models Package

This package contains all Pydantic models used in FinTrack.
All data flowing through the system must conform to these schemas.
"""

from fintrack.models.categories import (
    DEFAULT_CATEGORIES,
    FALLBACK_CATEGORY,
    Category,
    categories_for_type,
    category_color,
    category_for,
    find_category,
)
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
    BillDraft,
    Budget,
    BudgetDraft,
    Investment,
    InvestmentCategory,
    InvestmentDraft,
    Record,
    Transaction,
    TransactionDraft,
    TransactionType,
)
from fintrack.models.results import (
    MutationResult,
    ValidationIssue,
    ValidationResult,
)

__all__ = [
    # Records
    "Bill",
    "Budget",
    "Investment",
    "InvestmentCategory",
    "Record",
    "Transaction",
    "TransactionType",
    # Drafts
    "BillDraft",
    "BudgetDraft",
    "InvestmentDraft",
    "TransactionDraft",
    # Categories
    "Category",
    "DEFAULT_CATEGORIES",
    "FALLBACK_CATEGORY",
    "categories_for_type",
    "category_color",
    "category_for",
    "find_category",
    # Derived values
    "AssetPerformance",
    "BudgetLevel",
    "BudgetProgress",
    "CategoryTotal",
    "DailyFlow",
    "PortfolioStats",
    "TransactionTotals",
    # Results
    "MutationResult",
    "ValidationIssue",
    "ValidationResult",
]
