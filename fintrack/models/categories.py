"""
Category reference data.

Transactions point at categories by *name*, and the name is free text,
so the seeded list is never assumed to be exhaustive: every lookup falls
back to the catch-all "Other" entry.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict

from fintrack.models.records import TransactionType


class Category(BaseModel):
    """Static display metadata for a category."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    icon: str
    color: str
    type: TransactionType


DEFAULT_CATEGORIES: tuple[Category, ...] = (
    Category(id="1", name="Food & Dining", icon="Utensils", color="#EF4444", type=TransactionType.EXPENSE),
    Category(id="2", name="Shopping", icon="ShoppingBag", color="#F59E0B", type=TransactionType.EXPENSE),
    Category(id="3", name="Transportation", icon="Car", color="#10B981", type=TransactionType.EXPENSE),
    Category(id="4", name="Entertainment", icon="Film", color="#8B5CF6", type=TransactionType.EXPENSE),
    Category(id="5", name="Health", icon="HeartPulse", color="#EC4899", type=TransactionType.EXPENSE),
    Category(id="6", name="Utilities", icon="Zap", color="#3B82F6", type=TransactionType.EXPENSE),
    Category(id="7", name="Salary", icon="Wallet", color="#10B981", type=TransactionType.INCOME),
    Category(id="8", name="Investment", icon="TrendingUp", color="#6366F1", type=TransactionType.INCOME),
    Category(id="9", name="Other", icon="MoreHorizontal", color="#6B7280", type=TransactionType.EXPENSE),
)

FALLBACK_CATEGORY = DEFAULT_CATEGORIES[-1]

DEFAULT_TRANSACTION_CATEGORY = DEFAULT_CATEGORIES[0].name
DEFAULT_BILL_CATEGORY = "Utilities"

_BY_NAME = {category.name: category for category in DEFAULT_CATEGORIES}


def find_category(name: Optional[str]) -> Optional[Category]:
    """Exact-name lookup. None when the name is not a seeded category."""
    if name is None:
        return None
    return _BY_NAME.get(name)


def category_for(name: Optional[str]) -> Category:
    """Lookup that always succeeds, using "Other" for unknown names."""
    return find_category(name) or FALLBACK_CATEGORY


def category_color(name: Optional[str]) -> str:
    return category_for(name).color


def categories_for_type(transaction_type: TransactionType) -> list[Category]:
    """Categories offered for a transaction of the given type."""
    return [c for c in DEFAULT_CATEGORIES if c.type == transaction_type]
