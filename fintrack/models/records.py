"""
Core Record Models for FinTrack

These models define the schemas for the four persisted collections:
transactions, bills, budgets and investments.

Records are frozen. The only way to "change" one is to build a new
record with ``model_copy`` and a new collection around it, which is what
the mutation handlers do.

Persisted JSON uses camelCase keys (``dueDate``, ``isPaid``,
``purchasePrice``...) so collections written by the browser version of
the dashboard load unchanged. Python code uses snake_case attributes.

Money and quantities are Decimal so that totals add up exactly.
"""

import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)
from pydantic.alias_generators import to_camel


# =============================================================================
# ENUMS
# =============================================================================

class TransactionType(str, Enum):
    """Direction of a transaction."""
    INCOME = "income"
    EXPENSE = "expense"


class InvestmentCategory(str, Enum):
    """Asset classes an investment can be filed under."""
    STOCK = "Stock"
    CRYPTO = "Crypto"
    REAL_ESTATE = "Real Estate"
    OTHER = "Other"


# =============================================================================
# PERSISTED RECORDS
# =============================================================================

class Record(BaseModel):
    """
    Base class for every persisted record.

    Every record owns a fresh UUID assigned at creation time.
    """
    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: UUID = Field(
        default_factory=uuid4,
        description="Unique record ID"
    )

    def to_storage_dict(self) -> dict:
        """JSON-ready dict using the persisted (camelCase) keys."""
        return self.model_dump(mode="json", by_alias=True)


class Transaction(Record):
    """
    A single income or expense entry.

    Immutable once created; it can only be deleted.
    ``category`` is free text: it usually names a seeded category but
    does not have to.
    """

    date: datetime.date = Field(
        ...,
        description="Calendar date of the transaction"
    )
    amount: Decimal = Field(
        ...,
        ge=0,
        description="Non-negative amount"
    )
    category: str = Field(
        ...,
        description="Category name (free text)"
    )
    description: str = Field(
        ...,
        min_length=1,
        description="What the money was for"
    )
    type: TransactionType = Field(
        ...,
        description="income or expense"
    )

    @property
    def is_income(self) -> bool:
        return self.type == TransactionType.INCOME

    @property
    def is_expense(self) -> bool:
        return self.type == TransactionType.EXPENSE


class Bill(Record):
    """A bill reminder. ``is_paid`` is the only field that ever flips."""

    name: str = Field(
        default="",
        description="Who or what the bill is for"
    )
    amount: Decimal = Field(
        ...,
        ge=0,
        description="Amount due"
    )
    due_date: datetime.date = Field(
        ...,
        description="When payment is due"
    )
    category: str = "Utilities"
    is_paid: bool = Field(
        default=False,
        description="Payment status"
    )


class Budget(Record):
    """
    A monthly spending limit for one category.

    Spend is never stored here; it is derived from expense transactions
    whose category equals ``category``.
    """

    category: str
    limit: Decimal = Field(
        ...,
        ge=0,
        description="Monthly limit"
    )


class Investment(Record):
    """
    A holding in the user's portfolio.

    ``current_price`` is entered by the user; there is no market feed.
    """

    asset_name: str = ""
    symbol: str = ""
    quantity: Decimal = Field(..., ge=0)
    purchase_price: Decimal = Field(..., ge=0)
    current_price: Decimal = Field(..., ge=0)
    purchase_date: datetime.date
    category: InvestmentCategory = InvestmentCategory.STOCK

    @property
    def invested_value(self) -> Decimal:
        return self.purchase_price * self.quantity

    @property
    def current_value(self) -> Decimal:
        return self.current_price * self.quantity


# =============================================================================
# DRAFTS - loose form input, validated by fintrack.validation
# =============================================================================

# Limits on new input only; stored records of any length still load
MAX_NAME_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 500
MAX_SYMBOL_LENGTH = 20


class Draft(BaseModel):
    """
    Unvalidated user input for a new record.

    Every field is optional because a form may submit nothing for it.
    Blank strings count as "not provided".
    """
    model_config = ConfigDict(
        str_strip_whitespace=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    @field_validator('*', mode='before')
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class TransactionDraft(Draft):
    amount: Optional[Decimal] = None
    description: Optional[str] = Field(default=None, max_length=MAX_DESCRIPTION_LENGTH)
    category: Optional[str] = Field(default=None, max_length=MAX_NAME_LENGTH)
    date: Optional[datetime.date] = None
    type: Optional[TransactionType] = None


class BillDraft(Draft):
    name: Optional[str] = Field(default=None, max_length=MAX_NAME_LENGTH)
    amount: Optional[Decimal] = None
    due_date: Optional[datetime.date] = None
    category: Optional[str] = Field(default=None, max_length=MAX_NAME_LENGTH)


class BudgetDraft(Draft):
    category: Optional[str] = Field(default=None, max_length=MAX_NAME_LENGTH)
    limit: Optional[Decimal] = None


class InvestmentDraft(Draft):
    asset_name: Optional[str] = Field(default=None, max_length=MAX_NAME_LENGTH)
    symbol: Optional[str] = Field(default=None, max_length=MAX_SYMBOL_LENGTH)
    quantity: Optional[Decimal] = None
    purchase_price: Optional[Decimal] = None
    current_price: Optional[Decimal] = None
    purchase_date: Optional[datetime.date] = None
    category: Optional[InvestmentCategory] = None
