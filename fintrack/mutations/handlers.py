"""
Mutation Handlers

Pure, copy-on-write operations on the four collections. Each handler
takes the current collection (a tuple), validates its input and returns
a MutationResult holding the collection the caller should keep.

Handlers NEVER mutate their input: the returned collection is always a
new tuple on success and the very same tuple on failure or no-op. They
do no I/O; persisting the result is the caller's job.
"""

import datetime
from typing import Optional
from uuid import UUID

from pydantic import ValidationError

from fintrack.models.categories import (
    DEFAULT_BILL_CATEGORY,
    DEFAULT_TRANSACTION_CATEGORY,
)
from fintrack.models.records import (
    Bill,
    Budget,
    Investment,
    InvestmentCategory,
    Transaction,
    TransactionType,
)
from fintrack.models.results import MutationResult
from fintrack.validation.validator import (
    DraftInput,
    RecordValidator,
    issues_from_error,
    to_decimal,
)


_default_validator = RecordValidator()


def _rejected(collection, issues) -> MutationResult:
    return MutationResult(success=False, collection=collection, issues=issues)


def _build(factory, collection, issues, **fields):
    """
    Construct a record, turning a model-level ValidationError (e.g. a
    description that is too long) into a rejected result.
    """
    try:
        return factory(**fields), None
    except ValidationError as e:
        return None, _rejected(collection, issues + issues_from_error(e))


def add_transaction(
    transactions: tuple[Transaction, ...],
    draft: DraftInput,
    today: Optional[datetime.date] = None,
    validator: Optional[RecordValidator] = None,
) -> MutationResult[Transaction]:
    """
    Validate a transaction draft and prepend it (newest first).

    Requires a non-zero amount and a non-empty description. Date
    defaults to today, category to the first seeded category and type
    to expense.
    """
    validator = validator or _default_validator
    parsed, result = validator.check_transaction(draft)
    if parsed is None or not result.is_valid:
        return _rejected(transactions, result.issues)

    transaction, failure = _build(
        Transaction,
        transactions,
        result.issues,
        amount=parsed.amount,
        description=parsed.description,
        category=parsed.category or DEFAULT_TRANSACTION_CATEGORY,
        date=parsed.date or today or datetime.date.today(),
        type=parsed.type or TransactionType.EXPENSE,
    )
    if failure:
        return failure

    return MutationResult(
        success=True,
        collection=(transaction,) + tuple(transactions),
        record=transaction,
        issues=result.issues,
    )


def delete_transaction(
    transactions: tuple[Transaction, ...],
    transaction_id: UUID,
) -> MutationResult[Transaction]:
    """Remove a transaction by id. Unknown ids are a successful no-op."""
    removed = next((t for t in transactions if t.id == transaction_id), None)
    if removed is None:
        return MutationResult(success=True, collection=transactions)

    return MutationResult(
        success=True,
        collection=tuple(t for t in transactions if t.id != transaction_id),
        record=removed,
    )


def add_bill(
    bills: tuple[Bill, ...],
    draft: DraftInput,
    today: Optional[datetime.date] = None,
    validator: Optional[RecordValidator] = None,
) -> MutationResult[Bill]:
    """Append a new unpaid bill. Category defaults to "Utilities"."""
    validator = validator or _default_validator
    parsed, result = validator.check_bill(draft)
    if parsed is None or not result.is_valid:
        return _rejected(bills, result.issues)

    bill, failure = _build(
        Bill,
        bills,
        result.issues,
        name=parsed.name or "",
        amount=parsed.amount,
        due_date=parsed.due_date or today or datetime.date.today(),
        category=parsed.category or DEFAULT_BILL_CATEGORY,
        is_paid=False,
    )
    if failure:
        return failure

    return MutationResult(
        success=True,
        collection=tuple(bills) + (bill,),
        record=bill,
        issues=result.issues,
    )


def toggle_bill_paid(
    bills: tuple[Bill, ...],
    bill_id: UUID,
) -> MutationResult[Bill]:
    """Flip ``is_paid`` on the matching bill. Unknown ids are a no-op."""
    target = next((b for b in bills if b.id == bill_id), None)
    if target is None:
        return MutationResult(success=True, collection=bills)

    toggled = target.model_copy(update={"is_paid": not target.is_paid})
    return MutationResult(
        success=True,
        collection=tuple(toggled if b.id == bill_id else b for b in bills),
        record=toggled,
    )


def add_budget(
    budgets: tuple[Budget, ...],
    draft: DraftInput,
    validator: Optional[RecordValidator] = None,
) -> MutationResult[Budget]:
    """
    Append a budget.

    Categories are not unique: two budgets for the same
    category are both kept and tracked independently.
    """
    validator = validator or _default_validator
    parsed, result = validator.check_budget(draft)
    if parsed is None or not result.is_valid:
        return _rejected(budgets, result.issues)

    budget, failure = _build(
        Budget,
        budgets,
        result.issues,
        category=parsed.category or DEFAULT_TRANSACTION_CATEGORY,
        limit=parsed.limit,
    )
    if failure:
        return failure

    return MutationResult(
        success=True,
        collection=tuple(budgets) + (budget,),
        record=budget,
        issues=result.issues,
    )


def add_investment(
    investments: tuple[Investment, ...],
    draft: DraftInput,
    today: Optional[datetime.date] = None,
    validator: Optional[RecordValidator] = None,
) -> MutationResult[Investment]:
    """Append a holding. Missing numeric fields are taken as zero."""
    validator = validator or _default_validator
    parsed, result = validator.check_investment(draft)
    if parsed is None or not result.is_valid:
        return _rejected(investments, result.issues)

    investment, failure = _build(
        Investment,
        investments,
        result.issues,
        asset_name=parsed.asset_name or "",
        symbol=parsed.symbol or "",
        quantity=to_decimal(parsed.quantity),
        purchase_price=to_decimal(parsed.purchase_price),
        current_price=to_decimal(parsed.current_price),
        purchase_date=parsed.purchase_date or today or datetime.date.today(),
        category=parsed.category or InvestmentCategory.STOCK,
    )
    if failure:
        return failure

    return MutationResult(
        success=True,
        collection=tuple(investments) + (investment,),
        record=investment,
        issues=result.issues,
    )
