"""Mutation handlers package."""

from fintrack.mutations.handlers import (
    add_bill,
    add_budget,
    add_investment,
    add_transaction,
    delete_transaction,
    toggle_bill_paid,
)

__all__ = [
    "add_bill",
    "add_budget",
    "add_investment",
    "add_transaction",
    "delete_transaction",
    "toggle_bill_paid",
]
