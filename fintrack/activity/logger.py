"""
Activity Logger

Every mutation and every insight request produces one structured log
event. Events are written to the local structured log only; nothing is
persisted alongside the collections.

The logger:
- Never raises into the calling flow
- Emits JSON lines so logs can be grepped and parsed
"""

import logging
from typing import Optional

import structlog

from fintrack.models.records import Bill, Budget, Investment, Transaction
from fintrack.models.results import ValidationIssue


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "INFO") -> None:
    """Route structlog output through stdlib logging at ``level``."""
    logging.basicConfig(format="%(message)s", level=level)
    logging.getLogger("fintrack").setLevel(level)


class ActivityLogger:
    """Structured log of what the user did to their data."""

    def __init__(self, logger: Optional[structlog.stdlib.BoundLogger] = None):
        self._logger = logger or structlog.get_logger("fintrack.activity")

    def log_transaction_added(self, transaction: Transaction) -> None:
        self._logger.info(
            "transaction_added",
            transaction_id=str(transaction.id),
            type=transaction.type.value,
            amount=str(transaction.amount),
            category=transaction.category,
            date=transaction.date.isoformat(),
        )

    def log_transaction_deleted(self, transaction: Transaction) -> None:
        self._logger.info(
            "transaction_deleted",
            transaction_id=str(transaction.id),
        )

    def log_bill_added(self, bill: Bill) -> None:
        self._logger.info(
            "bill_added",
            bill_id=str(bill.id),
            amount=str(bill.amount),
            due_date=bill.due_date.isoformat(),
        )

    def log_bill_paid_toggled(self, bill: Bill) -> None:
        self._logger.info(
            "bill_paid_toggled",
            bill_id=str(bill.id),
            is_paid=bill.is_paid,
        )

    def log_budget_added(self, budget: Budget) -> None:
        self._logger.info(
            "budget_added",
            budget_id=str(budget.id),
            category=budget.category,
            limit=str(budget.limit),
        )

    def log_investment_added(self, investment: Investment) -> None:
        self._logger.info(
            "investment_added",
            investment_id=str(investment.id),
            symbol=investment.symbol,
            category=investment.category.value,
        )

    def log_mutation_rejected(
        self,
        operation: str,
        issues: list[ValidationIssue],
    ) -> None:
        self._logger.warning(
            "mutation_rejected",
            operation=operation,
            issues=[
                {"field": i.field, "type": i.issue_type, "message": i.message}
                for i in issues
                if i.severity == "error"
            ],
        )

    def log_insight_requested(self, transaction_count: int) -> None:
        self._logger.info("insight_requested", transaction_count=transaction_count)

    def log_insight_completed(self, generated_by_model: bool, length: int) -> None:
        self._logger.info(
            "insight_completed",
            generated_by_model=generated_by_model,
            length=length,
        )
