"""
Two-Stage Draft Validation

Validation happens in two distinct stages:

STAGE 1 - SCHEMA VALIDATION:
- Parse loose form input into a typed draft
- Non-numeric amounts, unparseable dates, unknown enum values

STAGE 2 - SEMANTIC VALIDATION:
- Business rules: required fields, non-zero amounts, positive limits,
  non-negative prices

Stage 2 only runs when stage 1 produced a draft.

Validation NEVER silently fixes input and never silently drops it:
every rejection comes back as a list of ValidationIssue objects.
"""

from decimal import Decimal
from typing import Any, Mapping, Optional, TypeVar, Union

from pydantic import ValidationError

from fintrack.models.records import (
    BillDraft,
    BudgetDraft,
    Draft,
    InvestmentDraft,
    TransactionDraft,
)
from fintrack.models.results import ValidationIssue, ValidationResult


DraftT = TypeVar("DraftT", bound=Draft)

DraftInput = Union[Draft, Mapping[str, Any]]


def issues_from_error(error: ValidationError) -> list[ValidationIssue]:
    """Convert a pydantic ValidationError into ValidationIssue objects."""
    issues = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail.get("loc", ())) or "record"
        issues.append(ValidationIssue(
            field=location,
            issue_type="invalid_format",
            message=f"{location}: {detail.get('msg', 'invalid value')}",
            severity="error",
        ))
    return issues


def _missing(field: str, label: str) -> ValidationIssue:
    return ValidationIssue(
        field=field,
        issue_type="missing",
        message=f"{label} is required",
        severity="error",
    )


def _negative(field: str, label: str) -> ValidationIssue:
    return ValidationIssue(
        field=field,
        issue_type="invalid_value",
        message=f"{label} cannot be negative",
        severity="error",
    )


class RecordValidator:
    """
    Validates drafts for the four record types.

    Each ``check_*`` method returns the parsed draft (or None when stage 1
    failed) together with a ValidationResult.
    """

    def parse(
        self,
        draft_cls: type[DraftT],
        data: DraftInput,
    ) -> tuple[Optional[DraftT], list[ValidationIssue]]:
        """
        Stage 1: Schema validation.

        Accepts an already-built draft or a mapping of raw form values.
        """
        if isinstance(data, draft_cls):
            return data, []
        if isinstance(data, Draft):
            data = data.model_dump(exclude_none=True)
        try:
            return draft_cls.model_validate(data), []
        except ValidationError as e:
            return None, issues_from_error(e)

    def _check(self, draft_cls, data, semantic) -> tuple[Optional[Draft], ValidationResult]:
        draft, issues = self.parse(draft_cls, data)
        if draft is not None:
            issues.extend(semantic(draft))
        return draft, ValidationResult(issues=issues)

    # -------------------------------------------------------------------------
    # Stage 2: per-record semantic rules
    # -------------------------------------------------------------------------

    def _transaction_rules(self, draft: TransactionDraft) -> list[ValidationIssue]:
        issues = []

        if draft.amount is None:
            issues.append(_missing("amount", "Amount"))
        elif draft.amount == 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message="Amount must be greater than zero",
                severity="error",
                suggested_fix="Enter the transaction amount",
            ))
        elif draft.amount < 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message="Amount cannot be negative",
                severity="error",
                suggested_fix="Record money going out as an expense instead",
            ))

        if not draft.description:
            issues.append(_missing("description", "Description"))

        return issues

    def _bill_rules(self, draft: BillDraft) -> list[ValidationIssue]:
        issues = []

        if draft.amount is None:
            issues.append(_missing("amount", "Amount"))
        elif draft.amount < 0:
            issues.append(_negative("amount", "Amount"))

        if not draft.name:
            issues.append(ValidationIssue(
                field="name",
                issue_type="missing",
                message="Bill has no name",
                severity="warning",
            ))

        return issues

    def _budget_rules(self, draft: BudgetDraft) -> list[ValidationIssue]:
        issues = []

        if draft.limit is None:
            issues.append(_missing("limit", "Monthly limit"))
        elif draft.limit <= 0:
            issues.append(ValidationIssue(
                field="limit",
                issue_type="invalid_value",
                message="Monthly limit must be greater than zero",
                severity="error",
            ))

        return issues

    def _investment_rules(self, draft: InvestmentDraft) -> list[ValidationIssue]:
        issues = []

        for field, label in (
            ("quantity", "Quantity"),
            ("purchase_price", "Purchase price"),
            ("current_price", "Current price"),
        ):
            value = getattr(draft, field)
            if value is not None and value < 0:
                issues.append(_negative(field, label))

        if not draft.purchase_price:
            issues.append(ValidationIssue(
                field="purchase_price",
                issue_type="suspicious_value",
                message="Purchase price is zero, performance cannot be calculated",
                severity="warning",
            ))

        return issues

    # -------------------------------------------------------------------------
    # Public entry points
    # -------------------------------------------------------------------------

    def check_transaction(self, data: DraftInput) -> tuple[Optional[TransactionDraft], ValidationResult]:
        return self._check(TransactionDraft, data, self._transaction_rules)

    def check_bill(self, data: DraftInput) -> tuple[Optional[BillDraft], ValidationResult]:
        return self._check(BillDraft, data, self._bill_rules)

    def check_budget(self, data: DraftInput) -> tuple[Optional[BudgetDraft], ValidationResult]:
        return self._check(BudgetDraft, data, self._budget_rules)

    def check_investment(self, data: DraftInput) -> tuple[Optional[InvestmentDraft], ValidationResult]:
        return self._check(InvestmentDraft, data, self._investment_rules)

    def get_user_friendly_summary(self, result: ValidationResult) -> str:
        """Short text suitable for showing next to a form."""
        if result.is_valid and not result.warnings:
            return "All checks passed."

        lines = []
        if result.has_errors:
            lines.append("Please fix the following:")
            for issue in result.issues:
                if issue.severity == "error":
                    lines.append(f"  - {issue.message}")
                    if issue.suggested_fix:
                        lines.append(f"    {issue.suggested_fix}")

        if result.warnings:
            if lines:
                lines.append("")
            lines.append("Please verify:")
            for warning in result.warnings:
                lines.append(f"  - {warning}")

        return "\n".join(lines)


def to_decimal(value: Optional[Decimal]) -> Decimal:
    """Missing numeric form fields count as zero."""
    return value if value is not None else Decimal(0)
