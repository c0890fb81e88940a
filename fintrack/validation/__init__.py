"""Validation package."""

from fintrack.validation.validator import (
    RecordValidator,
    issues_from_error,
    to_decimal,
)

__all__ = ["RecordValidator", "issues_from_error", "to_decimal"]
