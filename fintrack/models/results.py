"""
Validation and mutation result types.

Mutation handlers never fail silently: they always return a
MutationResult saying whether the change was applied, and if not, which
fields were wrong.
"""

from dataclasses import dataclass, field
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, Field

from fintrack.models.records import Record


RecordT = TypeVar("RecordT", bound=Record)


class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_format', 'invalid_value')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        default="error",
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = Field(
        default=None,
        description="Suggested fix if available"
    )


class ValidationResult(BaseModel):
    """Outcome of validating one draft."""

    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def is_valid(self) -> bool:
        return not self.has_errors

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")

    @property
    def warnings(self) -> list[str]:
        return [issue.message for issue in self.issues if issue.severity == "warning"]


@dataclass(frozen=True)
class MutationResult(Generic[RecordT]):
    """
    Outcome of a mutation handler.

    ``collection`` is always the collection the caller should keep: the
    new one on success, the untouched input on failure. ``record`` is the
    record that was added, toggled or removed, or None when nothing
    matched.
    """

    success: bool
    collection: tuple[RecordT, ...]
    record: Optional[RecordT] = None
    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return self.success and self.record is not None

    @property
    def error_messages(self) -> list[str]:
        return [issue.message for issue in self.issues if issue.severity == "error"]
