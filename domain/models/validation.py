"""
Validation result types.

Errors block a save; warnings are informational and never affect ``is_valid``.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, computed_field


class ValidationCode(str, Enum):
    """Machine-readable issue codes."""

    REQUIRED_FIELD = "REQUIRED_FIELD"
    NO_ASSIGNMENTS = "NO_ASSIGNMENTS"
    EMPTY_WORKOUT = "EMPTY_WORKOUT"
    EMPTY_PROGRAM = "EMPTY_PROGRAM"
    INVALID_DURATION = "INVALID_DURATION"
    DURATION_OUT_OF_RANGE = "DURATION_OUT_OF_RANGE"
    EMPTY_BLOCK = "EMPTY_BLOCK"
    MISSING_INTERVAL = "MISSING_INTERVAL"
    INVALID_REPETITIONS = "INVALID_REPETITIONS"
    MEDICAL_CONFLICT = "MEDICAL_CONFLICT"
    MEDICAL_CHECK_FAILED = "MEDICAL_CHECK_FAILED"


class ValidationIssue(BaseModel):
    """A single error or warning, anchored to a field path like ``intervals[0].duration``."""

    field: str
    message: str
    code: ValidationCode

    def __str__(self) -> str:
        return f"{self.field}: {self.message} ({self.code.value})"

    model_config = {"frozen": True}


class ValidationResult(BaseModel):
    """
    Outcome of running the validation pipeline against one draft.

    ``draft_version`` records which draft version the result was computed
    against so callers can drop results that arrive out of order.
    """

    errors: List[ValidationIssue] = Field(default_factory=list)
    warnings: List[ValidationIssue] = Field(default_factory=list)
    draft_version: Optional[int] = None

    @computed_field
    @property
    def is_valid(self) -> bool:
        return not self.errors

    def codes(self) -> List[ValidationCode]:
        """Codes of all errors followed by all warnings."""
        return [issue.code for issue in self.errors] + [issue.code for issue in self.warnings]

    def error_for(self, field: str) -> Optional[ValidationIssue]:
        """First error anchored at ``field``, if any."""
        for issue in self.errors:
            if issue.field == field:
                return issue
        return None

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        """Concatenate two results, keeping this result's draft version."""
        return ValidationResult(
            errors=[*self.errors, *other.errors],
            warnings=[*self.warnings, *other.warnings],
            draft_version=self.draft_version,
        )

    def summary(self) -> str:
        if self.is_valid and not self.warnings:
            return "valid"
        return f"{len(self.errors)} errors, {len(self.warnings)} warnings"
