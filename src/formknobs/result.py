"""Structured result for field and form validation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ValidationResult:
    """Outcome of validating a field or a whole form.

    The predicates return plain booleans; the form layer wraps their verdicts
    in this class so callers get messages alongside validity.
    """

    valid: bool
    value: Any
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        """Allow 'if result:' usage to check validity."""
        return self.valid

    def merge(self, other: ValidationResult) -> ValidationResult:
        """Combine two results; the merged result is valid only if both are.

        Args:
            other: Another ValidationResult to merge with this one

        Returns:
            New ValidationResult with combined state
        """
        return ValidationResult(
            valid=self.valid and other.valid,
            value=self.value,
            errors=self.errors + other.errors,
            warnings=self.warnings + other.warnings,
        )

    def add_error(self, error: str) -> ValidationResult:
        """Add an error and mark as invalid (fluent API).

        Args:
            error: Error message to add

        Returns:
            Self for chaining
        """
        self.errors.append(error)
        self.valid = False
        return self

    def add_warning(self, warning: str) -> ValidationResult:
        """Add a warning without affecting validity (fluent API)."""
        self.warnings.append(warning)
        return self

    @classmethod
    def success(cls, value: Any, warnings: list[str] | None = None) -> ValidationResult:
        """Create a successful validation result."""
        return cls(valid=True, value=value, errors=[], warnings=warnings or [])

    @classmethod
    def failure(
        cls, value: Any, errors: list[str], warnings: list[str] | None = None
    ) -> ValidationResult:
        """Create a failed validation result.

        Args:
            value: The value that failed validation
            errors: List of error messages
            warnings: Optional list of warnings

        Returns:
            Failed ValidationResult
        """
        return cls(valid=False, value=value, errors=errors, warnings=warnings or [])
