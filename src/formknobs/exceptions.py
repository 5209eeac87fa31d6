"""Exception hierarchy for formknobs.

The field predicates themselves never raise: a malformed value is a ``False``
verdict, not an error. These exceptions belong to the layers built around the
predicates (registry lookups, form schemas and settings loading), and all of
them carry an optional context dictionary with structured error details.

Example:
    ```python
    from formknobs.exceptions import FormknobsError, NotFoundError

    try:
        validator = get_validator("is_valid_zip")
    except NotFoundError as e:
        logger.error(f"Error: {e}")
        logger.error(f"Available: {e.context['available_keys']}")
    ```
"""

from typing import Any, Dict


class FormknobsError(Exception):
    """Base exception for all formknobs errors.

    Attributes:
        context: Dictionary containing contextual information about the error
        details: Alias for context

    Args:
        message: Human-readable error message
        context: Optional dictionary with error context (field names, keys, etc.)
        details: Alternative to context (both are supported)

    Example:
        ```python
        error = FormknobsError(
            "Operation failed",
            context={"field": "email", "field_type": "email"}
        )
        str(error)
        # 'Operation failed'
        error.context
        # {'field': 'email', 'field_type': 'email'}
        ```
    """

    def __init__(
        self,
        message: str,
        context: Dict[str, Any] | None = None,
        details: Dict[str, Any] | None = None,
    ):
        """Initialize the exception with optional context.

        Args:
            message: Error message
            context: Optional context dictionary
            details: Optional details dictionary (takes precedence over context)
        """
        super().__init__(message)
        self.context = details or context or {}
        self.details = self.context


class ValidationError(FormknobsError):
    """Raised when a caller asks for validation to be enforced and it fails.

    Example:
        ```python
        raise ValidationError(
            "Form 'signup' is invalid",
            context={"errors": ["Field 'email' is not a valid email"]}
        )
        ```
    """

    pass


class ConfigurationError(FormknobsError):
    """Raised when settings or a form configuration are invalid or missing.

    Example:
        ```python
        raise ConfigurationError(
            "Unknown field type: zip",
            context={"field": "postcode", "available_types": ["text", "email"]}
        )
        ```
    """

    pass


class NotFoundError(FormknobsError):
    """Raised when a validator or field type is looked up and doesn't exist."""

    pass


class OperationError(FormknobsError):
    """Raised when a registry operation fails (e.g. duplicate registration)."""

    pass


__all__ = [
    "FormknobsError",
    "ValidationError",
    "ConfigurationError",
    "NotFoundError",
    "OperationError",
]
