"""Field validation for form input.

Pure, stateless predicates that classify raw input as well-formed or not:

- **Predicates**: ``is_non_empty_string``, ``is_valid_email``,
  ``is_valid_password``, ``is_valid_phone_number``, ``is_valid_url``,
  ``is_valid_credit_card_number`` and ``is_valid_iso_date``
- **Registry**: immutable name-to-predicate mapping (``VALIDATORS``) and a
  mutable ``ValidatorRegistry`` for custom checks
- **Forms**: ``FormSchema`` combining field verdicts into one result
- **Settings**: ``ValidatorSettings`` loaded from dicts, files or environment

Example:
    ```python
    from formknobs import VALIDATORS, is_valid_email

    is_valid_email("user@example.com")
    # True
    VALIDATORS["is_valid_iso_date"]("2024-02-29")
    # True
    ```
"""

from formknobs.exceptions import (
    ConfigurationError,
    FormknobsError,
    NotFoundError,
    OperationError,
    ValidationError,
)
from formknobs.forms import FIELD_TYPES, FieldSpec, FormSchema
from formknobs.predicates import (
    PasswordOptions,
    is_non_empty_string,
    is_valid_credit_card_number,
    is_valid_email,
    is_valid_iso_date,
    is_valid_password,
    is_valid_phone_number,
    is_valid_url,
    luhn_checksum,
)
from formknobs.registry import (
    VALIDATORS,
    Registry,
    ValidatorRegistry,
    build_validators,
    get_validator,
)
from formknobs.result import ValidationResult
from formknobs.settings import ValidatorSettings, VariableSubstitution

__version__ = "1.0.0"

__all__ = [
    # Version
    "__version__",
    # Predicates
    "PasswordOptions",
    "is_non_empty_string",
    "is_valid_email",
    "is_valid_password",
    "is_valid_phone_number",
    "is_valid_url",
    "is_valid_credit_card_number",
    "is_valid_iso_date",
    "luhn_checksum",
    # Registry
    "VALIDATORS",
    "Registry",
    "ValidatorRegistry",
    "build_validators",
    "get_validator",
    # Forms
    "FIELD_TYPES",
    "FieldSpec",
    "FormSchema",
    "ValidationResult",
    # Settings
    "ValidatorSettings",
    "VariableSubstitution",
    # Exceptions
    "FormknobsError",
    "ValidationError",
    "ConfigurationError",
    "NotFoundError",
    "OperationError",
]
