"""Form-level validation built on the field predicates.

A ``FormSchema`` maps each form field to a field type, looks the matching
predicate up in a ``ValidatorRegistry`` and turns ``False`` verdicts into
messages. The predicates stay boolean; this layer is where verdicts get
combined into a form-level result.

Example:
    ```python
    schema = (
        FormSchema("signup")
        .field("email", "email")
        .field("password", "password")
        .field("website", "url", required=False)
    )
    result = schema.validate({"email": "user@example.com", "password": "Abcdef1!"})
    if not result:
        print(result.errors)
    ```

Example configuration (see ``FormSchema.from_dict``):
    ```yaml
    name: signup
    strict: true
    fields:
      - name: email
        type: email
      - name: password
        type: password
        message: Password is too weak
        options:
          min_length: 12
    ```
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from dataclasses import field as dataclass_field
from types import MappingProxyType
from typing import Any

from .exceptions import ConfigurationError, NotFoundError, ValidationError
from .predicates import PasswordOptions
from .registry import ValidatorRegistry
from .result import ValidationResult
from .settings import ValidatorSettings

logger = logging.getLogger(__name__)

FIELD_TYPES: Mapping[str, str] = MappingProxyType({
    "text": "is_non_empty_string",
    "email": "is_valid_email",
    "password": "is_valid_password",
    "phone": "is_valid_phone_number",
    "url": "is_valid_url",
    "credit_card": "is_valid_credit_card_number",
    "date": "is_valid_iso_date",
})


def is_missing(value: Any) -> bool:
    """A form value is missing when it is None or blank text."""
    return value is None or (isinstance(value, str) and not value.strip())


@dataclass
class FieldSpec:
    """Definition of one form field.

    Attributes:
        name: Field name (key in the submitted data)
        field_type: A key of ``FIELD_TYPES`` or a validator name in the registry
        required: Whether a missing value is an error
        message: Error message used when the predicate rejects the value
        options: Keyword arguments passed to the predicate
    """

    name: str
    field_type: str
    required: bool = True
    message: str | None = None
    options: dict[str, Any] = dataclass_field(default_factory=dict)

    def validate(self, value: Any, registry: ValidatorRegistry) -> ValidationResult:
        """Validate a value for this field.

        Args:
            value: Submitted value
            registry: Registry to resolve the field's predicate from

        Returns:
            ValidationResult with outcome
        """
        if is_missing(value):
            if self.required:
                return ValidationResult.failure(value, [f"Field '{self.name}' is required"])
            return ValidationResult.success(value)

        predicate = registry.get(FIELD_TYPES.get(self.field_type, self.field_type))
        if predicate(value, **self.options):
            return ValidationResult.success(value)

        message = self.message or f"Field '{self.name}' is not a valid {self.field_type}"
        return ValidationResult.failure(value, [message])


class FormSchema:
    """A named set of field definitions with a fluent API."""

    def __init__(
        self,
        name: str,
        strict: bool = False,
        settings: ValidatorSettings | None = None,
        registry: ValidatorRegistry | None = None,
    ):
        """Initialize form schema.

        Args:
            name: Schema name for identification
            strict: If True, reject submissions with unknown fields
            settings: Defaults for the password and url predicates
            registry: Registry of predicates (the built-ins by default)
        """
        self.name = name
        self.strict = strict
        self.settings = settings or ValidatorSettings()
        self.registry = registry or ValidatorRegistry()
        self.fields: dict[str, FieldSpec] = {}

    def field(
        self,
        name: str,
        field_type: str,
        required: bool = True,
        message: str | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> FormSchema:
        """Add a field definition (fluent API).

        Args:
            name: Field name
            field_type: Field type or validator name
            required: Whether field is required
            message: Custom error message for rejected values
            options: Predicate keyword arguments, overriding the settings

        Returns:
            Self for chaining

        Raises:
            ConfigurationError: If the field type resolves to no predicate, or
                the options do not fit the predicate's signature
        """
        validator_name = FIELD_TYPES.get(field_type, field_type)
        if not self.registry.has(validator_name):
            raise ConfigurationError(
                f"Unknown field type: {field_type}",
                context={
                    "field": name,
                    "field_type": field_type,
                    "available_types": list(FIELD_TYPES.keys()),
                    "available_validators": self.registry.list_keys(),
                },
            )

        field_options = self.settings.options_for(validator_name)
        field_options.update(self._normalize_options(validator_name, options or {}))
        self._check_options(name, field_type, validator_name, field_options)

        self.fields[name] = FieldSpec(
            name=name,
            field_type=field_type,
            required=required,
            message=message,
            options=field_options,
        )
        return self

    def _normalize_options(self, validator_name: str, options: Mapping[str, Any]) -> dict[str, Any]:
        # Password options may be given flat, as in configuration files
        if validator_name == "is_valid_password" and "options" not in options and options:
            return {"options": PasswordOptions.from_value(options)}
        return dict(options)

    def _check_options(
        self, name: str, field_type: str, validator_name: str, options: Mapping[str, Any]
    ) -> None:
        predicate = self.registry.get(validator_name)
        try:
            signature = inspect.signature(predicate)
        except ValueError:
            # Some builtins expose no signature
            return
        try:
            signature.bind(None, **options)
        except TypeError as e:
            raise ConfigurationError(
                f"Invalid options for field '{name}': {e}",
                context={
                    "field": name,
                    "field_type": field_type,
                    "options": list(options),
                },
            ) from e

    def validate_field(self, name: str, value: Any) -> ValidationResult:
        """Validate a single field value.

        Raises:
            NotFoundError: If the schema has no field with that name
        """
        if name not in self.fields:
            raise NotFoundError(
                f"Field not found: {name}",
                context={"field": name, "schema": self.name, "available_fields": list(self.fields)},
            )
        return self.fields[name].validate(value, self.registry)

    def validate(self, data: Mapping[str, Any]) -> ValidationResult:
        """Validate submitted form data.

        Args:
            data: Mapping of field name to submitted value

        Returns:
            ValidationResult whose value is the submitted data and whose errors
            list every rejected field
        """
        result = ValidationResult.success(data)
        for field_name, field_spec in self.fields.items():
            field_result = field_spec.validate(data.get(field_name), self.registry)
            if not field_result.valid:
                result = result.merge(field_result)

        if self.strict:
            unknown_fields = [key for key in data if key not in self.fields]
            if unknown_fields:
                result.add_error(f"Unknown fields in strict mode: {', '.join(unknown_fields)}")

        if not result.valid:
            logger.debug(f"Form '{self.name}' failed validation: {result.errors}")
        return result

    def ensure_valid(self, data: Mapping[str, Any]) -> Mapping[str, Any]:
        """Validate submitted data and raise if it is invalid.

        Returns:
            The data, unchanged

        Raises:
            ValidationError: If any field is rejected
        """
        result = self.validate(data)
        if not result.valid:
            raise ValidationError(
                f"Form '{self.name}' is invalid",
                context={"schema": self.name, "errors": result.errors},
            )
        return data

    @classmethod
    def from_dict(
        cls,
        config: Mapping[str, Any],
        settings: ValidatorSettings | None = None,
        registry: ValidatorRegistry | None = None,
    ) -> FormSchema:
        """Create a form schema from configuration.

        Configuration Options:
            name (str): Schema name
            strict (bool): Whether to reject unknown fields (default: False)
            fields (list): Field definitions with ``name``, ``type``,
                ``required``, ``message`` and ``options``

        Raises:
            ConfigurationError: If a field has an unknown type
        """
        name = config.get("name", "unnamed_form")
        logger.info(f"Creating form schema: {name}")

        schema = cls(name, strict=config.get("strict", False), settings=settings, registry=registry)
        for field_config in config.get("fields", []):
            field_name = field_config.get("name")
            if not field_name:
                logger.warning("Field configuration missing 'name', skipping")
                continue
            schema.field(
                name=field_name,
                field_type=field_config.get("type", "text"),
                required=field_config.get("required", True),
                message=field_config.get("message"),
                options=field_config.get("options"),
            )
        return schema
