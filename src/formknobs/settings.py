"""Settings for the configurable field checks.

Two predicates take configuration: the password policy (minimum length) and
the URL check (whether a scheme is required). ``ValidatorSettings`` holds the
application-wide values and can be loaded from a dict, a YAML/JSON file or
environment variables. String values may contain ``${VAR}``,
``${VAR:default}`` or ``${VAR:-default}`` placeholders.

Example settings file:
    ```yaml
    password_min_length: ${PASSWORD_MIN_LENGTH:12}
    url_require_scheme: true
    ```
"""

from __future__ import annotations

import json
import logging
import os
import re
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml  # type: ignore[import-untyped]

from .exceptions import ConfigurationError
from .predicates import DEFAULT_PASSWORD_MIN_LENGTH, PasswordOptions

logger = logging.getLogger(__name__)


class VariableSubstitution:
    """Handles environment variable substitution in configuration values.

    Supports patterns:
    - ${VAR} - Replace with environment variable VAR, error if not found
    - ${VAR:default} - Replace with VAR or use default if not found
    - ${VAR:-default} - Same as above (bash-style)
    """

    VAR_PATTERN = re.compile(r'\$\{([^}:]+)(?::(-)?([^}]*))?\}')

    def substitute(self, value: Any) -> Any:
        """Recursively substitute environment variables in a value.

        Args:
            value: Value to process (can be string, dict, list, or other)

        Returns:
            Value with environment variables substituted

        Raises:
            ConfigurationError: If a required environment variable is not found
        """
        if isinstance(value, str):
            return self._substitute_string(value)
        elif isinstance(value, dict):
            return {key: self.substitute(item) for key, item in value.items()}
        elif isinstance(value, list):
            return [self.substitute(item) for item in value]
        return value

    def _lookup(self, match: re.Match) -> str:
        var_name = match.group(1)
        has_default = match.group(2) is not None or match.group(3) is not None
        if var_name in os.environ:
            return os.environ[var_name]
        if has_default:
            return match.group(3) or ""
        raise ConfigurationError(
            f"Environment variable '{var_name}' not found",
            context={"variable": var_name},
        )

    def _substitute_string(self, text: str) -> Union[str, int, float, bool]:
        """Substitute environment variables in a string.

        A string that is exactly one placeholder is converted to int, float
        or bool when the substituted text looks like one.
        """
        match = self.VAR_PATTERN.fullmatch(text)
        if match:
            return self.convert_type(self._lookup(match))
        return self.VAR_PATTERN.sub(self._lookup, text)

    def convert_type(self, value: str) -> Union[str, int, float, bool]:
        """Convert a string value to bool, int or float when it looks like one."""
        if value.lower() in ("true", "yes", "on"):
            return True
        elif value.lower() in ("false", "no", "off"):
            return False

        try:
            return int(value)
        except ValueError:
            pass

        try:
            return float(value)
        except ValueError:
            return value


@dataclass(frozen=True)
class ValidatorSettings:
    """Application-wide options for the configurable predicates.

    Attributes:
        password_min_length: Minimum password length (positive integer)
        url_require_scheme: Whether URLs without a scheme are rejected
    """

    password_min_length: int = DEFAULT_PASSWORD_MIN_LENGTH
    url_require_scheme: bool = True

    def __post_init__(self) -> None:
        min_length = self.password_min_length
        if isinstance(min_length, bool) or not isinstance(min_length, int) or min_length <= 0:
            raise ConfigurationError(
                f"password_min_length must be a positive integer, got {min_length!r}",
                context={"setting": "password_min_length", "value": min_length},
            )
        if not isinstance(self.url_require_scheme, bool):
            raise ConfigurationError(
                f"url_require_scheme must be a boolean, got {self.url_require_scheme!r}",
                context={"setting": "url_require_scheme", "value": self.url_require_scheme},
            )

    @classmethod
    def setting_names(cls) -> List[str]:
        return [f.name for f in fields(cls)]

    @classmethod
    def from_dict(cls, data: Dict[str, Any] | None) -> ValidatorSettings:
        """Create settings from a dictionary.

        Unknown keys are logged and ignored; placeholders are substituted.

        Args:
            data: Settings dictionary (may be None or empty)

        Returns:
            ValidatorSettings instance

        Raises:
            ConfigurationError: If the data or any value is invalid
        """
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Settings must be a mapping, got {type(data).__name__}",
            )

        data = VariableSubstitution().substitute(data)
        known = cls.setting_names()
        values = {}
        for key, value in data.items():
            if key in known:
                values[key] = value
            else:
                logger.warning(f"Ignoring unknown setting: {key}")
        return cls(**values)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> ValidatorSettings:
        """Load settings from a YAML or JSON file.

        Args:
            path: Path to a ``.yaml``, ``.yml`` or ``.json`` file

        Returns:
            ValidatorSettings instance

        Raises:
            ConfigurationError: If the file is missing, unreadable or invalid
        """
        path = Path(path).resolve()
        if not path.exists():
            raise ConfigurationError(
                f"Settings file not found: {path}", context={"path": str(path)}
            )

        suffix = path.suffix.lower()
        try:
            with open(path) as f:
                if suffix in [".yaml", ".yml"]:
                    data = yaml.safe_load(f)
                elif suffix == ".json":
                    data = json.load(f)
                else:
                    raise ConfigurationError(
                        f"Unsupported settings file format: {suffix}",
                        context={"path": str(path)},
                    )
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigurationError(
                f"Failed to parse settings file {path}: {e}",
                context={"path": str(path)},
            ) from e

        logger.info(f"Loaded validator settings from {path}")
        return cls.from_dict(data)

    @classmethod
    def from_env(cls, prefix: str = "FORMKNOBS_") -> ValidatorSettings:
        """Load settings from environment variables.

        ``FORMKNOBS_PASSWORD_MIN_LENGTH`` and ``FORMKNOBS_URL_REQUIRE_SCHEME``
        are read with the default prefix; unset variables keep the defaults.
        """
        substitution = VariableSubstitution()
        values: Dict[str, Any] = {}
        for name in cls.setting_names():
            env_var = f"{prefix}{name.upper()}"
            if env_var in os.environ:
                values[name] = substitution.convert_type(os.environ[env_var])
        return cls.from_dict(values)

    def password_options(self) -> PasswordOptions:
        return PasswordOptions(min_length=self.password_min_length)

    def options_for(self, validator_name: str) -> Dict[str, Any]:
        """Get the default predicate keyword arguments for a validator.

        Args:
            validator_name: Registry key of the predicate (e.g. "is_valid_password")

        Returns:
            Keyword arguments to pass to the predicate
        """
        if validator_name == "is_valid_password":
            return {"options": self.password_options()}
        if validator_name == "is_valid_url":
            return {"require_scheme": self.url_require_scheme}
        return {}
