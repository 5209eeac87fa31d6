"""Lookup of field predicates by name.

Two surfaces are provided:

- ``VALIDATORS`` / ``build_validators()``: an immutable, ordered mapping from
  validator name to predicate, for callers that pick a check at runtime.
- ``ValidatorRegistry``: a thread-safe, mutable registry pre-populated with
  the same predicates, for applications that add their own field checks.
  ``freeze()`` turns it into the same kind of immutable mapping.

Example:
    ```python
    from formknobs.registry import VALIDATORS, ValidatorRegistry

    VALIDATORS["is_valid_email"]("user@example.com")
    # True

    registry = ValidatorRegistry()
    registry.register("is_valid_zip", lambda v: isinstance(v, str) and v.isdigit())
    checks = registry.freeze()
    ```
"""

import logging
import threading
from types import MappingProxyType
from typing import (
    Callable,
    Dict,
    Generic,
    List,
    Mapping,
    TypeVar,
)

from formknobs.exceptions import NotFoundError, OperationError
from formknobs.predicates import (
    is_non_empty_string,
    is_valid_credit_card_number,
    is_valid_email,
    is_valid_iso_date,
    is_valid_password,
    is_valid_phone_number,
    is_valid_url,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

Predicate = Callable[..., bool]

BUILTIN_PREDICATES: tuple[Predicate, ...] = (
    is_non_empty_string,
    is_valid_email,
    is_valid_password,
    is_valid_phone_number,
    is_valid_url,
    is_valid_credit_card_number,
    is_valid_iso_date,
)


class Registry(Generic[T]):
    """Thread-safe registry of named items.

    Attributes:
        name: Name of the registry (for logging/debugging)

    Example:
        ```python
        registry = Registry[str]("my_registry")
        registry.register("key1", "value1")
        registry.get("key1")
        # 'value1'
        "key1" in registry
        # True
        ```
    """

    def __init__(self, name: str):
        """Initialize the registry.

        Args:
            name: Registry name for identification
        """
        self._name = name
        self._items: Dict[str, T] = {}
        self._lock = threading.RLock()

    @property
    def name(self) -> str:
        """Get registry name."""
        return self._name

    def register(self, key: str, item: T, allow_overwrite: bool = False) -> None:
        """Register an item by key.

        Args:
            key: Unique identifier for the item
            item: Item to register
            allow_overwrite: Whether to allow overwriting existing items

        Raises:
            OperationError: If item already exists and allow_overwrite is False
        """
        with self._lock:
            if not allow_overwrite and key in self._items:
                raise OperationError(
                    f"Item '{key}' already registered in {self._name}",
                    context={"key": key, "registry": self._name},
                )
            self._items[key] = item
        logger.debug(f"Registered '{key}' in {self._name}")

    def get(self, key: str) -> T:
        """Get an item by key.

        Args:
            key: Key of item to retrieve

        Returns:
            The registered item

        Raises:
            NotFoundError: If item not found
        """
        with self._lock:
            if key not in self._items:
                raise NotFoundError(
                    f"Item not found: {key}",
                    context={
                        "key": key,
                        "registry": self._name,
                        "available_keys": list(self._items.keys()),
                    },
                )
            return self._items[key]

    def has(self, key: str) -> bool:
        """Check if item exists."""
        with self._lock:
            return key in self._items

    def list_keys(self) -> List[str]:
        """List all registered keys in registration order."""
        with self._lock:
            return list(self._items.keys())

    def freeze(self) -> Mapping[str, T]:
        """Take an immutable snapshot of the registry.

        Returns:
            Read-only mapping of the current items, in registration order.
            Later changes to the registry do not affect it.
        """
        with self._lock:
            return MappingProxyType(dict(self._items))

    def __len__(self) -> int:
        """Get number of registered items using len()."""
        with self._lock:
            return len(self._items)

    def __contains__(self, key: str) -> bool:
        """Check if item exists using 'in' operator."""
        return self.has(key)


class ValidatorRegistry(Registry[Predicate]):
    """Registry of field predicates, keyed by function name.

    Starts with the built-in predicates unless ``include_builtins`` is False.
    """

    def __init__(self, name: str = "validators", include_builtins: bool = True):
        super().__init__(name)
        if include_builtins:
            for predicate in BUILTIN_PREDICATES:
                self.register(predicate.__name__, predicate)

    def register_predicate(self, predicate: Predicate, allow_overwrite: bool = False) -> None:
        """Register a predicate under its own ``__name__``."""
        self.register(predicate.__name__, predicate, allow_overwrite=allow_overwrite)


def build_validators() -> Mapping[str, Predicate]:
    """Build the immutable name-to-predicate mapping of the built-in checks.

    Each call returns a new mapping with the same contents.
    """
    return MappingProxyType({predicate.__name__: predicate for predicate in BUILTIN_PREDICATES})


VALIDATORS: Mapping[str, Predicate] = build_validators()


def get_validator(name: str) -> Predicate:
    """Look up a built-in predicate by name.

    Raises:
        NotFoundError: If no predicate has that name
    """
    try:
        return VALIDATORS[name]
    except KeyError:
        raise NotFoundError(
            f"Unknown validator: {name}",
            context={"name": name, "available_keys": list(VALIDATORS.keys())},
        ) from None


__all__ = [
    "BUILTIN_PREDICATES",
    "Predicate",
    "Registry",
    "ValidatorRegistry",
    "VALIDATORS",
    "build_validators",
    "get_validator",
]
