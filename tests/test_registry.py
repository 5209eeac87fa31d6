"""Tests for the predicate registry."""

from threading import Thread

import pytest

from formknobs import predicates
from formknobs.exceptions import NotFoundError, OperationError
from formknobs.registry import (
    BUILTIN_PREDICATES,
    VALIDATORS,
    Registry,
    ValidatorRegistry,
    build_validators,
    get_validator,
)

EXPECTED_NAMES = [
    "is_non_empty_string",
    "is_valid_email",
    "is_valid_password",
    "is_valid_phone_number",
    "is_valid_url",
    "is_valid_credit_card_number",
    "is_valid_iso_date",
]

SAMPLE_INPUTS = [
    None,
    "",
    "  a  ",
    "user@example.com",
    "Abcdef1!",
    "+1 (555) 123-4567",
    "https://example.com",
    "4532015112830366",
    "2024-02-29",
    "2023-02-29",
]


class TestValidators:
    """Test the immutable VALIDATORS mapping."""

    def test_names_in_order(self):
        assert list(VALIDATORS.keys()) == EXPECTED_NAMES

    def test_entries_are_the_module_functions(self):
        for name, predicate in VALIDATORS.items():
            assert predicate is getattr(predicates, name)

    @pytest.mark.parametrize("name", EXPECTED_NAMES)
    def test_lookup_matches_direct_call(self, name):
        """Test that registry entries give the same verdicts as direct calls."""
        direct = getattr(predicates, name)
        for value in SAMPLE_INPUTS:
            assert VALIDATORS[name](value) == direct(value)

    def test_mapping_is_read_only(self):
        with pytest.raises(TypeError):
            VALIDATORS["is_valid_zip"] = lambda value: True  # type: ignore[index]
        with pytest.raises(TypeError):
            del VALIDATORS["is_valid_email"]  # type: ignore[attr-defined]

    def test_build_is_idempotent(self):
        first = build_validators()
        second = build_validators()
        assert first is not second
        assert dict(first) == dict(second) == dict(VALIDATORS)
        assert list(first) == list(second)

    def test_get_validator(self):
        assert get_validator("is_valid_iso_date")("2024-02-29") is True

    def test_get_unknown_validator(self):
        with pytest.raises(NotFoundError) as exc_info:
            get_validator("is_valid_zip")

        error = exc_info.value
        assert "is_valid_zip" in str(error)
        assert error.context["available_keys"] == EXPECTED_NAMES


class TestRegistry:
    """Test the generic Registry."""

    def test_create_registry(self):
        registry = Registry[str]("test_registry")
        assert registry.name == "test_registry"
        assert len(registry) == 0

    def test_register_and_get(self):
        registry = Registry[str]("test")
        registry.register("key1", "value1")

        assert len(registry) == 1
        assert registry.has("key1")
        assert "key1" in registry
        assert registry.get("key1") == "value1"

    def test_register_duplicate_raises_error(self):
        registry = Registry[str]("test")
        registry.register("key1", "value1")

        with pytest.raises(OperationError) as exc_info:
            registry.register("key1", "value2")

        assert "already registered" in str(exc_info.value)
        assert exc_info.value.context == {"key": "key1", "registry": "test"}

    def test_register_duplicate_with_overwrite(self):
        registry = Registry[str]("test")
        registry.register("key1", "value1")
        registry.register("key1", "value2", allow_overwrite=True)

        assert registry.get("key1") == "value2"

    def test_get_missing(self):
        registry = Registry[str]("test")
        registry.register("key1", "value1")

        with pytest.raises(NotFoundError) as exc_info:
            registry.get("nonexistent")

        assert "not found" in str(exc_info.value).lower()
        assert exc_info.value.context["available_keys"] == ["key1"]

    def test_listing_keeps_registration_order(self):
        registry = Registry[int]("test")
        for key, value in [("b", 2), ("a", 1), ("c", 3)]:
            registry.register(key, value)

        assert registry.list_keys() == ["b", "a", "c"]
        assert len(registry) == 3

    def test_freeze_is_a_snapshot(self):
        registry = Registry[str]("test")
        registry.register("key1", "value1")

        frozen = registry.freeze()
        registry.register("key2", "value2")

        assert dict(frozen) == {"key1": "value1"}
        with pytest.raises(TypeError):
            frozen["key3"] = "value3"  # type: ignore[index]

    def test_thread_safety(self):
        registry = Registry[int]("test")

        def register_items(start, end):
            for i in range(start, end):
                registry.register(f"key{i}", i)

        threads = [Thread(target=register_items, args=(i * 100, (i + 1) * 100)) for i in range(5)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(registry) == 500


class TestValidatorRegistry:
    """Test the predicate registry."""

    def test_builtins_registered(self, registry):
        assert registry.name == "validators"
        assert registry.list_keys() == EXPECTED_NAMES

    def test_without_builtins(self):
        registry = ValidatorRegistry("custom", include_builtins=False)
        assert len(registry) == 0

    def test_freeze_matches_validators(self, registry):
        assert dict(registry.freeze()) == dict(VALIDATORS)

    def test_register_custom_predicate(self, registry):
        def is_valid_zip(value):
            return isinstance(value, str) and len(value) == 5 and value.isdigit()

        registry.register_predicate(is_valid_zip)

        assert registry.get("is_valid_zip")("12345") is True
        assert registry.list_keys()[-1] == "is_valid_zip"
        assert "is_valid_zip" not in VALIDATORS

    def test_builtin_cannot_be_replaced_silently(self, registry):
        def is_valid_email(value):
            return True

        with pytest.raises(OperationError):
            registry.register_predicate(is_valid_email)

        registry.register_predicate(is_valid_email, allow_overwrite=True)
        assert registry.get("is_valid_email")("not an email") is True

    def test_builtin_tuple_matches_names(self):
        assert [p.__name__ for p in BUILTIN_PREDICATES] == EXPECTED_NAMES
