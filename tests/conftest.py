"""Pytest configuration and fixtures for formknobs tests."""

import pytest

from formknobs.registry import ValidatorRegistry


NON_TEXT_VALUES = [
    None,
    0,
    42,
    3.14,
    True,
    b"user@example.com",
    ["user@example.com"],
    {"value": "user@example.com"},
    ("2024-02-29",),
    object(),
]


@pytest.fixture(params=NON_TEXT_VALUES, ids=lambda v: type(v).__name__)
def non_text_value(request):
    """Values that are not text and must be rejected by every predicate."""
    return request.param


@pytest.fixture
def registry():
    """A fresh registry of the built-in predicates."""
    return ValidatorRegistry()


@pytest.fixture
def signup_config():
    """Form configuration for a typical signup form."""
    return {
        "name": "signup",
        "strict": True,
        "fields": [
            {"name": "name", "type": "text"},
            {"name": "email", "type": "email"},
            {
                "name": "password",
                "type": "password",
                "message": "Password is too weak",
            },
            {"name": "phone", "type": "phone", "required": False},
            {"name": "website", "type": "url", "required": False},
        ],
    }
