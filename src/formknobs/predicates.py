"""Field predicates: pure, stateless checks of raw form input.

Every predicate accepts a value of any type and returns a ``bool``. Values
that are not text are a ``False`` verdict rather than a type error, and no
predicate raises for any input. Each predicate does its own text check so it
can be used (and tested) on its own.
"""

from __future__ import annotations

import calendar
import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)

DEFAULT_PASSWORD_MIN_LENGTH = 8

EMAIL_PATTERN = re.compile(
    r"[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~ -]+@([a-zA-Z0-9-]+\.)+[a-zA-Z]{2,}"
)

UPPERCASE_PATTERN = re.compile(r"[A-Z]")
LOWERCASE_PATTERN = re.compile(r"[a-z]")
DIGIT_PATTERN = re.compile(r"[0-9]")
SPECIAL_CHAR_PATTERN = re.compile(r'[!@#$%^&*(),.?":{}|<>]')

PHONE_SEPARATORS = re.compile(r"[ \-()]")
PHONE_PATTERN = re.compile(r"\+?[0-9]{7,15}")

WHITESPACE = re.compile(r"\s+")
DIGITS_PATTERN = re.compile(r"[0-9]+")

ISO_DATE_PATTERN = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})")
DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)

# Schemes whose URLs are meaningless without a host
HOST_REQUIRED_SCHEMES = frozenset({"http", "https", "ftp", "ws", "wss"})


@dataclass(frozen=True)
class PasswordOptions:
    """Options for the password policy.

    Attributes:
        min_length: Minimum number of characters (default 8). Anything that
            isn't a positive integer is replaced by the default.
    """

    min_length: int = DEFAULT_PASSWORD_MIN_LENGTH

    def __post_init__(self) -> None:
        if not _is_positive_int(self.min_length):
            logger.warning(
                f"Invalid password min_length {self.min_length!r}, "
                f"using default {DEFAULT_PASSWORD_MIN_LENGTH}"
            )
            object.__setattr__(self, "min_length", DEFAULT_PASSWORD_MIN_LENGTH)

    @classmethod
    def from_value(cls, options: PasswordOptions | Mapping[str, Any] | None) -> PasswordOptions:
        """Normalize the accepted option forms into a PasswordOptions.

        Args:
            options: None, a PasswordOptions, or a mapping with ``min_length``
                (or ``minLength``)

        Returns:
            PasswordOptions instance
        """
        if isinstance(options, PasswordOptions):
            return options
        if isinstance(options, Mapping):
            min_length = options.get("min_length", options.get("minLength"))
            if min_length is None:
                return cls()
            return cls(min_length=min_length)
        if options is not None:
            logger.warning(
                f"Ignoring password options of type {type(options).__name__}"
            )
        return cls()


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def is_non_empty_string(value: Any) -> bool:
    """Check that a value is text with something other than whitespace in it."""
    return isinstance(value, str) and len(value.strip()) > 0


def is_valid_email(email: Any) -> bool:
    """Check the syntax of an email address.

    The address is trimmed first. The local part accepts the RFC 5322 atom
    characters plus dots and spaces; the domain needs at least one label
    followed by an alphabetic top-level label of two or more characters.
    No DNS or mailbox verification is done.

    Args:
        email: Value to check

    Returns:
        True if the value is a syntactically valid email address
    """
    if not isinstance(email, str):
        return False
    return EMAIL_PATTERN.fullmatch(email.strip()) is not None


def is_valid_password(
    password: Any,
    options: PasswordOptions | Mapping[str, Any] | None = None,
) -> bool:
    """Check a password against the strength policy.

    A valid password is at least ``min_length`` characters long and contains
    an uppercase letter, a lowercase letter, a digit and one of
    ``!@#$%^&*(),.?":{}|<>``. Characters outside those classes are allowed.

    Args:
        password: Value to check
        options: Optional PasswordOptions or ``{"min_length": n}`` mapping

    Returns:
        True if the password satisfies every rule
    """
    if not isinstance(password, str):
        return False
    policy = PasswordOptions.from_value(options)
    if len(password) < policy.min_length:
        return False

    return (
        UPPERCASE_PATTERN.search(password) is not None
        and LOWERCASE_PATTERN.search(password) is not None
        and DIGIT_PATTERN.search(password) is not None
        and SPECIAL_CHAR_PATTERN.search(password) is not None
    )


def is_valid_phone_number(phone: Any) -> bool:
    """Check a phone number: optional leading '+' then 7 to 15 digits.

    Spaces, hyphens and parentheses are ignored wherever they appear.
    """
    if not isinstance(phone, str):
        return False
    cleaned = PHONE_SEPARATORS.sub("", phone)
    return PHONE_PATTERN.fullmatch(cleaned) is not None


def is_valid_url(url: Any, require_scheme: bool = True) -> bool:
    """Check that a value parses as a URL.

    Without a scheme the text is read as a network-path reference
    (``example.com/path``), so it still needs a host and may not contain
    whitespace anywhere.

    Args:
        url: Value to check
        require_scheme: If True (the default), URLs without a scheme are invalid

    Returns:
        True if the value parses as a URL
    """
    if not isinstance(url, str) or not url.strip():
        return False
    text = url.strip()
    try:
        parsed = urlsplit(text)
        # Port and bracketed-host errors only surface when accessed
        parsed.port
    except ValueError:
        return False

    if not parsed.scheme:
        if require_scheme or WHITESPACE.search(text):
            return False
        return _has_network_host(text if text.startswith("//") else "//" + text)
    if parsed.scheme.lower() in HOST_REQUIRED_SCHEMES and not parsed.hostname:
        return False
    if WHITESPACE.search(parsed.netloc):
        return False
    return True


def _has_network_host(reference: str) -> bool:
    try:
        parsed = urlsplit(reference)
        parsed.port
    except ValueError:
        return False
    return bool(parsed.hostname)


def luhn_checksum(digits: str) -> int:
    """Compute the Luhn sum of a string of ASCII digits.

    Digits are processed right to left; every second one (starting with the
    second from the right) is doubled, and 9 is subtracted from doubled
    values above 9.

    Args:
        digits: String made only of the characters 0-9

    Returns:
        The Luhn sum; the number is valid when it is divisible by 10
    """
    total = 0
    should_double = False
    for char in reversed(digits):
        digit = int(char)
        if should_double:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
        should_double = not should_double
    return total


def is_valid_credit_card_number(card_number: Any) -> bool:
    """Check a payment card number with the Luhn algorithm.

    Whitespace anywhere in the number is ignored; any other non-digit
    character makes it invalid.
    """
    if not isinstance(card_number, str):
        return False
    sanitized = WHITESPACE.sub("", card_number)
    if DIGITS_PATTERN.fullmatch(sanitized) is None:
        return False
    return luhn_checksum(sanitized) % 10 == 0


def is_valid_iso_date(date_str: Any) -> bool:
    """Check for an ISO 8601 calendar date written exactly as YYYY-MM-DD.

    The text must have that shape and name a real day of the proleptic
    Gregorian calendar, so ``2023-02-29`` and ``2024-04-31`` are rejected.
    Year ``0000`` is allowed and is a leap year.
    """
    if not isinstance(date_str, str):
        return False
    match = ISO_DATE_PATTERN.fullmatch(date_str)
    if match is None:
        return False
    year, month, day = (int(part) for part in match.groups())
    if not 1 <= month <= 12:
        return False
    if month == 2 and calendar.isleap(year):
        days_in_month = 29
    else:
        days_in_month = DAYS_IN_MONTH[month - 1]
    return 1 <= day <= days_in_month
