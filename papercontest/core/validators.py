"""Reusable field rules shared by request schemas."""

import re
from typing import Annotated, Final

from pydantic import AfterValidator

from papercontest.core.constants import (
    MIN_PASSWORD_CHARACTER_CLASSES,
    MIN_PASSWORD_LENGTH,
)

PASSWORD_RULE_MESSAGE: Final[str] = (
    f"Password must be at least {MIN_PASSWORD_LENGTH} characters and contain at "
    f"least {MIN_PASSWORD_CHARACTER_CLASSES} of: uppercase letters, lowercase "
    "letters, special characters"
)

_CHARACTER_CLASSES: Final[tuple[re.Pattern[str], ...]] = (
    re.compile(r"[A-Z]"),
    re.compile(r"[a-z]"),
    re.compile(r"[^a-zA-Z0-9]"),
)


def is_strong_password(password: str) -> bool:
    """Check a candidate password against the platform password policy.

    Digits count towards the length but not towards the character classes.

    Args:
        password: Candidate password.

    Returns:
        bool: True if the password satisfies the policy.

    Examples:
        >>> is_strong_password("abc!ef")
        True
        >>> is_strong_password("abcdef")
        False
    """
    if len(password) < MIN_PASSWORD_LENGTH:
        return False
    matched = sum(1 for pattern in _CHARACTER_CLASSES if pattern.search(password))
    return matched >= MIN_PASSWORD_CHARACTER_CLASSES


def _check_strong_password(password: str) -> str:
    if not is_strong_password(password):
        raise ValueError(PASSWORD_RULE_MESSAGE)
    return password


StrongPassword = Annotated[str, AfterValidator(_check_strong_password)]
