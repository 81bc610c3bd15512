"""Password Rules — strength policy shared by create and update schemas.

Invariants:
    - A password is strong iff check_password_strength() returns an empty list
    - All failing rules are reported, in a stable order (length first)
    - Pure functions: no IO, no hashing
"""

import re

MIN_PASSWORD_LENGTH = 8

_PATTERN_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"[A-Z]"), "Password must contain at least one uppercase letter."),
    (re.compile(r"[a-z]"), "Password must contain at least one lowercase letter."),
    (re.compile(r"\d"), "Password must contain at least one digit."),
    (re.compile(r"[^\w\s]"), "Password must contain at least one special character."),
)


def check_password_strength(password: str) -> list[str]:
    """Return the messages of every strength rule the password violates."""
    failures = []
    if len(password) < MIN_PASSWORD_LENGTH:
        failures.append(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long.",
        )
    for pattern, message in _PATTERN_RULES:
        if not pattern.search(password):
            failures.append(message)
    return failures


def is_strong_password(password: str) -> bool:
    return not check_password_strength(password)
