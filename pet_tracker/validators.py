"""
Credential validation — password strength and email shape.

Pure predicates with no side effects: they never raise, they only answer
True or False. The service layer decides which error to raise when a
check fails.

Password policy (see PASSWORD_* constants in pet_tracker.config):
  - at least PASSWORD_MIN_LENGTH characters
  - at least one uppercase letter
  - at least one lowercase letter
  - at least one digit
  - at least one character from PASSWORD_SPECIAL_CHARACTERS
"""

import re

from pet_tracker.config import PASSWORD_MIN_LENGTH, PASSWORD_SPECIAL_CHARACTERS


_PASSWORD_CLASSES: tuple[re.Pattern[str], ...] = (
    re.compile(r"[A-Z]"),
    re.compile(r"[a-z]"),
    re.compile(r"\d"),
    re.compile(f"[{re.escape(PASSWORD_SPECIAL_CHARACTERS)}]"),
)

# local-part "@" domain, domain contains at least one dot, no whitespace anywhere
_EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@.]+(\.[^\s@.]+)+")


def is_valid_password_pattern(password: str | None) -> bool:
    """
    Check a password against the composition policy.

    Args:
        password: The raw password, possibly None.

    Returns:
        True only if every rule of the policy is satisfied.
    """
    if not password or len(password) < PASSWORD_MIN_LENGTH:
        return False
    return all(pattern.search(password) for pattern in _PASSWORD_CLASSES)


def get_password_requirements() -> str:
    """Human-readable description of the password policy, used as an error message."""
    return (
        f"Password must be at least {PASSWORD_MIN_LENGTH} characters long and contain "
        f"at least one uppercase letter, one lowercase letter, one digit and one "
        f"special character ({PASSWORD_SPECIAL_CHARACTERS})"
    )


def is_valid_email_pattern(email: str | None) -> bool:
    """Return True if the string has the shape of an email address."""
    if not email:
        return False
    return _EMAIL_PATTERN.fullmatch(email) is not None
