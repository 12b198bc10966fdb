"""
Password strength policy.

Every rule is checked against the whole password; the message on failure lists all
missing requirements in rule order, not just the first.
"""

PASSWORD_MIN_LEN = 8

STRONG_PASSWORD_MESSAGE = "Your password is strong"
MISSING_PREFIX = "Your password also need to contain"


def _is_special(ch: str) -> bool:
    return not (ch.isalpha() or ch.isdecimal())


def evaluate_password(password: str) -> tuple[bool, str]:
    """Return (is_strong, message) for password."""
    requirements = [
        (f"at least {PASSWORD_MIN_LEN} characters", len(password) >= PASSWORD_MIN_LEN),
        ("an uppercase letter", any(ch.isupper() for ch in password)),
        ("a lowercase letter", any(ch.islower() for ch in password)),
        ("a digit", any(ch.isdecimal() for ch in password)),
        ("a special character", any(_is_special(ch) for ch in password)),
    ]
    missing = [label for label, ok in requirements if not ok]

    if not missing:
        return True, STRONG_PASSWORD_MESSAGE
    if len(missing) == 1:
        return False, f"{MISSING_PREFIX} {missing[0]}"
    return False, f"{MISSING_PREFIX} {', '.join(missing[:-1])}, and {missing[-1]}."
