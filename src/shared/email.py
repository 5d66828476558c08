"""Email address normalization and structural checks."""

import re

_EMAIL_PATTERN = re.compile(r"^[\w.+-]+@[\w-]+(\.[\w-]+)*\.[A-Za-z]{2,}$")


def normalize_email(email: str | None) -> str | None:
    if email is None:
        return None
    return email.strip().lower()


def is_valid_email(email: str | None) -> bool:
    return bool(email) and _EMAIL_PATTERN.match(email) is not None
