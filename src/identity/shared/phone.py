"""Phone number validation."""

import re

from shared.exceptions import ValidationError

_PHONE_PATTERN = re.compile(r"^\+?[\d\s\-()]+$")


def normalize_phone(value: str | None, field: str = "phone") -> str | None:
    """Return the trimmed number, or None when blank.

    Accepts digits, spaces, hyphens, parentheses, and an optional leading +.
    """
    number = (value or "").strip()
    if not number:
        return None
    if not re.search(r"\d", number) or not _PHONE_PATTERN.match(number):
        raise ValidationError({field: ["Invalid phone number"]})
    return number
