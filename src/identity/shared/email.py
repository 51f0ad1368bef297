"""Email address normalization and validation."""

from shared.exceptions import ValidationError

_FORBIDDEN = (";", ",", "(", ")", '"', ":", "<", ">", "[", "]", "\\")


def is_valid_email(email: str) -> bool:
    """Structural check: exactly one @, sane local and domain parts, no forbidden characters."""
    if not email or any(whitespace in email for whitespace in (" ", "\t", "\n")):
        return False
    if email.count("@") != 1:
        return False

    local_part, domain_part = email.split("@", 1)
    if not local_part or local_part.startswith(".") or local_part.endswith("."):
        return False
    if not domain_part or domain_part.startswith(".") or domain_part.endswith("."):
        return False
    if "." not in domain_part:
        return False
    # Each domain label must not start or end with a hyphen
    if any(label.startswith("-") or label.endswith("-") for label in domain_part.split(".")):
        return False
    if ".." in local_part or ".." in domain_part:
        return False
    return not any(forbidden in email for forbidden in _FORBIDDEN)


def normalize_email(value: str | None, field: str = "email") -> str:
    email = (value or "").strip().lower()
    if not is_valid_email(email):
        raise ValidationError({field: ["Invalid email address"]})
    return email
