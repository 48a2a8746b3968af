import re
from typing import Dict

from portfolio_api.core.errors import ValidationError
from portfolio_api.models.contact import ContactRequest

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
REQUIRED_FIELDS = ("name", "email", "subject", "message")


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.match(email))


def validate_contact(payload: ContactRequest) -> Dict[str, str]:
    """
    Check and normalize a contact form payload.

    Returns the four required fields trimmed, with the email lower-cased.
    Raises ValidationError("missing field") for absent, non-text or blank
    fields and ValidationError("invalid email") for a malformed address.
    """
    cleaned = {}
    for field in REQUIRED_FIELDS:
        value = getattr(payload, field)
        if not isinstance(value, str) or not value.strip():
            raise ValidationError("All fields are required", reason="missing field")
        cleaned[field] = value.strip()

    cleaned["email"] = cleaned["email"].lower()
    if not is_valid_email(cleaned["email"]):
        raise ValidationError("Please provide a valid email address", reason="invalid email")

    return cleaned
