import pytest

from portfolio_api.core.errors import ValidationError
from portfolio_api.core.validation import is_valid_email, validate_contact
from portfolio_api.models.contact import ContactRequest


def test_fields_are_trimmed():
    cleaned = validate_contact(ContactRequest(
        name="  Grace ", email=" Grace@Navy.MIL ", subject=" Hi ", message=" Hello\n"
    ))

    assert cleaned == {"name": "Grace", "email": "grace@navy.mil", "subject": "Hi", "message": "Hello"}


def test_missing_field_reason():
    with pytest.raises(ValidationError) as exc_info:
        validate_contact(ContactRequest(name="Grace", email="g@x.com", subject="Hi"))

    assert exc_info.value.reason == "missing field"
    assert exc_info.value.status_code == 400


def test_non_string_field_is_missing():
    with pytest.raises(ValidationError) as exc_info:
        validate_contact(ContactRequest(name=42, email="g@x.com", subject="Hi", message="m"))

    assert exc_info.value.reason == "missing field"


def test_invalid_email_reason():
    with pytest.raises(ValidationError) as exc_info:
        validate_contact(ContactRequest(name="G", email="g@x", subject="Hi", message="m"))

    assert exc_info.value.reason == "invalid email"


@pytest.mark.parametrize("email,expected", [
    ("user@example.com", True),
    ("first.last+tag@sub.domain.org", True),
    ("user@localhost", False),
    ("user@@example.com", False),
    ("user example@example.com", False),
    ("", False),
])
def test_email_shape(email, expected):
    assert is_valid_email(email) is expected
