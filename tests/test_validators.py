import pytest
from pydantic import ValidationError

from studio.domain.clients.schemas import ClientUpdate
from studio.shared.validators import (
    validate_category,
    validate_client_source,
    validate_payment_method,
    validate_phone,
    validate_timezone,
)
from studio.utils.sanitization import clean_text


def test_phone_is_normalized():
    assert validate_phone("+48 600-100 200") == "+48600100200"
    assert validate_phone("(600) 100.200") == "600100200"
    assert validate_phone("   ") is None


def test_phone_digit_count_is_checked():
    with pytest.raises(ValueError):
        validate_phone("12345")
    with pytest.raises(ValueError):
        validate_phone("1" * 16)


def test_client_source():
    assert validate_client_source(" Booksy ") == "booksy"
    assert validate_client_source("") is None
    with pytest.raises(ValueError):
        validate_client_source("tiktok")


def test_payment_method():
    assert validate_payment_method("BLIK") == "blik"
    with pytest.raises(ValueError):
        validate_payment_method("crypto")


def test_timezone():
    assert validate_timezone(" Europe/London ") == "Europe/London"
    with pytest.raises(ValueError):
        validate_timezone("Nowhere/City")


def test_category_is_trimmed_and_lowercased():
    assert validate_category("  Rings ") == "rings"
    assert validate_category("   ") is None


def test_clean_text():
    assert clean_text("  hello\x00 world  ") == "hello world"
    assert clean_text("<b>keep</b>") == "<b>keep</b>"
    assert clean_text("   ") is None
    with pytest.raises(ValueError):
        clean_text("x" * 11, max_length=10)


def test_partial_update_keeps_required_fields_non_null():
    assert ClientUpdate(phone=None).model_dump(exclude_unset=True) == {"phone": None}
    assert ClientUpdate().model_dump(exclude_unset=True) == {}
    with pytest.raises(ValidationError):
        ClientUpdate(name=None)
