"""Unit tests for account request schemas."""

from datetime import date

import pytest
from pydantic import ValidationError

from usermanagement.application.schemas import RegisterAccountSchema, UpdateAccountSchema
from usermanagement.application.schemas.account_schemas import years_before
from usermanagement.domain.entities import RegisterAccountRequest, UpdateAccountRequest


def register_payload(**overrides) -> dict:
    payload = {
        "email": "jane@example.com",
        "password": "Str0ng!Passw",
        "first_name": "Jane",
        "last_name": "O'Neil-Smith",
    }
    payload.update(overrides)
    return payload


class TestRegisterAccountSchema:
    """Tests for registration syntax validation."""

    def test_valid_payload(self):
        schema = RegisterAccountSchema(**register_payload(phone_number=" +15551234567 "))

        request = schema.to_request()

        assert isinstance(request, RegisterAccountRequest)
        assert request.email == "jane@example.com"
        assert request.phone_number == "+15551234567"
        assert request.last_name == "O'Neil-Smith"

    def test_invalid_email(self):
        with pytest.raises(ValidationError):
            RegisterAccountSchema(**register_payload(email="not-an-email"))

    def test_email_too_long(self):
        with pytest.raises(ValidationError):
            RegisterAccountSchema(**register_payload(email=f"{'a' * 95}@x.com"))

    @pytest.mark.parametrize("first_name", ["J", "Jane3", "Jane!", "x" * 51])
    def test_invalid_first_name(self, first_name):
        with pytest.raises(ValidationError):
            RegisterAccountSchema(**register_payload(first_name=first_name))

    @pytest.mark.parametrize("phone_number", ["12345", "+1555-123-4567", "1" * 16])
    def test_invalid_phone(self, phone_number):
        with pytest.raises(ValidationError, match="between 7 and 15 digits"):
            RegisterAccountSchema(**register_payload(phone_number=phone_number))

    def test_blank_phone_becomes_none(self):
        schema = RegisterAccountSchema(**register_payload(phone_number="  "))

        assert schema.phone_number is None

    def test_weak_password_reports_every_rule(self):
        with pytest.raises(ValidationError) as exc_info:
            RegisterAccountSchema(**register_payload(password="weak"))

        message = str(exc_info.value)
        assert "at least 10 characters" in message
        assert "uppercase letter" in message
        assert "special character" in message

    def test_password_containing_email_prefix(self):
        with pytest.raises(ValidationError, match="email prefix"):
            RegisterAccountSchema(**register_payload(password="Jane!Secret99"))

    def test_configured_password_length(self, monkeypatch):
        monkeypatch.setenv("USERMANAGEMENT_PASSWORD_MIN_LENGTH", "16")

        with pytest.raises(ValidationError, match="at least 16 characters"):
            RegisterAccountSchema(**register_payload())

    def test_too_young(self):
        today = date.today()

        with pytest.raises(ValidationError, match="at least 13 years old"):
            RegisterAccountSchema(**register_payload(date_of_birth=years_before(today, 5)))

    def test_exactly_minimum_age(self):
        dob = years_before(date.today(), 13)

        schema = RegisterAccountSchema(**register_payload(date_of_birth=dob))

        assert schema.date_of_birth == dob


class TestUpdateAccountSchema:
    """Tests for update syntax validation."""

    def test_valid_payload(self):
        schema = UpdateAccountSchema(account_id=" acc_1 ", first_name="Jane", last_name="Doe")

        request = schema.to_request()

        assert isinstance(request, UpdateAccountRequest)
        assert request.account_id == "acc_1"
        assert request.email is None
        assert request.password is None

    def test_blank_account_id(self):
        with pytest.raises(ValidationError, match="User ID is required"):
            UpdateAccountSchema(account_id="   ", first_name="Jane", last_name="Doe")

    def test_same_phone_rules_as_registration(self):
        with pytest.raises(ValidationError):
            UpdateAccountSchema(
                account_id="acc_1", first_name="Jane", last_name="Doe", phone_number="abc"
            )


def test_years_before_leap_day():
    assert years_before(date(2024, 2, 29), 13) == date(2011, 2, 28)
    assert years_before(date(2024, 3, 1), 13) == date(2011, 3, 1)
