"""Unit tests for the password strength policy."""

import pytest

from usermanagement.domain.services.password_validator import (
    PasswordValidator,
    default_password_validator,
)


def codes(errors):
    return {error.code for error in errors}


class TestPasswordValidator:
    """Tests for PasswordValidator.validate."""

    def test_strong_password(self):
        assert default_password_validator.validate("Str0ng!Passw") == []
        assert default_password_validator.is_valid("Str0ng!Passw")

    @pytest.mark.parametrize(
        ("password", "expected"),
        [
            ("Sh0rt!", "password_too_short"),
            ("nouppercase1!", "password_no_uppercase"),
            ("NOLOWERCASE1!", "password_no_lowercase"),
            ("NoDigitsHere!", "password_no_digit"),
            ("NoSpecial123", "password_no_special"),
        ],
    )
    def test_single_rule_violation(self, password, expected):
        assert codes(default_password_validator.validate(password)) == {expected}

    def test_all_violations_are_reported(self):
        errors = default_password_validator.validate("abc")

        assert codes(errors) == {
            "password_too_short",
            "password_no_uppercase",
            "password_no_digit",
            "password_no_special",
        }
        assert all(error.field == "password" for error in errors)

    def test_custom_minimum_length(self):
        validator = PasswordValidator(min_length=6)

        assert validator.is_valid("Ab1!xy")
        assert "at least 6 characters" in validator.validate("Ab1!x")[0].message

    def test_optional_rules_can_be_disabled(self):
        validator = PasswordValidator(require_special=False, require_uppercase=False)

        assert validator.is_valid("lowercase123")

    def test_email_local_part_rejected(self):
        errors = default_password_validator.validate("Jsmith#2024x", email="jsmith@example.com")

        assert codes(errors) == {"password_contains_email"}

    def test_phone_suffix_rejected(self):
        errors = default_password_validator.validate(
            "Secret!234567", phone_number="+15551234567"
        )

        assert codes(errors) == {"password_contains_phone"}

    def test_phone_prefix_allowed(self):
        assert default_password_validator.is_valid("Secret!15551", phone_number="+15551234567")

    def test_common_password_rejected(self):
        validator = PasswordValidator(
            require_uppercase=False, require_digit=False, require_special=False
        )

        assert codes(validator.validate("QwertyUiop")) == {"password_too_common"}
