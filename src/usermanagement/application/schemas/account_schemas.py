"""Pydantic schemas for account request syntax validation.

These checks run before a request reaches the account service: email
format, password policy, name and phone patterns, and minimum age. The
service itself only performs presence checks and business rules.
"""

import re
from datetime import date

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator

from usermanagement.core.config import get_settings
from usermanagement.domain.entities.account_requests import (
    RegisterAccountRequest,
    UpdateAccountRequest,
)
from usermanagement.domain.services.password_validator import PasswordValidator

NAME_PATTERN = re.compile(r"^[a-zA-Z\s'-]+$")
PHONE_PATTERN = re.compile(r"^\+?[0-9]{7,15}$")
EMAIL_MAX_LENGTH = 100


def years_before(today: date, years: int) -> date:
    """Return the date ``years`` before ``today`` (Feb 29 maps to Feb 28)."""
    try:
        return today.replace(year=today.year - years)
    except ValueError:
        return today.replace(year=today.year - years, day=28)


def _validate_name(value: str, label: str) -> str:
    value = value.strip()
    if not NAME_PATTERN.match(value):
        raise ValueError(
            f"{label} can only contain letters, spaces, hyphens, and apostrophes"
        )
    return value


def _validate_phone(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    value = value.strip()
    if not PHONE_PATTERN.match(value):
        raise ValueError(
            "Phone number must be between 7 and 15 digits and can optionally start with '+'"
        )
    return value


def _validate_date_of_birth(value: date | None) -> date | None:
    if value is None:
        return None
    minimum_age = get_settings().minimum_age_years
    if value > years_before(date.today(), minimum_age):
        raise ValueError(f"You must be at least {minimum_age} years old to register")
    return value


class ProfileFields(BaseModel):
    """Profile fields shared by registration and update requests."""

    first_name: str = Field(..., min_length=2, max_length=50, description="First name")
    last_name: str = Field(..., min_length=2, max_length=50, description="Last name")
    display_name: str | None = Field(None, max_length=100, description="Display name")
    date_of_birth: date | None = Field(None, description="Date of birth")
    phone_number: str | None = Field(None, description="Phone number")

    @field_validator("first_name")
    @classmethod
    def validate_first_name(cls, v: str) -> str:
        return _validate_name(v, "First name")

    @field_validator("last_name")
    @classmethod
    def validate_last_name(cls, v: str) -> str:
        return _validate_name(v, "Last name")

    @field_validator("phone_number")
    @classmethod
    def validate_phone_number(cls, v: str | None) -> str | None:
        return _validate_phone(v)

    @field_validator("date_of_birth")
    @classmethod
    def validate_date_of_birth(cls, v: date | None) -> date | None:
        return _validate_date_of_birth(v)


class RegisterAccountSchema(ProfileFields):
    """Request body for account registration."""

    email: EmailStr = Field(..., description="Email address")
    password: str = Field(..., min_length=1, description="Password")

    @field_validator("email")
    @classmethod
    def validate_email_length(cls, v: str) -> str:
        if len(v) > EMAIL_MAX_LENGTH:
            raise ValueError(f"Email must not exceed {EMAIL_MAX_LENGTH} characters")
        return v

    @model_validator(mode="after")
    def validate_password_policy(self) -> "RegisterAccountSchema":
        """Apply the password policy, which depends on email and phone."""
        validator = PasswordValidator(min_length=get_settings().password_min_length)
        errors = validator.validate(self.password, self.email, self.phone_number)
        if errors:
            raise ValueError("; ".join(error.message for error in errors))
        return self

    def to_request(self) -> RegisterAccountRequest:
        """Convert to the service request DTO."""
        return RegisterAccountRequest(
            email=self.email,
            password=self.password,
            first_name=self.first_name,
            last_name=self.last_name,
            display_name=self.display_name,
            date_of_birth=self.date_of_birth,
            phone_number=self.phone_number,
        )


class UpdateAccountSchema(ProfileFields):
    """Request body for a profile update."""

    account_id: str = Field(..., min_length=1, description="Account ID")

    @field_validator("account_id")
    @classmethod
    def validate_account_id(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("User ID is required")
        return v

    def to_request(self) -> UpdateAccountRequest:
        """Convert to the service request DTO."""
        return UpdateAccountRequest(
            account_id=self.account_id,
            first_name=self.first_name,
            last_name=self.last_name,
            display_name=self.display_name,
            date_of_birth=self.date_of_birth,
            phone_number=self.phone_number,
        )
