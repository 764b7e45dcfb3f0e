"""Password validation service.

Validates password strength according to configurable rules:
- Minimum length
- Uppercase, lowercase, digit and special character requirements
- Must not contain the local part of the user's email
- Must not contain the trailing digits of the user's phone number
- Must not be a commonly used password
"""

import re
from dataclasses import dataclass

# Small list of easily guessed passwords, compared case-insensitively
COMMON_PASSWORDS = frozenset(
    {
        "password",
        "password123",
        "1234567890",
        "qwertyuiop",
        "admin123",
        "welcome123",
    }
)

# Number of trailing phone digits that must not appear in the password
PHONE_SUFFIX_LENGTH = 6


@dataclass(frozen=True)
class PasswordValidationError:
    """Represents a password validation error.

    Attributes:
        field: The field name (always 'password').
        message: Human-readable error message.
        code: Machine-readable error code.
    """

    field: str
    message: str
    code: str


class PasswordValidator:
    """Validates password strength.

    Default policy:
    - Minimum 10 characters
    - At least one uppercase letter
    - At least one lowercase letter
    - At least one digit
    - At least one special (non-alphanumeric) character
    """

    def __init__(
        self,
        min_length: int = 10,
        require_uppercase: bool = True,
        require_lowercase: bool = True,
        require_digit: bool = True,
        require_special: bool = True,
    ) -> None:
        """Initialize the password validator.

        Args:
            min_length: Minimum password length (default 10).
            require_uppercase: Require at least one uppercase letter.
            require_lowercase: Require at least one lowercase letter.
            require_digit: Require at least one digit.
            require_special: Require at least one special character.
        """
        self.min_length = min_length
        self.require_uppercase = require_uppercase
        self.require_lowercase = require_lowercase
        self.require_digit = require_digit
        self.require_special = require_special

    def _error(self, message: str, code: str) -> PasswordValidationError:
        return PasswordValidationError(field="password", message=message, code=code)

    def validate(
        self,
        password: str,
        email: str | None = None,
        phone_number: str | None = None,
    ) -> list[PasswordValidationError]:
        """Validate a password against the policy.

        Args:
            password: The password to validate.
            email: Optional email whose local part must not appear in the password.
            phone_number: Optional phone whose trailing digits must not appear.

        Returns:
            List of validation errors. Empty list if password is valid.
        """
        errors: list[PasswordValidationError] = []

        if len(password) < self.min_length:
            errors.append(
                self._error(
                    f"Password must be at least {self.min_length} characters long",
                    "password_too_short",
                )
            )

        if self.require_uppercase and not re.search(r"[A-Z]", password):
            errors.append(
                self._error(
                    "Password must contain at least one uppercase letter",
                    "password_no_uppercase",
                )
            )

        if self.require_lowercase and not re.search(r"[a-z]", password):
            errors.append(
                self._error(
                    "Password must contain at least one lowercase letter",
                    "password_no_lowercase",
                )
            )

        if self.require_digit and not re.search(r"\d", password):
            errors.append(
                self._error("Password must contain at least one digit", "password_no_digit")
            )

        if self.require_special and not re.search(r"[^a-zA-Z0-9]", password):
            errors.append(
                self._error(
                    "Password must contain at least one special character",
                    "password_no_special",
                )
            )

        if email:
            local_part = email.split("@")[0]
            if local_part and local_part.lower() in password.lower():
                errors.append(
                    self._error(
                        "Password must not contain your email prefix",
                        "password_contains_email",
                    )
                )

        if phone_number and phone_number.strip():
            suffix = phone_number.strip()[-PHONE_SUFFIX_LENGTH:]
            if suffix in password:
                errors.append(
                    self._error(
                        "Password must not contain a substring of your phone number",
                        "password_contains_phone",
                    )
                )

        if password.lower() in COMMON_PASSWORDS:
            errors.append(
                self._error(
                    "Password is too common and easily guessable",
                    "password_too_common",
                )
            )

        return errors

    def is_valid(
        self,
        password: str,
        email: str | None = None,
        phone_number: str | None = None,
    ) -> bool:
        """Check if a password is valid."""
        return len(self.validate(password, email, phone_number)) == 0


# Default validator instance
default_password_validator = PasswordValidator()
