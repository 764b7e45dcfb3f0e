"""Request and response DTOs exchanged with the account service.

These are transient structures. The service reads only the fields it is
allowed to act on; responses never carry the password hash.
"""

from dataclasses import dataclass
from datetime import date, datetime

from usermanagement.domain.entities.account import Account


@dataclass
class RegisterAccountRequest:
    """Data required to register a new account."""

    email: str | None
    password: str | None
    first_name: str = ""
    last_name: str = ""
    display_name: str | None = None
    date_of_birth: date | None = None
    phone_number: str | None = None


@dataclass
class UpdateAccountRequest:
    """Profile changes for an existing account.

    ``email`` and ``password`` are accepted so that payloads carrying them
    can be passed through unchanged; the service never applies them.
    """

    account_id: str
    first_name: str = ""
    last_name: str = ""
    display_name: str | None = None
    date_of_birth: date | None = None
    phone_number: str | None = None
    email: str | None = None
    password: str | None = None


@dataclass(frozen=True)
class AccountResponse:
    """Public view of an account."""

    account_id: str
    email: str
    first_name: str
    last_name: str
    display_name: str | None
    date_of_birth: date | None
    phone_number: str | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_account(cls, account: Account) -> "AccountResponse":
        """Map a persisted account to its public view."""
        if account.id is None:
            raise ValueError("Cannot build a response for an unsaved account")
        return cls(
            account_id=account.id,
            email=account.email,
            first_name=account.first_name,
            last_name=account.last_name,
            display_name=account.display_name,
            date_of_birth=account.date_of_birth,
            phone_number=account.phone_number,
            created_at=account.created_at,
            updated_at=account.updated_at,
        )
