"""Abstract base class for account persistence.

The account service depends only on this contract. Implementations decide
how uniqueness is enforced at the storage level, but must surface a
violation as :class:`UniqueConstraintViolation` rather than a raw driver
error.
"""

from abc import ABC, abstractmethod

from usermanagement.domain.entities.account import Account


class RepositoryError(Exception):
    """Base class for conditions reported by account repositories."""


class UniqueConstraintViolation(RepositoryError):
    """Raised when a write would duplicate a unique field.

    Args:
        field: Name of the violated field (``email`` or ``phone_number``).
        value: The conflicting value, when known.
    """

    def __init__(self, field: str, value: str | None = None) -> None:
        self.field = field
        self.value = value
        super().__init__(f"Unique constraint violated on '{field}'")


class AccountNotFoundError(RepositoryError):
    """Raised when an update targets an account that no longer exists."""

    def __init__(self, account_id: str | None) -> None:
        self.account_id = account_id
        super().__init__(f"Account '{account_id}' not found")


class AccountRepository(ABC):
    """Abstract base class for account repositories.

    Existence checks only consider live (not soft-deleted) accounts and
    treat the email as already normalized.
    """

    @abstractmethod
    async def exists_by_email(self, email: str, *, exclude_id: str | None = None) -> bool:
        """Check whether a live account holds ``email``.

        Args:
            email: Normalized email address.
            exclude_id: Account ID to ignore (the account being updated).

        Returns:
            True if another live account holds the email.
        """

    @abstractmethod
    async def exists_by_phone(self, phone_number: str, *, exclude_id: str | None = None) -> bool:
        """Check whether a live account holds ``phone_number``.

        Args:
            phone_number: Phone number to look up.
            exclude_id: Account ID to ignore (the account being updated).

        Returns:
            True if another live account holds the phone number.
        """

    @abstractmethod
    async def create(self, account: Account) -> Account:
        """Persist a new account and return it with its assigned ID.

        Raises:
            UniqueConstraintViolation: If a unique field is already claimed.
        """

    @abstractmethod
    async def get_by_id(self, account_id: str) -> Account | None:
        """Return the account with ``account_id`` or None."""

    @abstractmethod
    async def get_by_email(self, email: str) -> Account | None:
        """Return the live account holding the normalized ``email`` or None."""

    @abstractmethod
    async def update(self, account: Account) -> Account:
        """Persist changes to an existing account.

        Raises:
            AccountNotFoundError: If the account no longer exists.
            UniqueConstraintViolation: If a unique field is already claimed.
        """
