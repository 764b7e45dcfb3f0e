"""In-memory implementation of the account repository.

Used by the test suite and for embedding the service without a database.
Unique constraints are enforced inside :meth:`create` and :meth:`update`
the same way a unique index would, independently of the service's own
existence checks.
"""

import asyncio
import uuid
from dataclasses import replace

from usermanagement.domain.entities.account import Account
from usermanagement.domain.repositories.account_repository import (
    AccountNotFoundError,
    AccountRepository,
    UniqueConstraintViolation,
)


class InMemoryAccountRepository(AccountRepository):
    """Dict-backed account repository.

    Stored and returned accounts are copies, so callers cannot modify
    stored state without going through :meth:`update`.
    """

    def __init__(self, accounts: list[Account] | None = None) -> None:
        self._accounts: dict[str, Account] = {}
        self._lock = asyncio.Lock()
        self.create_calls = 0
        self.update_calls = 0
        for account in accounts or []:
            stored = replace(account, id=account.id or str(uuid.uuid4()))
            self._accounts[stored.id] = stored

    def __len__(self) -> int:
        return len(self._accounts)

    def all(self) -> list[Account]:
        """Return copies of every stored account, deleted ones included."""
        return [replace(account) for account in self._accounts.values()]

    def _live(self, exclude_id: str | None = None) -> list[Account]:
        return [
            account
            for account in self._accounts.values()
            if not account.is_deleted and account.id != exclude_id
        ]

    def _check_unique(self, account: Account) -> None:
        """Raise if another live account holds the same email or phone."""
        for other in self._live(exclude_id=account.id):
            if other.email == account.email:
                raise UniqueConstraintViolation("email", account.email)
            if account.phone_number is not None and other.phone_number == account.phone_number:
                raise UniqueConstraintViolation("phone_number", account.phone_number)

    async def exists_by_email(self, email: str, *, exclude_id: str | None = None) -> bool:
        normalized = email.strip().lower()
        return any(account.email == normalized for account in self._live(exclude_id))

    async def exists_by_phone(self, phone_number: str, *, exclude_id: str | None = None) -> bool:
        return any(account.phone_number == phone_number for account in self._live(exclude_id))

    async def create(self, account: Account) -> Account:
        async with self._lock:
            self.create_calls += 1
            if not account.password_hash:
                raise ValueError("Password hash is required")
            stored = replace(account, id=account.id or str(uuid.uuid4()))
            if stored.id in self._accounts:
                raise UniqueConstraintViolation("id", stored.id)
            self._check_unique(stored)
            self._accounts[stored.id] = stored
            return replace(stored)

    async def get_by_id(self, account_id: str) -> Account | None:
        account = self._accounts.get(account_id)
        return replace(account) if account is not None else None

    async def get_by_email(self, email: str) -> Account | None:
        normalized = email.strip().lower()
        for account in self._live():
            if account.email == normalized:
                return replace(account)
        return None

    async def update(self, account: Account) -> Account:
        async with self._lock:
            self.update_calls += 1
            if account.id is None or account.id not in self._accounts:
                raise AccountNotFoundError(account.id)
            self._check_unique(account)
            stored = replace(account)
            self._accounts[stored.id] = stored
            return replace(stored)

    async def soft_delete(self, account_id: str) -> bool:
        """Flag an account as deleted. Returns False if it does not exist."""
        async with self._lock:
            account = self._accounts.get(account_id)
            if account is None:
                return False
            account.is_deleted = True
            return True
