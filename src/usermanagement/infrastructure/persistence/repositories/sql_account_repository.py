"""SQLAlchemy implementation of the account repository."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import false, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from usermanagement.core.logging import get_logger
from usermanagement.domain.entities.account import MUTABLE_FIELDS, Account
from usermanagement.domain.repositories.account_repository import (
    AccountNotFoundError,
    AccountRepository,
    UniqueConstraintViolation,
)
from usermanagement.infrastructure.persistence.models import AccountModel

logger = get_logger(__name__)

# Mutable columns copied from the entity on update
_UPDATABLE_COLUMNS = MUTABLE_FIELDS + ("updated_at",)


def _as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes returned by drivers without tz support."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _violated_field(error: IntegrityError) -> str | None:
    """Work out which unique field an integrity error refers to."""
    message = str(error.orig).lower()
    if "phone" in message:
        return "phone_number"
    if "email" in message:
        return "email"
    return None


class SqlAccountRepository(AccountRepository):
    """Repository for account database operations.

    Writes are flushed immediately so that unique index violations surface
    from :meth:`create` and :meth:`update`; committing is left to the
    session scope.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def exists_by_email(self, email: str, *, exclude_id: str | None = None) -> bool:
        query = select(AccountModel.id).where(
            AccountModel.email == email.strip().lower(),
            AccountModel.is_deleted == false(),
        )
        if exclude_id is not None:
            query = query.where(AccountModel.id != exclude_id)
        result = await self.session.execute(query.limit(1))
        return result.scalar_one_or_none() is not None

    async def exists_by_phone(self, phone_number: str, *, exclude_id: str | None = None) -> bool:
        query = select(AccountModel.id).where(
            AccountModel.phone_number == phone_number,
            AccountModel.is_deleted == false(),
        )
        if exclude_id is not None:
            query = query.where(AccountModel.id != exclude_id)
        result = await self.session.execute(query.limit(1))
        return result.scalar_one_or_none() is not None

    async def create(self, account: Account) -> Account:
        """Insert a new account.

        Args:
            account: Account entity; an ID is generated when missing.

        Returns:
            The stored account with its ID.

        Raises:
            UniqueConstraintViolation: If email or phone number is taken.
        """
        if not account.password_hash:
            raise ValueError("Password hash is required")

        model = AccountModel(
            id=account.id or str(uuid.uuid4()),
            email=account.email,
            password_hash=account.password_hash,
            first_name=account.first_name,
            last_name=account.last_name,
            display_name=account.display_name,
            date_of_birth=account.date_of_birth,
            phone_number=account.phone_number,
            is_deleted=account.is_deleted,
            created_at=account.created_at,
            updated_at=account.updated_at,
        )
        self.session.add(model)
        await self._flush(account)
        logger.debug("Account inserted", account_id=model.id)
        return self._to_entity(model)

    async def get_by_id(self, account_id: str) -> Account | None:
        model = await self.session.get(AccountModel, account_id)
        return self._to_entity(model) if model is not None else None

    async def get_by_email(self, email: str) -> Account | None:
        result = await self.session.execute(
            select(AccountModel).where(
                AccountModel.email == email.strip().lower(),
                AccountModel.is_deleted == false(),
            )
        )
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model is not None else None

    async def update(self, account: Account) -> Account:
        """Persist the mutable columns of an existing account.

        Raises:
            AccountNotFoundError: If no row has the account's ID.
            UniqueConstraintViolation: If the new phone number is taken.
        """
        model = await self.session.get(AccountModel, account.id) if account.id else None
        if model is None:
            raise AccountNotFoundError(account.id)

        for column in _UPDATABLE_COLUMNS:
            setattr(model, column, getattr(account, column))
        await self._flush(account)
        return self._to_entity(model)

    async def soft_delete(self, account_id: str) -> bool:
        """Flag an account as deleted. Returns False if it does not exist."""
        model = await self.session.get(AccountModel, account_id)
        if model is None:
            return False
        model.is_deleted = True
        await self.session.flush()
        return True

    async def _flush(self, account: Account) -> None:
        try:
            await self.session.flush()
        except IntegrityError as e:
            await self.session.rollback()
            field = _violated_field(e)
            if field is None:
                raise
            raise UniqueConstraintViolation(field, getattr(account, field)) from e

    @staticmethod
    def _to_entity(model: AccountModel) -> Account:
        return Account(
            id=model.id,
            email=model.email,
            password_hash=model.password_hash,
            first_name=model.first_name,
            last_name=model.last_name,
            display_name=model.display_name,
            date_of_birth=model.date_of_birth,
            phone_number=model.phone_number,
            is_deleted=model.is_deleted,
            created_at=_as_utc(model.created_at),
            updated_at=_as_utc(model.updated_at),
        )
