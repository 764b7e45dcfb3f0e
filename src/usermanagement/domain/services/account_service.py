"""Account service for registration and profile updates.

Sequences presence checks, normalization, the business rule pipeline,
password encoding and persistence. Every public method returns an
:class:`~usermanagement.core.outcome.Outcome`; unexpected faults are
logged and converted at this boundary and never propagate to callers.
"""

from dataclasses import replace
from datetime import datetime, timedelta
from typing import Any

from usermanagement.core.logging import get_logger
from usermanagement.core.outcome import ErrorCode, Outcome
from usermanagement.domain.entities.account import MUTABLE_FIELDS, Account, utcnow
from usermanagement.domain.entities.account_requests import (
    AccountResponse,
    RegisterAccountRequest,
    UpdateAccountRequest,
)
from usermanagement.domain.repositories.account_repository import (
    AccountNotFoundError,
    AccountRepository,
    UniqueConstraintViolation,
)
from usermanagement.domain.services.account_validators import (
    ValidatorPipeline,
    conflict_outcome,
)
from usermanagement.infrastructure.auth.password_hasher import SecretEncoder

logger = get_logger(__name__)


def normalize_email(email: str) -> str:
    """Trim and lowercase an email address."""
    return email.strip().lower()


def _clean(value: str | None) -> str | None:
    """Trim a string, mapping blank values to None."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def _profile_changes(request: UpdateAccountRequest) -> dict[str, Any]:
    """Collect the cleaned whitelisted fields of an update request."""
    changes: dict[str, Any] = {}
    for name in MUTABLE_FIELDS:
        value = getattr(request, name)
        if isinstance(value, str):
            value = _clean(value)
        if name in ("first_name", "last_name"):
            value = value or ""
        changes[name] = value
    return changes


class AccountService:
    """Service for account registration and update business logic.

    The service holds no per-call state and may be shared between
    concurrent tasks.

    Args:
        repository: Account persistence contract.
        encoder: One-way password encoder.
        registration_pipeline: Rules evaluated before creating an account.
        update_pipeline: Rules evaluated before updating an account.
    """

    def __init__(
        self,
        repository: AccountRepository,
        encoder: SecretEncoder,
        registration_pipeline: ValidatorPipeline,
        update_pipeline: ValidatorPipeline,
    ) -> None:
        self.repository = repository
        self.encoder = encoder
        self.registration_pipeline = registration_pipeline
        self.update_pipeline = update_pipeline

    async def register_account(
        self, request: RegisterAccountRequest | None
    ) -> Outcome[AccountResponse]:
        """Register a new account.

        Args:
            request: Registration data. Field syntax is expected to have been
                validated already.

        Returns:
            Success with the created account, or a failure with one of
            ``INVALID_REQUEST``, ``MISSING_EMAIL``, ``MISSING_PASSWORD``,
            ``EMAIL_ALREADY_EXISTS``, ``PHONE_ALREADY_EXISTS`` or
            ``REGISTRATION_ERROR``.
        """
        email = getattr(request, "email", None)
        try:
            if request is None:
                return Outcome.failure(
                    "Registration request is required", code=ErrorCode.INVALID_REQUEST
                )
            if not request.email or not request.email.strip():
                return Outcome.failure("Email is required", code=ErrorCode.MISSING_EMAIL)
            if not request.password or not request.password.strip():
                return Outcome.failure(
                    "Password is required", code=ErrorCode.MISSING_PASSWORD
                )

            email = normalize_email(request.email)
            logger.info("Account registration started", email=email)

            candidate = Account(
                email=email,
                first_name=_clean(request.first_name) or "",
                last_name=_clean(request.last_name) or "",
                display_name=_clean(request.display_name),
                date_of_birth=request.date_of_birth,
                phone_number=_clean(request.phone_number),
            )

            validation = await self.registration_pipeline.run(candidate)
            if not validation.is_success:
                logger.warning(
                    "Account registration rejected", email=email, code=validation.code
                )
                return validation

            now = utcnow()
            account = replace(
                candidate,
                password_hash=self.encoder.encode(request.password),
                created_at=now,
                updated_at=now,
            )

            try:
                created = await self.repository.create(account)
            except UniqueConstraintViolation as e:
                return self._constraint_failure(e, email=email)

            if not created.id:
                raise RuntimeError("Repository did not assign an account ID")

            logger.info("Account registration completed", email=email, account_id=created.id)
            return Outcome.success(AccountResponse.from_account(created))
        except Exception as e:
            logger.exception("Unexpected error during account registration", email=email)
            return Outcome.from_exception(e, ErrorCode.REGISTRATION_ERROR)

    async def update_account(
        self, request: UpdateAccountRequest | None
    ) -> Outcome[AccountResponse]:
        """Update the profile fields of an existing account.

        Only the whitelisted profile fields are applied. Email, password
        hash, soft-delete flag, ID and creation timestamp are carried over
        from the stored account regardless of what the request contains.

        Args:
            request: Update data bound to an account ID.

        Returns:
            Success with the updated account, or a failure with one of
            ``INVALID_REQUEST``, ``USER_NOT_FOUND``, ``PHONE_ALREADY_EXISTS``
            or ``UPDATE_ERROR``.
        """
        account_id = getattr(request, "account_id", None)
        try:
            if request is None:
                return Outcome.failure(
                    "Update request is required", code=ErrorCode.INVALID_REQUEST
                )

            logger.info("Account update started", account_id=account_id)

            current = await self.repository.get_by_id(request.account_id)
            if current is None or current.is_deleted:
                logger.warning("Account update target not found", account_id=account_id)
                return self._not_found(request.account_id)

            candidate = replace(current, **_profile_changes(request))

            validation = await self.update_pipeline.run(candidate, current)
            if not validation.is_success:
                logger.warning(
                    "Account update rejected", account_id=account_id, code=validation.code
                )
                return validation

            candidate.updated_at = self._next_timestamp(current.updated_at)

            try:
                updated = await self.repository.update(candidate)
            except AccountNotFoundError:
                return self._not_found(request.account_id)
            except UniqueConstraintViolation as e:
                return self._constraint_failure(e, account_id=account_id)

            logger.info("Account update completed", account_id=account_id)
            return Outcome.success(AccountResponse.from_account(updated))
        except Exception as e:
            logger.exception("Unexpected error during account update", account_id=account_id)
            return Outcome.from_exception(e, ErrorCode.UPDATE_ERROR)

    async def get_account(self, account_id: str | None) -> Outcome[AccountResponse]:
        """Fetch a live account by ID.

        Returns:
            Success with the account, or a failure with ``INVALID_REQUEST``,
            ``USER_NOT_FOUND`` or ``RETRIEVAL_ERROR``.
        """
        try:
            if not account_id or not account_id.strip():
                return Outcome.failure(
                    "Account ID is required", code=ErrorCode.INVALID_REQUEST
                )
            account = await self.repository.get_by_id(account_id)
            if account is None or account.is_deleted:
                return self._not_found(account_id)
            return Outcome.success(AccountResponse.from_account(account))
        except Exception as e:
            logger.exception("Unexpected error during account retrieval", account_id=account_id)
            return Outcome.from_exception(e, ErrorCode.RETRIEVAL_ERROR)

    @staticmethod
    def _not_found(account_id: str | None) -> Outcome[AccountResponse]:
        return Outcome.failure(
            "User not found",
            [f"No user exists with ID '{account_id}'"],
            ErrorCode.USER_NOT_FOUND,
        )

    @staticmethod
    def _constraint_failure(
        error: UniqueConstraintViolation, **log_fields: str | None
    ) -> Outcome[AccountResponse]:
        """Report a storage-level uniqueness violation like the matching rule."""
        outcome = conflict_outcome(error.field)
        if outcome is None:
            raise error
        logger.warning(
            "Unique constraint violated at storage level",
            field=error.field,
            code=outcome.code,
            **log_fields,
        )
        return outcome

    @staticmethod
    def _next_timestamp(previous: datetime) -> datetime:
        """Return the current time, strictly later than ``previous``."""
        now = utcnow()
        if previous.tzinfo is None:
            now = now.replace(tzinfo=None)
        if now <= previous:
            now = previous + timedelta(microseconds=1)
        return now
