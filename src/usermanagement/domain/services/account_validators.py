"""Business rule validators for candidate accounts.

Validators are evaluated in a fixed order by :class:`ValidatorPipeline`.
The first failing validator stops the pipeline and its outcome is returned
unchanged. Validators may read from the repository but never write to it
and never modify the candidate.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable

from usermanagement.core.logging import get_logger
from usermanagement.core.outcome import ErrorCode, Outcome
from usermanagement.domain.entities.account import Account
from usermanagement.domain.repositories.account_repository import AccountRepository

logger = get_logger(__name__)


class AccountValidator(ABC):
    """A single business rule evaluated against a candidate account."""

    @abstractmethod
    async def evaluate(
        self, candidate: Account, current: Account | None = None
    ) -> Outcome[None]:
        """Evaluate the rule.

        Args:
            candidate: The account as it would be persisted.
            current: The stored account when evaluating an update, else None.

        Returns:
            A successful Outcome, or a failure describing the violation.
        """


class UniquenessRule(AccountValidator):
    """Fails when another live account already holds the candidate's value.

    Absent values never conflict (sparse uniqueness), and on updates a
    value that did not change is not looked up again.
    """

    field: str
    message: str
    detail: str
    code: ErrorCode

    def __init__(self, repository: AccountRepository) -> None:
        self.repository = repository

    @abstractmethod
    async def _exists(self, value: str, exclude_id: str | None) -> bool:
        """Look the value up in the repository."""

    async def evaluate(
        self, candidate: Account, current: Account | None = None
    ) -> Outcome[None]:
        value = getattr(candidate, self.field)
        if value is None or not str(value).strip():
            return Outcome.success()
        if current is not None and getattr(current, self.field) == value:
            return Outcome.success()

        if await self._exists(value, candidate.id):
            logger.warning(
                "Uniqueness rule failed",
                field=self.field,
                account_id=candidate.id,
            )
            return Outcome.failure(self.message, [self.detail], self.code)
        return Outcome.success()


class UniqueEmailRule(UniquenessRule):
    """Email addresses are unique among live accounts."""

    field = "email"
    message = "Email already exists"
    detail = "A user with this email address is already registered"
    code = ErrorCode.EMAIL_ALREADY_EXISTS

    async def _exists(self, value: str, exclude_id: str | None) -> bool:
        return await self.repository.exists_by_email(value, exclude_id=exclude_id)


class UniquePhoneRule(UniquenessRule):
    """Phone numbers, when present, are unique among live accounts."""

    field = "phone_number"
    message = "Phone number already exists"
    detail = "A user with this phone number is already registered"
    code = ErrorCode.PHONE_ALREADY_EXISTS

    async def _exists(self, value: str, exclude_id: str | None) -> bool:
        return await self.repository.exists_by_phone(value, exclude_id=exclude_id)


# Maps a repository constraint field to the rule reporting the same condition
UNIQUE_FIELD_RULES: dict[str, type[UniquenessRule]] = {
    UniqueEmailRule.field: UniqueEmailRule,
    UniquePhoneRule.field: UniquePhoneRule,
}


def conflict_outcome(field: str) -> Outcome | None:
    """Build the uniqueness failure for a storage-level constraint on ``field``.

    Returns None when the field is not covered by a uniqueness rule.
    """
    rule = UNIQUE_FIELD_RULES.get(field)
    if rule is None:
        return None
    return Outcome.failure(rule.message, [rule.detail], rule.code)


class ValidatorPipeline:
    """Ordered, short-circuiting sequence of validators."""

    def __init__(self, validators: Iterable[AccountValidator] = ()) -> None:
        self._validators: tuple[AccountValidator, ...] = tuple(validators)

    @property
    def validators(self) -> tuple[AccountValidator, ...]:
        return self._validators

    def __len__(self) -> int:
        return len(self._validators)

    async def run(self, candidate: Account, current: Account | None = None) -> Outcome[None]:
        """Run validators in order and stop at the first failure.

        Args:
            candidate: The account as it would be persisted.
            current: The stored account when validating an update.

        Returns:
            The first failing outcome verbatim, or success if all pass.
        """
        for validator in self._validators:
            outcome = await validator.evaluate(candidate, current)
            if not outcome.is_success:
                return outcome
        return Outcome.success()
