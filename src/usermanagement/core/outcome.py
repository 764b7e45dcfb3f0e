"""Outcome type used for every operation that can fail for a business reason.

Expected failures (missing fields, uniqueness conflicts, unknown accounts)
are returned as ``Outcome`` values instead of being raised, so callers can
branch on ``code`` without catching exceptions.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"


class ErrorCode(str, Enum):
    """Machine-readable failure codes returned by the account service."""

    INVALID_REQUEST = "INVALID_REQUEST"
    MISSING_EMAIL = "MISSING_EMAIL"
    MISSING_PASSWORD = "MISSING_PASSWORD"
    EMAIL_ALREADY_EXISTS = "EMAIL_ALREADY_EXISTS"
    PHONE_ALREADY_EXISTS = "PHONE_ALREADY_EXISTS"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    REGISTRATION_ERROR = "REGISTRATION_ERROR"
    UPDATE_ERROR = "UPDATE_ERROR"
    RETRIEVAL_ERROR = "RETRIEVAL_ERROR"


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Tagged success/failure result.

    A successful outcome carries ``value`` and no error fields. A failed
    outcome carries ``message``, an ordered tuple of ``errors`` and an
    optional ``code``; its ``value`` is always None.

    Attributes:
        is_success: Whether the operation succeeded.
        value: The result value (successful outcomes only).
        message: Human-readable summary of the failure.
        errors: Ordered detail strings describing the failure.
        code: Stable machine-readable failure code.
    """

    is_success: bool
    value: T | None = None
    message: str | None = None
    errors: tuple[str, ...] = ()
    code: str | None = None

    def __post_init__(self) -> None:
        """Enforce that only one side of the union is populated."""
        if self.is_success:
            if self.message is not None or self.errors or self.code is not None:
                raise ValueError("A successful outcome cannot carry failure details")
        else:
            if self.value is not None:
                raise ValueError("A failed outcome cannot carry a value")
            if not self.message:
                raise ValueError("A failed outcome requires a message")
        # Accept any iterable of details but store an immutable tuple
        object.__setattr__(self, "errors", tuple(self.errors))
        if isinstance(self.code, ErrorCode):
            object.__setattr__(self, "code", self.code.value)

    @property
    def is_failure(self) -> bool:
        return not self.is_success

    @classmethod
    def success(cls, value: T | None = None) -> "Outcome[T]":
        """Create a successful outcome carrying ``value``."""
        return cls(is_success=True, value=value)

    @classmethod
    def failure(
        cls,
        message: str,
        errors: tuple[str, ...] | list[str] = (),
        code: str | ErrorCode | None = None,
    ) -> "Outcome[T]":
        """Create a failed outcome.

        Args:
            message: Human-readable summary.
            errors: Optional ordered detail strings.
            code: Optional machine-readable code.

        Returns:
            A failed Outcome with no value.
        """
        return cls(is_success=False, message=message, errors=tuple(errors), code=code)

    @classmethod
    def from_exception(cls, exc: BaseException, code: str | ErrorCode) -> "Outcome[T]":
        """Convert an unexpected fault into a generic failure.

        Only the exception's message is kept; the exception object and its
        traceback are not retained on the outcome.

        Args:
            exc: The caught exception.
            code: Operation error code, e.g. ``REGISTRATION_ERROR``.

        Returns:
            A failed Outcome describing the fault generically.
        """
        detail = str(exc) or type(exc).__name__
        return cls.failure(UNEXPECTED_ERROR_MESSAGE, (detail,), code)
