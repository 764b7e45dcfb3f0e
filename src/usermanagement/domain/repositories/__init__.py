"""Repository contracts the domain layer depends on."""

from usermanagement.domain.repositories.account_repository import (
    AccountNotFoundError,
    AccountRepository,
    RepositoryError,
    UniqueConstraintViolation,
)

__all__ = [
    "AccountNotFoundError",
    "AccountRepository",
    "RepositoryError",
    "UniqueConstraintViolation",
]
