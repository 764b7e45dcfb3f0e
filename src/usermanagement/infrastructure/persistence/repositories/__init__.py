"""Account repository implementations."""

from usermanagement.infrastructure.persistence.repositories.memory_account_repository import (
    InMemoryAccountRepository,
)
from usermanagement.infrastructure.persistence.repositories.sql_account_repository import (
    SqlAccountRepository,
)

__all__ = [
    "InMemoryAccountRepository",
    "SqlAccountRepository",
]
