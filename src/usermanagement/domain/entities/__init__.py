"""Domain entities for user management.

Entities are plain dataclasses with no dependencies on infrastructure or
external frameworks.
"""

from usermanagement.domain.entities.account import MUTABLE_FIELDS, Account, utcnow
from usermanagement.domain.entities.account_requests import (
    AccountResponse,
    RegisterAccountRequest,
    UpdateAccountRequest,
)

__all__ = [
    "Account",
    "AccountResponse",
    "MUTABLE_FIELDS",
    "RegisterAccountRequest",
    "UpdateAccountRequest",
    "utcnow",
]
