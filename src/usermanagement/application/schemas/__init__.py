"""Request schemas validated before calling the account service."""

from usermanagement.application.schemas.account_schemas import (
    RegisterAccountSchema,
    UpdateAccountSchema,
)

__all__ = ["RegisterAccountSchema", "UpdateAccountSchema"]
