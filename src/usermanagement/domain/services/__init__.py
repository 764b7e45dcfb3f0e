"""Domain services for user management.

Services contain business logic that doesn't naturally fit within a single
entity: the account orchestration, its business rules and the password
policy.
"""

from usermanagement.domain.services.account_service import (
    AccountService,
    normalize_email,
)
from usermanagement.domain.services.account_validators import (
    AccountValidator,
    UniqueEmailRule,
    UniquenessRule,
    UniquePhoneRule,
    ValidatorPipeline,
)
from usermanagement.domain.services.password_validator import (
    PasswordValidationError,
    PasswordValidator,
    default_password_validator,
)

__all__ = [
    "AccountService",
    "AccountValidator",
    "PasswordValidationError",
    "PasswordValidator",
    "UniqueEmailRule",
    "UniquePhoneRule",
    "UniquenessRule",
    "ValidatorPipeline",
    "default_password_validator",
    "normalize_email",
]
