"""Composition of the account service with its default business rules."""

from usermanagement.core.config import Settings, get_settings
from usermanagement.domain.repositories.account_repository import AccountRepository
from usermanagement.domain.services.account_service import AccountService
from usermanagement.domain.services.account_validators import (
    UniqueEmailRule,
    UniquePhoneRule,
    ValidatorPipeline,
)
from usermanagement.infrastructure.auth.password_hasher import SecretEncoder


def default_registration_pipeline(repository: AccountRepository) -> ValidatorPipeline:
    """Email uniqueness first, then phone uniqueness."""
    return ValidatorPipeline([UniqueEmailRule(repository), UniquePhoneRule(repository)])


def default_update_pipeline(repository: AccountRepository) -> ValidatorPipeline:
    """Only the phone number can change on update, so only it is checked."""
    return ValidatorPipeline([UniquePhoneRule(repository)])


def create_account_service(
    repository: AccountRepository,
    settings: Settings | None = None,
    encoder: SecretEncoder | None = None,
) -> AccountService:
    """Build an account service with the default pipelines.

    Args:
        repository: Account repository the service and its rules use.
        settings: Optional settings; used for the argon2 cost parameters.
        encoder: Optional encoder overriding the one built from settings.

    Returns:
        A ready-to-use AccountService.
    """
    if encoder is None:
        encoder = SecretEncoder.from_settings(settings or get_settings())
    return AccountService(
        repository=repository,
        encoder=encoder,
        registration_pipeline=default_registration_pipeline(repository),
        update_pipeline=default_update_pipeline(repository),
    )
