"""Application services wiring the domain layer to its collaborators."""

from usermanagement.application.services.account_service_factory import (
    create_account_service,
    default_registration_pipeline,
    default_update_pipeline,
)

__all__ = [
    "create_account_service",
    "default_registration_pipeline",
    "default_update_pipeline",
]
