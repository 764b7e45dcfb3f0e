"""SQLAlchemy models for the user management tables."""

from usermanagement.infrastructure.persistence.models.account import AccountModel

__all__ = ["AccountModel"]
