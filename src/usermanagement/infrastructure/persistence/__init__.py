"""Persistence layer: database manager, models and repositories."""

from usermanagement.infrastructure.persistence.database import Base, DatabaseManager

__all__ = ["Base", "DatabaseManager"]
