"""SQLAlchemy model for the accounts table.

Email and phone number are unique among live (not soft-deleted) accounts.
Both constraints are partial indexes so that a soft-deleted account does
not block re-registration, and absent phone numbers never collide.
"""

from datetime import date, datetime

from sqlalchemy import Boolean, Date, DateTime, Index, String, false
from sqlalchemy.orm import Mapped, mapped_column

from usermanagement.infrastructure.persistence.database import Base


class AccountModel(Base):
    """SQLAlchemy model for the accounts table.

    Attributes:
        id: Primary key (UUID string).
        email: Normalized email address.
        password_hash: Argon2 hash of the password.
        first_name: First name.
        last_name: Last name.
        display_name: Optional display name.
        date_of_birth: Optional date of birth.
        phone_number: Optional phone number.
        is_deleted: Soft-delete flag.
        created_at: Timestamp when the account was created.
        updated_at: Timestamp when the account was last updated.
    """

    __tablename__ = "accounts"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        comment="Account ID (UUID)",
    )
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Normalized email address",
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Hashed password (argon2id)",
    )
    first_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    last_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    display_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    date_of_birth: Mapped[date | None] = mapped_column(Date, nullable=True)
    phone_number: Mapped[str | None] = mapped_column(
        String(20),
        nullable=True,
        comment="Optional phone number, unique when present",
    )
    is_deleted: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        comment="Soft-delete flag",
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    def __repr__(self) -> str:
        return f"<Account(id={self.id}, email={self.email})>"


Index(
    "uq_accounts_email_live",
    AccountModel.email,
    unique=True,
    sqlite_where=AccountModel.is_deleted == false(),
    postgresql_where=AccountModel.is_deleted == false(),
)

Index(
    "uq_accounts_phone_live",
    AccountModel.phone_number,
    unique=True,
    sqlite_where=(AccountModel.phone_number.is_not(None))
    & (AccountModel.is_deleted == false()),
    postgresql_where=(AccountModel.phone_number.is_not(None))
    & (AccountModel.is_deleted == false()),
)
