"""Account entity for registered users.

An account is identified by a repository-assigned ID and by its normalized
email address. The phone number is optional but unique when present.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone


def utcnow() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


# Fields that the update path is allowed to change
MUTABLE_FIELDS: tuple[str, ...] = (
    "first_name",
    "last_name",
    "display_name",
    "date_of_birth",
    "phone_number",
)


@dataclass
class Account:
    """Account entity representing a registered user.

    A candidate account built during registration has no ``id`` and no
    ``password_hash`` yet; both are filled in before persistence.

    Attributes:
        email: Normalized (trimmed, lowercase) email address.
        first_name: User's first name.
        last_name: User's last name.
        id: Repository-assigned identifier (None until persisted).
        password_hash: Encoded credential, never the raw secret.
        display_name: Optional display name.
        date_of_birth: Optional date of birth.
        phone_number: Optional phone number (unique when present).
        is_deleted: Soft-delete flag.
        created_at: Timestamp when the account was created.
        updated_at: Timestamp when the account was last updated.
    """

    email: str
    first_name: str
    last_name: str
    id: str | None = None
    password_hash: str | None = None
    display_name: str | None = None
    date_of_birth: date | None = None
    phone_number: str | None = None
    is_deleted: bool = False
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def __post_init__(self) -> None:
        """Validate account data after initialization."""
        if not self.email:
            raise ValueError("Email is required")

    @property
    def is_persisted(self) -> bool:
        return self.id is not None

    def __repr__(self) -> str:
        # password_hash is never rendered
        return f"<Account(id={self.id}, email={self.email}, is_deleted={self.is_deleted})>"
