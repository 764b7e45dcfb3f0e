"""Password hashing utility using Argon2.

Provides one-way password encoding and verification using the Argon2id
algorithm. Verification re-derives the hash from the candidate password;
hashes are never decoded.
"""

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

from usermanagement.core.config import Settings


class SecretEncoder:
    """Argon2id password encoder with tunable cost parameters.

    Args:
        time_cost: Number of iterations.
        memory_cost: Memory usage in KiB.
        parallelism: Number of parallel lanes.
    """

    def __init__(
        self,
        time_cost: int = 3,
        memory_cost: int = 65536,
        parallelism: int = 4,
    ) -> None:
        self._hasher = PasswordHasher(
            time_cost=time_cost,
            memory_cost=memory_cost,
            parallelism=parallelism,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "SecretEncoder":
        """Build an encoder using the configured cost parameters."""
        return cls(
            time_cost=settings.password_hash_time_cost,
            memory_cost=settings.password_hash_memory_cost,
            parallelism=settings.password_hash_parallelism,
        )

    def encode(self, password: str) -> str:
        """Hash a password using Argon2id.

        Args:
            password: The plaintext password to hash.

        Returns:
            The encoded hash string (salted, so different on every call).

        Example:
            >>> encoder = SecretEncoder(time_cost=1, memory_cost=8, parallelism=1)
            >>> encoder.encode("SecureP@ss123!").startswith("$argon2id$")
            True
        """
        return self._hasher.hash(password)

    def verify(self, password: str, hashed: str) -> bool:
        """Verify a password against a hash.

        Args:
            password: The plaintext password to verify.
            hashed: The hash to verify against.

        Returns:
            True if the password matches, False otherwise (including
            malformed hashes).
        """
        try:
            return self._hasher.verify(hashed, password)
        except (VerificationError, InvalidHashError):
            return False

    def needs_rehash(self, hashed: str) -> bool:
        """Check if a hash was produced with outdated cost parameters.

        Args:
            hashed: The hash to check.

        Returns:
            True if the hash should be regenerated, False otherwise.
        """
        return self._hasher.check_needs_rehash(hashed)


# Encoder with library defaults, used by the module-level helpers
_default_encoder = SecretEncoder()


def hash_password(password: str) -> str:
    """Hash a password with the default encoder."""
    return _default_encoder.encode(password)


def verify_password(password: str, hashed: str) -> bool:
    """Verify a password against a hash with the default encoder."""
    return _default_encoder.verify(password, hashed)


def needs_rehash(hashed: str) -> bool:
    """Check whether a hash needs to be regenerated."""
    return _default_encoder.needs_rehash(hashed)
