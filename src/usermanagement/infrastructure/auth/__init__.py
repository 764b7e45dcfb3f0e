"""Authentication infrastructure components.

This module provides password encoding and verification.
"""

from usermanagement.infrastructure.auth.password_hasher import (
    SecretEncoder,
    hash_password,
    needs_rehash,
    verify_password,
)

__all__ = [
    "SecretEncoder",
    "hash_password",
    "needs_rehash",
    "verify_password",
]
