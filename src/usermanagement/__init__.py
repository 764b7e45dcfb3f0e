"""User management - account registration and profile updates.

Validates candidate accounts against ordered business rules, encodes
passwords with Argon2id and persists accounts through a repository
contract, reporting every expected failure as an Outcome.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
