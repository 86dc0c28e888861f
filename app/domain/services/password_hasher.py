"""Password hashing interface - domain service abstraction.

Subjects (moderators, organizations, users) authenticate with a secret that
is stored hashed by the credential store. Login only ever needs to verify a
presented secret against that hash.

The domain does NOT care:
- Which algorithm produced the stored hash (Argon2, bcrypt)
- Which library implements it
"""

from abc import ABC, abstractmethod


class IPasswordHasher(ABC):
    """
    Interface for password hashing operations.

    The session core never sees plaintext secrets beyond the single
    :meth:`verify` call made during login, and never persists them.
    """

    @abstractmethod
    def hash(self, plain_password: str) -> str:
        """
        Hash a plain text password.

        Args:
            plain_password: The plain text password to hash

        Returns:
            Self-describing hash string (algorithm, parameters, salt, digest)
        """
        pass

    @abstractmethod
    def verify(self, plain_password: str, hashed_password: str) -> bool:
        """
        Verify a plain text password against a stored hash.

        Args:
            plain_password: The plain text password to verify
            hashed_password: The stored hash to check against

        Returns:
            True if password matches, False otherwise (including malformed
            or unsupported hashes)
        """
        pass
