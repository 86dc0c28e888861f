"""Password hasher implementation using pwdlib.

Stored subject passwords come in two flavours: bcrypt hashes written by the
existing admin tooling, and Argon2id hashes for anything hashed here. pwdlib
picks the right hasher from the hash prefix, so login works for both.

Dependency flow:
    AuthService (application) → IPasswordHasher (domain) ← PwdlibPasswordHasher (infrastructure)
"""

import logging

from pwdlib import PasswordHash
from pwdlib.exceptions import UnknownHashError
from pwdlib.hashers.argon2 import Argon2Hasher
from pwdlib.hashers.bcrypt import BcryptHasher

from app.domain.services.password_hasher import IPasswordHasher

logger = logging.getLogger(__name__)


class PwdlibPasswordHasher(IPasswordHasher):
    """
    Production password hasher: Argon2id for new hashes, bcrypt accepted.

    The first hasher in the tuple is used by :meth:`hash`; every hasher is
    tried by :meth:`verify`.

    Usage:
        hasher = PwdlibPasswordHasher()

        hashed = hasher.hash("user_password_123")
        # Returns: "$argon2id$v=19$m=65536,t=3,p=4$<salt>$<hash>"

        hasher.verify("user_password_123", hashed)           # True
        hasher.verify("user_password_123", "$2b$10$...")     # bcrypt, also checked
    """

    def __init__(self):
        self._password_hash = PasswordHash((Argon2Hasher(), BcryptHasher()))

    def hash(self, plain_password: str) -> str:
        """
        Hash a plain text password using Argon2id.

        Each call generates a unique salt, so hashing the same password
        twice produces different hashes.
        """
        return self._password_hash.hash(plain_password)

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        """
        Verify a plain text password against an Argon2 or bcrypt hash.

        Uses constant-time comparison. Unknown or malformed hashes verify as
        False instead of raising, so login never reveals why it failed.
        """
        try:
            return self._password_hash.verify(plain_password, hashed_password)
        except UnknownHashError:
            logger.warning("Stored password hash uses an unsupported format")
            return False
        except ValueError:
            return False
