"""
Password hashing with bcrypt.

Passwords are reduced to a fixed-length SHA-256 digest (base64) before
bcrypt sees them, so inputs longer than bcrypt's 72-byte limit and
inputs containing NUL characters are hashed in full.
"""

import base64
import hashlib
import logging

import bcrypt

from .exceptions import MalformedHashError

logger = logging.getLogger(__name__)

DEFAULT_ROUNDS = 12


def _prepare(password: str) -> bytes:
    # Lone surrogates are valid password text
    digest = hashlib.sha256(password.encode("utf-8", "surrogatepass")).digest()
    return base64.b64encode(digest)


class BcryptPasswordHasher:
    """
    Salted, deliberately slow password hashing.

    Each call to hash() draws a fresh salt, so hashing the same password
    twice yields different digests. The cost factor is embedded in the
    digest, so verify() works for hashes made with any rounds value.
    """

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        if not 4 <= rounds <= 31:
            raise ValueError(f"bcrypt rounds must be between 4 and 31, got {rounds}")
        self.rounds = rounds

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(_prepare(password), salt).decode("ascii")

    def verify(self, password: str, digest: str) -> bool:
        """
        Check a password against a stored digest.

        Raises:
            MalformedHashError: If the digest is not a bcrypt hash
        """
        if not isinstance(digest, str) or not digest:
            raise MalformedHashError()
        prepared = _prepare(password)
        try:
            return bcrypt.checkpw(prepared, digest.encode("ascii"))
        except (ValueError, UnicodeEncodeError) as e:
            logger.debug("Rejected malformed password hash: %s", type(e).__name__)
            raise MalformedHashError() from e
