"""Password Hasher — salted, adaptive one-way hashing with bcrypt.

Invariants:
    - Every hash() call draws a fresh salt, so equal plaintexts give different digests
    - The salt and cost factor are embedded in the digest (verify needs nothing else)
    - verify() never raises on a malformed digest; it returns False

Design Decisions:
    - Plaintext pre-hashed with SHA-256 and base64-encoded before bcrypt: bcrypt
      only reads 72 bytes and rejects NUL bytes, base64 output has neither problem
    - Cost factor injected (Settings.bcrypt_rounds) so tests can run at the minimum
"""

import base64
import hashlib

import bcrypt

MIN_ROUNDS = 4
MAX_ROUNDS = 31
DEFAULT_ROUNDS = 10


def _prehash(plaintext: str) -> bytes:
    digest = hashlib.sha256(plaintext.encode("utf-8")).digest()
    return base64.b64encode(digest)


class PasswordHasher:
    """bcrypt wrapper with a configurable work factor."""

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        if not MIN_ROUNDS <= rounds <= MAX_ROUNDS:
            raise ValueError(
                f"bcrypt rounds must be between {MIN_ROUNDS} and {MAX_ROUNDS}",
            )
        self.rounds = rounds

    def hash(self, plaintext: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(_prehash(plaintext), salt).decode("ascii")

    def verify(self, plaintext: str, digest: str) -> bool:
        if not digest:
            return False
        try:
            return bcrypt.checkpw(_prehash(plaintext), digest.encode("ascii"))
        except (ValueError, UnicodeEncodeError):
            return False
