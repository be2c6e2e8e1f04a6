"""
NoteDrawer Backend — Password Hashing
======================================

What:  One-way salted password hashing with bcrypt.
How:   `hash`/`verify` do the CPU-bound work; `hash_async`/`verify_async`
       run it in Starlette's threadpool so a login never blocks the event
       loop.

bcrypt only considers the first 72 bytes of a password. Inputs are cut to
that length explicitly, since recent bcrypt releases reject longer values.
"""

import logging

import bcrypt
from starlette.concurrency import run_in_threadpool

logger = logging.getLogger(__name__)

BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


class PasswordHasher:
    """bcrypt hasher with a configurable cost factor."""

    def __init__(self, rounds: int = 10):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        return bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=self.rounds)).decode("ascii")

    def verify(self, password_hash: str, password: str) -> bool:
        """True if `password` matches `password_hash`; malformed hashes never match."""
        try:
            return bcrypt.checkpw(_encode(password), password_hash.encode("ascii"))
        except ValueError:
            logger.warning("Stored password hash is not a valid bcrypt hash")
            return False

    async def hash_async(self, password: str) -> str:
        return await run_in_threadpool(self.hash, password)

    async def verify_async(self, password_hash: str, password: str) -> bool:
        return await run_in_threadpool(self.verify, password_hash, password)
