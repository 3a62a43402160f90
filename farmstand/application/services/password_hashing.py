"""Password hashing strategies."""

from __future__ import annotations

import hashlib
import hmac
import secrets

from farmstand.domain.auth.repositories import PasswordHasher

SEPARATOR = ":"
SALT_BYTES = 16
# OWASP 2023 guidance for PBKDF2-HMAC-SHA256
DEFAULT_ITERATIONS = 600_000


class Pbkdf2PasswordHasher(PasswordHasher):
    """PBKDF2-HMAC-SHA256 hasher storing credentials as ``<salt>:<derived key>``.

    Both halves are lowercase hex, so the separator never appears inside
    either of them. The iteration count is not part of the stored value:
    changing it invalidates every existing credential.
    """

    def __init__(self, iterations: int = DEFAULT_ITERATIONS) -> None:
        if iterations < 1:
            raise ValueError("iterations must be positive")
        self._iterations = iterations

    @property
    def iterations(self) -> int:
        return self._iterations

    def generate_salt(self) -> str:
        return secrets.token_hex(SALT_BYTES)

    def derive(self, password: str, salt: str) -> str:
        return hashlib.pbkdf2_hmac(
            "sha256",
            password.encode("utf-8"),
            salt.encode("utf-8"),
            self._iterations,
        ).hex()

    def hash(self, password: str) -> str:
        salt = self.generate_salt()
        return f"{salt}{SEPARATOR}{self.derive(password, salt)}"

    def verify(self, password: str, hashed: str) -> bool:
        if not hashed:
            return False
        parts = hashed.split(SEPARATOR)
        if len(parts) != 2:
            return False
        salt, expected = parts
        if not salt or not expected:
            return False
        computed = self.derive(password, salt)
        return hmac.compare_digest(
            computed.encode("utf-8"), expected.encode("utf-8")
        )
