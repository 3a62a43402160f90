# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import AdminSession
from .exceptions import (
    InvalidCredentialsError,
    LoginRateLimitedError,
    PasswordRequiredError,
    PasswordTooShortError,
)
from .repositories import (
    AdminSessionRepository,
    CredentialRepository,
    LoginAttemptRepository,
    PasswordHasher,
)

__all__ = [
    "AdminSession",
    "AdminSessionRepository",
    "CredentialRepository",
    "InvalidCredentialsError",
    "LoginAttemptRepository",
    "LoginRateLimitedError",
    "PasswordHasher",
    "PasswordRequiredError",
    "PasswordTooShortError",
]
