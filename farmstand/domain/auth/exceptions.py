# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from farmstand.shared.errors.base import DomainError, ValidationError


class InvalidCredentialsError(DomainError):
    code = "invalid_credentials"
    status = HTTPStatus.UNAUTHORIZED


class LoginRateLimitedError(DomainError):
    code = "rate_limited"
    status = HTTPStatus.TOO_MANY_REQUESTS

    def __init__(self, retry_after: int) -> None:
        super().__init__(headers={"Retry-After": str(retry_after)})
        self.retry_after = retry_after


class PasswordRequiredError(ValidationError):
    def __init__(self) -> None:
        super().__init__("password_required")


class PasswordTooShortError(ValidationError):
    def __init__(self, min_length: int) -> None:
        super().__init__("password_too_short", context={"min_length": min_length})
