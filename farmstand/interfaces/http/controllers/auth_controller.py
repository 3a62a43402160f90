# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from farmstand.application.use_cases.auth.login_admin import LoginAdminUseCase
from farmstand.application.use_cases.auth.logout_admin import LogoutAdminUseCase
from farmstand.application.use_cases.auth.verify_session import VerifySessionUseCase
from farmstand.domain.auth.exceptions import InvalidCredentialsError, LoginRateLimitedError
from farmstand.infrastructure.audit import AuditAction, audit_log
from farmstand.infrastructure.observability import record_login_outcome
from farmstand.interfaces.http.auth_guard import bearer_token
from farmstand.interfaces.http.dto.auth import (
    LoginRequestDTO,
    LoginSuccessDTO,
    OkDTO,
    SessionStatusDTO,
)
from farmstand.shared.errors.validation import raise_validation_error
from farmstand.shared.logging import logger
from farmstand.shared.middleware.request_logger import client_address


class AuthController:
    def __init__(
        self,
        *,
        login_use_case: LoginAdminUseCase,
        logout_use_case: LogoutAdminUseCase,
        verify_use_case: VerifySessionUseCase,
        store_id: str,
    ) -> None:
        self._login_use_case = login_use_case
        self._logout_use_case = logout_use_case
        self._verify_use_case = verify_use_case
        self._store_id = store_id

    async def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        ip_address = client_address()

        try:
            outcome = await self._login_use_case.execute(dto.password, ip_address, self._store_id)
        except LoginRateLimitedError:
            record_login_outcome("rate_limited")
            audit_log(
                AuditAction.LOGIN_RATE_LIMITED,
                store_id=self._store_id,
                ip_address=ip_address,
                success=False,
            )
            raise
        except InvalidCredentialsError:
            record_login_outcome("failed")
            audit_log(
                AuditAction.LOGIN_FAILED,
                store_id=self._store_id,
                ip_address=ip_address,
                success=False,
            )
            raise

        action = (
            AuditAction.CREDENTIAL_BOOTSTRAPPED
            if outcome.bootstrapped
            else AuditAction.LOGIN_SUCCESS
        )
        audit_log(action, store_id=self._store_id, ip_address=ip_address, success=True)
        record_login_outcome("bootstrapped" if outcome.bootstrapped else "success")

        logger.info(f"auth.login: ok store={self._store_id} bootstrapped={outcome.bootstrapped}")
        return jsonify(LoginSuccessDTO(token=outcome.token).model_dump()), 200

    async def logout(self) -> tuple[Response, int]:
        token = bearer_token()
        await self._logout_use_case.execute(token)

        if token is not None:
            audit_log(
                AuditAction.LOGOUT,
                store_id=self._store_id,
                ip_address=client_address(),
                success=True,
            )

        logger.info("auth.logout: ok")
        return jsonify(OkDTO().model_dump()), 200

    async def verify(self) -> tuple[Response, int]:
        valid = await self._verify_use_case.execute(bearer_token())
        return jsonify(SessionStatusDTO(valid=valid).model_dump()), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/api/auth")
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/logout", view_func=self.logout, methods=["POST"])
        bp.add_url_rule("/verify", view_func=self.verify, methods=["GET"])
        return bp
