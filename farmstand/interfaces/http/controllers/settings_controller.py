# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from farmstand.application.use_cases.auth.verify_session import VerifySessionUseCase
from farmstand.application.use_cases.stores.get_store_settings import GetStoreSettingsUseCase
from farmstand.application.use_cases.stores.update_store_settings import (
    UpdateStoreSettingsUseCase,
)
from farmstand.infrastructure.audit import AuditAction, audit_log
from farmstand.interfaces.http.auth_guard import auth_required, bearer_token
from farmstand.interfaces.http.dto.auth import OkDTO
from farmstand.interfaces.http.dto.settings import UpdateSettingsRequestDTO
from farmstand.shared.errors.validation import raise_validation_error
from farmstand.shared.logging import logger
from farmstand.shared.middleware.request_logger import client_address


class SettingsController:
    def __init__(
        self,
        *,
        get_settings: GetStoreSettingsUseCase,
        update_settings: UpdateStoreSettingsUseCase,
        verify_session: VerifySessionUseCase,
        store_id: str,
    ) -> None:
        self._get_settings = get_settings
        self._update_settings = update_settings
        self._verify_session = verify_session
        self._store_id = store_id

    async def get_settings(self) -> tuple[Response, int]:
        # Admins see a few extra fields; everyone else gets the storefront view
        is_admin = await self._verify_session.execute(bearer_token())
        view = await self._get_settings.execute(self._store_id, include_admin_fields=is_admin)
        return jsonify(view), 200

    async def update_settings(self) -> tuple[Response, int]:
        try:
            dto = UpdateSettingsRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        changed = await self._update_settings.execute(self._store_id, dto.changes())

        ip_address = client_address()
        if "admin_password" in changed:
            audit_log(
                AuditAction.PASSWORD_CHANGED,
                store_id=self._store_id,
                ip_address=ip_address,
                success=True,
            )
        fields = [field for field in changed if field != "admin_password"]
        if fields:
            audit_log(
                AuditAction.SETTINGS_UPDATED,
                store_id=self._store_id,
                ip_address=ip_address,
                details={"fields": fields},
                success=True,
            )

        logger.info(f"settings.update: ok store={self._store_id} changed={len(changed)}")
        return jsonify(OkDTO().model_dump()), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("settings", __name__, url_prefix="/api")
        bp.add_url_rule(
            "/settings",
            view_func=self.get_settings,
            methods=["GET"],
            endpoint="settings_get",
        )
        bp.add_url_rule(
            "/settings",
            view_func=auth_required(self._verify_session)(self.update_settings),
            methods=["PUT"],
            endpoint="settings_set",
        )
        return bp
