# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from functools import cached_property

from farmstand.application.services.login_throttle import LoginThrottle
from farmstand.application.services.password_hashing import Pbkdf2PasswordHasher
from farmstand.application.services.session_tokens import SessionTokenService
from farmstand.application.use_cases.auth.login_admin import LoginAdminUseCase
from farmstand.application.use_cases.auth.logout_admin import LogoutAdminUseCase
from farmstand.application.use_cases.auth.verify_session import VerifySessionUseCase
from farmstand.application.use_cases.stores.get_store_settings import GetStoreSettingsUseCase
from farmstand.application.use_cases.stores.update_store_settings import (
    UpdateStoreSettingsUseCase,
)
from farmstand.infrastructure.repositories.auth.sqlalchemy_auth_repository import (
    SqlAlchemyAdminSessionRepository,
    SqlAlchemyCredentialRepository,
    SqlAlchemyLoginAttemptRepository,
)
from farmstand.infrastructure.repositories.stores.sqlalchemy_store_repository import (
    SqlAlchemyStoreSettingsRepository,
)
from farmstand.interfaces.http.controllers.auth_controller import AuthController
from farmstand.interfaces.http.controllers.misc_controller import MiscController
from farmstand.interfaces.http.controllers.settings_controller import SettingsController
from farmstand.shared.config import AppConfig, load_config


class Container:
    def __init__(self, config: AppConfig | None = None) -> None:
        self._config = config or load_config()

    @property
    def config(self) -> AppConfig:
        return self._config

    @cached_property
    def password_hasher(self) -> Pbkdf2PasswordHasher:
        return Pbkdf2PasswordHasher(
            iterations=self._config.security.password_hash_iterations
        )

    @cached_property
    def credential_repository(self) -> SqlAlchemyCredentialRepository:
        return SqlAlchemyCredentialRepository()

    @cached_property
    def login_attempt_repository(self) -> SqlAlchemyLoginAttemptRepository:
        return SqlAlchemyLoginAttemptRepository()

    @cached_property
    def admin_session_repository(self) -> SqlAlchemyAdminSessionRepository:
        return SqlAlchemyAdminSessionRepository()

    @cached_property
    def store_settings_repository(self) -> SqlAlchemyStoreSettingsRepository:
        return SqlAlchemyStoreSettingsRepository()

    @cached_property
    def login_throttle(self) -> LoginThrottle:
        return LoginThrottle(
            self.login_attempt_repository,
            max_attempts=self._config.security.login_max_attempts,
            window_seconds=self._config.security.login_window,
        )

    @cached_property
    def session_token_service(self) -> SessionTokenService:
        return SessionTokenService(
            self.admin_session_repository,
            lifetime_seconds=self._config.security.session_lifetime,
        )

    # Auth use cases

    @cached_property
    def login_admin_use_case(self) -> LoginAdminUseCase:
        return LoginAdminUseCase(
            credentials=self.credential_repository,
            throttle=self.login_throttle,
            sessions=self.session_token_service,
            password_hasher=self.password_hasher,
            min_password_length=self._config.security.password_min_length,
        )

    @cached_property
    def logout_admin_use_case(self) -> LogoutAdminUseCase:
        return LogoutAdminUseCase(sessions=self.session_token_service)

    @cached_property
    def verify_session_use_case(self) -> VerifySessionUseCase:
        return VerifySessionUseCase(sessions=self.session_token_service)

    # Store settings use cases

    @cached_property
    def get_store_settings_use_case(self) -> GetStoreSettingsUseCase:
        return GetStoreSettingsUseCase(stores=self.store_settings_repository)

    @cached_property
    def update_store_settings_use_case(self) -> UpdateStoreSettingsUseCase:
        return UpdateStoreSettingsUseCase(
            stores=self.store_settings_repository,
            credentials=self.credential_repository,
            password_hasher=self.password_hasher,
            min_password_length=self._config.security.password_min_length,
        )

    # Controllers

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            login_use_case=self.login_admin_use_case,
            logout_use_case=self.logout_admin_use_case,
            verify_use_case=self.verify_session_use_case,
            store_id=self._config.store_id,
        )

    @cached_property
    def settings_controller(self) -> SettingsController:
        return SettingsController(
            get_settings=self.get_store_settings_use_case,
            update_settings=self.update_store_settings_use_case,
            verify_session=self.verify_session_use_case,
            store_id=self._config.store_id,
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(
            metrics_enabled=self._config.observability.metrics_enabled
        )


container = Container()
