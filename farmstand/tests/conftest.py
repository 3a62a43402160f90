from __future__ import annotations

import os
import tempfile

_TMP = tempfile.mkdtemp(prefix="farmstand-tests-")
os.environ.setdefault("DATABASE_URL", f"sqlite+aiosqlite:///{_TMP}/farmstand.db")
os.environ.setdefault("LOG_FILE", os.path.join(_TMP, "farmstand.log"))
os.environ.setdefault("PASSWORD_HASH_ITERATIONS", "1000")
os.environ.pop("ALLOWED_ORIGIN", None)

import pytest  # noqa: E402
from fakes import (  # noqa: E402
    FakeClock,
    InMemoryAdminSessionRepository,
    InMemoryCredentialRepository,
    InMemoryLoginAttemptRepository,
    InMemoryStoreSettingsRepository,
)

from farmstand.application.services.login_throttle import LoginThrottle  # noqa: E402
from farmstand.application.services.password_hashing import Pbkdf2PasswordHasher  # noqa: E402
from farmstand.application.services.session_tokens import SessionTokenService  # noqa: E402
from farmstand.application.use_cases.auth.login_admin import LoginAdminUseCase  # noqa: E402


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def hasher() -> Pbkdf2PasswordHasher:
    return Pbkdf2PasswordHasher(iterations=1000)


@pytest.fixture()
def credentials() -> InMemoryCredentialRepository:
    return InMemoryCredentialRepository()


@pytest.fixture()
def attempts() -> InMemoryLoginAttemptRepository:
    return InMemoryLoginAttemptRepository()


@pytest.fixture()
def session_repo() -> InMemoryAdminSessionRepository:
    return InMemoryAdminSessionRepository()


@pytest.fixture()
def stores() -> InMemoryStoreSettingsRepository:
    return InMemoryStoreSettingsRepository()


@pytest.fixture()
def session_service(
    session_repo: InMemoryAdminSessionRepository, clock: FakeClock
) -> SessionTokenService:
    return SessionTokenService(session_repo, clock=clock)


@pytest.fixture()
def login_use_case(
    credentials: InMemoryCredentialRepository,
    attempts: InMemoryLoginAttemptRepository,
    session_service: SessionTokenService,
    hasher: Pbkdf2PasswordHasher,
    clock: FakeClock,
) -> LoginAdminUseCase:
    return LoginAdminUseCase(
        credentials=credentials,
        throttle=LoginThrottle(attempts, max_attempts=10, window_seconds=900),
        sessions=session_service,
        password_hasher=hasher,
        clock=clock,
    )
