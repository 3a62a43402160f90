from __future__ import annotations

import pytest
from fakes import (
    FakeClock,
    InMemoryAdminSessionRepository,
    InMemoryCredentialRepository,
    InMemoryLoginAttemptRepository,
)

from farmstand.application.services.login_throttle import LoginThrottle
from farmstand.application.services.password_hashing import Pbkdf2PasswordHasher
from farmstand.application.services.session_tokens import SessionTokenService
from farmstand.application.use_cases.auth.login_admin import LoginAdminUseCase
from farmstand.application.use_cases.auth.logout_admin import LogoutAdminUseCase
from farmstand.application.use_cases.auth.verify_session import VerifySessionUseCase
from farmstand.domain.auth.exceptions import (
    InvalidCredentialsError,
    LoginRateLimitedError,
    PasswordRequiredError,
    PasswordTooShortError,
)

STORE = "default"
IP = "203.0.113.7"


async def _initialize(
    login_use_case: LoginAdminUseCase, password: str = "longenough1"
) -> str:
    outcome = await login_use_case.execute(password, IP, STORE)
    assert outcome.bootstrapped
    return outcome.token


@pytest.mark.asyncio
async def test_first_login_with_short_password_is_rejected(
    login_use_case: LoginAdminUseCase,
    credentials: InMemoryCredentialRepository,
    attempts: InMemoryLoginAttemptRepository,
) -> None:
    with pytest.raises(PasswordTooShortError) as exc_info:
        await login_use_case.execute("short", IP, STORE)

    assert exc_info.value.context == {"min_length": 8}
    assert credentials.hashes == {}
    assert attempts.attempts == []


@pytest.mark.asyncio
async def test_first_login_sets_credential_and_issues_session(
    login_use_case: LoginAdminUseCase,
    credentials: InMemoryCredentialRepository,
    attempts: InMemoryLoginAttemptRepository,
    session_service: SessionTokenService,
    hasher: Pbkdf2PasswordHasher,
) -> None:
    outcome = await login_use_case.execute("longenough1", IP, STORE)

    assert outcome.bootstrapped is True
    assert hasher.verify("longenough1", credentials.hashes[STORE])
    assert await session_service.is_authenticated(outcome.token)
    # Setting up the credential is not a login attempt
    assert attempts.attempts == []


@pytest.mark.asyncio
async def test_missing_password_is_a_validation_error(
    login_use_case: LoginAdminUseCase, credentials: InMemoryCredentialRepository
) -> None:
    with pytest.raises(PasswordRequiredError):
        await login_use_case.execute("", IP, STORE)

    assert credentials.reads == 0


@pytest.mark.asyncio
async def test_login_after_bootstrap_verifies_password(
    login_use_case: LoginAdminUseCase,
    session_service: SessionTokenService,
) -> None:
    await _initialize(login_use_case)

    outcome = await login_use_case.execute("longenough1", IP, STORE)

    assert outcome.bootstrapped is False
    assert await session_service.is_authenticated(outcome.token)


@pytest.mark.asyncio
async def test_wrong_password_raises_and_issues_no_session(
    login_use_case: LoginAdminUseCase,
    session_repo: InMemoryAdminSessionRepository,
) -> None:
    await _initialize(login_use_case)
    before = dict(session_repo.sessions)

    with pytest.raises(InvalidCredentialsError) as exc_info:
        await login_use_case.execute("wrongpass", IP, STORE)

    assert exc_info.value.to_dict() == {"error": "invalid_credentials"}
    assert session_repo.sessions == before


@pytest.mark.asyncio
async def test_short_password_after_bootstrap_is_just_wrong(
    login_use_case: LoginAdminUseCase,
) -> None:
    await _initialize(login_use_case)

    with pytest.raises(InvalidCredentialsError):
        await login_use_case.execute("short", IP, STORE)


@pytest.mark.asyncio
async def test_attempts_recorded_for_success_and_failure(
    login_use_case: LoginAdminUseCase,
    attempts: InMemoryLoginAttemptRepository,
    clock: FakeClock,
) -> None:
    await _initialize(login_use_case)

    await login_use_case.execute("longenough1", IP, STORE)
    with pytest.raises(InvalidCredentialsError):
        await login_use_case.execute("wrongpass", IP, STORE)

    assert [(a.client_address, a.attempted_at) for a in attempts.attempts] == [
        (IP, clock.now),
        (IP, clock.now),
    ]


@pytest.mark.asyncio
async def test_rate_limit_boundary(
    login_use_case: LoginAdminUseCase,
    attempts: InMemoryLoginAttemptRepository,
) -> None:
    await _initialize(login_use_case)

    for _ in range(10):
        with pytest.raises(InvalidCredentialsError):
            await login_use_case.execute("wrongpass", IP, STORE)

    with pytest.raises(LoginRateLimitedError) as exc_info:
        await login_use_case.execute("wrongpass", IP, STORE)

    assert exc_info.value.retry_after == 900
    assert exc_info.value.headers == {"Retry-After": "900"}
    assert exc_info.value.to_dict() == {"error": "rate_limited"}
    assert len(attempts.attempts) == 10


@pytest.mark.asyncio
async def test_rate_limited_request_skips_credential_and_recording(
    login_use_case: LoginAdminUseCase,
    credentials: InMemoryCredentialRepository,
    attempts: InMemoryLoginAttemptRepository,
    clock: FakeClock,
) -> None:
    await _initialize(login_use_case)
    for _ in range(10):
        await attempts.add(IP, clock.now)
    reads_before = credentials.reads

    # Even the right password is refused while blocked
    with pytest.raises(LoginRateLimitedError):
        await login_use_case.execute("longenough1", IP, STORE)

    assert credentials.reads == reads_before
    assert len(attempts.attempts) == 10


@pytest.mark.asyncio
async def test_rate_limit_is_per_address(
    login_use_case: LoginAdminUseCase,
    attempts: InMemoryLoginAttemptRepository,
    clock: FakeClock,
) -> None:
    await _initialize(login_use_case)
    for _ in range(10):
        await attempts.add(IP, clock.now)

    outcome = await login_use_case.execute("longenough1", "198.51.100.1", STORE)

    assert outcome.token


@pytest.mark.asyncio
async def test_rate_limit_window_slides(
    login_use_case: LoginAdminUseCase,
    attempts: InMemoryLoginAttemptRepository,
    clock: FakeClock,
) -> None:
    await _initialize(login_use_case)
    for _ in range(10):
        await attempts.add(IP, clock.now)

    clock.advance(899)
    with pytest.raises(LoginRateLimitedError):
        await login_use_case.execute("longenough1", IP, STORE)

    clock.advance(1)
    outcome = await login_use_case.execute("longenough1", IP, STORE)
    assert outcome.token


@pytest.mark.asyncio
async def test_old_attempts_are_pruned(
    login_use_case: LoginAdminUseCase,
    attempts: InMemoryLoginAttemptRepository,
    clock: FakeClock,
) -> None:
    await _initialize(login_use_case)
    await attempts.add(IP, clock.now - 1801)
    await attempts.add(IP, clock.now - 1800)

    await login_use_case.execute("longenough1", IP, STORE)

    assert [a.attempted_at for a in attempts.attempts] == [clock.now - 1800, clock.now]


@pytest.mark.asyncio
async def test_pruning_failure_does_not_fail_login(
    login_use_case: LoginAdminUseCase,
    attempts: InMemoryLoginAttemptRepository,
) -> None:
    await _initialize(login_use_case)
    attempts.fail_on_delete = True

    outcome = await login_use_case.execute("longenough1", IP, STORE)

    assert outcome.token


@pytest.mark.asyncio
async def test_storage_failure_propagates(
    login_use_case: LoginAdminUseCase,
    credentials: InMemoryCredentialRepository,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    async def broken(_tenant_id: str) -> str | None:
        raise ConnectionError("database unavailable")

    monkeypatch.setattr(credentials, "get_hash", broken)

    with pytest.raises(ConnectionError):
        await login_use_case.execute("longenough1", IP, STORE)


@pytest.mark.asyncio
async def test_lost_bootstrap_race_falls_back_to_verification(
    login_use_case: LoginAdminUseCase,
    credentials: InMemoryCredentialRepository,
    attempts: InMemoryLoginAttemptRepository,
    hasher: Pbkdf2PasswordHasher,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    winner = hasher.hash("theotherone")
    original_claim = credentials.claim_initial_hash

    async def racing_claim(tenant_id: str, password_hash: str) -> bool:
        credentials.hashes[tenant_id] = winner
        return await original_claim(tenant_id, password_hash)

    monkeypatch.setattr(credentials, "claim_initial_hash", racing_claim)

    with pytest.raises(InvalidCredentialsError):
        await login_use_case.execute("longenough1", IP, STORE)

    assert credentials.hashes[STORE] == winner
    assert len(attempts.attempts) == 1


@pytest.mark.asyncio
async def test_tenants_have_separate_credentials(
    login_use_case: LoginAdminUseCase,
    credentials: InMemoryCredentialRepository,
) -> None:
    await login_use_case.execute("first-store-pw", IP, "north")
    outcome = await login_use_case.execute("second-store-pw", "198.51.100.9", "south")

    assert outcome.bootstrapped is True
    assert set(credentials.hashes) == {"north", "south"}


@pytest.mark.asyncio
async def test_end_to_end_scenario(
    login_use_case: LoginAdminUseCase,
    session_service: SessionTokenService,
    credentials: InMemoryCredentialRepository,
) -> None:
    logout = LogoutAdminUseCase(sessions=session_service)
    verify = VerifySessionUseCase(sessions=session_service)

    with pytest.raises(PasswordTooShortError):
        await login_use_case.execute("short", IP, STORE)
    assert STORE not in credentials.hashes

    first = await login_use_case.execute("longenough1", IP, STORE)
    assert STORE in credentials.hashes

    for _ in range(10):
        with pytest.raises(InvalidCredentialsError):
            await login_use_case.execute("wrongpass", IP, STORE)
    with pytest.raises(LoginRateLimitedError):
        await login_use_case.execute("wrongpass", IP, STORE)

    assert await verify.execute(first.token) is True
    await logout.execute(first.token)
    assert await verify.execute(first.token) is False
