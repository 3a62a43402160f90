# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError

from farmstand.domain.auth.entities import AdminSession as DomainAdminSession
from farmstand.domain.auth.repositories import (
    AdminSessionRepository,
    CredentialRepository,
    LoginAttemptRepository,
)
from farmstand.infrastructure.db.models import AdminSession, LoginAttempt, Store
from farmstand.infrastructure.db.session import session_scope
from farmstand.shared.utils.clock import unix_now


class SqlAlchemyCredentialRepository(CredentialRepository):
    async def get_hash(self, tenant_id: str) -> str | None:
        async with session_scope() as session:
            return await session.scalar(
                select(Store.admin_password_hash).where(Store.id == tenant_id)
            )

    async def set_hash(self, tenant_id: str, password_hash: str) -> None:
        now = unix_now()
        async with session_scope() as session:
            row = await session.get(Store, tenant_id)
            if row is None:
                session.add(
                    Store(
                        id=tenant_id,
                        admin_password_hash=password_hash,
                        created_at=now,
                        updated_at=now,
                    )
                )
                return
            row.admin_password_hash = password_hash
            row.updated_at = now

    async def claim_initial_hash(self, tenant_id: str, password_hash: str) -> bool:
        now = unix_now()
        async with session_scope() as session:
            result = await session.execute(
                update(Store)
                .where(Store.id == tenant_id, Store.admin_password_hash.is_(None))
                .values(admin_password_hash=password_hash, updated_at=now)
            )
            if result.rowcount:
                return True

        # No row at all yet: the primary key lets only one concurrent insert through
        try:
            async with session_scope() as session:
                session.add(
                    Store(
                        id=tenant_id,
                        admin_password_hash=password_hash,
                        created_at=now,
                        updated_at=now,
                    )
                )
        except IntegrityError:
            return False
        return True


class SqlAlchemyLoginAttemptRepository(LoginAttemptRepository):
    async def count_since(self, client_address: str, since: int) -> int:
        async with session_scope() as session:
            count = await session.scalar(
                select(func.count())
                .select_from(LoginAttempt)
                .where(
                    LoginAttempt.client_address == client_address,
                    LoginAttempt.attempted_at > since,
                )
            )
            return int(count or 0)

    async def add(self, client_address: str, attempted_at: int) -> None:
        async with session_scope() as session:
            session.add(LoginAttempt(client_address=client_address, attempted_at=attempted_at))

    async def delete_before(self, timestamp: int) -> None:
        async with session_scope() as session:
            await session.execute(
                delete(LoginAttempt).where(LoginAttempt.attempted_at < timestamp)
            )


def _to_entity(row: AdminSession) -> DomainAdminSession:
    return DomainAdminSession(
        token=row.token, created_at=row.created_at, expires_at=row.expires_at
    )


class SqlAlchemyAdminSessionRepository(AdminSessionRepository):
    async def add(self, session: DomainAdminSession) -> None:
        async with session_scope() as db:
            db.add(
                AdminSession(
                    token=session.token,
                    created_at=session.created_at,
                    expires_at=session.expires_at,
                )
            )

    async def exists_valid(self, token: str, now: int) -> bool:
        async with session_scope() as session:
            row = await session.get(AdminSession, token)
            return row is not None and _to_entity(row).is_valid_at(now)

    async def delete(self, token: str) -> None:
        async with session_scope() as session:
            await session.execute(delete(AdminSession).where(AdminSession.token == token))
