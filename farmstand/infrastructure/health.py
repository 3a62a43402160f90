# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from sqlalchemy import text

from farmstand.infrastructure.db import ENGINE


async def check_database() -> bool:
    async with ENGINE.connect() as connection:
        await connection.execute(text("SELECT 1"))
    return True


__all__ = ["check_database"]
