# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from sqlalchemy import Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .session import Base


class Store(Base):
    __tablename__ = "stores"
    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str | None] = mapped_column(String(128), nullable=True)
    logo_url: Mapped[str | None] = mapped_column(String(512), nullable=True)
    color_primary: Mapped[str | None] = mapped_column(String(32), nullable=True)
    color_secondary: Mapped[str | None] = mapped_column(String(32), nullable=True)
    color_accent: Mapped[str | None] = mapped_column(String(32), nullable=True)
    stripe_publishable_key: Mapped[str | None] = mapped_column(String(256), nullable=True)
    stripe_secret_key: Mapped[str | None] = mapped_column(String(256), nullable=True)
    venmo_handle: Mapped[str | None] = mapped_column(String(64), nullable=True)
    apple_pay_domain_file: Mapped[str | None] = mapped_column(Text, nullable=True)
    admin_password_hash: Mapped[str | None] = mapped_column(String(256), nullable=True)
    created_at: Mapped[int] = mapped_column(Integer, nullable=False)
    updated_at: Mapped[int] = mapped_column(Integer, nullable=False)


class LoginAttempt(Base):
    __tablename__ = "login_attempts"
    __table_args__ = (
        Index("ix_login_attempts_address_time", "client_address", "attempted_at"),
    )
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    client_address: Mapped[str] = mapped_column(String(64), nullable=False)
    attempted_at: Mapped[int] = mapped_column(Integer, nullable=False, index=True)


class AdminSession(Base):
    __tablename__ = "sessions"
    token: Mapped[str] = mapped_column(String(128), primary_key=True)
    created_at: Mapped[int] = mapped_column(Integer, nullable=False)
    expires_at: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
