# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Security audit trail for the admin console.

Events are log records only; nothing here touches the database.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from farmstand.shared.logging import logger

_REDACTED = "***REDACTED***"
_SENSITIVE_KEY_PARTS = ("password", "token", "hash", "secret", "key")


class AuditAction(str, Enum):
    LOGIN_SUCCESS = "login_success"
    LOGIN_FAILED = "login_failed"
    LOGIN_RATE_LIMITED = "login_rate_limited"
    CREDENTIAL_BOOTSTRAPPED = "credential_bootstrapped"
    LOGOUT = "logout"

    PASSWORD_CHANGED = "password_changed"
    SETTINGS_UPDATED = "settings_updated"


@dataclass(frozen=True, slots=True)
class AuditEvent:
    action: AuditAction
    store_id: str | None = None
    ip_address: str | None = None
    success: bool = True
    details: Mapping[str, Any] = field(default_factory=dict)

    def redacted_details(self) -> dict[str, Any]:
        return {
            name: _REDACTED if any(part in name.lower() for part in _SENSITIVE_KEY_PARTS) else value
            for name, value in self.details.items()
        }

    def render(self) -> str:
        line = (
            f"AUDIT: {self.action.value} | store={self.store_id} | "
            f"ip={self.ip_address} | success={self.success}"
        )
        details = self.redacted_details()
        if details:
            line += f" | details={details}"
        return line


class AuditLogger:
    def record(self, event: AuditEvent) -> None:
        bound = logger.bind(audit_action=event.action.value)
        if event.success:
            bound.info(event.render())
        else:
            bound.warning(event.render())


audit = AuditLogger()


def audit_log(
    action: AuditAction,
    store_id: str | None = None,
    ip_address: str | None = None,
    details: Mapping[str, Any] | None = None,
    success: bool = True,
) -> None:
    audit.record(
        AuditEvent(
            action=action,
            store_id=store_id,
            ip_address=ip_address,
            success=success,
            details=details or {},
        )
    )


__all__ = [
    "AuditAction",
    "AuditEvent",
    "AuditLogger",
    "audit",
    "audit_log",
]
