# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class AdminSession:

    token: str
    created_at: int
    expires_at: int

    def is_valid_at(self, now: int) -> bool:
        return now < self.expires_at
