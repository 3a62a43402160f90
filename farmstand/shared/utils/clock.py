# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import time
from collections.abc import Callable

Clock = Callable[[], int]


def unix_now() -> int:
    """Current time as whole seconds since the epoch."""
    return int(time.time())


__all__ = ["Clock", "unix_now"]
