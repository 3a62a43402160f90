# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .clock import Clock, unix_now

__all__ = ["Clock", "unix_now"]
