"""Lightweight in-memory activity counters.

Incremented by the state operations; reset when the server restarts.
The health endpoint shows them next to the uptime.
"""
from __future__ import annotations

import time
from dataclasses import dataclass, field


@dataclass
class ActivityStats:
    started_at: float = field(default_factory=time.time)
    sessions_logged: int = 0
    sessions_updated: int = 0
    sessions_deleted: int = 0
    reports_generated: int = 0

    @property
    def uptime_seconds(self) -> int:
        return int(time.time() - self.started_at)
