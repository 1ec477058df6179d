from __future__ import annotations

import threading
from datetime import datetime
from typing import Iterable, Optional, Sequence

from .model import PunchEvent


class InMemoryPunchRepository:
    """Process-local punch store used by the development wiring and tests."""

    def __init__(self, punches: Iterable[PunchEvent] = ()):
        self._lock = threading.Lock()
        self._punches: list[PunchEvent] = list(punches)

    def find_in_range(
        self,
        *,
        start: datetime,
        end: datetime,
        employee_code: Optional[str] = None,
    ) -> Sequence[PunchEvent]:
        with self._lock:
            items = [
                p for p in self._punches
                if start <= p.timestamp <= end and (employee_code is None or p.employee.code == employee_code)
            ]
        items.sort(key=lambda p: p.sort_key)
        return items

    def add(self, punch: PunchEvent) -> None:
        with self._lock:
            self._punches.append(punch)
