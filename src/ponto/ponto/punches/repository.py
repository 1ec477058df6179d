from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import PunchEvent


class PunchRepository(Protocol):
    def find_in_range(
        self,
        *,
        start: datetime,
        end: datetime,
        employee_code: Optional[str] = None,
    ) -> Sequence[PunchEvent]:
        """Punches with start <= timestamp <= end, optionally for one employee."""

        raise NotImplementedError

    def add(self, punch: PunchEvent) -> None:
        """Persist one punch. Callers serialize count-then-add within a process."""

        raise NotImplementedError
