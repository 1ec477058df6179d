from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Iterable

from ...punches.model import PunchEvent


class DurationCalculator(ABC):
    """Calculator interface (Strategy Pattern for worked time)."""

    @abstractmethod
    def worked_duration(self, punches: Iterable[PunchEvent]) -> timedelta:
        """Worked time of one employee on one civil day, never negative."""

        raise NotImplementedError
