from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional

from ..common.datetime_utils import civil_day, day_bounds, now_local, to_civil
from ..common.validators import require_non_empty
from ..worktime.calculator.base import DurationCalculator
from ..worktime.calculator.segment_calculator import SegmentDurationCalculator
from .model import EmployeeIdentity, PunchEvent
from .repository import PunchRepository
from .sequencer import PunchSequencer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DiaryEntry:
    day: date
    total: timedelta
    punches: tuple[PunchEvent, ...]


class PunchService:
    def __init__(
        self,
        punches: PunchRepository,
        *,
        sequencer: Optional[PunchSequencer] = None,
        calculator: Optional[DurationCalculator] = None,
    ):
        self._punches = punches
        self._sequencer = sequencer or PunchSequencer()
        self._calculator = calculator or SegmentDurationCalculator()
        # Held across count-then-add. Stores shared between processes must
        # enforce one punch per (employee, day, type) themselves.
        self._register_lock = threading.Lock()

    def _punches_on(self, employee_code: str, day: date) -> list[PunchEvent]:
        start, end = day_bounds(day)
        items = list(self._punches.find_in_range(start=start, end=end, employee_code=employee_code))
        items.sort(key=lambda p: p.sort_key)
        return items

    def register(self, employee: EmployeeIdentity, *, now: Optional[datetime] = None) -> PunchEvent:
        """Register the next punch of the employee's civil day.

        Raises DayExhaustedError when the sequence is already complete; the
        caller decides how to present it.
        """
        code = require_non_empty(employee.code, "Código do funcionário")
        now = to_civil(now) if now else now_local()

        with self._register_lock:
            today = self._punches_on(code, civil_day(now))
            punch_type = self._sequencer.next_type(len(today))

            punch = PunchEvent(employee=employee, type=punch_type, timestamp=now)
            self._punches.add(punch)
        logger.info("Registered %s for employee %s at %s", punch_type.value, code, now.isoformat())
        return punch

    def get_diary(self, employee_code: str, day: date) -> DiaryEntry:
        code = require_non_empty(employee_code, "Código do funcionário")
        punches = self._punches_on(code, day)
        return DiaryEntry(
            day=day,
            total=self._calculator.worked_duration(punches),
            punches=tuple(punches),
        )
