from __future__ import annotations

from datetime import datetime, timedelta
from typing import Iterable, Optional, Sequence

from ...core.enums import PunchType
from ...punches.model import PunchEvent
from .base import DurationCalculator

ZERO = timedelta(0)


def _first_after(
    punches: Sequence[PunchEvent],
    punch_type: PunchType,
    anchor: Optional[datetime] = None,
) -> Optional[PunchEvent]:
    for p in punches:
        if p.type == punch_type and (anchor is None or p.timestamp > anchor):
            return p
    return None


class SegmentDurationCalculator(DurationCalculator):
    """Standard rule.

    - Full day: (LUNCH_START - IN) + (OUT - LUNCH_END), each segment floored at 0.
    - Otherwise: OUT - IN, using the first OUT after the first IN.
    - Anything else counts as zero.

    Only the first complete pattern of the day is credited; extra pairs
    (e.g. a re-punch after OUT) are ignored.
    """

    def worked_duration(self, punches: Iterable[PunchEvent]) -> timedelta:
        ordered = sorted(punches, key=lambda p: p.sort_key)
        if not ordered:
            return ZERO

        detailed = self._detailed(ordered)
        if detailed > ZERO:
            return detailed

        first_in = _first_after(ordered, PunchType.IN)
        if first_in is None:
            return ZERO
        first_out = _first_after(ordered, PunchType.OUT, first_in.timestamp)
        if first_out is None:
            return ZERO
        return max(first_out.timestamp - first_in.timestamp, ZERO)

    def _detailed(self, ordered: Sequence[PunchEvent]) -> timedelta:
        first_in = _first_after(ordered, PunchType.IN)
        if first_in is None:
            return ZERO
        lunch_start = _first_after(ordered, PunchType.LUNCH_START, first_in.timestamp)
        if lunch_start is None:
            return ZERO
        lunch_end = _first_after(ordered, PunchType.LUNCH_END, lunch_start.timestamp)
        if lunch_end is None:
            return ZERO
        first_out = _first_after(ordered, PunchType.OUT, lunch_end.timestamp)
        if first_out is None:
            return ZERO

        morning = max(lunch_start.timestamp - first_in.timestamp, ZERO)
        afternoon = max(first_out.timestamp - lunch_end.timestamp, ZERO)
        return morning + afternoon
