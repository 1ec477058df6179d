from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Optional

from ..common.datetime_utils import civil_day, civil_month
from ..common.validators import collation_key
from ..core.constants import MONTH_NAMES
from ..core.enums import PunchType
from ..punches.model import EmployeeIdentity, PunchEvent
from .calculator.base import DurationCalculator
from .calculator.segment_calculator import SegmentDurationCalculator


@dataclass(frozen=True)
class DayBucket:
    day: date
    punches: tuple[PunchEvent, ...]
    worked: timedelta

    def first_of(self, punch_type: PunchType) -> Optional[PunchEvent]:
        for p in self.punches:
            if p.type == punch_type:
                return p
        return None


@dataclass(frozen=True)
class EmployeeMonth:
    employee: EmployeeIdentity
    days: tuple[DayBucket, ...]

    @property
    def total(self) -> timedelta:
        return sum((d.worked for d in self.days), timedelta(0))

    @property
    def punches(self) -> tuple[PunchEvent, ...]:
        return tuple(p for d in self.days for p in d.punches)


@dataclass(frozen=True)
class MonthGroup:
    year: int
    month: int
    employees: tuple[EmployeeMonth, ...]

    @property
    def month_name(self) -> str:
        return MONTH_NAMES[self.month - 1]

    @property
    def title(self) -> str:
        return f"{self.month_name} {self.year}"


def employee_sort_key(employee: EmployeeIdentity) -> tuple:
    return collation_key(employee.name), employee.code


def group_by_month(
    punches: Iterable[PunchEvent],
    *,
    calculator: Optional[DurationCalculator] = None,
    employee_code: Optional[str] = None,
) -> list[MonthGroup]:
    """Bucket punches into month -> employee -> civil day.

    Output order is fixed by explicit sorts (months, then collated employee
    name and code, then day, then timestamp/type), so the result does not
    depend on the order of the input.
    """
    calculator = calculator or SegmentDurationCalculator()

    buckets: dict[tuple[int, int], dict[EmployeeIdentity, dict[date, list[PunchEvent]]]] = {}
    for p in punches:
        if employee_code is not None and p.employee.code != employee_code:
            continue
        by_employee = buckets.setdefault(civil_month(p.timestamp), {})
        by_day = by_employee.setdefault(p.employee, {})
        by_day.setdefault(civil_day(p.timestamp), []).append(p)

    months: list[MonthGroup] = []
    for (year, month) in sorted(buckets):
        by_employee = buckets[(year, month)]
        employees = []
        for employee in sorted(by_employee, key=employee_sort_key):
            by_day = by_employee[employee]
            days = []
            for day in sorted(by_day):
                ordered = tuple(sorted(by_day[day], key=lambda p: p.sort_key))
                days.append(DayBucket(day=day, punches=ordered, worked=calculator.worked_duration(ordered)))
            employees.append(EmployeeMonth(employee=employee, days=tuple(days)))
        months.append(MonthGroup(year=year, month=month, employees=tuple(employees)))
    return months
