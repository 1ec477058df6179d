from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .core.constants import DEFAULT_WORKBOOK_CREATOR
from .core.enums import PunchMode
from .punches.memory_repository import InMemoryPunchRepository
from .punches.repository import PunchRepository
from .punches.sequencer import PunchSequencer
from .punches.service import PunchService
from .reports.service import ReportService
from .worktime.calculator.segment_calculator import SegmentDurationCalculator


@dataclass(frozen=True)
class Container:
    punch_repo: PunchRepository

    punch_service: PunchService
    report_service: ReportService


def build_container(
    *,
    punch_repo: Optional[PunchRepository] = None,
    punch_mode: str = PunchMode.DETAILED.value,
    workbook_creator: str = DEFAULT_WORKBOOK_CREATOR,
) -> Container:
    punch_repo = punch_repo if punch_repo is not None else InMemoryPunchRepository()
    calculator = SegmentDurationCalculator()

    punch_service = PunchService(
        punch_repo,
        sequencer=PunchSequencer(PunchMode(punch_mode)),
        calculator=calculator,
    )
    report_service = ReportService(
        punch_repo,
        calculator=calculator,
        workbook_creator=workbook_creator,
    )

    return Container(
        punch_repo=punch_repo,
        punch_service=punch_service,
        report_service=report_service,
    )
