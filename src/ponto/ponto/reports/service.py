from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..common.datetime_utils import Period, format_date_dashed
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_WORKBOOK_CREATOR, PDF_MIMETYPE, XLSX_MIMETYPE
from ..core.enums import ReportLayout
from ..core.exceptions import ValidationError
from ..punches.model import EmployeeIdentity
from ..punches.repository import PunchRepository
from ..worktime.calculator.base import DurationCalculator
from ..worktime.calculator.segment_calculator import SegmentDurationCalculator
from ..worktime.grouping import group_by_month
from .document import render_employee_document
from .tabular import render_flat_workbook, render_grouped_workbook

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReportArtifact:
    filename: str
    mimetype: str
    content: bytes


def workbook_filename(period: Period) -> str:
    return (
        f"Folha_de_Ponto_{format_date_dashed(period.start_day)}"
        f"_a_{format_date_dashed(period.end_day)}.xlsx"
    )


def document_filename(employee: EmployeeIdentity) -> str:
    return f"Folha de Ponto - {employee.name}.pdf"


class ReportService:
    def __init__(
        self,
        punches: PunchRepository,
        *,
        calculator: Optional[DurationCalculator] = None,
        workbook_creator: str = DEFAULT_WORKBOOK_CREATOR,
    ):
        self._punches = punches
        self._calculator = calculator or SegmentDurationCalculator()
        self._creator = workbook_creator

    def build_timesheet_workbook(self, period: Period, *, layout: str = ReportLayout.GROUPED.value) -> ReportArtifact:
        try:
            chosen = ReportLayout(layout)
        except ValueError as e:
            raise ValidationError(f"Layout de relatório desconhecido: {layout}") from e

        punches = list(self._punches.find_in_range(start=period.start, end=period.end))
        if chosen is ReportLayout.FLAT:
            content = render_flat_workbook(punches)
        else:
            months = group_by_month(punches, calculator=self._calculator)
            content = render_grouped_workbook(months, creator=self._creator)

        logger.info(
            "Built %s workbook: %d punches from %s to %s",
            chosen.value, len(punches), period.start_day.isoformat(), period.end_day.isoformat(),
        )
        return ReportArtifact(filename=workbook_filename(period), mimetype=XLSX_MIMETYPE, content=content)

    def build_employee_document(
        self,
        employee_code: str,
        period: Period,
        *,
        employee_name: Optional[str] = None,
    ) -> ReportArtifact:
        code = require_non_empty(employee_code, "Código do funcionário")
        punches = list(self._punches.find_in_range(start=period.start, end=period.end, employee_code=code))

        # Stored punches carry the current display name; fall back to the caller's.
        name = punches[0].employee.name if punches else (employee_name or code)
        employee = EmployeeIdentity(code=code, name=name)

        content = render_employee_document(employee, punches, period)
        logger.info("Built document for employee %s: %d punches", code, len(punches))
        return ReportArtifact(filename=document_filename(employee), mimetype=PDF_MIMETYPE, content=content)
