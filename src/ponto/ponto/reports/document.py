from __future__ import annotations

import io
from dataclasses import dataclass
from typing import Iterable
from xml.sax.saxutils import escape

from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.platypus import (
    BaseDocTemplate,
    Frame,
    FrameBreak,
    NextPageTemplate,
    PageTemplate,
    Paragraph,
    Spacer,
)

from ..common.datetime_utils import Period, format_date_dashed, format_long_datetime
from ..core.constants import DOCUMENT_COLUMN_GAP, DOCUMENT_EMPTY_MESSAGE, DOCUMENT_TYPE_LABELS
from ..core.exceptions import RenderError
from ..punches.model import EmployeeIdentity, PunchEvent
from ..worktime.grouping import group_by_month

MARGIN = 40
HEADER_HEIGHT = 80

# Frame ids, in reading order within a page.
HEADER_FRAME = "header"
LEFT_FRAME = "left"
RIGHT_FRAME = "right"


@dataclass(frozen=True)
class MonthSection:
    heading: str
    lines: tuple[str, ...]


@dataclass(frozen=True)
class Placement:
    page: int
    frame: str
    text: str


def punch_line(punch: PunchEvent) -> str:
    return f"• {format_long_datetime(punch.timestamp)} — {DOCUMENT_TYPE_LABELS[punch.type]}"


def period_line(period: Period) -> str:
    return f"Período: {format_date_dashed(period.start_day)} até {format_date_dashed(period.end_day)}"


def month_sections(employee: EmployeeIdentity, punches: Iterable[PunchEvent]) -> list[MonthSection]:
    sections = []
    for month in group_by_month(punches, employee_code=employee.code):
        ordered = sorted(
            (p for block in month.employees for p in block.punches),
            key=lambda p: p.sort_key,
        )
        sections.append(MonthSection(heading=f"Mês: {month.title}", lines=tuple(punch_line(p) for p in ordered)))
    return sections


class TimesheetDocTemplate(BaseDocTemplate):
    """A4 document whose body flows down the left column, then the right one.

    The first page reserves a full-width band for the title and period;
    later pages are columns only. Every paragraph drawn is recorded in
    ``placements`` with its page and frame.
    """

    def __init__(self, filename, **kwargs):
        super().__init__(filename, **kwargs)
        self.placements: list[Placement] = []

        header = Frame(
            self.leftMargin, self.bottomMargin + self.height - HEADER_HEIGHT,
            self.width, HEADER_HEIGHT,
            id=HEADER_FRAME,
        )
        self.addPageTemplates([
            PageTemplate(id="first", frames=[header, *self._columns(self.height - HEADER_HEIGHT)]),
            PageTemplate(id="later", frames=self._columns(self.height)),
        ])

    def _columns(self, height: float) -> list[Frame]:
        width = (self.width - DOCUMENT_COLUMN_GAP) / 2
        padding = dict(leftPadding=0, rightPadding=0, topPadding=0, bottomPadding=0)
        return [
            Frame(self.leftMargin, self.bottomMargin, width, height, id=LEFT_FRAME, **padding),
            Frame(self.leftMargin + width + DOCUMENT_COLUMN_GAP, self.bottomMargin, width, height,
                  id=RIGHT_FRAME, **padding),
        ]

    def afterFlowable(self, flowable):
        if isinstance(flowable, Paragraph):
            self.placements.append(Placement(page=self.page, frame=self.frame.id, text=flowable.getPlainText()))


def _story(employee: EmployeeIdentity, punches: Iterable[PunchEvent], period: Period) -> list:
    styles = getSampleStyleSheet()
    title_style = ParagraphStyle("PontoTitle", parent=styles["Title"], fontSize=18, alignment=TA_CENTER)
    period_style = ParagraphStyle("PontoPeriod", parent=styles["Normal"], fontSize=12, alignment=TA_CENTER)
    month_style = ParagraphStyle("PontoMonth", parent=styles["Heading2"], fontSize=14, keepWithNext=1)
    line_style = ParagraphStyle("PontoLine", parent=styles["BodyText"], fontSize=10, leading=12, spaceBefore=1)

    story = [
        NextPageTemplate("later"),
        Paragraph(escape(employee.name), title_style),
        Paragraph(escape(period_line(period)), period_style),
        FrameBreak(),
    ]

    sections = month_sections(employee, punches)
    if not sections:
        story.append(Paragraph(escape(DOCUMENT_EMPTY_MESSAGE), line_style))
    for section in sections:
        story.append(Paragraph(escape(section.heading), month_style))
        story.extend(Paragraph(escape(line), line_style) for line in section.lines)
        story.append(Spacer(1, 8))
    return story


def layout_employee_document(
    employee: EmployeeIdentity,
    punches: Iterable[PunchEvent],
    period: Period,
) -> tuple[bytes, list[Placement]]:
    out = io.BytesIO()
    doc = TimesheetDocTemplate(
        out,
        pagesize=A4,
        leftMargin=MARGIN, rightMargin=MARGIN, topMargin=MARGIN, bottomMargin=MARGIN,
        title=employee.name,
        author=employee.name,
    )
    try:
        doc.build(_story(employee, punches, period))
    except Exception as e:
        raise RenderError("Falha ao gerar PDF") from e
    return out.getvalue(), doc.placements


def render_employee_document(
    employee: EmployeeIdentity,
    punches: Iterable[PunchEvent],
    period: Period,
) -> bytes:
    """Single-employee timesheet: one section per month, punches in two columns."""
    content, _ = layout_employee_document(employee, punches, period)
    return content
