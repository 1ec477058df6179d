from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from src.ponto.ponto.common.datetime_utils import TZ, parse_period
from src.ponto.ponto.core.enums import PunchType
from src.ponto.ponto.core.exceptions import RenderError
from src.ponto.ponto.punches.model import EmployeeIdentity, PunchEvent
from src.ponto.ponto.reports.document import (
    LEFT_FRAME,
    RIGHT_FRAME,
    TimesheetDocTemplate,
    layout_employee_document,
    month_sections,
    period_line,
    punch_line,
    render_employee_document,
)

CARLA = EmployeeIdentity(code="042", name="Carla Mendes")
OTHER = EmployeeIdentity(code="043", name="Outro")


def _p(employee, punch_type, *args) -> PunchEvent:
    return PunchEvent(employee=employee, type=punch_type, timestamp=datetime(*args, tzinfo=TZ))


def test_punch_line_uses_long_datetime_and_document_label():
    line = punch_line(_p(CARLA, PunchType.LUNCH_START, 2025, 8, 25, 12, 0, 5))

    assert line == "• 25/08/2025, 12:00:05 — SAÍDA PARA O ALMOÇO"


def test_period_line_uses_dashed_dates():
    assert period_line(parse_period("2025-08-01", "2025-09-30")) == "Período: 01-08-2025 até 30-09-2025"


def test_sections_per_month_in_order_for_one_employee():
    punches = [
        _p(CARLA, PunchType.OUT, 2025, 9, 1, 17, 0),
        _p(OTHER, PunchType.IN, 2025, 8, 5, 8, 0),
        _p(CARLA, PunchType.IN, 2025, 8, 29, 8, 0),
        _p(CARLA, PunchType.IN, 2025, 9, 1, 8, 0),
        _p(CARLA, PunchType.OUT, 2025, 8, 29, 17, 0),
    ]

    sections = month_sections(CARLA, punches)

    assert [s.heading for s in sections] == ["Mês: Agosto 2025", "Mês: Setembro 2025"]
    assert sections[0].lines == (
        "• 29/08/2025, 08:00:00 — ENTRADA",
        "• 29/08/2025, 17:00:00 — SAÍDA",
    )
    assert len(sections[1].lines) == 2


def test_render_produces_pdf_with_employee_metadata():
    punches = [_p(CARLA, PunchType.IN, 2025, 8, d, 8, 0) for d in range(1, 29)]

    content = render_employee_document(CARLA, punches, parse_period("2025-08-01", "2025-08-31"))

    assert content.startswith(b"%PDF")
    assert b"Carla Mendes" in content


def test_render_without_punches_is_still_a_document():
    content = render_employee_document(CARLA, [], parse_period("2025-08-01", "2025-08-31"))

    assert content.startswith(b"%PDF")


def test_build_failure_is_a_render_error(monkeypatch):
    def broken_build(self, flowables, **kwargs):
        raise OSError("broken pipe")

    monkeypatch.setattr(TimesheetDocTemplate, "build", broken_build)

    with pytest.raises(RenderError):
        render_employee_document(CARLA, [], parse_period("2025-08-01", "2025-08-31"))


def test_long_month_reads_left_then_right_across_pages():
    start = datetime(2025, 8, 1, 5, 0, tzinfo=TZ)
    punches = [
        PunchEvent(employee=CARLA, type=PunchType.IN, timestamp=start + timedelta(hours=5 * i))
        for i in range(140)
    ]
    expected = [punch_line(p) for p in punches]

    content, placements = layout_employee_document(CARLA, reversed(punches), parse_period("2025-08-01", "2025-08-31"))

    assert content.startswith(b"%PDF")
    lines = [pl for pl in placements if pl.text.startswith("•")]
    assert max(pl.page for pl in lines) > 1
    assert {pl.frame for pl in lines if pl.page == 1} == {LEFT_FRAME, RIGHT_FRAME}

    frame_rank = {LEFT_FRAME: 0, RIGHT_FRAME: 1}
    reading_order = sorted(lines, key=lambda pl: (pl.page, frame_rank[pl.frame]))
    assert [pl.text for pl in reading_order] == expected


def test_title_and_period_sit_above_the_columns():
    _, placements = layout_employee_document(CARLA, [], parse_period("2025-08-01", "2025-08-31"))

    assert [(pl.frame, pl.text) for pl in placements[:2]] == [
        ("header", "Carla Mendes"),
        ("header", "Período: 01-08-2025 até 31-08-2025"),
    ]
    assert placements[2].frame == LEFT_FRAME
