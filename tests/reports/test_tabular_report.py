from __future__ import annotations

import io
from datetime import datetime, timedelta

import openpyxl
import pytest

from src.ponto.ponto.common.datetime_utils import TZ, format_duration
from src.ponto.ponto.core.enums import PunchType
from src.ponto.ponto.core.exceptions import RenderError
from src.ponto.ponto.punches.model import EmployeeIdentity, PunchEvent
from src.ponto.ponto.reports import tabular
from src.ponto.ponto.reports.tabular import render_flat_workbook, render_grouped_workbook
from src.ponto.ponto.worktime.grouping import group_by_month

ANA = EmployeeIdentity(code="010", name="Ana Souza")
BRUNO = EmployeeIdentity(code="007", name="Bruno Lima")


def _p(employee, punch_type, *args, **kwargs) -> PunchEvent:
    return PunchEvent(employee=employee, type=punch_type, timestamp=datetime(*args, tzinfo=TZ), **kwargs)


def _load(content: bytes):
    return openpyxl.load_workbook(io.BytesIO(content))


@pytest.fixture
def punches():
    return [
        # Bruno first on purpose: sheets must still list Ana first
        _p(BRUNO, PunchType.IN, 2025, 8, 1, 9, 0),
        _p(ANA, PunchType.IN, 2025, 8, 1, 8, 0),
        _p(ANA, PunchType.LUNCH_START, 2025, 8, 1, 12, 0),
        _p(ANA, PunchType.LUNCH_END, 2025, 8, 1, 13, 0),
        _p(ANA, PunchType.OUT, 2025, 8, 1, 17, 0),
        _p(ANA, PunchType.IN, 2025, 8, 4, 8, 0),
        _p(ANA, PunchType.OUT, 2025, 8, 4, 17, 0),
        _p(BRUNO, PunchType.IN, 2025, 9, 1, 7, 45),
        _p(BRUNO, PunchType.OUT, 2025, 9, 1, 16, 15),
        _p(ANA, PunchType.IN, 2025, 9, 2, 8, 0),
        _p(ANA, PunchType.OUT, 2025, 9, 2, 12, 0),
    ]


def test_empty_period_gets_single_informational_sheet():
    wb = _load(render_grouped_workbook([]))

    assert wb.sheetnames == ["Sem Registros"]
    assert wb["Sem Registros"]["A1"].value == "Não há registros de ponto no período informado."


def test_one_sheet_per_month_with_alphabetical_employee_blocks(punches):
    wb = _load(render_grouped_workbook(group_by_month(punches)))

    assert wb.sheetnames == ["Agosto 2025", "Setembro 2025"]
    for ws in wb.worksheets:
        codes = [c.value for c in ws["A"] if isinstance(c.value, str) and c.value.startswith("Funcionário (Código)")]
        assert codes == ["Funcionário (Código): 010", "Funcionário (Código): 007"]


def test_employee_block_layout(punches):
    ws = _load(render_grouped_workbook(group_by_month(punches)))["Agosto 2025"]

    assert ws["A1"].value == "Funcionário (Código): 010"
    assert ws["A2"].value == "Funcionário (Nome): Ana Souza"
    assert ws["A1"].font.bold and ws["A2"].font.bold
    merged = {str(r) for r in ws.merged_cells.ranges}
    assert {"A1:F1", "A2:F2"} <= merged
    assert not ws["A3"].value

    header = [c.value for c in ws[4]]
    assert header == ["Data", "Entrada", "Saída p/ Almoço", "Retorno do Almoço", "Saída", "Total"]
    assert all(c.font.bold for c in ws[4])

    assert [c.value for c in ws[5]] == ["01/08/2025", "08:00", "12:00", "13:00", "17:00", "08:00"]
    day2 = [c.value or "" for c in ws[6]]
    assert day2 == ["04/08/2025", "08:00", "", "", "17:00", "09:00"]

    assert ws["F7"].value == "Total de Horas: 17:00 hs"
    assert ws["F7"].font.bold
    assert ws["F7"].alignment.horizontal == "right"
    assert not ws["A8"].value
    assert ws["A9"].value == "Funcionário (Código): 007"


def test_column_widths_are_fixed(punches):
    ws = _load(render_grouped_workbook(group_by_month(punches))).worksheets[0]

    widths = [ws.column_dimensions[letter].width for letter in "ABCDEF"]
    assert widths == [14, 12, 16, 20, 12, 16]


def test_summary_row_matches_sum_of_daily_totals(punches):
    months = group_by_month(punches)
    wb = _load(render_grouped_workbook(months))

    for month in months:
        ws = wb[month.title]
        summaries = [c.value for c in ws["F"] if isinstance(c.value, str) and c.value.startswith("Total de Horas")]
        expected = [f"Total de Horas: {format_duration(sum((d.worked for d in e.days), timedelta(0)))} hs" for e in month.employees]
        assert summaries == expected


def test_sheet_title_is_truncated():
    month = group_by_month([_p(ANA, PunchType.IN, 2025, 8, 1, 8)])[0]

    assert len(tabular.sheet_title(month)) <= 31
    assert tabular.sheet_title(month) == "Agosto 2025"


def test_workbook_creator_is_recorded(punches):
    wb = _load(render_grouped_workbook(group_by_month(punches), creator="Grupo Locar"))

    assert wb.properties.creator == "Grupo Locar"


def test_flat_layout_one_row_per_punch(punches):
    ws = _load(render_flat_workbook(punches))["Registros"]

    assert [c.value for c in ws[1]] == ["Código", "Funcionário", "Data", "Hora", "Tipo"]
    assert all(c.font.bold for c in ws[1])
    assert ws.freeze_panes == "A2"
    assert ws.max_row == 1 + len(punches)

    assert [c.value for c in ws[2]] == ["010", "Ana Souza", "01/08/2025", "08:00:00", "Entrada"]
    names = [ws.cell(row=r, column=2).value for r in range(2, ws.max_row + 1)]
    assert names == ["Ana Souza"] * 8 + ["Bruno Lima"] * 3


def test_flat_layout_adds_location_columns_when_present():
    punches = [
        _p(ANA, PunchType.IN, 2025, 8, 1, 8, source="mobile", latitude=-23.55, longitude=-46.63),
        _p(ANA, PunchType.OUT, 2025, 8, 1, 17),
    ]

    ws = _load(render_flat_workbook(punches))["Registros"]

    assert [c.value for c in ws[1]][-3:] == ["Origem", "Latitude", "Longitude"]
    assert [c.value for c in ws[2]][-3:] == ["mobile", -23.55, -46.63]


def test_flat_layout_orders_homonyms_by_code_then_time():
    twin = EmployeeIdentity(code="011", name="Ana Souza")
    punches = [
        _p(twin, PunchType.OUT, 2025, 8, 1, 17, 0),
        _p(twin, PunchType.IN, 2025, 8, 1, 8, 0),
        _p(ANA, PunchType.OUT, 2025, 8, 2, 17, 0),
        _p(ANA, PunchType.IN, 2025, 8, 2, 8, 0),
    ]

    ws = _load(render_flat_workbook(punches))["Registros"]

    rows = [[c.value for c in ws[r]][:4] for r in range(2, ws.max_row + 1)]
    assert rows == [
        ["010", "Ana Souza", "02/08/2025", "08:00:00"],
        ["010", "Ana Souza", "02/08/2025", "17:00:00"],
        ["011", "Ana Souza", "01/08/2025", "08:00:00"],
        ["011", "Ana Souza", "01/08/2025", "17:00:00"],
    ]


def test_flat_layout_empty_period_gets_informational_sheet():
    wb = _load(render_flat_workbook([]))

    assert wb.sheetnames == ["Sem Registros"]
    ws = wb["Sem Registros"]
    assert ws["A1"].value == "Não há registros de ponto no período informado."
    assert ws.max_row == 1


def test_serialization_failure_is_a_render_error(monkeypatch, punches):
    def broken_save(self, filename):
        raise OSError("disk full")

    monkeypatch.setattr(openpyxl.Workbook, "save", broken_save)

    with pytest.raises(RenderError):
        render_grouped_workbook(group_by_month(punches))
