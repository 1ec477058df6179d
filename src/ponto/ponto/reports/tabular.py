from __future__ import annotations

import io
from datetime import datetime
from typing import Iterable, Sequence

import openpyxl
import pandas as pd
from openpyxl.styles import Alignment, Font
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from ..common.datetime_utils import format_date, format_duration, format_hhmm, format_hhmmss
from ..common.validators import collation_key
from ..core.constants import (
    DEFAULT_WORKBOOK_CREATOR,
    EMPTY_SHEET_MESSAGE,
    EMPTY_SHEET_TITLE,
    FLAT_SHEET_TITLE,
    GROUPED_COLUMNS,
    SHEET_TITLE_MAX_LENGTH,
    TYPE_LABELS,
)
from ..core.enums import PunchType
from ..core.exceptions import RenderError
from ..punches.model import PunchEvent
from ..worktime.grouping import DayBucket, EmployeeMonth, MonthGroup

BOLD = Font(bold=True)
N_COLUMNS = len(GROUPED_COLUMNS)

DAY_COLUMNS = (PunchType.IN, PunchType.LUNCH_START, PunchType.LUNCH_END, PunchType.OUT)


def sheet_title(month: MonthGroup) -> str:
    return month.title[:SHEET_TITLE_MAX_LENGTH]


def total_label(employee: EmployeeMonth) -> str:
    return f"Total de Horas: {format_duration(employee.total)} hs"


def _day_row(day: DayBucket) -> list[str]:
    row = [format_date(day.day)]
    for punch_type in DAY_COLUMNS:
        first = day.first_of(punch_type)
        row.append(format_hhmm(first.timestamp) if first else "")
    row.append(format_duration(day.worked))
    return row


def _merged_bold_row(ws: Worksheet, text: str) -> None:
    ws.append([text])
    r = ws.max_row
    ws.merge_cells(start_row=r, start_column=1, end_row=r, end_column=N_COLUMNS)
    ws.cell(row=r, column=1).font = BOLD


def _write_employee_block(ws: Worksheet, employee: EmployeeMonth) -> None:
    _merged_bold_row(ws, f"Funcionário (Código): {employee.employee.code}")
    _merged_bold_row(ws, f"Funcionário (Nome): {employee.employee.name}")
    ws.append([""] * N_COLUMNS)

    ws.append([header for header, _ in GROUPED_COLUMNS])
    for cell in ws[ws.max_row]:
        cell.font = BOLD

    for day in employee.days:
        ws.append(_day_row(day))

    ws.append([""] * (N_COLUMNS - 1) + [total_label(employee)])
    for cell in ws[ws.max_row]:
        cell.font = BOLD
    ws.cell(row=ws.max_row, column=N_COLUMNS).alignment = Alignment(horizontal="right")

    ws.append([""] * N_COLUMNS)


def _write_month_sheet(ws: Worksheet, month: MonthGroup) -> None:
    ws.title = sheet_title(month)
    for idx, (_, width) in enumerate(GROUPED_COLUMNS, start=1):
        ws.column_dimensions[get_column_letter(idx)].width = width

    for employee in month.employees:
        _write_employee_block(ws, employee)


def _save(wb: openpyxl.Workbook) -> bytes:
    out = io.BytesIO()
    try:
        wb.save(out)
    except Exception as e:
        raise RenderError("Falha ao gerar planilha") from e
    return out.getvalue()


def render_grouped_workbook(months: Sequence[MonthGroup], *, creator: str = DEFAULT_WORKBOOK_CREATOR) -> bytes:
    """One sheet per month with one block per employee.

    With no months at all, the workbook holds a single informational sheet
    instead of an empty grouped layout.
    """
    wb = openpyxl.Workbook()
    wb.properties.creator = creator
    wb.properties.created = datetime.now()

    first = wb.active
    if not months:
        first.title = EMPTY_SHEET_TITLE
        first.append([EMPTY_SHEET_MESSAGE])
        return _save(wb)

    _write_month_sheet(first, months[0])
    for month in months[1:]:
        _write_month_sheet(wb.create_sheet(), month)
    return _save(wb)


FLAT_COLUMNS = ["Código", "Funcionário", "Data", "Hora", "Tipo"]
LOCATION_COLUMNS = ["Origem", "Latitude", "Longitude"]


def _flat_sort_key(p: PunchEvent) -> tuple:
    return collation_key(p.employee.name), p.employee.code, p.sort_key


def flat_frame(punches: Iterable[PunchEvent]) -> pd.DataFrame:
    """One row per punch, sorted by employee name, code and time."""
    ordered = sorted(punches, key=_flat_sort_key)
    with_location = any(p.has_location for p in ordered)
    columns = FLAT_COLUMNS + (LOCATION_COLUMNS if with_location else [])

    data = []
    for p in ordered:
        row = {
            "Código": p.employee.code,
            "Funcionário": p.employee.name,
            "Data": format_date(p.timestamp),
            "Hora": format_hhmmss(p.timestamp),
            "Tipo": TYPE_LABELS[p.type],
        }
        if with_location:
            row["Origem"] = p.source or ""
            row["Latitude"] = p.latitude if p.latitude is not None else ""
            row["Longitude"] = p.longitude if p.longitude is not None else ""
        data.append(row)
    return pd.DataFrame(data, columns=columns)


def render_flat_workbook(punches: Iterable[PunchEvent]) -> bytes:
    df = flat_frame(punches)
    if df.empty:
        df = pd.DataFrame({EMPTY_SHEET_MESSAGE: []})
        sheet_name = EMPTY_SHEET_TITLE
    else:
        sheet_name = FLAT_SHEET_TITLE

    output = io.BytesIO()
    try:
        with pd.ExcelWriter(output, engine="openpyxl") as writer:
            df.to_excel(writer, index=False, sheet_name=sheet_name)
            ws = writer.sheets[sheet_name]
            for cell in ws[1]:
                cell.font = BOLD
            ws.freeze_panes = "A2"
    except Exception as e:
        raise RenderError("Falha ao gerar planilha") from e
    return output.getvalue()
