"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from .enums import PunchType

TIMEZONE_NAME = "America/Sao_Paulo"

MONTH_NAMES = (
    "Janeiro", "Fevereiro", "Março", "Abril", "Maio", "Junho",
    "Julho", "Agosto", "Setembro", "Outubro", "Novembro", "Dezembro",
)

# Spreadsheet labels
TYPE_LABELS = {
    PunchType.IN: "Entrada",
    PunchType.LUNCH_START: "Saída p/ Almoço",
    PunchType.LUNCH_END: "Retorno do Almoço",
    PunchType.OUT: "Saída",
}

# PDF labels
DOCUMENT_TYPE_LABELS = {
    PunchType.IN: "ENTRADA",
    PunchType.LUNCH_START: "SAÍDA PARA O ALMOÇO",
    PunchType.LUNCH_END: "RETORNO DO ALMOÇO",
    PunchType.OUT: "SAÍDA",
}

SHEET_TITLE_MAX_LENGTH = 31

# Grouped layout: (header, width)
GROUPED_COLUMNS = (
    ("Data", 14),
    ("Entrada", 12),
    ("Saída p/ Almoço", 16),
    ("Retorno do Almoço", 20),
    ("Saída", 12),
    ("Total", 16),
)

EMPTY_SHEET_TITLE = "Sem Registros"
EMPTY_SHEET_MESSAGE = "Não há registros de ponto no período informado."
FLAT_SHEET_TITLE = "Registros"

DOCUMENT_COLUMN_GAP = 20
DOCUMENT_EMPTY_MESSAGE = "Nenhum registro de ponto no período."

DEFAULT_WORKBOOK_CREATOR = "Ponto"

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
PDF_MIMETYPE = "application/pdf"
