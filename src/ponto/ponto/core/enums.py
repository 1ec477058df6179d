from __future__ import annotations

from enum import Enum


class PunchType(str, Enum):
    """Tipos de batida de ponto, na ordem canônica do dia."""

    IN = "IN"
    LUNCH_START = "LUNCH_START"
    LUNCH_END = "LUNCH_END"
    OUT = "OUT"

    @property
    def order(self) -> int:
        return _PUNCH_ORDER[self]


_PUNCH_ORDER = {
    PunchType.IN: 0,
    PunchType.LUNCH_START: 1,
    PunchType.LUNCH_END: 2,
    PunchType.OUT: 3,
}


class PunchMode(str, Enum):
    """Jornada com intervalo de almoço (4 batidas) ou simples (2 batidas)."""

    DETAILED = "detailed"
    SIMPLE = "simple"


class ReportLayout(str, Enum):
    GROUPED = "grouped"
    FLAT = "flat"
