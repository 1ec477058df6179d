from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import PunchType


@dataclass(frozen=True)
class EmployeeIdentity:
    """Funcionário: código estável + nome de exibição (nomes podem repetir)."""

    code: str
    name: str


@dataclass(frozen=True)
class PunchEvent:
    """Uma batida de ponto, imutável após criada."""

    employee: EmployeeIdentity
    type: PunchType
    timestamp: datetime
    source: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @property
    def sort_key(self) -> tuple[datetime, int]:
        return self.timestamp, self.type.order

    @property
    def has_location(self) -> bool:
        return self.source is not None or self.latitude is not None or self.longitude is not None
