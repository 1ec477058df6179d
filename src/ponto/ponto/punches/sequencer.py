from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import PunchMode, PunchType
from ..core.exceptions import DayExhaustedError, ValidationError

SEQUENCES: dict[PunchMode, tuple[PunchType, ...]] = {
    PunchMode.DETAILED: (PunchType.IN, PunchType.LUNCH_START, PunchType.LUNCH_END, PunchType.OUT),
    PunchMode.SIMPLE: (PunchType.IN, PunchType.OUT),
}


@dataclass(frozen=True)
class PunchSequencer:
    """Forward-only state machine over the day's punch sequence.

    The state is the number of punches already registered on the civil day;
    once it reaches the sequence length the day is exhausted.
    """

    mode: PunchMode = PunchMode.DETAILED

    @property
    def sequence(self) -> tuple[PunchType, ...]:
        return SEQUENCES[self.mode]

    def is_exhausted(self, count: int) -> bool:
        return count >= len(self.sequence)

    def next_type(self, count: int) -> PunchType:
        if count < 0:
            raise ValidationError("Quantidade de batidas inválida")
        if self.is_exhausted(count):
            raise DayExhaustedError("Todos os registros do dia já foram registrados.")
        return self.sequence[count]
