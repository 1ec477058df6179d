from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo

from ..core.constants import TIMEZONE_NAME
from ..core.exceptions import ValidationError

TZ = ZoneInfo(TIMEZONE_NAME)


@dataclass(frozen=True)
class Period:
    """Inclusive instant range covering whole civil days."""

    start: datetime
    end: datetime

    @property
    def start_day(self) -> date:
        return self.start.date()

    @property
    def end_day(self) -> date:
        return self.end.date()


def to_civil(instant: datetime) -> datetime:
    """Convert an absolute instant into the fixed civil timezone.

    Every day/month boundary and every displayed time goes through here, so the
    host timezone never leaks into reports.

    The zone is America/Sao_Paulo, which has been UTC-3 all year since 2019.
    Older instants follow the zone history, so summer dates before 2019 land
    on UTC-2.
    """
    if instant.tzinfo is None or instant.utcoffset() is None:
        raise ValidationError("Horário sem fuso horário não é aceito")
    return instant.astimezone(TZ)


def civil_day(instant: datetime) -> date:
    return to_civil(instant).date()


def civil_month(instant: datetime) -> tuple[int, int]:
    local = to_civil(instant)
    return local.year, local.month


def day_bounds(day: date) -> tuple[datetime, datetime]:
    """First and last instant of a civil day."""
    start = datetime.combine(day, time.min, tzinfo=TZ)
    end = datetime.combine(day, time.max, tzinfo=TZ)
    return start, end


def now_local() -> datetime:
    """Current time in the civil timezone.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(TZ)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError) as e:
        raise ValidationError("Datas inválidas. Use o formato YYYY-MM-DD.") from e


def parse_period(start_s: str | None, end_s: str | None) -> Period:
    if not start_s or not end_s:
        raise ValidationError("Parâmetros start e end são obrigatórios (YYYY-MM-DD).")

    start_day = parse_iso_date(start_s)
    end_day = parse_iso_date(end_s)
    if start_day > end_day:
        raise ValidationError("A data inicial deve ser anterior ou igual à data final.")

    start, _ = day_bounds(start_day)
    _, end = day_bounds(end_day)
    return Period(start=start, end=end)


def format_date(value: date | datetime) -> str:
    """DD/MM/YYYY; datetimes are converted to the civil day first."""
    if isinstance(value, datetime):
        value = to_civil(value).date()
    return value.strftime("%d/%m/%Y")


def format_date_dashed(value: date) -> str:
    return value.strftime("%d-%m-%Y")


def format_hhmm(instant: datetime) -> str:
    return to_civil(instant).strftime("%H:%M")


def format_hhmmss(instant: datetime) -> str:
    return to_civil(instant).strftime("%H:%M:%S")


def format_long_datetime(instant: datetime) -> str:
    """pt-BR long form, e.g. 25/08/2025, 08:00:00."""
    return to_civil(instant).strftime("%d/%m/%Y, %H:%M:%S")


def _split_duration(value: timedelta) -> tuple[int, int]:
    total_seconds = max(int(value.total_seconds()), 0)
    return total_seconds // 3600, (total_seconds % 3600) // 60


def format_duration(value: timedelta) -> str:
    """HH:MM with floored minutes; hours are not wrapped at 24."""
    hours, minutes = _split_duration(value)
    return f"{hours:02d}:{minutes:02d}"


def format_duration_short(value: timedelta) -> str:
    hours, minutes = _split_duration(value)
    return f"{hours}:{minutes:02d}"
