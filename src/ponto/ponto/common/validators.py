from __future__ import annotations

import unicodedata

from ..core.exceptions import ValidationError


def require_non_empty(value: str | None, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} inválido")
    return value.strip()


def collation_key(value: str) -> tuple[str, str]:
    """Sort key close to pt-BR collation: accents and case are secondary."""
    decomposed = unicodedata.normalize("NFKD", value or "")
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), value or ""
