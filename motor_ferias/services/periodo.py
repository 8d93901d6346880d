"""
Regras do período de férias: contagem de dias, sobreposição e limites do abono.
"""
from __future__ import annotations

import datetime as _dt
from typing import Any

from .. import config
from ..errors import ValidationError


def parse_date(value: Any) -> _dt.date:
    """Aceita date, datetime ou 'YYYY-MM-DD[THH:MM...]' (a hora é ignorada)."""
    if isinstance(value, _dt.datetime):
        return value.date()
    if isinstance(value, _dt.date):
        return value
    s = str(value or "").strip()
    try:
        return _dt.date.fromisoformat(s.split("T")[0][:10])
    except ValueError:
        raise ValidationError(f"Data inválida: {value!r}") from None


def period_days(start: Any, end: Any) -> int:
    """Dias corridos do período, contando início e fim."""
    d0 = parse_date(start)
    d1 = parse_date(end)
    if d0 >= d1:
        raise ValidationError("Data de início deve ser anterior à data de término")
    return (d1 - d0).days + 1


def validate_vacation_period(start: Any, end: Any, days: int, sold_days: int = 0) -> int:
    """Valida o período informado e devolve a quantidade de dias."""
    n = period_days(start, end)
    if days != n:
        raise ValidationError(
            f"Quantidade de dias informada ({days}) não corresponde ao período entre as datas ({n} dias)"
        )
    if sold_days < 0:
        raise ValidationError("Dias vendidos não pode ser negativo")
    if sold_days > config.ABONO_MAX_DIAS:
        raise ValidationError(f"O máximo de dias que podem ser vendidos é {config.ABONO_MAX_DIAS}")
    if sold_days > days:
        raise ValidationError(
            "Quantidade de dias vendidos não pode ser maior que a quantidade total de dias de férias"
        )
    return n


def periods_overlap(a_start: Any, a_end: Any, b_start: Any, b_end: Any) -> bool:
    """True se os dois períodos (inclusivos) têm ao menos um dia em comum."""
    return parse_date(a_start) <= parse_date(b_end) and parse_date(b_start) <= parse_date(a_end)
