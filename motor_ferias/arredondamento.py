# -*- coding: utf-8 -*-
"""
Arredondamento canônico de valores (2 casas, half up) e leitura de números.
"""
from __future__ import annotations

import numbers
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any

from .errors import ValidationError

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_decimal(x: Any) -> Decimal:
    """Converte int/float/str/Decimal em Decimal sem passar por binário.

    Aceita formato brasileiro em strings: "3.000,00" -> 3000.00, "R$ 1.518,5" -> 1518.5.
    """
    if isinstance(x, Decimal):
        d = x
    elif isinstance(x, bool):
        raise ValidationError(f"Valor numérico inválido: {x!r}")
    elif isinstance(x, numbers.Integral):
        d = Decimal(int(x))
    elif isinstance(x, numbers.Real):
        d = Decimal(str(float(x)))
    elif isinstance(x, str):
        s = x.strip().replace("R$", "").replace(" ", "")
        # 1.234,56 -> 1234.56
        if s.count(",") == 1 and s.count(".") >= 1:
            s = s.replace(".", "").replace(",", ".")
        elif s.count(",") == 0 and s.count(".") > 1:
            # 3.208.680 -> 3208680
            s = s.replace(".", "")
        elif s.count(",") == 1:
            s = s.replace(",", ".")
        try:
            d = Decimal(s)
        except InvalidOperation:
            raise ValidationError(f"Valor numérico inválido: {x!r}") from None
    else:
        raise ValidationError(f"Valor numérico inválido: {x!r}")

    if not d.is_finite():
        raise ValidationError(f"Valor numérico inválido: {x!r}")
    return d


def round2(x: Any) -> Decimal:
    """Arredondamento a 2 casas (half up) para valores monetários."""
    d = to_decimal(x)
    try:
        return d.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ValidationError(f"Valor fora do intervalo suportado: {x!r}") from None
