"""
Faixas progressivas (INSS / IRRF) e alíquotas fixas (FGTS, INSS patronal).

Todas as funções recebem valores já na base correta e devolvem Decimal com 2 casas.
"""
from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Optional, Sequence

from ..arredondamento import ZERO, round2, to_decimal
from ..errors import ValidationError
from ..models import TaxBracket, TaxTables
from .tabelas import get_tables

logger = logging.getLogger(__name__)

HUNDRED = Decimal("100")


def find_bracket(value: Any, brackets: Sequence[TaxBracket]) -> Optional[TaxBracket]:
    """Primeira faixa cujo teto cobre o valor (faixas contíguas, em ordem crescente)."""
    v = to_decimal(value)
    for b in brackets:
        if b.max is None or v <= b.max:
            return b
    return None


def resolve_bracket(value: Any, brackets: Sequence[TaxBracket]) -> Decimal:
    """(valor × alíquota) - parcela a deduzir, nunca negativo."""
    v = to_decimal(value)
    if v <= 0:
        return ZERO

    b = find_bracket(v, brackets)
    if b is None:
        logger.warning("valor %s acima da última faixa (teto %s)", v, brackets[-1].max if brackets else None)
        return ZERO

    raw = v * b.rate / HUNDRED - b.deduction
    return round2(max(raw, ZERO))


def calculate_inss(value: Any, tables: Optional[TaxTables] = None) -> Decimal:
    """INSS do empregado.

    A partir de `flat_rate_threshold` (R$ 4.190,84 em 2025) aplica 14% sobre o valor
    total, sem parcela a deduzir e sem teto. Abaixo disso, fórmula progressiva.
    """
    t = (tables or get_tables()).inss
    v = to_decimal(value)
    if v <= 0:
        return ZERO

    if v >= t.flat_rate_threshold:
        return round2(v * t.flat_rate / HUNDRED)

    return resolve_bracket(v, t.brackets)


def inss_bracket_rate(value: Any, tables: Optional[TaxTables] = None) -> Decimal:
    """Alíquota da faixa usada no INSS (7,5 / 9 / 12 / 14), 0 para valor <= 0."""
    t = (tables or get_tables()).inss
    v = to_decimal(value)
    if v <= 0:
        return Decimal("0")
    if v >= t.flat_rate_threshold:
        return t.flat_rate
    b = find_bracket(v, t.brackets)
    return b.rate if b else Decimal("0")


def calculate_irrf(base_value: Any, dependents: int = 0, tables: Optional[TaxTables] = None) -> Decimal:
    """IRRF sobre a base já descontada do INSS, menos a dedução por dependente."""
    if dependents < 0:
        raise ValidationError(f"Número de dependentes não pode ser negativo: {dependents}")

    t = (tables or get_tables()).irrf
    taxable = to_decimal(base_value) - t.dependent_deduction * dependents
    if taxable <= 0:
        return ZERO

    return resolve_bracket(taxable, t.brackets)


def calculate_fgts(value: Any, tables: Optional[TaxTables] = None) -> Decimal:
    """FGTS (8%), pago pela empresa."""
    t = tables or get_tables()
    v = to_decimal(value)
    if v <= 0:
        return ZERO
    return round2(v * t.fgts_rate / HUNDRED)


def calculate_employer_inss(value: Any, tables: Optional[TaxTables] = None) -> Decimal:
    """INSS patronal (20%)."""
    t = (tables or get_tables()).inss
    v = to_decimal(value)
    if v <= 0:
        return ZERO
    return round2(v * t.employer_rate / HUNDRED)
