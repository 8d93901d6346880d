from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from .. import config
from ..arredondamento import ZERO, round2
from ..errors import ValidationError
from ..models import TaxTables, VacationCalculationInput, VacationCalculationResult
from .faixas import calculate_fgts, calculate_inss, calculate_irrf
from .tabelas import get_tables

logger = logging.getLogger(__name__)

DIAS_MES = Decimal(config.DIAS_MES)
THREE = Decimal("3")
TWO = Decimal("2")


def _coerce_input(data: Union[VacationCalculationInput, Mapping[str, Any]]) -> VacationCalculationInput:
    if isinstance(data, VacationCalculationInput):
        return data
    try:
        return VacationCalculationInput.model_validate(dict(data))
    except PydanticValidationError as e:
        raise ValidationError.from_pydantic(e) from e


def check_legal_limits(inp: VacationCalculationInput) -> None:
    """Tetos da CLT: abono de até 10 dias, período de até 30 dias."""
    if inp.sold_days > config.ABONO_MAX_DIAS:
        raise ValidationError(f"O máximo de dias que podem ser vendidos é {config.ABONO_MAX_DIAS}")
    if inp.total_days > config.FERIAS_MAX_DIAS:
        raise ValidationError(f"O período de férias não pode exceder {config.FERIAS_MAX_DIAS} dias")


def calculate_vacation(
    data: Union[VacationCalculationInput, Mapping[str, Any]],
    *,
    year: Optional[int] = None,
    strict: Optional[bool] = None,
    tables: Optional[TaxTables] = None,
) -> VacationCalculationResult:
    """Calcula férias + 1/3, abono pecuniário, 1ª parcela do 13º, INSS, IRRF e FGTS.

    O abono pecuniário (dias vendidos) entra no bruto mas é isento de INSS, IRRF e FGTS.
    """
    inp = _coerce_input(data)
    enforce = config.LIMITES_LEGAIS if strict is None else strict
    if enforce:
        check_legal_limits(inp)
    t = tables or get_tables(year)

    salary = inp.monthly_salary

    # 1. Salário diário (sempre base 30 dias)
    daily_salary = salary / DIAS_MES

    # 2. Dias efetivos de férias
    vacation_days = inp.total_days - inp.sold_days

    # 3. Férias (dias gozados) + 1/3 constitucional
    vacation_base = daily_salary * vacation_days
    vacation_third = vacation_base / THREE
    vacation_total = vacation_base + vacation_third

    # 4. Abono pecuniário (dias vendidos) + 1/3
    sold_days_base = daily_salary * inp.sold_days
    sold_days_third = sold_days_base / THREE
    sold_days_total = sold_days_base + sold_days_third

    # 5. Adiantamento do 13º (50% do salário)
    advance_13th = salary / TWO if inp.advance_13th_salary else ZERO

    # 6. Bruto
    gross_total = vacation_total + sold_days_total + advance_13th

    # 7. INSS: férias + 1/3 + 13º (abono isento)
    inss_base = vacation_total + advance_13th
    inss = calculate_inss(inss_base, t)

    # 8. IRRF: base do INSS menos o INSS (abono isento)
    irrf_base = inss_base - inss
    irrf = calculate_irrf(irrf_base, inp.dependents, t)

    # 9. Descontos
    total_deductions = inss + irrf

    # 10. Líquido (abono passa integral). Usa o bruto arredondado para fechar ao centavo
    gross_r = round2(gross_total)
    net_total = gross_r - total_deductions

    # 11. FGTS sobre férias + 1/3 + 13º (abono não incide)
    fgts = calculate_fgts(vacation_total + advance_13th, t)

    # 12. Custo empresa
    employer_cost = gross_r + fgts

    result = VacationCalculationResult(
        monthly_salary=round2(salary),
        daily_salary=round2(daily_salary),
        total_days=inp.total_days,
        vacation_days=vacation_days,
        sold_days=inp.sold_days,
        dependents=inp.dependents,
        vacation_base=round2(vacation_base),
        vacation_third=round2(vacation_third),
        vacation_total=round2(vacation_total),
        sold_days_base=round2(sold_days_base),
        sold_days_third=round2(sold_days_third),
        sold_days_total=round2(sold_days_total),
        advance_13th=round2(advance_13th),
        gross_total=gross_r,
        inss_base=round2(inss_base),
        inss=inss,
        irrf_base=round2(irrf_base),
        irrf=irrf,
        total_deductions=round2(total_deductions),
        net_total=round2(net_total),
        fgts=fgts,
        employer_cost=round2(employer_cost),
        table_year=t.year,
    )
    logger.debug(
        "férias: salário=%s dias=%s vendidos=%s bruto=%s líquido=%s",
        result.monthly_salary, result.total_days, result.sold_days, result.gross_total, result.net_total,
    )
    return result


def _item(concept: str, base: Any = ZERO, earning: Any = ZERO, deduction: Any = ZERO) -> Dict[str, Any]:
    return {
        "concept": concept,
        "base": round2(base),
        "earning": round2(earning),
        "deduction": round2(deduction),
    }


def vacation_receipt(result: VacationCalculationResult) -> Dict[str, Any]:
    """Linhas do recibo de férias (proventos / descontos) e totais."""
    r = result
    items: List[Dict[str, Any]] = [
        _item(f"Férias ({r.vacation_days} dias)", base=r.monthly_salary, earning=r.vacation_base),
        _item("1/3 constitucional", base=r.vacation_base, earning=r.vacation_third),
    ]
    if r.sold_days:
        items.append(_item(f"Abono pecuniário ({r.sold_days} dias)", base=r.monthly_salary, earning=r.sold_days_base))
        items.append(_item("1/3 sobre abono", base=r.sold_days_base, earning=r.sold_days_third))
    if r.advance_13th:
        items.append(_item("Adiantamento 1ª parcela 13º", base=r.monthly_salary, earning=r.advance_13th))
    items.append(_item("INSS", base=r.inss_base, deduction=r.inss))
    items.append(_item("IRRF", base=r.irrf_base, deduction=r.irrf))

    return {
        "items": items,
        "totals": {
            "earnings": r.gross_total,
            "deductions": r.total_deductions,
            "net": r.net_total,
        },
        "employer": {
            "fgts": r.fgts,
            "employer_cost": r.employer_cost,
        },
    }
