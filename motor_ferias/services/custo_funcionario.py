from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional

from .. import config
from ..arredondamento import ZERO, round2, to_decimal
from ..errors import ValidationError
from ..models import EmployeeMonthlyCost, TaxTables
from .faixas import calculate_employer_inss, calculate_fgts, calculate_inss, inss_bracket_rate
from .tabelas import get_tables


def employee_monthly_cost(
    monthly_salary: Any,
    benefits: Any = 0,
    *,
    year: Optional[int] = None,
    tables: Optional[TaxTables] = None,
) -> EmployeeMonthlyCost:
    """Custo mensal de um funcionário: salário + benefícios + encargos patronais.

    O INSS do empregado sai do salário bruto, então entra só no líquido, não no custo.
    """
    salary = to_decimal(monthly_salary)
    total_benefits = to_decimal(benefits)
    if salary < 0:
        raise ValidationError(f"Salário mensal não pode ser negativo: {salary}")
    if total_benefits < 0:
        raise ValidationError(f"Benefícios não podem ser negativos: {total_benefits}")
    for label, v in (("Salário mensal", salary), ("Benefícios", total_benefits)):
        if v > config.VALOR_MAXIMO:
            raise ValidationError(f"{label} acima do máximo suportado ({config.VALOR_MAXIMO}): {v}")

    t = tables or get_tables(year)

    employer_inss = calculate_employer_inss(salary, t)
    fgts = calculate_fgts(salary, t)
    total_taxes = employer_inss + fgts

    employee_inss = calculate_inss(salary, t)
    # Percentual efetivo sobre o salário (não a alíquota da faixa)
    effective_rate = round2(employee_inss / salary * Decimal("100")) if salary > 0 else ZERO

    total_monthly_cost = salary + total_benefits + total_taxes

    return EmployeeMonthlyCost(
        monthly_salary=round2(salary),
        total_benefits=round2(total_benefits),
        employer_inss=employer_inss,
        fgts=fgts,
        total_taxes=round2(total_taxes),
        employee_inss=employee_inss,
        employee_inss_rate=effective_rate,
        employee_inss_bracket_rate=inss_bracket_rate(salary, t),
        net_salary=round2(salary - employee_inss),
        total_monthly_cost=round2(total_monthly_cost),
        total_annual_cost=round2(total_monthly_cost * 12),
        table_year=t.year,
    )
