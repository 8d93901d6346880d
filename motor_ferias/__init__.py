"""
Motor de cálculo de férias: férias + 1/3, abono pecuniário, 1ª parcela do 13º,
INSS, IRRF, FGTS e custo empresa.
"""
import logging

from .errors import TablesError, ValidationError
from .models import (
    EmployeeMonthlyCost,
    TaxBracket,
    TaxTables,
    VacationCalculationInput,
    VacationCalculationResult,
)
from .services.calculo_ferias import calculate_vacation, vacation_receipt
from .services.custo_funcionario import employee_monthly_cost
from .services.faixas import (
    calculate_employer_inss,
    calculate_fgts,
    calculate_inss,
    calculate_irrf,
    find_bracket,
    inss_bracket_rate,
    resolve_bracket,
)
from .services.tabelas import available_years, get_tables

__version__ = "1.0.0"

__all__ = [
    "ValidationError",
    "TablesError",
    "TaxBracket",
    "TaxTables",
    "VacationCalculationInput",
    "VacationCalculationResult",
    "EmployeeMonthlyCost",
    "calculate_vacation",
    "vacation_receipt",
    "employee_monthly_cost",
    "resolve_bracket",
    "find_bracket",
    "calculate_inss",
    "inss_bracket_rate",
    "calculate_irrf",
    "calculate_fgts",
    "calculate_employer_inss",
    "get_tables",
    "available_years",
]

logging.getLogger(__name__).addHandler(logging.NullHandler())
