from __future__ import annotations

from decimal import Decimal
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from . import config


# --- 1. TABELAS (INSS / IRRF / FGTS) ---
class TaxBracket(BaseModel):
    """Faixa progressiva: alíquota em % e parcela a deduzir. max=None é faixa aberta."""

    model_config = ConfigDict(frozen=True)

    min: Decimal = Field(default=Decimal("0"), ge=0)
    max: Optional[Decimal] = Field(default=None, ge=0)
    rate: Decimal = Field(..., ge=0, description="Percentual (ex: 7.5 para 7,5%)")
    deduction: Decimal = Field(default=Decimal("0"), ge=0)


def _check_brackets(brackets: Tuple[TaxBracket, ...]) -> Tuple[TaxBracket, ...]:
    if not brackets:
        raise ValueError("tabela sem faixas")
    prev = None
    for i, b in enumerate(brackets):
        if b.max is None and i != len(brackets) - 1:
            raise ValueError("apenas a última faixa pode ser aberta")
        if b.max is not None and b.max < b.min:
            raise ValueError(f"faixa {i + 1}: max menor que min")
        if prev is not None and b.max is not None and b.max <= prev:
            raise ValueError(f"faixa {i + 1}: faixas fora de ordem")
        prev = b.max
    return brackets


class InssTable(BaseModel):
    model_config = ConfigDict(frozen=True)

    brackets: Tuple[TaxBracket, ...]
    # Acima deste valor aplica-se a alíquota cheia sobre o total, sem parcela a deduzir
    flat_rate_threshold: Decimal = Field(..., gt=0)
    flat_rate: Decimal = Field(..., ge=0)
    ceiling: Decimal = Field(..., gt=0)
    max_contribution: Decimal = Field(..., ge=0)
    employer_rate: Decimal = Field(default=Decimal("20"), ge=0)

    @field_validator("brackets")
    @classmethod
    def check_brackets(cls, v: Tuple[TaxBracket, ...]) -> Tuple[TaxBracket, ...]:
        return _check_brackets(v)


class IrrfTable(BaseModel):
    model_config = ConfigDict(frozen=True)

    brackets: Tuple[TaxBracket, ...]
    dependent_deduction: Decimal = Field(..., ge=0)

    @field_validator("brackets")
    @classmethod
    def check_brackets(cls, v: Tuple[TaxBracket, ...]) -> Tuple[TaxBracket, ...]:
        return _check_brackets(v)


class TaxTables(BaseModel):
    """Tabelas vigentes a partir de `year`."""

    model_config = ConfigDict(frozen=True)

    year: int
    source: str = ""
    inss: InssTable
    irrf: IrrfTable
    fgts_rate: Decimal = Field(default=Decimal("8"), ge=0)


# --- 2. ENTRADA ---
class VacationCalculationInput(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    monthly_salary: Decimal = Field(..., ge=0, le=config.VALOR_MAXIMO, description="Salário mensal bruto")
    total_days: int = Field(default=30, ge=0, description="Dias do período de férias")
    sold_days: int = Field(default=0, ge=0, description="Dias vendidos (abono pecuniário)")
    advance_13th_salary: bool = Field(default=False, alias="advance13thSalary")
    dependents: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def sold_days_within_period(self) -> "VacationCalculationInput":
        if self.sold_days > self.total_days:
            raise ValueError(
                f"Dias vendidos ({self.sold_days}) não podem exceder o total de dias de férias ({self.total_days})"
            )
        return self


# --- 3. RESULTADO ---
class VacationCalculationResult(BaseModel):
    """Demonstrativo de férias. Todos os valores monetários já arredondados a 2 casas."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    # Valores base
    monthly_salary: Decimal
    daily_salary: Decimal
    total_days: int
    vacation_days: int
    sold_days: int
    dependents: int = 0

    # Férias (dias gozados)
    vacation_base: Decimal
    vacation_third: Decimal
    vacation_total: Decimal

    # Abono pecuniário (dias vendidos)
    sold_days_base: Decimal
    sold_days_third: Decimal
    sold_days_total: Decimal

    # 1ª parcela do 13º
    advance_13th: Decimal = Field(alias="advance13th")

    gross_total: Decimal

    # Descontos
    inss_base: Decimal
    inss: Decimal
    irrf_base: Decimal
    irrf: Decimal
    total_deductions: Decimal

    net_total: Decimal

    # Custo empresa
    fgts: Decimal
    employer_cost: Decimal

    table_year: int


class EmployeeMonthlyCost(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    monthly_salary: Decimal
    total_benefits: Decimal
    employer_inss: Decimal
    fgts: Decimal
    total_taxes: Decimal
    employee_inss: Decimal = Field(alias="employeeINSS")
    employee_inss_rate: Decimal = Field(alias="employeeINSSRate")
    employee_inss_bracket_rate: Decimal = Field(alias="employeeINSSBracketRate")
    net_salary: Decimal
    total_monthly_cost: Decimal
    total_annual_cost: Decimal
    table_year: int
