"""
lote.py
Cálculo de férias em lote (folha inteira) a partir de uma planilha ou DataFrame.

Uso:
    motor-ferias-lote entrada.xlsx saida.xlsx [--ano 2025] [--limites-legais]
"""
from __future__ import annotations

import argparse
import logging
import re
import unicodedata
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

from .. import config
from ..arredondamento import ZERO, round2, to_decimal
from ..errors import ValidationError
from ..models import VacationCalculationResult
from .calculo_ferias import calculate_vacation
from .tabelas import get_tables

logger = logging.getLogger(__name__)

# coluna canônica -> cabeçalhos aceitos (já normalizados)
COLUMN_ALIASES: Dict[str, tuple] = {
    "monthly_salary": ("monthly_salary", "monthlysalary", "salario", "salario_mensal"),
    "total_days": ("total_days", "totaldays", "dias", "dias_ferias"),
    "sold_days": ("sold_days", "solddays", "dias_vendidos", "abono"),
    "advance_13th_salary": ("advance_13th_salary", "advance13thsalary", "adiantar_13", "adiantamento_13"),
    "dependents": ("dependents", "dependentes"),
}

MONEY_COLUMNS = (
    "monthly_salary", "daily_salary",
    "vacation_base", "vacation_third", "vacation_total",
    "sold_days_base", "sold_days_third", "sold_days_total",
    "advance_13th", "gross_total",
    "inss_base", "inss", "irrf_base", "irrf", "total_deductions",
    "net_total", "fgts", "employer_cost",
)

SUMMARY_COLUMNS = ("gross_total", "total_deductions", "net_total", "fgts", "employer_cost")


def _norm(s: Any) -> str:
    s = str(s or "").strip()
    s = unicodedata.normalize("NFKD", s)
    s = "".join(ch for ch in s if not unicodedata.combining(ch))
    s = s.lower()
    s = re.sub(r"[\s\-]+", "_", s)
    return s


def _is_blank(v: Any) -> bool:
    if v is None:
        return True
    if isinstance(v, str):
        return not v.strip()
    try:
        return bool(pd.isna(v))
    except (TypeError, ValueError):
        return False


def _int(v: Any, default: int) -> int:
    if _is_blank(v):
        return default
    d = to_decimal(v)
    if d != d.to_integral_value():
        raise ValidationError(f"Esperado número inteiro: {v!r}")
    return int(d)


def _bool(v: Any) -> bool:
    if _is_blank(v):
        return False
    if isinstance(v, str):
        s = _norm(v)
        if s in ("sim", "s", "true", "1", "x", "yes"):
            return True
        if s in ("nao", "n", "false", "0", "no"):
            return False
        raise ValidationError(f"Valor booleano inválido: {v!r}")
    return bool(v)


def normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Renomeia os cabeçalhos conhecidos para o nome canônico.

    Dois cabeçalhos que caem na mesma coluna (ex.: "salario" e "Salário") são erro.
    """
    lookup = {alias: canon for canon, aliases in COLUMN_ALIASES.items() for alias in aliases}
    targets: Dict[Any, List[Any]] = {}
    rename = {}
    for col in df.columns:
        canon = lookup.get(_norm(col))
        if canon:
            rename[col] = canon
        targets.setdefault(canon or col, []).append(col)

    dupes = {k: v for k, v in targets.items() if len(v) > 1}
    if dupes:
        desc = "; ".join(f"{k}: " + ", ".join(repr(c) for c in cols) for k, cols in dupes.items())
        raise ValidationError(f"Colunas duplicadas: {desc}")
    return df.rename(columns=rename)


def _row_input(row: Dict[str, Any]) -> Dict[str, Any]:
    salary = row.get("monthly_salary")
    if _is_blank(salary):
        raise ValidationError("Salário mensal não informado")
    return {
        "monthly_salary": to_decimal(salary),
        "total_days": _int(row.get("total_days"), config.DIAS_MES),
        "sold_days": _int(row.get("sold_days"), 0),
        "advance_13th_salary": _bool(row.get("advance_13th_salary")),
        "dependents": _int(row.get("dependents"), 0),
    }


def calculate_batch(
    df: pd.DataFrame,
    *,
    year: Optional[int] = None,
    strict: Optional[bool] = None,
) -> pd.DataFrame:
    """Uma linha de resultado por linha de entrada; colunas extras (matrícula, nome...) são mantidas.

    Qualquer linha inválida interrompe o lote com ValidationError indicando a linha da planilha.
    """
    df = normalize_columns(df)
    if "monthly_salary" not in df.columns:
        raise ValidationError("Coluna de salário não encontrada (monthly_salary / salario)")

    t = get_tables(year)
    result_columns = list(VacationCalculationResult.model_fields)
    passthrough = [c for c in df.columns if c not in COLUMN_ALIASES and c not in result_columns]

    rows: List[Dict[str, Any]] = []
    for i, row in enumerate(df.to_dict("records")):
        # linha 1 da planilha é o cabeçalho
        try:
            res = calculate_vacation(_row_input(row), strict=strict, tables=t)
        except ValidationError as e:
            raise ValidationError(f"Linha {i + 2}: {e}", e.errors) from e

        out = {c: row[c] for c in passthrough}
        out.update(res.model_dump())
        rows.append(out)

    result = pd.DataFrame(rows, columns=passthrough + result_columns)
    for col in MONEY_COLUMNS:
        result[col] = result[col].astype(float)
    logger.info("lote calculado: %d linhas (tabela %s)", len(result), t.year)
    return result


def summarize_batch(results: pd.DataFrame) -> Dict[str, Any]:
    """Totais da folha de férias: bruto, descontos, líquido, FGTS e custo empresa."""
    summary: Dict[str, Any] = {"count": int(len(results))}
    for col in SUMMARY_COLUMNS:
        total = sum((to_decimal(v) for v in results[col]), ZERO) if len(results) else ZERO
        summary[col] = round2(total)
    return summary


def read_batch(path: Any, sheet_name: Any = 0) -> pd.DataFrame:
    p = Path(path)
    if p.suffix.lower() == ".csv":
        return pd.read_csv(p, dtype=str, keep_default_na=False)
    return pd.read_excel(p, sheet_name=sheet_name, engine="openpyxl")


def write_batch(df: pd.DataFrame, path: Any) -> Path:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    if p.suffix.lower() == ".csv":
        df.to_csv(p, index=False)
    else:
        df.to_excel(p, index=False, engine="openpyxl")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="motor-ferias-lote", description="Cálculo de férias em lote")
    parser.add_argument("entrada", help="planilha .xlsx ou .csv com uma linha por funcionário")
    parser.add_argument("saida", help="arquivo de saída .xlsx ou .csv")
    parser.add_argument("--ano", type=int, default=None, help="ano da tabela INSS/IRRF")
    parser.add_argument("--limites-legais", action="store_true", help="valida abono <= 10 e período <= 30 dias")
    args = parser.parse_args(argv)

    logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    df = read_batch(args.entrada)
    results = calculate_batch(df, year=args.ano, strict=True if args.limites_legais else None)
    out = write_batch(results, args.saida)

    s = summarize_batch(results)
    logger.info(
        "OK -> %s (funcionários=%d bruto=%s líquido=%s custo_empresa=%s)",
        out, s["count"], s["gross_total"], s["net_total"], s["employer_cost"],
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
