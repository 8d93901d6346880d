"""
Gera data/tabelas.json a partir da planilha de tabelas legais.

Planilha esperada:
- INSS_<ano> / IRRF_<ano>: colunas Min, Max, Aliquota, Deducao (Max vazio = faixa aberta)
- Parametros: colunas Ano, Chave, Valor. Chaves: inss.flat_rate_threshold, inss.flat_rate,
  inss.ceiling, inss.max_contribution, inss.employer_rate, irrf.dependent_deduction,
  fgts_rate, source
"""
from __future__ import annotations

import argparse
import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

import openpyxl
from pydantic import ValidationError as PydanticValidationError

from . import config
from .arredondamento import to_decimal
from .errors import TablesError
from .models import TaxTables
from .services.tabelas import load_tables_file

logger = logging.getLogger(__name__)

SHEET_RE = re.compile(r"^(INSS|IRRF)_(\d{4})$", re.IGNORECASE)
BRACKET_COLUMNS = ["Min", "Max", "Aliquota", "Deducao"]
PARAM_COLUMNS = ["Ano", "Chave", "Valor"]


def norm(h: Any) -> Optional[str]:
    """Cabeçalho sem espaços nas pontas e com espaços internos colapsados."""
    if h is None:
        return None
    return re.sub(r"\s+", " ", str(h).strip()) or None


def export_sheet_rows(ws, required: List[str]) -> List[Dict[str, Any]]:
    """Linhas não vazias da aba como dicts {coluna pedida: valor}.

    Cabeçalhos casam sem diferenciar maiúsculas; coluna ausente é TablesError.
    """
    header_row = next(ws.iter_rows(min_row=1, max_row=1, values_only=True), ())
    positions: Dict[str, int] = {}
    for i, h in enumerate(header_row):
        key = norm(h)
        if key:
            positions.setdefault(key.lower(), i)

    cols = {want: positions.get(want.lower()) for want in required}
    missing = [w for w, i in cols.items() if i is None]
    if missing:
        raise TablesError(f"Aba {ws.title}: colunas ausentes {missing}")

    out = []
    for values in ws.iter_rows(min_row=2, values_only=True):
        row = {want: (values[i] if i < len(values) else None) for want, i in cols.items()}
        if any(v not in (None, "") for v in row.values()):
            out.append(row)
    return out


def _num(v: Any) -> Optional[str]:
    if v is None or (isinstance(v, str) and v.strip().lower() in ("", "inf", "infinito", "∞")):
        return None
    return str(to_decimal(v))


def _brackets(rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [
        {
            "min": _num(r["Min"]) or "0",
            "max": _num(r["Max"]),
            "rate": _num(r["Aliquota"]) or "0",
            "deduction": _num(r["Deducao"]) or "0",
        }
        for r in rows
    ]


def build_tables(wb) -> Dict[str, Any]:
    sheets: Dict[int, Dict[str, Any]] = {}
    for name in wb.sheetnames:
        m = SHEET_RE.match(name)
        if not m:
            continue
        kind, year = m.group(1).lower(), int(m.group(2))
        sheets.setdefault(year, {})[kind] = _brackets(export_sheet_rows(wb[name], BRACKET_COLUMNS))

    params: Dict[int, Dict[str, Any]] = {}
    if "Parametros" in wb.sheetnames:
        for r in export_sheet_rows(wb["Parametros"], PARAM_COLUMNS):
            year = int(to_decimal(r["Ano"]))
            params.setdefault(year, {})[str(r["Chave"]).strip()] = r["Valor"]

    out: Dict[str, Any] = {}
    for year in sorted(sheets):
        kinds = sheets[year]
        if "inss" not in kinds or "irrf" not in kinds:
            raise TablesError(f"Ano {year}: faltam as abas INSS_{year} e IRRF_{year}")

        data: Dict[str, Any] = {"inss": {"brackets": kinds["inss"]}, "irrf": {"brackets": kinds["irrf"]}}
        for key, value in params.get(year, {}).items():
            if key == "source":
                data["source"] = str(value)
            elif key == "fgts_rate":
                data["fgts_rate"] = _num(value)
            elif "." in key:
                section, field = key.split(".", 1)
                if section not in ("inss", "irrf"):
                    raise TablesError(f"Ano {year}: chave desconhecida {key!r}")
                data[section][field] = _num(value)
            else:
                raise TablesError(f"Ano {year}: chave desconhecida {key!r}")

        try:
            TaxTables.model_validate({**data, "year": year})
        except PydanticValidationError as e:
            raise TablesError(f"Tabela {year} inválida: {e}") from e
        out[str(year)] = data

    if not out:
        raise TablesError("Nenhuma aba INSS_<ano>/IRRF_<ano> encontrada")
    return out


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="motor-ferias-tabelas", description="Planilha -> tabelas.json")
    parser.add_argument("origem", help="planilha .xlsx com as abas INSS_<ano>, IRRF_<ano> e Parametros")
    parser.add_argument("--saida", default=config.TABELAS_PATH)
    args = parser.parse_args(argv)

    logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    src = Path(args.origem)
    if not src.exists():
        raise SystemExit(f"Não existe {src}")

    wb = openpyxl.load_workbook(src, data_only=True)
    tables = build_tables(wb)

    out = Path(args.saida)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(json.dumps(tables, ensure_ascii=False, indent=2), encoding="utf-8")
    load_tables_file.cache_clear()
    logger.info("OK -> %s (anos=%s)", out, ", ".join(tables))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
