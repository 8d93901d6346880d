from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from .. import config
from ..errors import TablesError
from ..models import TaxTables

logger = logging.getLogger(__name__)


@lru_cache(maxsize=4)
def load_tables_file(path: str) -> Dict[int, TaxTables]:
    """Lê o JSON de tabelas ({"2025": {...}, ...}) e valida cada ano."""
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Missing tabelas.json at {p}")
    raw = json.loads(p.read_text(encoding="utf-8"))
    if not isinstance(raw, dict) or not raw:
        raise TablesError(f"Arquivo de tabelas vazio ou inválido: {p}")

    out: Dict[int, TaxTables] = {}
    for key, data in raw.items():
        try:
            year = int(key)
        except ValueError:
            raise TablesError(f"Ano inválido em {p}: {key!r}") from None
        try:
            out[year] = TaxTables.model_validate({**data, "year": year})
        except PydanticValidationError as e:
            raise TablesError(f"Tabela {year} inválida em {p}: {e}") from e

    logger.debug("tabelas carregadas de %s: %s", p, sorted(out))
    return out


def available_years(path: Optional[str] = None) -> List[int]:
    return sorted(load_tables_file(path or config.TABELAS_PATH))


def get_tables(year: Optional[int] = None, path: Optional[str] = None) -> TaxTables:
    """Tabela vigente para `year`: a mais recente com ano <= year."""
    year = int(year if year is not None else config.ANO_PADRAO)
    tables = load_tables_file(path or config.TABELAS_PATH)

    if year in tables:
        return tables[year]

    candidates = [y for y in tables if y <= year]
    if not candidates:
        raise TablesError(f"Não há tabela vigente para {year} (disponíveis: {sorted(tables)})")

    chosen = max(candidates)
    logger.warning("sem tabela para %s; usando a vigente de %s", year, chosen)
    return tables[chosen]
