# -*- coding: utf-8 -*-
"""
config.py
Parâmetros do motor lidos do ambiente:
- MOTOR_FERIAS_TABELAS_PATH: arquivo JSON com as tabelas INSS/IRRF/FGTS por ano
- MOTOR_FERIAS_ANO: ano de tabela padrão
- MOTOR_FERIAS_LIMITES_LEGAIS: valida teto do abono (10 dias) e do período (30 dias)
- MOTOR_FERIAS_LOG_LEVEL: nível de log dos CLIs
"""
from __future__ import annotations

import os
from decimal import Decimal


def _default_tabelas_path() -> str:
    # Resolvemos relativo a este arquivo, não ao CWD.
    here = os.path.dirname(__file__)
    return os.path.join(here, "data", "tabelas.json")


def _env_bool(name: str, default: bool = False) -> bool:
    v = os.getenv(name)
    if v is None:
        return default
    return v.strip().lower() in ("1", "true", "sim", "yes", "on")


TABELAS_PATH = os.getenv("MOTOR_FERIAS_TABELAS_PATH", _default_tabelas_path())
ANO_PADRAO = int(os.getenv("MOTOR_FERIAS_ANO", "2025"))
LIMITES_LEGAIS = _env_bool("MOTOR_FERIAS_LIMITES_LEGAIS")
LOG_LEVEL = os.getenv("MOTOR_FERIAS_LOG_LEVEL", "INFO").upper()

# CLT: mês comercial de 30 dias, abono de até 10 dias
DIAS_MES = 30
ABONO_MAX_DIAS = 10
FERIAS_MAX_DIAS = 30

# Teto de qualquer valor monetário de entrada (salário, benefícios)
VALOR_MAXIMO = Decimal("999999999999.99")
