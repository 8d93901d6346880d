from __future__ import annotations

from typing import Any, Dict, List, Optional


class ValidationError(ValueError):
    """Entrada inválida, detectada antes de qualquer cálculo."""

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.errors = list(errors or [])

    @classmethod
    def from_pydantic(cls, exc: Any) -> "ValidationError":
        errs = exc.errors()
        parts = []
        for e in errs:
            loc = ".".join(str(x) for x in e.get("loc", ()))
            msg = e.get("msg", "")
            parts.append(f"{loc}: {msg}" if loc else msg)
        return cls("; ".join(parts) or str(exc), errs)


class TablesError(ValueError):
    """Não há tabela vigente para o ano pedido ou o arquivo está malformado."""
