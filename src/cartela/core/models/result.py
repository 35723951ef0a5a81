"""
Resultado tipado das chamadas autorizadas ao backend.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from cartela.core.exceptions import CartelaBaseException


class RequestOutcome(str, Enum):
    SUCCESS = "success"
    AUTH_FAILURE = "auth_failure"
    NETWORK_FAILURE = "network_failure"


@dataclass(frozen=True)
class RequestResult:
    """Sucesso com payload, ou falha com a exceção correspondente."""

    outcome: RequestOutcome
    payload: Optional[Dict[str, Any]] = None
    error: Optional[CartelaBaseException] = None
    attempts: int = 1

    @property
    def ok(self) -> bool:
        return self.outcome is RequestOutcome.SUCCESS

    @classmethod
    def success(cls, payload: Dict[str, Any], attempts: int = 1) -> RequestResult:
        return cls(RequestOutcome.SUCCESS, payload=payload, attempts=attempts)

    @classmethod
    def auth_failure(cls, error: CartelaBaseException, attempts: int = 1) -> RequestResult:
        return cls(RequestOutcome.AUTH_FAILURE, error=error, attempts=attempts)

    @classmethod
    def network_failure(cls, error: CartelaBaseException, attempts: int = 1) -> RequestResult:
        return cls(RequestOutcome.NETWORK_FAILURE, error=error, attempts=attempts)

    def unwrap(self) -> Dict[str, Any]:
        """Retorna o payload ou levanta a falha registrada."""
        if self.error is not None:
            raise self.error
        return self.payload or {}
