"""
Pacote de Modelos (Entidades) do Domínio.

Centraliza todas as estruturas de dados do sistema.
"""

from .state import CollectionState, ScanResult, VisitorStatus, new_visitor_id
from .token import TokenSlotState
from .result import RequestOutcome, RequestResult
from .keys import StoreKeys

__all__ = [
    "CollectionState",
    "ScanResult",
    "VisitorStatus",
    "new_visitor_id",
    "TokenSlotState",
    "RequestOutcome",
    "RequestResult",
    "StoreKeys",
]
