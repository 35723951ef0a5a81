"""
Entidades de Estado da Cartela.
"""

from __future__ import annotations

import random
import string
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional

from cartela.config.constants import ITEM_KEYS

_SUFIXO_ALFABETO = string.ascii_lowercase + string.digits


def new_visitor_id(now: Optional[float] = None) -> str:
    """Gera ``user_<epoch em ms><7 caracteres base36>``."""
    instante = time.time() if now is None else now
    sufixo = "".join(random.choices(_SUFIXO_ALFABETO, k=7))
    return f"user_{int(instante * 1000)}{sufixo}"


class VisitorStatus(str, Enum):
    """Resultado de ``initialize_from_store``."""

    NEW = "new"
    RETURNING = "returning"


@dataclass
class CollectionState:
    """Quatro itens coletados? + resgatado? para um visitante."""

    visitor_id: Optional[str] = None
    items: Dict[str, bool] = field(default_factory=lambda: {k: False for k in ITEM_KEYS})
    redeemed: bool = False

    @property
    def all_collected(self) -> bool:
        return all(self.items[k] for k in ITEM_KEYS)

    @property
    def collected_count(self) -> int:
        return sum(1 for k in ITEM_KEYS if self.items[k])

    def snapshot(self) -> Dict[str, bool]:
        """Cópia dos quatro itens para a camada de apresentação."""
        return {k: self.items[k] for k in ITEM_KEYS}


@dataclass(frozen=True)
class ScanResult:
    """Resultado do processamento de um token escaneado."""

    collected: bool
    item_key: Optional[str] = None
    token: Optional[str] = None
