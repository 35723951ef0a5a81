"""
Implementações do armazenamento chave/valor com expiração.
"""

import time
from typing import Dict, Optional, Tuple

from cartela.core.interfaces import Clock, KeyValueStore

SECONDS_PER_DAY = 86400


def ttl_seconds(ttl_days: Optional[float]) -> Optional[int]:
    """Converte dias em segundos inteiros (mínimo 1); ``None`` continua ``None``."""
    if ttl_days is None:
        return None
    return max(1, int(ttl_days * SECONDS_PER_DAY))


class InMemoryKeyValueStore(KeyValueStore):
    """
    Implementação em memória (não persistente entre reinícios).
    Útil para testes; o relógio é injetável para simular expiração.
    """

    def __init__(self, clock: Clock = time.time):
        self._storage: Dict[str, Tuple[str, Optional[float]]] = {}
        self._clock = clock

    def get(self, key: str) -> Optional[str]:
        entry = self._storage.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at is not None and self._clock() >= expires_at:
            del self._storage[key]
            return None
        return value

    def set(self, key: str, value: str, ttl_days: Optional[float] = None) -> None:
        seconds = ttl_seconds(ttl_days)
        expires_at = None if seconds is None else self._clock() + seconds
        self._storage[key] = (str(value), expires_at)

    def delete(self, key: str) -> None:
        self._storage.pop(key, None)
