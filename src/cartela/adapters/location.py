"""
Localização da página em memória.

Representa a URL atual de uma "carga de página": de onde vem o token
escaneado e onde ele é removido com uma substituição que não navega.
"""

from __future__ import annotations

from typing import List, Optional
from urllib.parse import parse_qsl, urlsplit


class InMemoryPageLocation:
    """
    Implementação de ``PageLocation`` sem navegador.

    ``replace_url`` troca a URL sem empilhar histórico e sem recarregar.
    ``reload`` apenas conta as recargas pedidas.
    """

    def __init__(self, url: str = "") -> None:
        self._url = url
        self.history: List[str] = [url]
        self.reload_count = 0

    @property
    def url(self) -> str:
        return self._url

    @property
    def history_length(self) -> int:
        return len(self.history)

    def get_query_param(self, name: str) -> Optional[str]:
        for chave, valor in parse_qsl(urlsplit(self._url).query, keep_blank_values=True):
            if chave == name:
                return valor
        return None

    def replace_url(self, url: str) -> None:
        self._url = url
        self.history[-1] = url

    def reload(self) -> None:
        self.reload_count += 1
