"""
Interfaces do Núcleo (Core Interfaces).

Define os contratos (Ports) que os Adapters devem implementar.
Segue o princípio de Inversão de Dependência (DIP).
"""

from abc import ABC, abstractmethod
from typing import Callable, Mapping, Optional, Protocol

# Fornece a senha do backend no momento da chamada (nunca um literal embutido)
PasswordProvider = Callable[[], str]

# Relógio em segundos (time.time por padrão; substituível nos testes)
Clock = Callable[[], float]


class KeyValueStore(ABC):
    """
    Interface para persistência chave/valor com expiração por escrita.
    Evita acoplamento direto com cookies ou memória.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Recupera um valor; ``None`` quando ausente ou expirado. Nunca levanta para chave inexistente."""
        ...

    @abstractmethod
    def set(self, key: str, value: str, ttl_days: Optional[float] = None) -> None:
        """Grava um valor legível até ``ttl_days`` dias (``None`` = sem expiração)."""
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove a chave; o próximo ``get`` retorna ``None``."""
        ...


class PageLocation(Protocol):
    """Protocolo da URL atual da página (fonte do token escaneado)."""

    @property
    def url(self) -> str: ...
    def get_query_param(self, name: str) -> Optional[str]: ...
    def replace_url(self, url: str) -> None: ...
    def reload(self) -> None: ...


class StampCardView(ABC):
    """
    Colaborador de apresentação da cartela.

    Transições de página, animações e diálogos ficam fora do núcleo;
    o núcleo apenas indica o que deve ser exibido.
    """

    @abstractmethod
    def show_start_page(self) -> None:
        """Exibe a página inicial de um visitante novo."""
        ...

    @abstractmethod
    def show_game_page(self) -> None:
        """Exibe a cartela."""
        ...

    @abstractmethod
    def render_items(self, items: Mapping[str, bool]) -> None:
        """Desenha cada item como coletado / não coletado."""
        ...

    @abstractmethod
    def animate_item_collected(self, item_key: str) -> None:
        """Sinal visual de que ``item_key`` acabou de ser coletado."""
        ...

    @abstractmethod
    def set_redeem_enabled(self, enabled: bool) -> None:
        """Arma ou desarma o botão de resgate."""
        ...

    @abstractmethod
    def open_confirmation(self) -> None:
        ...

    @abstractmethod
    def close_confirmation(self) -> None:
        ...

    @abstractmethod
    def show_error(self, title: str, text: str) -> None:
        """Aviso visível ao usuário (falhas de rede ou de autorização)."""
        ...
