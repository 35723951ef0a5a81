"""
Cartela - cartela de carimbos com coleta por QR code e resgate único.

Organização:
- core/models: Entidades (estado da cartela, resultado de scan, slots de token)
- core/services: Estado persistido, ciclo de vida do token, protocolo de coleta
- core/exceptions: Hierarquia de exceções
- adapters/api: Transporte HTTP e cliente autorizado
- adapters/storage: Cookie jar e memória
- infrastructure: Logging
- ui: Console, tabelas e view da cartela
"""

from cartela.core.exceptions import (
    AuthFailure,
    CartelaBaseException,
    NetworkError,
    StorageReadError,
)

__version__ = "1.0.0"

__all__ = [
    "CartelaBaseException",
    "AuthFailure",
    "NetworkError",
    "StorageReadError",
    "__version__",
]
