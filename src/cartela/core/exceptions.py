"""Sistema centralizado de exceções customizadas da Cartela."""

from __future__ import annotations
from typing import Any, Optional


class CartelaBaseException(Exception):
    """Exceção base para todas as exceções customizadas da Cartela."""

    def __init__(self, message: str, *, details: Optional[dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        base = self.message
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            base = f"{base} ({details_str})"
        if self.cause:
            base = f"{base} | Causa: {self.cause}"
        return base

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# ==================== Exceções de Armazenamento ====================

class StorageException(CartelaBaseException):
    """Exceção base para erros do armazenamento persistente."""
    pass


class StorageReadError(StorageException):
    """Valor persistido ausente ou malformado.

    Sempre recuperado localmente (o campo assume ``False``/ausente);
    nunca chega ao usuário.
    """

    def __init__(self, key: str, raw_value: Any):
        self.key = key
        self.raw_value = raw_value
        super().__init__(
            f"Valor inválido no armazenamento para '{key}'",
            details={"key": key, "raw_value": raw_value},
        )


class StorageWriteError(StorageException):
    """Falha ao gravar um campo no armazenamento."""
    pass


# ==================== Exceções de Rede ====================

class NetworkError(CartelaBaseException):
    """Falha de transporte ou status HTTP fora da faixa de sucesso.

    Nunca é repetida automaticamente.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
        url: Optional[str] = None,
        cause: Optional[Exception] = None,
    ):
        self.status_code = status_code
        self.body = body
        self.url = url
        details: dict[str, Any] = {}
        if status_code is not None:
            details["status_code"] = status_code
        if url:
            details["url"] = url
        super().__init__(message, details=details, cause=cause)


# ==================== Exceções de Autenticação ====================

class AuthFailure(CartelaBaseException):
    """Emissão de token negada, ou chamada recusada duas vezes seguidas."""
    pass


# ==================== Exceções de Domínio ====================

class InvalidItemKeyError(CartelaBaseException):
    """Chave de item fora de ``item_1..item_4``."""

    def __init__(self, item_key: str):
        self.item_key = item_key
        super().__init__(f"Item desconhecido: {item_key}", details={"item_key": item_key})


# ==================== Exceções de Configuração ====================

class ConfigurationException(CartelaBaseException):
    """Exceção base para erros de configuração."""
    pass


# ==================== Helpers ====================

def wrap_exception(exc: Exception, wrapper_class: type[CartelaBaseException], message: str, **details: Any) -> CartelaBaseException:
    """
    Envolve uma exceção existente em uma exceção customizada.

    Args:
        exc: Exceção original
        wrapper_class: Classe da exceção customizada
        message: Mensagem descritiva
        **details: Detalhes adicionais

    Returns:
        Instância da exceção customizada
    """
    return wrapper_class(message, details=details, cause=exc)


__all__ = [
    "CartelaBaseException",
    "StorageException",
    "StorageReadError",
    "StorageWriteError",
    "NetworkError",
    "AuthFailure",
    "InvalidItemKeyError",
    "ConfigurationException",
    "wrap_exception",
]
