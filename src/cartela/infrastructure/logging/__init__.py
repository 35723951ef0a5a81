"""
Sistema de logging da Cartela.

Logger com API em português (``info``, ``sucesso``, ``aviso``, ``erro``)
e saída colorida via Rich.
"""

import dataclasses
from typing import Any, Optional

from cartela.config.models import LoggerConfig
from .logger import CartelaLogger, ScopedLogger

# Singleton do logger principal
_logger_instance: Optional[CartelaLogger] = None


def get_logger() -> CartelaLogger:
    """Retorna a instância singleton do logger."""
    global _logger_instance
    if _logger_instance is None:
        _logger_instance = CartelaLogger()
    return _logger_instance


def configurar_logging(config: Optional[LoggerConfig] = None, **overrides: Any) -> CartelaLogger:
    """Configura o logger global e o retorna para encadeamento.

    Args:
        config: Configuração opcional a ser aplicada.
        **overrides: Campos para sobrescrever na configuração final.
    """
    logger = get_logger()
    config = config or logger.config
    if overrides:
        config = dataclasses.replace(config, **overrides)
    logger.configure(config)
    return logger


__all__ = [
    "LoggerConfig",
    "CartelaLogger",
    "ScopedLogger",
    "get_logger",
    "configurar_logging",
]
