"""
Carregador de configuração (Loader).

Responsável por ler o arquivo de configuração (YAML) e aplicar overrides
via variáveis de ambiente, retornando uma instância válida de AppConfig.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from cartela.config.constants import DEFAULTS
from cartela.config.models import AppConfig
from cartela.core.exceptions import ConfigurationException


class ConfigLoaderException(ConfigurationException):
    """Erro ao carregar configurações."""
    pass


class ConfigLoader:
    """Carregador de configurações."""

    DEFAULT_FILENAME = DEFAULTS["config_file"]

    @classmethod
    def load(cls, path: Optional[Path | str] = None) -> AppConfig:
        """
        Carrega a configuração completa.

        Ordem de precedência:
        1. Defaults do código
        2. Arquivo YAML
        3. Variáveis de Ambiente (CARTELA_*)

        Args:
            path: Caminho opcional para o arquivo cartela.yaml

        Returns:
            AppConfig: Configuração validada e carregada.

        Raises:
            ConfigLoaderException: Se houver erro de parsing ou validação.
        """
        config_path = Path(path) if path else Path(cls.DEFAULT_FILENAME)

        file_data = cls._read_yaml(config_path)
        merged_data = cls._apply_env_overrides(file_data)

        try:
            return AppConfig.from_dict(merged_data)
        except ConfigurationException as e:
            raise ConfigLoaderException(f"Erro ao validar configuração: {e}", cause=e) from e
        except (AttributeError, TypeError, ValueError) as e:
            raise ConfigLoaderException(f"Erro ao validar configuração: {e}", cause=e) from e

    @staticmethod
    def _read_yaml(path: Path) -> Dict[str, Any]:
        """Lê arquivo YAML com segurança."""
        if not path.exists():
            return {}

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigLoaderException(f"Erro ao ler arquivo {path}: {e}", cause=e) from e

        if not isinstance(data, dict):
            raise ConfigLoaderException(f"Arquivo {path} deve conter um mapeamento no topo")
        return data

    @classmethod
    def _apply_env_overrides(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        """Aplica overrides via variáveis de ambiente (CARTELA_...)."""
        # Cópia rasa por seção para não mutar o original
        out = {k: (dict(v) if isinstance(v, dict) else v) for k, v in data.items()}

        # Mapeamento: ENV_VAR -> (path.no.dict, type_func)
        overrides = {
            "CARTELA_DEBUG": (["debug"], cls._parse_bool),
            "CARTELA_ACTID": (["campaign", "actid"], str),
            "CARTELA_EXPIRES_DAYS": (["campaign", "expires_days"], int),
            "CARTELA_API_BASE_URL": (["api", "base_url"], str),
            "CARTELA_STORE_BACKEND": (["store", "backend"], str),
            "CARTELA_COOKIE_FILE": (["store", "cookie_file"], str),
            "LOG_LEVEL": (["logging", "nivel_minimo"], str),
            "LOG_FILE": (["logging", "arquivo_log"], str),
        }

        for env_var, (keys, type_func) in overrides.items():
            val = os.getenv(env_var)
            if val is None:
                continue
            try:
                cls._set_nested(out, keys, type_func(val))
            except ValueError as e:
                raise ConfigLoaderException(f"Valor inválido em {env_var}: {val!r}", cause=e) from e

        return out

    @staticmethod
    def _set_nested(data: Dict[str, Any], keys: list, value: Any) -> None:
        """Helper para setar valor em dict aninhado."""
        current = data
        for key in keys[:-1]:
            # seção vazia no YAML chega como None
            if not isinstance(current.get(key), dict):
                current[key] = {}
            current = current[key]
        current[keys[-1]] = value

    @staticmethod
    def _parse_bool(val: str) -> bool:
        """Parse seguro de boolean."""
        return val.lower() in ("true", "1", "yes", "on")
