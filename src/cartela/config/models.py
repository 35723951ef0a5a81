"""
Modelos de dados de configuração.

Define a estrutura tipada das configurações usando Dataclasses.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from cartela.config.constants import (
    DEFAULT_QR_CODES,
    DEFAULTS,
    ITEM_KEYS,
    LEVEL_VALUES,
    VALID_STORE_BACKENDS,
)
from cartela.config.validators import (
    validate_choice,
    validate_injective_mapping,
    validate_not_empty,
    validate_positive_int,
    validate_type,
)


@dataclass
class LoggerConfig:
    """Configuração para o sistema de logging."""

    nome: str = "cartela"
    nivel_minimo: str = "INFO"
    arquivo_log: Optional[Path] = None
    sobrescrever_arquivo: bool = False
    mostrar_tempo: bool = True
    usar_cores: bool = True

    def __post_init__(self):
        validate_choice(self.nivel_minimo.upper(), set(LEVEL_VALUES.keys()), "nivel_minimo")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> LoggerConfig:
        clean_data = {k: v for k, v in data.items() if k in cls.__annotations__}

        if "usar_cores" in clean_data: validate_type(clean_data["usar_cores"], bool, "logging.usar_cores")
        if "mostrar_tempo" in clean_data: validate_type(clean_data["mostrar_tempo"], bool, "logging.mostrar_tempo")

        if clean_data.get("arquivo_log"):
            clean_data["arquivo_log"] = Path(clean_data["arquivo_log"])

        return cls(**clean_data)


@dataclass
class CampaignConfig:
    """Configuração da campanha (ACTID, validade e tabela de QR codes)."""

    actid: str = DEFAULTS["actid"]
    expires_days: int = DEFAULTS["expires_days"]
    qr_codes: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_QR_CODES))

    def __post_init__(self):
        validate_not_empty(self.actid, "actid")
        validate_positive_int(self.expires_days, "expires_days")
        validate_not_empty(self.qr_codes, "qr_codes")
        validate_injective_mapping(self.qr_codes, ITEM_KEYS, "qr_codes")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> CampaignConfig:
        clean = {k: v for k, v in data.items() if k in cls.__annotations__}

        if "actid" in clean: validate_type(clean["actid"], str, "campaign.actid")
        if "expires_days" in clean: validate_type(clean["expires_days"], int, "campaign.expires_days")
        if "qr_codes" in clean: validate_type(clean["qr_codes"], dict, "campaign.qr_codes")

        return cls(**clean)


@dataclass
class APIConfig:
    """Configurações do backend de tokens."""

    base_url: str = DEFAULTS["base_url"]
    default_timeout: int = DEFAULTS["timeout_api"]
    # Nome da variável de ambiente com a senha; a senha nunca fica na config
    password_env: str = DEFAULTS["password_env"]
    redeem_endpoint: Optional[str] = None

    def __post_init__(self):
        validate_not_empty(self.base_url, "base_url")
        validate_positive_int(self.default_timeout, "default_timeout")

    @property
    def sync_redeem(self) -> bool:
        return bool(self.redeem_endpoint)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> APIConfig:
        clean = {k: v for k, v in data.items() if k in cls.__annotations__}

        if "default_timeout" in clean: validate_type(clean["default_timeout"], int, "api.default_timeout")
        if "redeem_endpoint" in clean: validate_type(clean["redeem_endpoint"], str, "api.redeem_endpoint")

        return cls(**clean)


@dataclass
class StoreConfig:
    """Configuração do armazenamento persistente (o 'cookie jar')."""

    backend: str = "cookie"
    cookie_file: Path = Path(DEFAULTS["cookie_file"])

    def __post_init__(self):
        validate_choice(self.backend, VALID_STORE_BACKENDS, "store.backend")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> StoreConfig:
        clean = {k: v for k, v in data.items() if k in cls.__annotations__}

        if "backend" in clean: validate_type(clean["backend"], str, "store.backend")
        if clean.get("cookie_file"):
            clean["cookie_file"] = Path(clean["cookie_file"])

        return cls(**clean)


@dataclass
class AppConfig:
    """
    Configuração raiz da aplicação.
    Agrega todas as outras configurações.
    """

    app_name: str = "Cartela"
    version: str = "1.0.0"
    debug: bool = False

    campaign: Optional[CampaignConfig] = None
    api: Optional[APIConfig] = None
    store: Optional[StoreConfig] = None
    logging: Optional[LoggerConfig] = None

    def __post_init__(self):
        # Inicialização Lazy segura
        if self.campaign is None: self.campaign = CampaignConfig()
        if self.api is None: self.api = APIConfig()
        if self.store is None: self.store = StoreConfig()
        if self.logging is None: self.logging = LoggerConfig()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> AppConfig:
        campaign = CampaignConfig.from_dict(data.get("campaign") or {})
        api = APIConfig.from_dict(data.get("api") or {})
        store = StoreConfig.from_dict(data.get("store") or {})
        logging = LoggerConfig.from_dict(data.get("logging") or {})

        nested_keys = {"campaign", "api", "store", "logging"}
        root_args = {k: v for k, v in data.items() if k in cls.__annotations__ and k not in nested_keys}

        if "debug" in root_args: validate_type(root_args["debug"], bool, "debug")

        return cls(
            **root_args,
            campaign=campaign,
            api=api,
            store=store,
            logging=logging,
        )
