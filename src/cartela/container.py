"""
Sistema de injeção de dependências da Cartela.

Monta armazenamento, serviços, cliente de API e view a partir do
``AppConfig`` usando dependency-injector.
"""

from __future__ import annotations

import os
from typing import Optional

from dependency_injector import containers, providers

from cartela.adapters.api.api_client import ApiClient
from cartela.adapters.api.http_transport import HttpTransport
from cartela.adapters.location import InMemoryPageLocation
from cartela.adapters.storage.cookie_store import CookieJarStore
from cartela.adapters.storage.key_value_store import InMemoryKeyValueStore
from cartela.config import AppConfig, get_config
from cartela.core.codec import BooleanCodec
from cartela.core.exceptions import AuthFailure
from cartela.core.interfaces import KeyValueStore, PasswordProvider
from cartela.core.services.collection_state import CollectionStateService
from cartela.core.services.stamp_card_service import HiddenResetTrigger, StampCardService
from cartela.core.services.token_manager import TokenLifecycleManager
from cartela.infrastructure.logging import get_logger
from cartela.ui.view import ConsoleStampCardView


def env_password_provider(var_name: str) -> PasswordProvider:
    """Lê a senha do backend da variável ``var_name`` no momento da chamada."""

    def _provider() -> str:
        senha = os.environ.get(var_name)
        if not senha:
            raise AuthFailure(
                "Senha do backend não configurada",
                details={"variavel": var_name},
            )
        return senha

    return _provider


def build_store(config: AppConfig, logger=None) -> KeyValueStore:
    if config.store.backend == "memory":
        return InMemoryKeyValueStore()
    return CookieJarStore(config.store.cookie_file, logger=logger)


class ApplicationContainer(containers.DeclarativeContainer):
    """
    Container de injeção de dependências da aplicação.

    Cada execução da CLI corresponde a uma carga de página: o container
    é criado, a URL é atribuída a ``location`` e o ``stamp_card`` conduz
    o fluxo.
    """

    config = providers.Singleton(get_config)

    logger = providers.Singleton(get_logger)

    store = providers.Singleton(build_store, config=config, logger=logger)

    codec = providers.Singleton(BooleanCodec)

    location = providers.Singleton(InMemoryPageLocation)

    view = providers.Singleton(ConsoleStampCardView)

    collection_state = providers.Singleton(
        CollectionStateService,
        store=store,
        actid=config.provided.campaign.actid,
        expires_days=config.provided.campaign.expires_days,
        codec=codec,
        logger=logger,
    )

    http_transport = providers.Singleton(
        HttpTransport,
        base_url=config.provided.api.base_url,
        timeout=config.provided.api.default_timeout,
        logger=logger,
    )

    password_provider = providers.Callable(
        env_password_provider,
        var_name=config.provided.api.password_env,
    )

    token_manager = providers.Singleton(
        TokenLifecycleManager,
        transport=http_transport,
        store=store,
        password_provider=password_provider,
        actid=config.provided.campaign.actid,
        logger=logger,
    )

    api_client = providers.Singleton(
        ApiClient,
        transport=http_transport,
        tokens=token_manager,
        view=view,
        logger=logger,
    )

    stamp_card = providers.Singleton(
        lambda config, state, view, location, api_client, logger: StampCardService(
            state,
            view,
            config.campaign.qr_codes,
            location=location,
            api_client=api_client if config.api.sync_redeem else None,
            redeem_endpoint=config.api.redeem_endpoint,
            logger=logger,
        ),
        config=config,
        state=collection_state,
        view=view,
        location=location,
        api_client=api_client,
        logger=logger,
    )

    hidden_reset = providers.Factory(
        lambda stamp_card: HiddenResetTrigger(stamp_card.clear_and_restart),
        stamp_card=stamp_card,
    )


_container: Optional[ApplicationContainer] = None


def get_container() -> ApplicationContainer:
    """Retorna o container global, criando-o na primeira chamada."""
    global _container
    if _container is None:
        _container = ApplicationContainer()
    return _container


__all__ = ["ApplicationContainer", "get_container", "env_password_provider", "build_store"]
