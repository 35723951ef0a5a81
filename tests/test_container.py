"""Testes da montagem do container de dependências."""

from __future__ import annotations

import os
import unittest
from unittest.mock import patch

from dependency_injector import providers

from cartela.adapters.api.api_client import ApiClient
from cartela.adapters.storage.key_value_store import InMemoryKeyValueStore
from cartela.config import AppConfig
from cartela.config.models import APIConfig, StoreConfig
from cartela.container import ApplicationContainer, env_password_provider
from cartela.core.exceptions import AuthFailure
from cartela.core.services.stamp_card_service import HiddenResetTrigger, StampCardService


class TestApplicationContainer(unittest.TestCase):
    def _container(self, **config) -> ApplicationContainer:
        app_config = AppConfig(store=StoreConfig(backend="memory"), **config)
        container = ApplicationContainer()
        container.config.override(providers.Object(app_config))
        return container

    def test_monta_servicos_com_armazenamento_em_memoria(self) -> None:
        container = self._container()

        stamp_card = container.stamp_card()

        self.assertIsInstance(stamp_card, StampCardService)
        self.assertIsInstance(container.store(), InMemoryKeyValueStore)
        self.assertIs(stamp_card.state, container.collection_state())
        self.assertFalse(stamp_card.sync_redeem)
        self.assertIsInstance(container.hidden_reset(), HiddenResetTrigger)

    def test_resgate_sincronizado_quando_endpoint_configurado(self) -> None:
        container = self._container(api=APIConfig(redeem_endpoint="api/redeem"))

        stamp_card = container.stamp_card()

        self.assertTrue(stamp_card.sync_redeem)
        self.assertIsInstance(container.api_client(), ApiClient)


class TestEnvPasswordProvider(unittest.TestCase):
    def test_le_a_variavel_no_momento_da_chamada(self) -> None:
        provider = env_password_provider("CARTELA_TESTE_PWD")

        with patch.dict(os.environ, {"CARTELA_TESTE_PWD": "segredo"}):
            self.assertEqual(provider(), "segredo")

    def test_variavel_ausente_e_falha_de_autorizacao(self) -> None:
        provider = env_password_provider("CARTELA_TESTE_PWD_AUSENTE")

        with patch.dict(os.environ, {}, clear=False):
            os.environ.pop("CARTELA_TESTE_PWD_AUSENTE", None)
            with self.assertRaises(AuthFailure):
                provider()


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
