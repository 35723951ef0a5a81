"""Testes do carregador de configuração."""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from cartela.config import ConfigLoader, ConfigLoaderException, DEFAULT_QR_CODES
from cartela.config.models import APIConfig, CampaignConfig
from cartela.config.validators import ValidationException

ENV_VARS = (
    "CARTELA_DEBUG",
    "CARTELA_ACTID",
    "CARTELA_EXPIRES_DAYS",
    "CARTELA_API_BASE_URL",
    "CARTELA_STORE_BACKEND",
    "CARTELA_COOKIE_FILE",
    "LOG_LEVEL",
    "LOG_FILE",
)


class TestConfigLoader(unittest.TestCase):
    """Defaults -> YAML -> variáveis de ambiente."""

    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self._tmp.name)
        limpo = {k: v for k, v in os.environ.items() if k not in ENV_VARS}
        self._env = patch.dict(os.environ, limpo, clear=True)
        self._env.start()

    def tearDown(self) -> None:
        self._env.stop()
        self._tmp.cleanup()

    def _yaml(self, conteudo: str) -> Path:
        path = self.dir / "cartela.yaml"
        path.write_text(conteudo, encoding="utf-8")
        return path

    def test_arquivo_ausente_usa_defaults(self) -> None:
        config = ConfigLoader.load(self.dir / "nao_existe.yaml")

        self.assertEqual(config.campaign.actid, "web_2025_itf_forest")
        self.assertEqual(config.campaign.expires_days, 7)
        self.assertEqual(config.campaign.qr_codes, DEFAULT_QR_CODES)
        self.assertEqual(config.api.base_url, "https://starlitetw.com/")
        self.assertFalse(config.api.sync_redeem)
        self.assertEqual(config.store.backend, "cookie")

    def test_yaml_sobrescreve_defaults(self) -> None:
        path = self._yaml(
            "campaign:\n"
            "  actid: outra_campanha\n"
            "  expires_days: 3\n"
            "api:\n"
            "  redeem_endpoint: api/redeem\n"
            "store:\n"
            "  backend: memory\n"
        )

        config = ConfigLoader.load(path)

        self.assertEqual(config.campaign.actid, "outra_campanha")
        self.assertEqual(config.campaign.expires_days, 3)
        self.assertTrue(config.api.sync_redeem)
        self.assertEqual(config.store.backend, "memory")

    def test_env_sobrescreve_yaml(self) -> None:
        path = self._yaml("campaign:\n  actid: do_arquivo\n")

        with patch.dict(os.environ, {"CARTELA_ACTID": "do_env", "CARTELA_EXPIRES_DAYS": "14", "CARTELA_DEBUG": "1"}):
            config = ConfigLoader.load(path)

        self.assertEqual(config.campaign.actid, "do_env")
        self.assertEqual(config.campaign.expires_days, 14)
        self.assertTrue(config.debug)

    def test_env_invalido(self) -> None:
        with patch.dict(os.environ, {"CARTELA_EXPIRES_DAYS": "sete"}):
            with self.assertRaises(ConfigLoaderException):
                ConfigLoader.load(self.dir / "nao_existe.yaml")

    def test_tabela_de_qr_nao_injetiva(self) -> None:
        path = self._yaml("campaign:\n  qr_codes:\n    aaa: item_1\n    bbb: item_1\n")

        with self.assertRaises(ConfigLoaderException):
            ConfigLoader.load(path)

    def test_tabela_de_qr_com_item_desconhecido(self) -> None:
        path = self._yaml("campaign:\n  qr_codes:\n    aaa: item_7\n")

        with self.assertRaises(ConfigLoaderException):
            ConfigLoader.load(path)

    def test_backend_invalido(self) -> None:
        with patch.dict(os.environ, {"CARTELA_STORE_BACKEND": "sqlite"}):
            with self.assertRaises(ConfigLoaderException):
                ConfigLoader.load(self.dir / "nao_existe.yaml")

    def test_yaml_que_nao_e_mapeamento(self) -> None:
        path = self._yaml("- a\n- b\n")

        with self.assertRaises(ConfigLoaderException):
            ConfigLoader.load(path)

    def test_secoes_vazias_usam_defaults(self) -> None:
        path = self._yaml("campaign:\napi:\nstore:\nlogging:\n")

        config = ConfigLoader.load(path)

        self.assertEqual(config.campaign.actid, "web_2025_itf_forest")
        self.assertEqual(config.store.backend, "cookie")

    def test_secao_vazia_com_override_de_ambiente(self) -> None:
        path = self._yaml("campaign:\n")

        with patch.dict(os.environ, {"CARTELA_ACTID": "do_ambiente"}):
            config = ConfigLoader.load(path)

        self.assertEqual(config.campaign.actid, "do_ambiente")

    def test_secao_que_nao_e_mapeamento(self) -> None:
        path = self._yaml("campaign: 5\n")

        with self.assertRaises(ConfigLoaderException):
            ConfigLoader.load(path)


class TestModels(unittest.TestCase):
    def test_expires_days_positivo(self) -> None:
        with self.assertRaises(ValidationException):
            CampaignConfig(expires_days=0)

    def test_timeout_deve_ser_inteiro(self) -> None:
        with self.assertRaises(ValidationException):
            APIConfig.from_dict({"default_timeout": "30"})


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
