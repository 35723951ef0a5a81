"""Testes das implementações de ``KeyValueStore``."""

from __future__ import annotations

import tempfile
import time
import unittest
from pathlib import Path
from unittest.mock import Mock

from cartela.adapters.storage.cookie_store import CookieJarStore
from cartela.adapters.storage.key_value_store import (
    InMemoryKeyValueStore,
    ttl_seconds,
)

DIA = 86400


class FakeClock:
    def __init__(self, agora: float = 1_000_000.0) -> None:
        self.agora = agora

    def __call__(self) -> float:
        return self.agora


class TestTtlSeconds(unittest.TestCase):
    def test_conversao(self) -> None:
        self.assertIsNone(ttl_seconds(None))
        self.assertEqual(ttl_seconds(7), 7 * DIA)
        self.assertEqual(ttl_seconds(0), 1)


class TestInMemoryKeyValueStore(unittest.TestCase):
    """Armazenamento em memória com relógio injetável."""

    def setUp(self) -> None:
        self.clock = FakeClock()
        self.store = InMemoryKeyValueStore(clock=self.clock)

    def test_get_de_chave_ausente_retorna_none(self) -> None:
        self.assertIsNone(self.store.get("nada"))

    def test_set_get_delete(self) -> None:
        self.store.set("k", "v", 7)
        self.assertEqual(self.store.get("k"), "v")

        self.store.delete("k")
        self.assertIsNone(self.store.get("k"))

    def test_delete_de_chave_ausente_nao_levanta(self) -> None:
        self.store.delete("nada")

    def test_expiracao_por_escrita(self) -> None:
        self.store.set("k", "v", 1)

        self.clock.agora += DIA - 1
        self.assertEqual(self.store.get("k"), "v")

        self.clock.agora += 1
        self.assertIsNone(self.store.get("k"))

    def test_sem_ttl_nunca_expira(self) -> None:
        self.store.set("token", "abc", None)
        self.clock.agora += 365 * DIA
        self.assertEqual(self.store.get("token"), "abc")

    def test_reescrita_renova_ttl(self) -> None:
        self.store.set("k", "false", 1)
        self.clock.agora += DIA - 10
        self.store.set("k", "true", 1)
        self.clock.agora += 20
        self.assertEqual(self.store.get("k"), "true")


class TestCookieJarStore(unittest.TestCase):
    """Cookie jar persistido em arquivo Netscape."""

    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / "cookies.txt"
        self.logger = Mock()

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _store(self, **kwargs) -> CookieJarStore:
        return CookieJarStore(self.path, logger=self.logger, **kwargs)

    def test_valores_sobrevivem_a_recarga(self) -> None:
        store = self._store()
        store.set("act_user_id", "user_123abc", 7)
        store.set("act_item_1_state", "true", 7)
        store.set("act_token", "tok", None)

        recarregado = self._store()
        self.assertEqual(recarregado.get("act_user_id"), "user_123abc")
        self.assertEqual(recarregado.get("act_item_1_state"), "true")
        self.assertEqual(recarregado.get("act_token"), "tok")

    def test_sobrescrita_mantem_um_unico_cookie(self) -> None:
        store = self._store()
        store.set("k", "false", 7)
        store.set("k", "true", 7)

        self.assertEqual(self._store().get("k"), "true")

    def test_delete_persiste(self) -> None:
        store = self._store()
        store.set("k", "v", 7)
        store.delete("k")

        self.assertIsNone(store.get("k"))
        self.assertIsNone(self._store().get("k"))

    def test_delete_de_chave_ausente_nao_levanta(self) -> None:
        self._store().delete("nada")

    def test_cookie_expirado_nao_e_lido(self) -> None:
        passado = time.time() - 8 * DIA
        store = self._store(clock=lambda: passado)
        store.set("k", "v", 7)

        self.assertIsNone(self._store().get("k"))

    def test_arquivo_corrompido_comeca_vazio(self) -> None:
        self.path.write_text("isto não é um cookie jar\n", encoding="utf-8")

        store = self._store()

        self.assertIsNone(store.get("k"))
        self.logger.aviso.assert_called_once()


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
