"""Testes do transporte HTTP e do cliente de API autorizado."""

from __future__ import annotations

import unittest
from unittest.mock import Mock

import requests

from cartela.adapters.api.api_client import ApiClient
from cartela.adapters.api.http_transport import HttpTransport
from cartela.adapters.storage.key_value_store import InMemoryKeyValueStore
from cartela.config.constants import NOTICE_TITLES
from cartela.core.exceptions import AuthFailure, NetworkError
from cartela.core.interfaces import StampCardView
from cartela.core.models import RequestOutcome
from cartela.core.services.token_manager import TokenLifecycleManager

ACTID = "web_2025_itf_forest"
TOKEN_KEY = f"{ACTID}_token"
UNAUTHORIZED = {"status": False, "msg": "Unauthorized"}


def _response(status_code: int = 200, payload=None, text: str = "") -> Mock:
    response = Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.text = text
    response.json.return_value = payload if payload is not None else {}
    return response


class TestHttpTransport(unittest.TestCase):
    """Envio cru com ``requests.Session`` mockada."""

    def setUp(self) -> None:
        self.session = Mock()
        self.transport = HttpTransport("https://starlitetw.com/", session=self.session, timeout=5, logger=Mock())

    def test_monta_url_e_cabecalhos(self) -> None:
        self.session.request.return_value = _response(payload={"status": True})

        dados = self.transport.send("api/redeem", {"a": 1}, token="tok")

        self.assertEqual(dados, {"status": True})
        args, kwargs = self.session.request.call_args
        self.assertEqual(args, ("POST", "https://starlitetw.com/api/redeem"))
        self.assertEqual(kwargs["json"], {"a": 1})
        self.assertEqual(kwargs["timeout"], 5)
        self.assertEqual(kwargs["headers"]["Authorization"], "Bearer tok")
        self.assertEqual(kwargs["headers"]["Accept"], "application/json")
        self.assertEqual(kwargs["headers"]["Content-Type"], "application/json")

    def test_sem_token_nao_envia_authorization(self) -> None:
        self.session.request.return_value = _response(payload={"status": True})

        self.transport.send("api/auth_token_get", {"actid": ACTID})

        _, kwargs = self.session.request.call_args
        self.assertNotIn("Authorization", kwargs["headers"])

    def test_base_url_sem_barra_final(self) -> None:
        transport = HttpTransport("https://starlitetw.com/campanha", session=self.session, logger=Mock())
        self.assertEqual(transport.build_url("api/x"), "https://starlitetw.com/campanha/api/x")

    def test_multipart_nao_define_content_type(self) -> None:
        self.session.request.return_value = _response(payload={"status": True})

        self.transport.send("api/upload", {"actid": ACTID}, files={"photo": b"..."}, token="tok")

        _, kwargs = self.session.request.call_args
        self.assertNotIn("Content-Type", kwargs["headers"])
        self.assertEqual(kwargs["data"], {"actid": ACTID})
        self.assertIn("files", kwargs)

    def test_status_fora_de_2xx_levanta_network_error(self) -> None:
        self.session.request.return_value = _response(500, text="boom")

        with self.assertRaises(NetworkError) as ctx:
            self.transport.send("api/x", {})

        self.assertEqual(ctx.exception.status_code, 500)
        self.assertEqual(ctx.exception.body, "boom")

    def test_falha_de_conexao_levanta_network_error(self) -> None:
        self.session.request.side_effect = requests.exceptions.ConnectionError("sem rede")

        with self.assertRaises(NetworkError):
            self.transport.send("api/x", {})

    def test_corpo_nao_json_levanta_network_error(self) -> None:
        response = _response(text="<html>")
        response.json.side_effect = ValueError("not json")
        self.session.request.return_value = response

        with self.assertRaises(NetworkError):
            self.transport.send("api/x", {})


class TestApiClient(unittest.TestCase):
    """Chamadas autorizadas com renovação silenciosa do token."""

    def setUp(self) -> None:
        self.transport = Mock()
        self.store = InMemoryKeyValueStore()
        self.tokens = TokenLifecycleManager(
            self.transport, self.store, lambda: "segredo", ACTID, logger=Mock()
        )
        self.view = Mock(spec=StampCardView)
        self.client = ApiClient(self.transport, self.tokens, view=self.view, logger=Mock())

    def _chamadas_autorizadas(self):
        return [c for c in self.transport.send.call_args_list if c.args[0] == "api/redeem"]

    def test_anexa_token_guardado(self) -> None:
        self.store.set(TOKEN_KEY, "tok", None)
        self.transport.send.return_value = {"status": True}

        self.assertEqual(self.client.post_data("api/redeem", {"x": 1}), {"status": True})

        self.transport.send.assert_called_once_with(
            "api/redeem", {"x": 1}, method="POST", token="tok", files=None
        )

    def test_unauthorized_duas_vezes_levanta_auth_failure(self) -> None:
        """Recusa -> uma renovação -> uma repetição -> AuthFailure, sem terceira tentativa."""
        self.store.set(TOKEN_KEY, "velho", None)
        self.transport.send.side_effect = [
            UNAUTHORIZED,
            {"status": True, "token": "novo"},
            UNAUTHORIZED,
        ]

        with self.assertRaises(AuthFailure):
            self.client.authorized_request("api/redeem", {"x": 1})

        self.assertEqual(self.transport.send.call_count, 3)
        autorizadas = self._chamadas_autorizadas()
        self.assertEqual([c.kwargs["token"] for c in autorizadas], ["velho", "novo"])
        self.view.show_error.assert_called_once()
        self.assertEqual(self.view.show_error.call_args.args[0], NOTICE_TITLES["auth"])

    def test_unauthorized_uma_vez_repete_com_token_novo(self) -> None:
        self.store.set(TOKEN_KEY, "velho", None)
        self.transport.send.side_effect = [
            UNAUTHORIZED,
            {"status": True, "token": "novo"},
            {"status": True, "ok": 1},
        ]

        result = self.client.try_request("api/redeem", {"x": 1})

        self.assertIs(result.outcome, RequestOutcome.SUCCESS)
        self.assertEqual(result.payload, {"status": True, "ok": 1})
        self.assertEqual(result.attempts, 2)
        self.assertEqual(self.store.get(TOKEN_KEY), "novo")
        self.view.show_error.assert_not_called()

    def test_sem_retry_nao_repete(self) -> None:
        self.store.set(TOKEN_KEY, "velho", None)
        self.transport.send.return_value = UNAUTHORIZED

        result = self.client.try_request("api/redeem", {}, retry=False)

        self.assertIs(result.outcome, RequestOutcome.AUTH_FAILURE)
        self.assertEqual(result.attempts, 1)
        self.transport.send.assert_called_once()

    def test_erro_de_rede_nao_e_repetido(self) -> None:
        self.store.set(TOKEN_KEY, "tok", None)
        self.transport.send.side_effect = NetworkError("HTTP error! Status: 502", status_code=502)

        with self.assertRaises(NetworkError):
            self.client.authorized_request("api/redeem", {})

        self.transport.send.assert_called_once()
        self.assertEqual(self.view.show_error.call_args.args[0], NOTICE_TITLES["network"])
        self.assertEqual(self.store.get(TOKEN_KEY), "tok")

    def test_emissao_negada_vira_auth_failure(self) -> None:
        self.transport.send.return_value = {"status": False, "msg": "Wrong password"}

        with self.assertRaises(AuthFailure) as ctx:
            self.client.authorized_request("api/redeem", {})

        self.assertEqual(ctx.exception.message, "Wrong password")
        self.view.show_error.assert_called_once_with(NOTICE_TITLES["auth"], "Wrong password")

    def test_chamada_sem_token_devolve_payload_como_esta(self) -> None:
        self.transport.send.return_value = UNAUTHORIZED

        dados = self.client.authorized_request("api/public", {}, needs_token=False)

        self.assertEqual(dados, UNAUTHORIZED)
        self.transport.send.assert_called_once_with(
            "api/public", {}, method="POST", token=None, files=None
        )


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
