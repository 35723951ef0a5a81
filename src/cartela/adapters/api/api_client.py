"""
Cliente de API autorizado.

Primitiva genérica usada pelo serviço da cartela: anexa o bearer token,
detecta o sentinela ``{status: false, msg: "Unauthorized"}`` e repete a
chamada exatamente uma vez após renovar o token.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from cartela.config.constants import NOTICE_TITLES, UNAUTHORIZED_MSG
from cartela.core.exceptions import AuthFailure, NetworkError
from cartela.core.interfaces import StampCardView
from cartela.core.models import RequestOutcome, RequestResult

MAX_ATTEMPTS = 2


class ApiClient:
    """
    Requisições autorizadas ao backend da campanha.

    Uso:
        client = ApiClient(transport, tokens, view=view)
        data = client.post_data("api/redeem", {"actid": actid, "user_id": uid})
    """

    def __init__(
        self,
        transport: Any,
        tokens: Any,
        *,
        view: Optional[StampCardView] = None,
        logger: Optional[Any] = None,
    ) -> None:
        self._transport = transport
        self._tokens = tokens
        self.view = view
        self._logger = logger or self._get_default_logger()

    def _get_default_logger(self) -> Any:
        from cartela.infrastructure.logging import get_logger
        return get_logger()

    @staticmethod
    def is_unauthorized(payload: Dict[str, Any]) -> bool:
        return payload.get("status") is False and payload.get("msg") == UNAUTHORIZED_MSG

    def try_request(
        self,
        endpoint: str,
        body: Optional[Dict[str, Any]] = None,
        *,
        method: str = "POST",
        needs_token: bool = True,
        retry: bool = True,
        files: Optional[Dict[str, Any]] = None,
    ) -> RequestResult:
        """
        Executa a chamada sem levantar exceções.

        No máximo duas tentativas: a segunda só acontece quando a primeira
        foi autorizada, voltou ``Unauthorized`` e ``retry`` está ativo.
        Falhas de rede nunca são repetidas.
        """
        max_attempts = MAX_ATTEMPTS if (needs_token and retry) else 1
        attempt = 0

        while attempt < max_attempts:
            attempt += 1
            try:
                token = self._tokens.check_and_get_token() if needs_token else None
                payload = self._transport.send(endpoint, body, method=method, token=token, files=files)
            except AuthFailure as e:
                return RequestResult.auth_failure(e, attempt)
            except NetworkError as e:
                return RequestResult.network_failure(e, attempt)

            if not (needs_token and self.is_unauthorized(payload)):
                return RequestResult.success(payload, attempt)

            self._tokens.invalidate()
            if attempt < max_attempts:
                self._logger.aviso("Token expirado ou inválido; renovando", endpoint=endpoint)

        return RequestResult.auth_failure(
            AuthFailure(UNAUTHORIZED_MSG, details={"endpoint": endpoint, "attempts": attempt}),
            attempt,
        )

    def authorized_request(
        self,
        endpoint: str,
        body: Optional[Dict[str, Any]] = None,
        method: str = "POST",
        needs_token: bool = True,
        retry: bool = True,
        files: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Executa a chamada e devolve o payload.

        Raises:
            AuthFailure: Token negado, ou chamada recusada duas vezes.
            NetworkError: Falha de transporte ou status fora de 2xx.
        """
        result = self.try_request(
            endpoint, body, method=method, needs_token=needs_token, retry=retry, files=files
        )
        if not result.ok:
            self._notify(endpoint, result)
        return result.unwrap()

    def post_data(self, endpoint: str, data: Dict[str, Any], **options: Any) -> Dict[str, Any]:
        return self.authorized_request(endpoint, data, method="POST", **options)

    def _notify(self, endpoint: str, result: RequestResult) -> None:
        titulo = NOTICE_TITLES["auth" if result.outcome is RequestOutcome.AUTH_FAILURE else "network"]
        mensagem = result.error.message if result.error is not None else ""
        self._logger.erro(
            "Falha na chamada à API",
            endpoint=endpoint,
            resultado=result.outcome.value,
            tentativas=result.attempts,
            erro=mensagem,
        )
        if self.view is not None:
            self.view.show_error(titulo, mensagem)
