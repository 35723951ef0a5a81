"""
Transporte HTTP do backend da campanha.

Envia uma única requisição com ``requests.Session`` e devolve o JSON
decodificado. Não conhece tokens de verdade, nem retentativas: apenas
anexa o cabeçalho ``Authorization`` quando recebe um token.
"""

from __future__ import annotations

from typing import Any, Dict, Optional
from urllib.parse import urljoin

import requests

from cartela.config.constants import DEFAULTS
from cartela.core.exceptions import NetworkError


class HttpTransport:
    """Envio cru de requisições JSON (ou multipart) ao backend."""

    def __init__(
        self,
        base_url: str = DEFAULTS["base_url"],
        *,
        session: Optional[requests.Session] = None,
        timeout: int = DEFAULTS["timeout_api"],
        logger: Optional[Any] = None,
    ) -> None:
        # urljoin descarta o último segmento sem barra final
        self.base_url = base_url if base_url.endswith("/") else f"{base_url}/"
        self.session = session or requests.Session()
        self.timeout = timeout
        self._logger = logger or self._get_default_logger()

    def _get_default_logger(self) -> Any:
        from cartela.infrastructure.logging import get_logger
        return get_logger()

    def build_url(self, endpoint: str) -> str:
        return urljoin(self.base_url, endpoint)

    def send(
        self,
        endpoint: str,
        body: Optional[Dict[str, Any]] = None,
        *,
        method: str = "POST",
        token: Optional[str] = None,
        files: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Executa a requisição e retorna o corpo JSON.

        Args:
            endpoint: Caminho relativo à URL base (ex.: ``api/auth_token_get``)
            body: Corpo da requisição; enviado como JSON, ou como campos de
                formulário quando ``files`` é informado
            method: Método HTTP
            token: Bearer token, quando a chamada é autorizada
            files: Arquivos para envio multipart

        Raises:
            NetworkError: Falha de transporte, status fora de 2xx ou corpo
                que não é JSON.
        """
        url = self.build_url(endpoint)
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"

        kwargs: Dict[str, Any] = {"headers": headers, "timeout": self.timeout}
        if files:
            # multipart: o requests define o Content-Type com boundary
            kwargs["data"] = body or {}
            kwargs["files"] = files
        elif body is not None:
            headers["Content-Type"] = "application/json"
            kwargs["json"] = body

        self._logger.debug("Requisição", metodo=method, url=url, autorizada=bool(token))

        try:
            response = self.session.request(method, url, **kwargs)
        except requests.exceptions.Timeout as e:
            raise NetworkError(f"Timeout ao acessar {url}", url=url, cause=e) from e
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"Falha de conexão com {url}", url=url, cause=e) from e

        if not response.ok:
            texto = response.text or "Sem resposta"
            raise NetworkError(
                f"HTTP error! Status: {response.status_code}, Message: {texto}",
                status_code=response.status_code,
                body=texto,
                url=url,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise NetworkError(
                "Resposta do servidor não é JSON",
                status_code=response.status_code,
                body=response.text,
                url=url,
                cause=e,
            ) from e

        if not isinstance(data, dict):
            raise NetworkError(
                "Resposta do servidor em formato inesperado",
                status_code=response.status_code,
                body=response.text,
                url=url,
            )
        return data
