"""
Ciclo de vida do bearer token.

O token fica no armazenamento sob ``{ACTID}_token`` sem expiração do lado
do cliente; a única indicação de expiração é a ausência ou um
``"Unauthorized"`` vindo do servidor.
"""

from __future__ import annotations

from typing import Any, Optional

from cartela.config.constants import DEFAULTS, ENDPOINTS
from cartela.core.exceptions import AuthFailure
from cartela.core.interfaces import KeyValueStore, PasswordProvider
from cartela.core.models import StoreKeys, TokenSlotState

FALLBACK_TOKEN_MESSAGE = "Failed to get a valid token."


class TokenLifecycleManager:
    """Obtém, guarda e renova o token de autorização."""

    def __init__(
        self,
        transport: Any,
        store: KeyValueStore,
        password_provider: PasswordProvider,
        actid: str = DEFAULTS["actid"],
        *,
        logger: Optional[Any] = None,
    ) -> None:
        self._transport = transport
        self._store = store
        self._password_provider = password_provider
        self.actid = actid
        self.key = StoreKeys(actid).token
        self._logger = logger or self._get_default_logger()
        self._rejected = False

    def _get_default_logger(self) -> Any:
        from cartela.infrastructure.logging import get_logger
        return get_logger()

    @property
    def state(self) -> TokenSlotState:
        if self._rejected:
            return TokenSlotState.REJECTED
        if self._store.get(self.key):
            return TokenSlotState.VALID
        return TokenSlotState.ABSENT

    def stored_token(self) -> Optional[str]:
        return self._store.get(self.key) or None

    def fetch_token(self) -> str:
        """
        Pede um token novo ao backend e o persiste sem expiração.

        Raises:
            AuthFailure: Backend respondeu ``status`` falso.
            NetworkError: Falha de transporte (propagada como está).
        """
        payload = self._transport.send(
            ENDPOINTS["auth_token_get"],
            {"actid": self.actid, "pwd": self._password_provider()},
        )
        token = payload.get("token")
        if payload.get("status") is not True or not token:
            mensagem = payload.get("msg") or FALLBACK_TOKEN_MESSAGE
            self._logger.erro("Emissão de token negada", actid=self.actid, motivo=mensagem)
            raise AuthFailure(mensagem, details={"actid": self.actid})

        self._store.set(self.key, str(token), None)
        self._rejected = False
        self._logger.sucesso("Token obtido", actid=self.actid)
        return str(token)

    def invalidate(self) -> None:
        """Marca o token atual como recusado e o remove do armazenamento."""
        anterior = self.state
        self._rejected = True
        self._logger.aviso("Token recusado pelo servidor", de=anterior.value, para=TokenSlotState.REJECTED.value)
        self._store.delete(self.key)
        self._rejected = False
        self._logger.debug("Token removido", de=TokenSlotState.REJECTED.value, para=TokenSlotState.ABSENT.value)

    def check_and_get_token(self) -> str:
        """Token guardado, se houver; caso contrário exatamente um ``fetch_token()``."""
        token = self.stored_token()
        if token:
            return token
        return self.fetch_token()
