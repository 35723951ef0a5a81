"""
Protocolo de coleta e resgate da cartela.

Decide quando um token escaneado marca um item e quando o conjunto pode
ser resgatado. A apresentação fica atrás de ``StampCardView``; a URL da
página atrás de ``PageLocation``.
"""

from __future__ import annotations

import time
from typing import Any, Callable, Mapping, Optional
from urllib.parse import unquote_plus, urlsplit, urlunsplit

from cartela.config.constants import (
    DEFAULT_QR_CODES,
    HIDDEN_RESET_CLICKS,
    HIDDEN_RESET_WINDOW,
    NOTICE_TITLES,
    TOKEN_QUERY_PARAM,
)
from cartela.core.exceptions import AuthFailure, NetworkError
from cartela.core.interfaces import Clock, PageLocation, StampCardView
from cartela.core.models import ScanResult, VisitorStatus
from cartela.core.services.collection_state import CollectionStateService


def strip_query_param(url: str, name: str) -> str:
    """Remove ``name`` da query string; os demais segmentos e o fragmento ficam intactos."""
    partes = urlsplit(url)
    if not partes.query:
        return url
    restantes = [
        segmento
        for segmento in partes.query.split("&")
        if unquote_plus(segmento.split("=", 1)[0]) != name
    ]
    return urlunsplit(partes._replace(query="&".join(restantes)))


class StampCardService:
    """
    Orquestra uma "carga de página" da cartela.

    Fluxo:
        1. ``bootstrap()`` hidrata o estado: visitante recorrente vai para
           a cartela e processa o scan; visitante novo vê a página inicial.
        2. ``start_new_visitor()`` cria a identidade e processa o scan.
        3. ``request_redeem()`` / ``confirm_redeem()`` / ``cancel_redeem()``.
    """

    def __init__(
        self,
        state: CollectionStateService,
        view: StampCardView,
        qr_codes: Optional[Mapping[str, str]] = None,
        *,
        location: Optional[PageLocation] = None,
        api_client: Optional[Any] = None,
        redeem_endpoint: Optional[str] = None,
        logger: Optional[Any] = None,
    ) -> None:
        self.state = state
        self.view = view
        self.qr_codes = dict(qr_codes if qr_codes is not None else DEFAULT_QR_CODES)
        self.location = location
        self._api = api_client
        self.redeem_endpoint = redeem_endpoint
        self._logger = logger or self._get_default_logger()
        # Identidade para a qual a confirmação foi aberta (None = fechada)
        self._confirmation_for: Optional[str] = None

    def _get_default_logger(self) -> Any:
        from cartela.infrastructure.logging import get_logger
        return get_logger()

    @property
    def confirmation_open(self) -> bool:
        return self._confirmation_for is not None

    @property
    def sync_redeem(self) -> bool:
        return self._api is not None and bool(self.redeem_endpoint)

    # ==================== Sessão ====================

    def bootstrap(self, location: Optional[PageLocation] = None) -> VisitorStatus:
        """Inicializa a página a partir do armazenamento."""
        if location is not None:
            self.location = location

        status = self.state.initialize_from_store()
        if status is VisitorStatus.RETURNING:
            self.view.show_game_page()
            self.refresh_view()
            self.handle_scan()
        else:
            self.view.show_start_page()
        return status

    def start_new_visitor(self) -> ScanResult:
        """Cria a identidade do visitante novo, exibe a cartela e processa o scan."""
        self._drop_confirmation()
        self.state.create_identity()
        self.view.show_game_page()
        self.refresh_view()
        return self.handle_scan()

    def clear_and_restart(self) -> VisitorStatus:
        """Apaga todos os dados da cartela e recarrega a página como visitante novo."""
        self._drop_confirmation()
        self.state.reset()
        if self.location is not None:
            self.location.reload()
        return self.bootstrap()

    def refresh_view(self) -> None:
        """Desenha os quatro itens e arma o resgate sse ``can_redeem()``."""
        self.view.render_items(self.state.items())
        self.view.set_redeem_enabled(self.state.can_redeem())

    # ==================== Coleta ====================

    def handle_scan(self) -> ScanResult:
        """
        Processa o parâmetro ``token`` da URL atual.

        Token ausente, desconhecido ou de item já coletado resulta em
        ``collected=False`` sem mudar estado nem URL. Nunca levanta.
        """
        token = self.location.get_query_param(TOKEN_QUERY_PARAM) if self.location is not None else None
        if not token:
            return ScanResult(collected=False)

        item_key = self.qr_codes.get(token)
        if item_key is None:
            self._logger.debug("Token de QR desconhecido", token=token)
            return ScanResult(collected=False, token=token)

        if self.state.visitor_id is None:
            self._logger.debug("Scan ignorado: visitante sem identidade", item=item_key)
            return ScanResult(collected=False, item_key=item_key, token=token)

        if not self.state.mark_collected(item_key):
            self._logger.info("Item já coletado", item=item_key)
            return ScanResult(collected=False, item_key=item_key, token=token)

        self.view.animate_item_collected(item_key)
        self.location.replace_url(strip_query_param(self.location.url, TOKEN_QUERY_PARAM))
        self.refresh_view()
        return ScanResult(collected=True, item_key=item_key, token=token)

    # ==================== Resgate ====================

    def request_redeem(self) -> bool:
        """Abre a confirmação quando o resgate está liberado."""
        if not self.state.can_redeem():
            return False
        self._confirmation_for = self.state.visitor_id
        self.view.open_confirmation()
        return True

    def confirm_redeem(self) -> bool:
        """
        Efetiva o resgate.

        Só aplica com a confirmação aberta, a mesma identidade de quando
        ela foi aberta e ``can_redeem()`` ainda verdadeiro. Com
        sincronização configurada, o backend precisa aceitar antes; uma
        recusa deixa estado e confirmação como estavam.
        """
        if self._confirmation_for is None:
            return False

        if self._confirmation_for != self.state.visitor_id:
            self._logger.aviso(
                "Identidade mudou com a confirmação aberta; resgate descartado",
                aberta_para=self._confirmation_for,
                atual=self.state.visitor_id,
            )
            self._close_confirmation()
            return False

        if not self.state.can_redeem():
            self._close_confirmation()
            self.refresh_view()
            return False

        if self.sync_redeem and not self._sync_with_backend():
            return False

        self.state.mark_redeemed()
        self.view.set_redeem_enabled(False)
        self._close_confirmation()
        return True

    def cancel_redeem(self) -> None:
        self._close_confirmation()

    # ==================== Internos ====================

    def _sync_with_backend(self) -> bool:
        body = {"actid": self.state.keys.actid, "user_id": self.state.visitor_id}
        try:
            with self._logger.etapa("Sincronizar resgate", visitante=self.state.visitor_id):
                payload = self._api.post_data(self.redeem_endpoint, body)
        except (AuthFailure, NetworkError) as e:
            # O cliente de API já exibiu o aviso ao usuário
            self._logger.erro("Resgate não sincronizado", erro=str(e))
            return False

        if payload.get("status") is False:
            mensagem = payload.get("msg") or ""
            self._logger.erro("Backend recusou o resgate", motivo=mensagem)
            self.view.show_error(NOTICE_TITLES["redeem"], mensagem)
            return False
        return True

    def _close_confirmation(self) -> None:
        self._confirmation_for = None
        self.view.close_confirmation()

    def _drop_confirmation(self) -> None:
        if self._confirmation_for is not None:
            self._close_confirmation()


class HiddenResetTrigger:
    """
    Atalho escondido de limpeza.

    ``clicks`` cliques seguidos, com menos de ``window`` segundos entre
    cliques consecutivos, disparam ``on_trigger``. Uma pausa maior zera
    a contagem.
    """

    def __init__(
        self,
        on_trigger: Callable[[], Any],
        *,
        clicks: int = HIDDEN_RESET_CLICKS,
        window: float = HIDDEN_RESET_WINDOW,
        clock: Clock = time.monotonic,
    ) -> None:
        self._on_trigger = on_trigger
        self.clicks = clicks
        self.window = window
        self._clock = clock
        self.count = 0
        self._last: Optional[float] = None

    def click(self) -> bool:
        """Registra um clique; retorna ``True`` quando a limpeza foi disparada."""
        agora = self._clock()
        if self._last is not None and agora - self._last >= self.window:
            self.count = 0
        self.count += 1
        self._last = agora

        if self.count >= self.clicks:
            self.count = 0
            self._last = None
            self._on_trigger()
            return True
        return False
