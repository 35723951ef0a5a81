"""
Serviço de estado da cartela.

Mantém em memória os quatro itens, o resgate e o identificador do
visitante, espelhando cada campo no armazenamento com expiração própria.
É a única fonte de verdade durante uma sessão; nada aqui é singleton,
cada instância recebe seu armazenamento pelo construtor.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from cartela.config.constants import DEFAULTS, ITEM_KEYS
from cartela.core.codec import BooleanCodec
from cartela.core.exceptions import InvalidItemKeyError, StorageReadError, StorageWriteError
from cartela.core.interfaces import KeyValueStore
from cartela.core.models import CollectionState, StoreKeys, VisitorStatus, new_visitor_id


class CollectionStateService:
    """
    Máquina de estados persistida da cartela.

    Invariantes:
        - ``redeemed`` implica os quatro itens coletados;
        - cada item só vai de ``False`` para ``True`` enquanto a
          identidade do visitante for a mesma;
        - ``redeemed`` só volta a ``False`` via ``reset()``.
    """

    def __init__(
        self,
        store: KeyValueStore,
        actid: str = DEFAULTS["actid"],
        *,
        expires_days: float = DEFAULTS["expires_days"],
        codec: Optional[BooleanCodec] = None,
        id_factory: Callable[[], str] = new_visitor_id,
        logger: Optional[Any] = None,
    ) -> None:
        self._store = store
        self.keys = StoreKeys(actid)
        self.expires_days = expires_days
        self._codec = codec or BooleanCodec()
        self._id_factory = id_factory
        self._logger = logger or self._get_default_logger()
        self._state = CollectionState()

    def _get_default_logger(self) -> Any:
        from cartela.infrastructure.logging import get_logger
        return get_logger()

    # ==================== Leitura ====================

    @property
    def state(self) -> CollectionState:
        return self._state

    @property
    def visitor_id(self) -> Optional[str]:
        return self._state.visitor_id

    @property
    def redeemed(self) -> bool:
        return self._state.redeemed

    def is_collected(self, item_key: str) -> bool:
        self._check_item(item_key)
        return self._state.items[item_key]

    def items(self) -> Dict[str, bool]:
        return self._state.snapshot()

    def can_redeem(self) -> bool:
        """Verdadeiro sse os quatro itens foram coletados e ainda não houve resgate."""
        return self._state.all_collected and not self._state.redeemed

    # ==================== Ciclo de vida ====================

    def initialize_from_store(self) -> VisitorStatus:
        """
        Hidrata o estado a partir do armazenamento.

        Returns:
            ``VisitorStatus.NEW`` quando não há identidade persistida (o
            chamador deve criar uma); ``VisitorStatus.RETURNING`` caso
            contrário, com campos ilegíveis assumindo ``False``.
        """
        visitor_id = self._store.get(self.keys.user_id)
        if not visitor_id:
            self._logger.debug("Nenhuma identidade persistida", chave=self.keys.user_id)
            return VisitorStatus.NEW

        items = {k: self._read_flag(self.keys.item_state(k)) for k in ITEM_KEYS}
        redeemed = self._read_flag(self.keys.redeem_state)

        if redeemed and not all(items.values()):
            # Itens expiraram antes do resgate; o resgate só volta atrás
            # com a limpeza completa da identidade.
            self._logger.aviso(
                "Resgate persistido sem os quatro itens; resgate mantido",
                visitante=visitor_id,
            )

        self._state = CollectionState(visitor_id=visitor_id, items=items, redeemed=redeemed)
        self._logger.info(
            "Visitante recorrente carregado",
            visitante=visitor_id,
            coletados=self._state.collected_count,
            resgatado=redeemed,
        )
        return VisitorStatus.RETURNING

    def create_identity(self) -> str:
        """
        Gera uma identidade nova, zera os cinco campos e persiste os seis valores.

        O estado em memória é trocado antes de qualquer escrita, então uma
        falha parcial de persistência nunca deixa a memória inconsistente.
        """
        visitor_id = self._id_factory()
        self._state = CollectionState(visitor_id=visitor_id)

        falhas = 0
        falhas += not self._write(self.keys.user_id, visitor_id)
        for item_key in ITEM_KEYS:
            falhas += not self._write(self.keys.item_state(item_key), self._codec.encode(False))
        falhas += not self._write(self.keys.redeem_state, self._codec.encode(False))

        if falhas:
            self._logger.aviso("Identidade criada com persistência parcial", visitante=visitor_id, falhas=falhas)
        else:
            self._logger.sucesso("Identidade criada", visitante=visitor_id)
        return visitor_id

    def mark_collected(self, item_key: str) -> bool:
        """
        Marca ``item_key`` como coletado e persiste apenas esse campo.

        Returns:
            ``True`` se houve mudança; ``False`` se o item já estava coletado.

        Raises:
            InvalidItemKeyError: Chave fora de ``item_1..item_4``.
        """
        self._check_item(item_key)
        if self._state.items[item_key]:
            return False

        self._state.items[item_key] = True
        self._write(self.keys.item_state(item_key), self._codec.encode(True))
        self._logger.sucesso("Item coletado", visitante=self.visitor_id, item=item_key)
        return True

    def mark_redeemed(self) -> bool:
        """
        Registra o resgate quando ``can_redeem()`` for verdadeiro.

        Returns:
            ``True`` se o resgate foi aplicado agora.
        """
        if not self.can_redeem():
            return False

        self._state.redeemed = True
        self._write(self.keys.redeem_state, self._codec.encode(True))
        self._logger.sucesso("Resgate registrado", visitante=self.visitor_id)
        return True

    def reset(self) -> None:
        """Apaga todos os campos persistidos e descarta o estado em memória."""
        anterior = self._state.visitor_id
        for key in self.keys.collection_keys():
            try:
                self._store.delete(key)
            except StorageWriteError as e:
                self._logger.erro("Falha ao apagar campo", chave=key, erro=str(e))
        self._state = CollectionState()
        self._logger.aviso("Dados da cartela apagados", visitante=anterior)

    # ==================== Internos ====================

    @staticmethod
    def _check_item(item_key: str) -> None:
        if item_key not in ITEM_KEYS:
            raise InvalidItemKeyError(item_key)

    def _read_flag(self, key: str) -> bool:
        raw = self._store.get(key)
        try:
            return self._codec.decode_strict(key, raw)
        except StorageReadError as e:
            if raw is not None:
                self._logger.aviso("Valor persistido inválido; assumindo False", chave=key, valor=raw)
            else:
                self._logger.debug("Campo ausente ou expirado; assumindo False", chave=e.key)
            return False

    def _write(self, key: str, value: str) -> bool:
        try:
            self._store.set(key, value, self.expires_days)
        except StorageWriteError as e:
            self._logger.erro("Falha ao persistir campo", chave=key, erro=str(e))
            return False
        return True
