"""
Codec booleano na fronteira do armazenamento.

Os valores persistidos são strings: ``True`` vira ``"true"`` e ``False``
vira ``"false"``. Na leitura, apenas o literal exato ``"true"`` é
verdadeiro; qualquer outro valor (ausente, ``"TRUE"``, ``"1"``, lixo)
é tratado como ``False``. É uma decisão deliberada de falhar para o
lado seguro: um campo corrompido nunca habilita um resgate.
"""

from __future__ import annotations

from typing import Optional

from cartela.core.exceptions import StorageReadError

TRUE_LITERAL = "true"
FALSE_LITERAL = "false"


class BooleanCodec:
    """Converte ``bool`` <-> ``"true"``/``"false"``."""

    @staticmethod
    def encode(value: bool) -> str:
        return TRUE_LITERAL if value else FALSE_LITERAL

    @staticmethod
    def decode_strict(key: str, raw: Optional[str]) -> bool:
        """
        Decodifica exigindo um dos dois literais.

        Raises:
            StorageReadError: Valor ausente ou malformado.
        """
        if raw == TRUE_LITERAL:
            return True
        if raw == FALSE_LITERAL:
            return False
        raise StorageReadError(key, raw)

    @classmethod
    def decode(cls, key: str, raw: Optional[str]) -> bool:
        """Decodificação tolerante: qualquer valor fora de ``"true"`` é ``False``."""
        try:
            return cls.decode_strict(key, raw)
        except StorageReadError:
            return False
