"""
Nomes das chaves persistidas, prefixados pelo ACTID da campanha.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from cartela.config.constants import (
    ITEM_KEYS,
    ITEM_STATE_SUFFIX,
    REDEEM_STATE_SUFFIX,
    TOKEN_SUFFIX,
    USER_ID_SUFFIX,
)
from cartela.core.exceptions import InvalidItemKeyError


@dataclass(frozen=True)
class StoreKeys:
    """``{ACTID}_user_id``, ``{ACTID}_item_N_state``, ``{ACTID}_redeem_state``, ``{ACTID}_token``."""

    actid: str

    def _key(self, suffix: str) -> str:
        return f"{self.actid}_{suffix}"

    @property
    def user_id(self) -> str:
        return self._key(USER_ID_SUFFIX)

    def item_state(self, item_key: str) -> str:
        if item_key not in ITEM_KEYS:
            raise InvalidItemKeyError(item_key)
        return self._key(ITEM_STATE_SUFFIX.format(item_key=item_key))

    @property
    def redeem_state(self) -> str:
        return self._key(REDEEM_STATE_SUFFIX)

    @property
    def token(self) -> str:
        return self._key(TOKEN_SUFFIX)

    def collection_keys(self) -> Tuple[str, ...]:
        """As seis chaves do estado da cartela (sem o token)."""
        return (self.user_id, *(self.item_state(k) for k in ITEM_KEYS), self.redeem_state)
