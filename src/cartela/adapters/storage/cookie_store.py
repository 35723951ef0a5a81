"""
Cookie jar em arquivo.

Guarda cada campo como um cookie no formato Netscape/Mozilla, com a
expiração própria de cada escrita. É o armazenamento padrão da CLI: cada
execução equivale a uma recarga da página lendo os mesmos cookies.
"""

from __future__ import annotations

import time
from http.cookiejar import Cookie, LoadError, MozillaCookieJar
from pathlib import Path
from typing import Any, Optional, Union

from cartela.adapters.storage.key_value_store import ttl_seconds
from cartela.config.constants import DEFAULTS
from cartela.core.exceptions import StorageWriteError, wrap_exception
from cartela.core.interfaces import Clock, KeyValueStore

COOKIE_DOMAIN = "localhost"
COOKIE_PATH = "/"


class CookieJarStore(KeyValueStore):
    """``KeyValueStore`` sobre ``http.cookiejar.MozillaCookieJar``."""

    def __init__(
        self,
        cookie_file: Union[str, Path] = DEFAULTS["cookie_file"],
        *,
        domain: str = COOKIE_DOMAIN,
        clock: Clock = time.time,
        logger: Optional[Any] = None,
    ) -> None:
        self.path = Path(cookie_file)
        self.domain = domain
        self._clock = clock
        self._logger = logger or self._get_default_logger()
        self._jar = MozillaCookieJar(str(self.path))
        self._load()

    def _get_default_logger(self) -> Any:
        from cartela.infrastructure.logging import get_logger
        return get_logger()

    def _load(self) -> None:
        if not self.path.exists():
            return
        try:
            # cookies sem expiração (token) são "de sessão" e precisam de ignore_discard
            self._jar.load(ignore_discard=True)
        except (LoadError, OSError) as e:
            self._logger.aviso("Cookie jar ilegível; começando vazio", arquivo=str(self.path), erro=str(e))
            self._jar.clear()

    def _save(self, key: str) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._jar.save(ignore_discard=True)
        except OSError as e:
            raise wrap_exception(e, StorageWriteError, "Falha ao gravar o cookie jar", key=key, arquivo=str(self.path)) from e

    def _find(self, key: str) -> Optional[Cookie]:
        for cookie in self._jar:
            if cookie.name == key and cookie.domain == self.domain and cookie.path == COOKIE_PATH:
                return cookie
        return None

    def get(self, key: str) -> Optional[str]:
        cookie = self._find(key)
        if cookie is None or cookie.is_expired(int(self._clock())):
            return None
        return cookie.value

    def set(self, key: str, value: str, ttl_days: Optional[float] = None) -> None:
        seconds = ttl_seconds(ttl_days)
        expires = None if seconds is None else int(self._clock()) + seconds
        cookie = Cookie(
            version=0,
            name=key,
            value=str(value),
            port=None,
            port_specified=False,
            domain=self.domain,
            domain_specified=False,
            domain_initial_dot=False,
            path=COOKIE_PATH,
            path_specified=True,
            secure=False,
            expires=expires,
            discard=expires is None,
            comment=None,
            comment_url=None,
            rest={},
        )
        self._jar.set_cookie(cookie)
        self._save(key)

    def delete(self, key: str) -> None:
        try:
            self._jar.clear(self.domain, COOKIE_PATH, key)
        except KeyError:
            return
        self._save(key)
