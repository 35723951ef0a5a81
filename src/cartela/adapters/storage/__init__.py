from cartela.adapters.storage.cookie_store import CookieJarStore
from cartela.adapters.storage.key_value_store import InMemoryKeyValueStore

__all__ = ["CookieJarStore", "InMemoryKeyValueStore"]
