"""
Registry of store credentials keyed by a caller-chosen name.
"""
from typing import Dict, List, Optional

from woostore.config import StoreConfig
from woostore.exceptions import StoreNotFoundError
from woostore.models import Credentials
from woostore.store import Store


class StoreRegistry:
    """
    Holds credentials for several stores and hands out Store clients.

    Each select call builds a fresh Store, so every selection starts with
    an empty manufacturer cache.

    Usage:
        registry = StoreRegistry()
        registry.add_store("main", Credentials(...))
        store = registry.select_store("main")
    """

    def __init__(self, config: Optional[StoreConfig] = None):
        self.config = config
        self.stores: Dict[str, Credentials] = {}

    def add_store(self, store_key: str, credentials: Credentials) -> None:
        """Register (or replace) credentials under a key."""
        self.stores[store_key] = credentials

    def select_store(self, store_key: str) -> Store:
        """
        Build a Store for the given key.

        Raises:
            StoreNotFoundError: If nothing is registered under the key
        """
        credentials = self.stores.get(store_key)
        if credentials is None:
            raise StoreNotFoundError(store_key)
        return Store(credentials, config=self.config)

    def select_all_stores(self) -> List[Store]:
        """Build a Store for every registered key, in registration order."""
        return [Store(credentials, config=self.config) for credentials in self.stores.values()]

    def remove_store(self, store_key: str) -> None:
        self.stores.pop(store_key, None)

    def remove_all_stores(self) -> None:
        self.stores.clear()

    def __contains__(self, store_key: str) -> bool:
        return store_key in self.stores

    def __len__(self) -> int:
        return len(self.stores)
