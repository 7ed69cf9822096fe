"""Persisted cart snapshot on a single key-value slot."""
import json

from storefront.db import KeyValueStore
from storefront.errors import StorageError
from storefront.logging import get_logger
from .models import Cart

logger = get_logger(__name__)


class CartStorage:
    """Reads and overwrites the JSON snapshot stored under one key."""

    def __init__(self, store: KeyValueStore, key: str):
        self.store = store
        self.key = key

    async def load(self) -> Cart:
        """Read the snapshot. Missing or corrupted data yields an empty cart."""
        try:
            data = await self.store.get(self.key)
        except Exception as e:
            logger.error(f"Failed to read cart snapshot: {e}")
            raise StorageError(f"Cart storage unavailable: {e}") from e

        if not data:
            return Cart()

        try:
            return Cart.from_list(json.loads(data))
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            logger.warning(f"Corrupted cart snapshot under {self.key!r}, starting empty: {e}")
            return Cart()

    async def save(self, cart: Cart) -> None:
        """Overwrite the snapshot with the full cart."""
        try:
            await self.store.set(self.key, json.dumps(cart.to_list(), ensure_ascii=False))
        except Exception as e:
            logger.error(f"Failed to save cart snapshot: {e}")
            raise StorageError(f"Cart storage unavailable: {e}") from e
