"""Order storage for the storefront"""

import json
import logging
from typing import Optional

from pydantic import TypeAdapter, ValidationError

from ..core.storage import KeyValueStore
from ..errors import StorageCorruptedError
from ..models.checkout import Order

logger = logging.getLogger(__name__)

_orders = TypeAdapter(list[Order])


def decode_orders(key: str, raw: Optional[str]) -> list[Order]:
    """
    Decode a persisted order list.

    Raises:
        StorageCorruptedError: if the record is not a JSON array of orders
    """
    if raw is None:
        return []
    try:
        return _orders.validate_json(raw)
    except ValidationError as e:
        raise StorageCorruptedError(key, str(e)) from e


class OrderStore:
    """Append-only list of committed orders"""

    def __init__(self, storage: KeyValueStore, key: str = "darna-orders"):
        self.storage = storage
        self.key = key
        self.orders: list[Order] = self._load()

    def _load(self) -> list[Order]:
        try:
            return decode_orders(self.key, self.storage.get(self.key))
        except StorageCorruptedError as e:
            logger.warning(f"Discarding saved orders: {e}")
            self.storage.delete(self.key)
            return []

    def _save(self, orders: list[Order]) -> None:
        payload = [order.model_dump(mode="json") for order in orders]
        self.storage.set(self.key, json.dumps(payload))

    def add_order(self, order: Order) -> None:
        """Append an order. Id uniqueness is the caller's responsibility."""
        orders = [*self.orders, order]
        self._save(orders)
        self.orders = orders

    def get_order_by_id(self, order_id: str) -> Optional[Order]:
        """Get an order by ID, or None if there is no such order"""
        return next((order for order in self.orders if order.id == order_id), None)

    def list_orders(self, limit: int = 50) -> list[Order]:
        """List recent orders"""
        orders = sorted(self.orders, key=lambda o: o.created_at, reverse=True)
        return orders[:limit]
