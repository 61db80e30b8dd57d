"""Cart storage for the storefront"""

import json
import logging
from typing import Any, Optional

from pydantic import TypeAdapter, ValidationError

from ..core.storage import KeyValueStore
from ..errors import StorageCorruptedError
from ..models.cart import CartLineItem
from ..models.product import normalize_product_id

logger = logging.getLogger(__name__)

_line_items = TypeAdapter(list[CartLineItem])


def decode_cart(key: str, raw: Optional[str]) -> list[CartLineItem]:
    """
    Decode a persisted cart record.

    Raises:
        StorageCorruptedError: if the record is not a JSON array of line items
    """
    if raw is None:
        return []
    try:
        return _line_items.validate_json(raw)
    except ValidationError as e:
        raise StorageCorruptedError(key, str(e)) from e


class CartStore:
    """
    Line items of the active session's cart.

    Every mutation rewrites the whole record before returning.
    """

    def __init__(self, storage: KeyValueStore, key: str = "darna-cart"):
        self.storage = storage
        self.key = key
        self._items: list[CartLineItem] = self._load()

    def _load(self) -> list[CartLineItem]:
        try:
            return decode_cart(self.key, self.storage.get(self.key))
        except StorageCorruptedError as e:
            logger.warning(f"Discarding saved cart: {e}")
            self.storage.delete(self.key)
            return []

    def _save(self, items: list[CartLineItem]) -> None:
        payload = [item.model_dump(mode="json") for item in items]
        self.storage.set(self.key, json.dumps(payload))

    def _commit(self, items: list[CartLineItem]) -> None:
        # memory only changes once the write went through
        self._save(items)
        self._items = items

    @property
    def items(self) -> list[CartLineItem]:
        """Deep copies of the current line items"""
        return [item.model_copy(deep=True) for item in self._items]

    def snapshot(self) -> list[CartLineItem]:
        return self.items

    def is_empty(self) -> bool:
        return not self._items

    def add_item(self, item: CartLineItem) -> None:
        """Add a line item, merging quantities with an existing row for the same id"""
        if any(i.id == item.id for i in self._items):
            items = [
                i.model_copy(update={"quantity": i.quantity + item.quantity}) if i.id == item.id else i
                for i in self._items
            ]
        else:
            items = [*self._items, item.model_copy(deep=True)]

        self._commit(items)

    def remove_item(self, item_id: Any) -> None:
        """Remove a line item; unknown ids are ignored"""
        item_id = normalize_product_id(item_id)
        self._commit([i for i in self._items if i.id != item_id])

    def update_quantity(self, item_id: Any, quantity: int) -> None:
        """Set a line item's quantity; zero or less removes it"""
        if quantity <= 0:
            self.remove_item(item_id)
            return

        item_id = normalize_product_id(item_id)
        self._commit([
            i.model_copy(update={"quantity": quantity}) if i.id == item_id else i
            for i in self._items
        ])

    def clear(self) -> None:
        """Remove all line items"""
        self._commit([])

    def get_total_price(self) -> float:
        return sum(item.price * item.quantity for item in self._items)

    def get_total_items(self) -> int:
        return sum(item.quantity for item in self._items)
