"""In-memory stock storage."""

from __future__ import annotations

import copy
import threading

from gorder.common.entities import Item
from gorder.stock.domain import NotFoundError, Repository

_STUB = {
    "item_id": Item(id="foo_item", name="stub item", quantity=10000,
                    price_id="stub_item_price_id"),
    "item1": Item(id="item1", name="stub item 1", quantity=10000,
                  price_id="stub_item1_price_id"),
    "item2": Item(id="item2", name="stub item 2", quantity=10000,
                  price_id="stub_item2_price_id"),
    "item3": Item(id="item3", name="stub item 3", quantity=10000,
                  price_id="stub_item3_price_id"),
}


class MemoryStockRepository(Repository):
    """Thread-safe stock store seeded with stub items."""

    def __init__(self):
        self._lock = threading.RLock()
        self._store: dict[str, Item] = copy.deepcopy(_STUB)

    def get_items(self, ids: list[str]) -> list[Item]:
        with self._lock:
            found = [self._store[i] for i in ids if i in self._store]
            missing = [i for i in ids if i not in self._store]
        if missing:
            raise NotFoundError(missing, found)
        return found