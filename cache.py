import threading
from typing import Optional

from models import Item


class ItemCache:
    """In-process item lookup shared by concurrent fetches.

    Entries are never evicted; upstream items are treated as immutable once
    fetched, so racing writes for the same id may land in either order.
    """

    def __init__(self, items: Optional[dict[int, Item]] = None):
        self._items: dict[int, Item] = dict(items or {})
        self._lock = threading.Lock()

    def get(self, item_id: int) -> Optional[Item]:
        with self._lock:
            return self._items.get(item_id)

    def put(self, item_id: int, item: Item) -> None:
        with self._lock:
            self._items[item_id] = item

    def __contains__(self, item_id: int) -> bool:
        with self._lock:
            return item_id in self._items

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
