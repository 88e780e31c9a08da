from typing import Optional

import requests
from requests.adapters import HTTPAdapter

from cache import ItemCache
from models import Item

HN_ENDPOINT = "https://hacker-news.firebaseio.com/v0"

# Networking
# Use short connect timeout and reasonable read timeout to avoid hangs
DEFAULT_TIMEOUT = (5, 15)
# topstories.json holds at most 500 ids, so no window is wider than this
POOL_MAXSIZE = 500


class HNError(Exception):
    """Raised when the ranked list or an item cannot be fetched or decoded."""


def _new_session(pool_maxsize: int) -> requests.Session:
    # One pooled connection per in-flight request of a window
    session = requests.Session()
    adapter = HTTPAdapter(pool_connections=1, pool_maxsize=pool_maxsize)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


class HNClient:
    def __init__(
        self,
        base_endpoint: str = HN_ENDPOINT,
        session: Optional[requests.Session] = None,
        cache: Optional[ItemCache] = None,
        timeout=DEFAULT_TIMEOUT,
        pool_maxsize: int = POOL_MAXSIZE,
    ):
        self.base_endpoint = base_endpoint.rstrip("/")
        self.session = session or _new_session(pool_maxsize)
        self.cache = cache if cache is not None else ItemCache()
        self.timeout = timeout

    def _get_json(self, url: str):
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise HNError(f"Request to {url} failed: {e}") from e
        if response.status_code != 200:
            raise HNError(f"Request to {url} failed: {response.status_code}")
        try:
            return response.json()
        except ValueError as e:
            raise HNError(f"Invalid JSON from {url}") from e

    def fetch_top_ids(self) -> list[int]:
        data = self._get_json(f"{self.base_endpoint}/topstories.json")
        if not isinstance(data, list):
            raise HNError("Ranked story list is not a JSON array")
        return data

    def fetch_item(self, item_id: int, use_cache: bool = False) -> Item:
        """Return the item for ``item_id``.

        With ``use_cache`` a previously fetched item is returned without a
        network call. Every successful network fetch is stored in the cache
        regardless of ``use_cache``; failures leave it untouched.
        """
        if use_cache:
            cached = self.cache.get(item_id)
            if cached is not None:
                return cached

        data = self._get_json(f"{self.base_endpoint}/item/{item_id}.json")
        try:
            item = Item.from_json(data)
        except ValueError as e:
            raise HNError(f"Item {item_id} could not be decoded: {e}") from e
        self.cache.put(item_id, item)
        return item

    def close(self):
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
