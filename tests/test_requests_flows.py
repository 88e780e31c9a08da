from cache import ItemCache
from hn_client import HNClient
from models import Item


class Resp:
    def __init__(self, status_code=200, json_data=None):
        self.status_code = status_code
        self._json = json_data

    def json(self):
        return self._json


class Sess:
    def __init__(self, routes):
        self.routes = routes
        self.calls = []

    def get(self, url, **kwargs):
        self.calls.append(url)
        return self.routes[url]

    def close(self):
        pass


BASE = "https://hn.test/v0"


def test_fetch_top_ids():
    sess = Sess({f"{BASE}/topstories.json": Resp(200, [3, 1, 2])})
    client = HNClient(BASE, session=sess)
    assert client.fetch_top_ids() == [3, 1, 2]


def test_base_endpoint_trailing_slash():
    sess = Sess({f"{BASE}/topstories.json": Resp(200, [])})
    client = HNClient(BASE + "/", session=sess)
    assert client.fetch_top_ids() == []


def test_fetch_item_decodes_text_unchanged():
    sess = Sess(
        {
            f"{BASE}/item/1.json": Resp(
                200, {"id": 1, "type": "story", "title": "Ask HN", "text": "<p>Hello &amp; bye</p>"}
            )
        }
    )
    item = HNClient(BASE, session=sess).fetch_item(1)
    assert item.title == "Ask HN"
    assert item.text == "<p>Hello &amp; bye</p>"


def test_fetch_item_writes_cache_even_without_use_cache():
    sess = Sess({f"{BASE}/item/1.json": Resp(200, {"id": 1, "type": "story", "url": "http://a.com"})})
    cache = ItemCache()
    client = HNClient(BASE, session=sess, cache=cache)

    client.fetch_item(1, use_cache=False)
    assert cache.get(1).url == "http://a.com"

    # Without use_cache the network is still hit
    client.fetch_item(1, use_cache=False)
    assert len(sess.calls) == 2


def test_fetch_item_served_from_cache():
    cached = Item(id=9, type="story", url="http://cached.com")
    sess = Sess({})
    client = HNClient(BASE, session=sess, cache=ItemCache({9: cached}))

    assert client.fetch_item(9, use_cache=True) is cached
    assert sess.calls == []


def test_cache_miss_with_use_cache_fetches():
    sess = Sess({f"{BASE}/item/2.json": Resp(200, {"id": 2, "type": "job"})})
    client = HNClient(BASE, session=sess)

    assert client.fetch_item(2, use_cache=True).type == "job"
    assert client.fetch_item(2, use_cache=True).type == "job"
    assert len(sess.calls) == 1


def test_client_context_manager_closes_session():
    closed = []

    class ClosingSess(Sess):
        def close(self):
            closed.append(True)

    with HNClient(BASE, session=ClosingSess({})):
        pass
    assert closed == [True]


def test_default_session_pools_a_connection_per_request():
    with HNClient(BASE) as client:
        adapter = client.session.get_adapter("https://hacker-news.firebaseio.com/v0/topstories.json")
        assert adapter._pool_maxsize == 500

    with HNClient(BASE, pool_maxsize=32) as client:
        assert client.session.get_adapter("http://hn.test/")._pool_maxsize == 32
