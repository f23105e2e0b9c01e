import threading

import httpx
import pytest

from models import ShowRecord


class StubClient:
    """Stands in for ShowCatalogClient; records the queries it receives."""
    def __init__(self, results=None, error=None):
        self.results = results or []
        self.error = error
        self.queries = []
        self._lock = threading.Lock()

    def search(self, query):
        with self._lock:
            self.queries.append(query)
        if self.error is not None:
            raise self.error
        return list(self.results)


@pytest.fixture
def full_item():
    return {
        "mal_id": 20,
        "url": "https://myanimelist.net/anime/20/Naruto",
        "image_url": "https://cdn.myanimelist.net/images/anime/13/17405.jpg",
        "title": "Naruto",
        "airing": False,
        "synopsis": "Moments prior to Naruto Uzumaki's birth, a huge demon...",
        "type": "TV",
        "episodes": 220,
        "score": 7.95,
        "start_date": "2002-10-03T00:00:00+00:00",
        "end_date": "2007-02-08T00:00:00+00:00",
        "members": 2412345,
        "rated": "PG-13",
    }


@pytest.fixture
def make_show():
    def factory(id, title, **kwargs):
        return ShowRecord(id=id, title=title, **kwargs)
    return factory


@pytest.fixture
def stub_client():
    return StubClient


@pytest.fixture
def mock_transport():
    """Builds an httpx.MockTransport and keeps the requests it served."""
    def factory(handler):
        requests = []

        def record(request):
            requests.append(request)
            return handler(request)

        transport = httpx.MockTransport(record)
        transport.requests = requests
        return transport
    return factory
