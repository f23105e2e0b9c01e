# services.py
import logging
from typing import List, Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from models import ShowRecord

logger = logging.getLogger(__name__)

# Existing %xx escapes and '+' pass through; '&', '#', '=' and spaces are escaped.
QUERY_SAFE_CHARS = "%+/:;,!'()*~"


class FetchFailed(Exception):
    """Raised for any failure to fetch or decode a catalog search."""


def parse_item(item: dict) -> ShowRecord:
    """Parses a single raw API item into our ShowRecord data model.

    Missing keys and nulls fall back to the ShowRecord defaults.
    """
    return ShowRecord.model_validate(item)


def dump_item(record: ShowRecord) -> dict:
    """Converts a ShowRecord back into the catalog's JSON shape."""
    return record.model_dump(by_alias=True)


def parse_response(payload) -> List[ShowRecord]:
    """Extracts the show records from a search response body, in order."""
    results = payload["results"]
    if not isinstance(results, list):
        raise TypeError(f"Expected 'results' to be a list, got {type(results).__name__}")
    return [parse_item(item) for item in results]


class ShowCatalogClient:
    """A service to handle interactions with the anime catalog search API."""

    def __init__(self, base_url: str, timeout: Optional[float] = None,
                 transport: Optional[httpx.BaseTransport] = None):
        self._http = httpx.Client(base_url=base_url, timeout=timeout, transport=transport)

    def search(self, query: str) -> List[ShowRecord]:
        """Performs the search and returns the shows in the order received.

        The query is sent as the single `q` parameter. Text that is already
        percent-encoded is not encoded a second time.
        """
        try:
            response = self._http.get(f"anime?q={quote(query, safe=QUERY_SAFE_CHARS)}")
            response.raise_for_status()
            results = parse_response(response.json())
        except (httpx.HTTPError, httpx.InvalidURL, ValidationError,
                ValueError, KeyError, TypeError) as exc:
            raise FetchFailed(f"Search for '{query}' failed: {exc}") from exc
        logger.debug("Search for %r returned %d shows", query, len(results))
        return results

    def close(self) -> None:
        self._http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()
