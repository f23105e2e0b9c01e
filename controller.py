# controller.py
import asyncio
import logging
from dataclasses import replace
from typing import Callable, List, Optional, Set

from models import SearchState

logger = logging.getLogger(__name__)

StateCallback = Callable[[SearchState], None]


def _is_blank(text: Optional[str]) -> bool:
    return text is None or not text.strip()


class SearchController:
    """Mediates between submitted queries and the catalog client.

    Every change is published as a whole new SearchState to the subscribed
    callbacks, so results and the loading flag always change together.
    Fetches run in a worker thread via asyncio.to_thread; the controller
    must be driven from a running event loop.
    """

    def __init__(self, client, default_query: str = "naruto"):
        self.client = client
        self.default_query = default_query
        self._state = SearchState()
        self._subscribers: List[StateCallback] = []
        self._tasks: Set[asyncio.Task] = set()
        self._sequence = 0

    @property
    def state(self) -> SearchState:
        return self._state

    def subscribe(self, callback: StateCallback) -> None:
        self._subscribers.append(callback)

    def unsubscribe(self, callback: StateCallback) -> None:
        self._subscribers.remove(callback)

    def initialize(self) -> Optional[asyncio.Task]:
        """Resets the state and starts the default search, if there is one."""
        if _is_blank(self.default_query):
            self._publish(SearchState())
            return None
        self._publish(SearchState(is_loading=True))
        return self.submit_query(self.default_query)

    def submit_query(self, text: Optional[str]) -> Optional[asyncio.Task]:
        """Starts a search for `text`. Blank input is ignored."""
        if _is_blank(text):
            return None
        self._sequence += 1
        self._publish(replace(self._state, is_loading=True, error=None))
        task = asyncio.get_running_loop().create_task(self._fetch(text, self._sequence))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def item_selected(self, position: int) -> None:
        # Hook for row clicks; selection does not change the search state.
        logger.debug("Item %s selected", position)

    def close(self) -> None:
        """Stops notifying subscribers. Outstanding fetches still run to completion."""
        self._subscribers.clear()

    async def _fetch(self, query: str, sequence: int) -> None:
        try:
            results = await asyncio.to_thread(self.client.search, query)
        except Exception as exc:
            logger.exception("Search for %r failed", query)
            if self._is_current(sequence, query):
                self._publish(replace(self._state, is_loading=False, error=str(exc)))
            return
        if self._is_current(sequence, query):
            self._publish(SearchState(results=tuple(results), is_loading=False))

    def _is_current(self, sequence: int, query: str) -> bool:
        if sequence != self._sequence:
            logger.debug("Dropping result of superseded search for %r", query)
            return False
        return True

    def _publish(self, state: SearchState) -> None:
        self._state = state
        for callback in list(self._subscribers):
            callback(state)
