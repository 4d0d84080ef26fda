"""
Type-ahead search for one live view.

Input is debounced: each keystroke re-arms a timer and only the newest query
is dispatched once the input goes quiet. Superseding input cancels the timer,
never a search that is already running, so responses may land out of order;
whichever completes last owns the state.
"""
import asyncio
import logging
from typing import Any, Callable, Dict, Optional, Set

from fastapi import HTTPException

from metaverse_sns.config import settings
from metaverse_sns.modules.search.schemas import SearchState
from metaverse_sns.modules.search.service import SearchService

logger = logging.getLogger(__name__)

Listener = Callable[[Dict[str, Any]], None]


class SearchController:
    def __init__(self, service: SearchService, listener: Listener, debounce_seconds: Optional[float] = None):
        self.service = service
        self.listener = listener
        if debounce_seconds is None:
            debounce_seconds = settings.search_debounce_seconds
        self.debounce_seconds = debounce_seconds
        self.state = SearchState()
        self._timer: Optional[asyncio.TimerHandle] = None
        self._in_flight: Set[asyncio.Task] = set()

    @property
    def pending(self) -> bool:
        return self._timer is not None

    def submit(self, query: str) -> None:
        """Record new input and (re)start the quiet period"""
        self.state.query = query
        if self._timer is not None:
            self._timer.cancel()
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self.debounce_seconds, self._dispatch, query)

    def _dispatch(self, query: str) -> None:
        self._timer = None
        task = asyncio.ensure_future(self.run(query))
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)

    async def run(self, query: str) -> None:
        if not query.strip():
            self.state.profiles = []
            self.state.avatars = []
            self.state.searched = False
            self._publish()
            return

        self.state.loading = True
        self._publish()
        try:
            results = await self.service.search(query)
        except HTTPException as e:
            self.state.loading = False
            self._publish()
            self.listener({"type": "toast", "level": "error", "message": e.detail})
            return

        self.state.profiles = results.profiles
        self.state.avatars = results.avatars
        self.state.searched = True
        self.state.loading = False
        self._publish()

    def _publish(self) -> None:
        self.listener({"type": "search", "state": self.state.model_dump(mode="json")})

    async def close(self) -> None:
        """Drop the pending timer and any running searches"""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        tasks = list(self._in_flight)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
