"""
Current-user state for one live view.

A store owns exactly one subscription to the auth service's state-change
stream, from start() until stop(). It turns the events it cares about into
view events handed to a listener:

- SIGNED_IN: {"type": "refresh", "user": {...}}
- SIGNED_OUT: {"type": "refresh", "user": None} then
  {"type": "navigate", "path": <sign-in path>}

The SDK may call back on whatever thread performed the auth call; the
listener is responsible for getting the event to the right place.
"""
import logging
from typing import Any, Callable, Dict, Optional

from metaverse_sns.config import settings
from metaverse_sns.core.session import user_payload

logger = logging.getLogger(__name__)

Listener = Callable[[Dict[str, Any]], None]


class SessionStore:
    def __init__(self, auth: Any, listener: Listener, sign_in_path: Optional[str] = None, user: Any = None):
        self.auth = auth
        self.listener = listener
        self.sign_in_path = sign_in_path or settings.sign_in_path
        self._user = user
        self._subscription = None

    @property
    def user(self) -> Any:
        return self._user

    @property
    def active(self) -> bool:
        return self._subscription is not None

    def start(self) -> None:
        if self._subscription is not None:
            return
        self._subscription = self.auth.on_auth_state_change(self._on_auth_event)
        logger.debug("Subscribed to auth state changes")

    def stop(self) -> None:
        if self._subscription is None:
            return
        self._subscription.unsubscribe()
        self._subscription = None
        logger.debug("Unsubscribed from auth state changes")

    def __enter__(self) -> "SessionStore":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    def _on_auth_event(self, event: str, session: Any) -> None:
        self._user = session.user if session is not None else None
        if event == "SIGNED_IN":
            self.listener({"type": "refresh", "user": user_payload(self._user)})
        elif event == "SIGNED_OUT":
            self.listener({"type": "refresh", "user": None})
            self.listener({"type": "navigate", "path": self.sign_in_path})
