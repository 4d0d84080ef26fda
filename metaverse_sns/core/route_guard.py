"""
Navigation gate.

Every page request passes through here before any handler runs. The only
question asked is whether a session exists; the sign-in path is the one place
both signed-in and signed-out users may not simply pass.
"""
import logging
from typing import List, Optional

from starlette.concurrency import run_in_threadpool
from starlette.requests import Request
from starlette.responses import RedirectResponse

from metaverse_sns.config import settings
from metaverse_sns.core.session import resolve_session

logger = logging.getLogger(__name__)


def resolve_redirect(path: str, has_session: bool, sign_in_path: str, home_path: str) -> Optional[str]:
    """Return the redirect target for a request, or None to let it through."""
    if not has_session and path != sign_in_path:
        return sign_in_path
    if has_session and path == sign_in_path:
        return home_path
    return None


def is_guarded(path: str, excluded_prefixes: List[str]) -> bool:
    for prefix in excluded_prefixes:
        if path == prefix or path.startswith(prefix.rstrip("/") + "/"):
            return False
    return True


class RouteGuardMiddleware:
    def __init__(
        self,
        app,
        sign_in_path: Optional[str] = None,
        home_path: Optional[str] = None,
        excluded_prefixes: Optional[List[str]] = None,
    ):
        self.app = app
        self.sign_in_path = sign_in_path or settings.sign_in_path
        self.home_path = home_path or settings.home_path
        if excluded_prefixes is None:
            excluded_prefixes = settings.get_guard_excluded_prefixes()
        self.excluded_prefixes = excluded_prefixes

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http" or not is_guarded(scope["path"], self.excluded_prefixes):
            await self.app(scope, receive, send)
            return

        request = Request(scope)
        user_session = await run_in_threadpool(resolve_session, request.cookies)
        # Handlers read this back through request.state instead of resolving again
        scope.setdefault("state", {})["user_session"] = user_session

        target = resolve_redirect(
            scope["path"], user_session is not None, self.sign_in_path, self.home_path
        )
        if target is not None:
            logger.debug(f"Redirecting {scope['path']} -> {target}")
            response = RedirectResponse(url=target, status_code=307)
            await response(scope, receive, send)
            return

        await self.app(scope, receive, send)
