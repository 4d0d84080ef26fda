"""
Core dependencies for session access and cookie handling
"""

from fastapi import Depends, Request, Response
from starlette.concurrency import run_in_threadpool
from typing import Any, Optional

from metaverse_sns.config import settings
from metaverse_sns.core.session import SessionRequired, UserSession, resolve_session


async def get_optional_session(request: Request) -> Optional[UserSession]:
    """Session resolved by the route guard, or resolved here for unguarded paths."""
    if hasattr(request.state, "user_session"):
        return request.state.user_session
    user_session = await run_in_threadpool(resolve_session, request.cookies)
    request.state.user_session = user_session
    return user_session


def require_session(
    user_session: Optional[UserSession] = Depends(get_optional_session),
) -> UserSession:
    """Precondition for every owner-scoped operation; missing session redirects to sign-in"""
    if user_session is None:
        raise SessionRequired()
    return user_session


def store_session_cookies(response: Response, session: Any) -> None:
    if session is None:
        return
    cookie_args = {"httponly": True, "secure": settings.cookie_secure, "samesite": "lax"}
    response.set_cookie(settings.access_token_cookie, session.access_token, **cookie_args)
    response.set_cookie(settings.refresh_token_cookie, session.refresh_token, **cookie_args)


def clear_session_cookies(response: Response) -> None:
    response.delete_cookie(settings.access_token_cookie)
    response.delete_cookie(settings.refresh_token_cookie)
