"""
Session resolution from request cookies.

The browser keeps the Supabase access and refresh tokens in http-only cookies.
Each request gets a fresh client bound to those tokens so that row-level
security applies to every query made on the caller's behalf.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from supabase import Client

from metaverse_sns.config import settings
from metaverse_sns.database.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)


class SessionRequired(Exception):
    """Raised when an operation needs an active session and there is none."""


@dataclass
class UserSession:
    client: Client
    session: Any

    @property
    def user(self) -> Any:
        return self.session.user

    @property
    def user_id(self) -> str:
        return self.session.user.id


def user_payload(user: Any) -> Optional[Dict[str, Any]]:
    if user is None:
        return None
    return {"id": user.id, "email": getattr(user, "email", None)}


def resolve_session(cookies: Mapping[str, str]) -> Optional[UserSession]:
    """Ask the auth service whether the cookie tokens still form a valid session."""
    access_token = cookies.get(settings.access_token_cookie)
    refresh_token = cookies.get(settings.refresh_token_cookie)
    if not access_token or not refresh_token:
        return None

    client = SupabaseClient.new_client()
    try:
        client.auth.set_session(access_token, refresh_token)
        session = client.auth.get_session()
    except Exception as e:
        logger.warning(f"Session validation failed: {e}")
        return None

    if session is None or session.user is None:
        return None
    return UserSession(client=client, session=session)
