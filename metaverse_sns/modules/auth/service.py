from supabase import Client
from metaverse_sns.modules.auth.schemas import AuthOutcome
from metaverse_sns.modules.profiles.service import ProfileService
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.profiles = ProfileService(supabase)

    def sign_up(self, email: str, password: str, username: str) -> AuthOutcome:
        """
        Create an identity, then its profile row.

        The two steps commit independently: when the profile insert fails the
        identity stays without a profile.
        """
        if not username.strip():
            raise HTTPException(status_code=400, detail="Please enter a username")
        try:
            auth_response = self.supabase.auth.sign_up({
                "email": email,
                "password": password,
            })

            if auth_response.user:
                self.profiles.create_profile(auth_response.user.id, username.strip())
        except Exception as e:
            logger.error(f"Sign-up failed: {e}")
            raise HTTPException(status_code=500, detail="Failed to create account")

        if auth_response.user:
            logger.info(f"Created account {auth_response.user.id}")
        return AuthOutcome(
            user=auth_response.user,
            session=auth_response.session,
            message="Account created",
        )

    def sign_in(self, email: str, password: str) -> AuthOutcome:
        """Exchange credentials for a session"""
        try:
            auth_response = self.supabase.auth.sign_in_with_password({
                "email": email,
                "password": password,
            })

            if not auth_response.user or not auth_response.session:
                raise ValueError("No session returned")
        except Exception as e:
            logger.error(f"Sign-in failed: {e}")
            raise HTTPException(status_code=500, detail="Failed to sign in")

        return AuthOutcome(
            user=auth_response.user,
            session=auth_response.session,
            message="Signed in",
        )

    def sign_out(self) -> None:
        """Revoke the session held by this client"""
        try:
            self.supabase.auth.sign_out()
        except Exception as e:
            logger.error(f"Sign-out failed: {e}")
            raise HTTPException(status_code=500, detail="Failed to sign out")
