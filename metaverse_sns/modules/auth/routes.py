from fastapi import APIRouter, Depends, Response
from metaverse_sns.database.supabase_client import get_supabase
from metaverse_sns.core.dependencies import (
    get_optional_session, store_session_cookies, clear_session_cookies
)
from metaverse_sns.core.schemas import MessageResponse
from metaverse_sns.core.session import UserSession
from metaverse_sns.modules.auth.controller import AuthFormController
from metaverse_sns.modules.auth.schemas import (
    AuthDraft, AuthFormRequest, AuthResponse, SignInRequest, SignUpRequest
)
from metaverse_sns.modules.auth.service import AuthService
from supabase import Client
from typing import Optional

router = APIRouter(prefix="/auth", tags=["auth"])


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


@router.post("/submit", response_model=AuthResponse)
async def submit_auth_form(
    form: AuthFormRequest,
    response: Response,
    service: AuthService = Depends(get_auth_service)
):
    """Submit the auth form in whichever mode it is in"""
    controller = AuthFormController(
        service,
        mode=form.mode,
        draft=AuthDraft(email=form.email, password=form.password, username=form.username),
    )
    outcome = controller.submit()
    store_session_cookies(response, outcome.session)
    return outcome.to_response()


@router.post("/sign-up", response_model=AuthResponse, status_code=201)
async def sign_up(
    sign_up_data: SignUpRequest,
    response: Response,
    service: AuthService = Depends(get_auth_service)
):
    """Create an account and its profile"""
    outcome = service.sign_up(sign_up_data.email, sign_up_data.password, sign_up_data.username)
    store_session_cookies(response, outcome.session)
    return outcome.to_response()


@router.post("/sign-in", response_model=AuthResponse)
async def sign_in(
    sign_in_data: SignInRequest,
    response: Response,
    service: AuthService = Depends(get_auth_service)
):
    """Sign in and store the session cookies"""
    outcome = service.sign_in(sign_in_data.email, sign_in_data.password)
    store_session_cookies(response, outcome.session)
    return outcome.to_response()


@router.post("/sign-out", response_model=MessageResponse)
async def sign_out(
    response: Response,
    user_session: Optional[UserSession] = Depends(get_optional_session)
):
    """Revoke the session (when there is one) and drop the cookies"""
    if user_session is not None:
        AuthService(user_session.client).sign_out()
    clear_session_cookies(response)
    return MessageResponse(message="Signed out")
