"""
Page endpoints. All of them sit behind the route guard; each returns the
view model its page renders from.
"""
from fastapi import APIRouter, Depends, HTTPException
from metaverse_sns.core.dependencies import require_session
from metaverse_sns.core.schemas import UserInfo
from metaverse_sns.core.session import UserSession, user_payload
from metaverse_sns.modules.auth.schemas import AuthMode
from metaverse_sns.modules.avatars.service import AvatarService
from metaverse_sns.modules.pages.schemas import AuthPage, HomePage, ProfilePage
from metaverse_sns.modules.profiles.service import ProfileService
from metaverse_sns.modules.search.routes import run_search
from metaverse_sns.modules.search.service import SearchService

router = APIRouter(tags=["pages"])

AUTH_FIELDS = {
    "sign-in": ["email", "password"],
    "sign-up": ["username", "email", "password"],
}


@router.get("/auth", response_model=AuthPage)
async def auth_page(mode: AuthMode = "sign-in"):
    """Sign-in surface; reachable only without a session"""
    return AuthPage(mode=mode, fields=AUTH_FIELDS[mode], submit_path="/api/v1/auth/submit")


@router.get("/", response_model=HomePage)
async def home_page(
    q: str = "",
    user_session: UserSession = Depends(require_session)
):
    results = await run_search(SearchService(user_session.client), q)
    return HomePage(user=UserInfo(**user_payload(user_session.user)), search=results)


@router.get("/profile", response_model=ProfilePage)
async def profile_page(user_session: UserSession = Depends(require_session)):
    """Profile and avatars load independently; a failure in one still renders the other"""
    page = ProfilePage(user=UserInfo(**user_payload(user_session.user)))
    try:
        page.profile = ProfileService(user_session.client).load_profile_form(user_session.user_id)
    except HTTPException as e:
        page.errors.append(e.detail)
    try:
        page.avatars = AvatarService(user_session.client).list_avatars(user_session.user_id)
    except HTTPException as e:
        page.errors.append(e.detail)
    return page
