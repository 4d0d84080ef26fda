from pydantic import BaseModel
from typing import List, Optional
from metaverse_sns.core.schemas import UserInfo
from metaverse_sns.modules.auth.schemas import AuthMode
from metaverse_sns.modules.avatars.schemas import AvatarResponse
from metaverse_sns.modules.profiles.schemas import ProfileForm
from metaverse_sns.modules.search.schemas import SearchResponse


class AuthPage(BaseModel):
    mode: AuthMode
    fields: List[str]
    submit_path: str


class HomePage(BaseModel):
    user: UserInfo
    search: SearchResponse


class ProfilePage(BaseModel):
    user: UserInfo
    profile: Optional[ProfileForm] = None
    avatars: List[AvatarResponse] = []
    errors: List[str] = []
