from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class ProfileForm(BaseModel):
    """Editable profile fields; empty strings stand for unset values."""
    username: str = ""
    bio: str = ""
    avatar_url: str = ""


class ProfileResponse(BaseModel):
    id: str
    username: str
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProfileUpdateResponse(BaseModel):
    profile: ProfileForm
    message: str


class ProfileImageResponse(BaseModel):
    avatar_url: str
    message: str
