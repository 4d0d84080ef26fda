from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class AvatarDraft(BaseModel):
    name: str = ""
    platform: str = ""
    description: str = ""
    image_url: str = ""


class AvatarResponse(BaseModel):
    id: str
    user_id: str
    name: str
    platform: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    is_primary: bool = False
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class AvatarActionResponse(BaseModel):
    avatar: AvatarResponse
    message: str
