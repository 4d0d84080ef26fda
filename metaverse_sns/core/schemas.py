from pydantic import BaseModel
from typing import Literal, Optional


class MessageResponse(BaseModel):
    message: str


class UserInfo(BaseModel):
    id: str
    email: Optional[str] = None


class Toast(BaseModel):
    type: Literal["toast"] = "toast"
    level: Literal["success", "error"]
    message: str
