from dataclasses import dataclass
from pydantic import BaseModel, EmailStr
from typing import Any, Literal, Optional

AuthMode = Literal["sign-in", "sign-up"]


class SignInRequest(BaseModel):
    email: EmailStr
    password: str


class SignUpRequest(BaseModel):
    email: EmailStr
    password: str
    username: str = ""


class AuthFormRequest(BaseModel):
    mode: AuthMode = "sign-in"
    email: EmailStr
    password: str
    username: str = ""


class AuthDraft(BaseModel):
    """Form fields kept across sign-in / sign-up toggles"""
    email: str = ""
    password: str = ""
    username: str = ""


class AuthResponse(BaseModel):
    user_id: Optional[str] = None
    email: Optional[str] = None
    message: str


@dataclass
class AuthOutcome:
    user: Any
    session: Any
    message: str

    def to_response(self) -> AuthResponse:
        if self.user is None:
            return AuthResponse(message=self.message)
        return AuthResponse(
            user_id=self.user.id,
            email=getattr(self.user, "email", None),
            message=self.message,
        )
