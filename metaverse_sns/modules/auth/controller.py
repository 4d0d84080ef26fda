"""
Sign-in / sign-up form state.

The controller owns a single draft record and the current mode. Toggling the
mode keeps whatever was typed; submitting dispatches to the auth service for
the active mode.

The in-progress guard is per controller instance. The HTTP submit route
builds a fresh controller for every request, so it only rejects re-entrant
submits on a controller that is held across calls.
"""
from typing import Optional

from fastapi import HTTPException

from metaverse_sns.modules.auth.schemas import AuthDraft, AuthMode, AuthOutcome
from metaverse_sns.modules.auth.service import AuthService


class AuthFormController:
    def __init__(self, service: AuthService, mode: AuthMode = "sign-in", draft: Optional[AuthDraft] = None):
        self.service = service
        self.mode: AuthMode = mode
        self.draft = draft or AuthDraft()
        self.is_loading = False

    @property
    def is_sign_up(self) -> bool:
        return self.mode == "sign-up"

    def toggle(self) -> AuthMode:
        self.mode = "sign-in" if self.is_sign_up else "sign-up"
        return self.mode

    def submit(self) -> AuthOutcome:
        if self.is_loading:
            raise HTTPException(status_code=409, detail="A request is already in progress")
        self.is_loading = True
        try:
            if self.is_sign_up:
                return self.service.sign_up(self.draft.email, self.draft.password, self.draft.username)
            return self.service.sign_in(self.draft.email, self.draft.password)
        finally:
            self.is_loading = False
