from fastapi import APIRouter, Depends, File, UploadFile
from metaverse_sns.core.dependencies import require_session
from metaverse_sns.core.image_storage import read_image_upload
from metaverse_sns.core.session import UserSession
from metaverse_sns.modules.profiles.schemas import (
    ProfileForm, ProfileUpdateResponse, ProfileImageResponse
)
from metaverse_sns.modules.profiles.service import ProfileService
from typing import Optional

router = APIRouter(prefix="/profile", tags=["profile"])


def get_profile_service(user_session: UserSession = Depends(require_session)) -> ProfileService:
    return ProfileService(user_session.client)


@router.get("", response_model=ProfileForm)
async def get_profile(
    user_session: UserSession = Depends(require_session),
    service: ProfileService = Depends(get_profile_service)
):
    """Load the caller's editable profile fields"""
    return service.load_profile_form(user_session.user_id)


@router.put("", response_model=ProfileUpdateResponse)
async def update_profile(
    form: ProfileForm,
    user_session: UserSession = Depends(require_session),
    service: ProfileService = Depends(get_profile_service)
):
    """Save the caller's profile"""
    profile = service.save_profile(user_session.user_id, form)
    return ProfileUpdateResponse(profile=profile, message="Profile updated")


@router.post("/image", response_model=ProfileImageResponse)
async def upload_profile_image(
    file: Optional[UploadFile] = File(None),
    user_session: UserSession = Depends(require_session),
    service: ProfileService = Depends(get_profile_service)
):
    """Replace the caller's profile image"""
    image = await read_image_upload(file)
    avatar_url = service.upload_profile_image(user_session.user_id, image)
    return ProfileImageResponse(avatar_url=avatar_url, message="Profile image updated")
