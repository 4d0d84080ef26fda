from fastapi import APIRouter, Depends, File, Form, UploadFile
from metaverse_sns.core.dependencies import require_session
from metaverse_sns.core.image_storage import read_image_upload
from metaverse_sns.core.session import UserSession
from metaverse_sns.modules.avatars.schemas import (
    AvatarDraft, AvatarResponse, AvatarActionResponse
)
from metaverse_sns.modules.avatars.service import AvatarService
from typing import List, Optional

router = APIRouter(prefix="/avatars", tags=["avatars"])


def get_avatar_service(user_session: UserSession = Depends(require_session)) -> AvatarService:
    return AvatarService(user_session.client)


@router.get("", response_model=List[AvatarResponse])
async def list_avatars(
    user_session: UserSession = Depends(require_session),
    service: AvatarService = Depends(get_avatar_service)
):
    """List the caller's avatars, newest first"""
    return service.list_avatars(user_session.user_id)


@router.post("", response_model=AvatarActionResponse, status_code=201)
async def create_avatar(
    name: str = Form(""),
    platform: str = Form(""),
    description: str = Form(""),
    image_url: str = Form(""),
    file: Optional[UploadFile] = File(None),
    user_session: UserSession = Depends(require_session),
    service: AvatarService = Depends(get_avatar_service)
):
    """Create an avatar, uploading its image first when one is attached"""
    draft = AvatarDraft(name=name, platform=platform, description=description, image_url=image_url)
    image = await read_image_upload(file)
    avatar = service.create_avatar(user_session.user_id, draft, image)
    return AvatarActionResponse(avatar=avatar, message="Avatar created")


@router.put("/{avatar_id}/image", response_model=AvatarActionResponse)
async def update_avatar_image(
    avatar_id: str,
    file: Optional[UploadFile] = File(None),
    user_session: UserSession = Depends(require_session),
    service: AvatarService = Depends(get_avatar_service)
):
    image = await read_image_upload(file)
    avatar = service.update_avatar_image(user_session.user_id, avatar_id, image)
    return AvatarActionResponse(avatar=avatar, message="Avatar image updated")


@router.post("/{avatar_id}/primary", response_model=AvatarActionResponse)
async def set_primary_avatar(
    avatar_id: str,
    user_session: UserSession = Depends(require_session),
    service: AvatarService = Depends(get_avatar_service)
):
    avatar = service.set_primary(user_session.user_id, avatar_id)
    return AvatarActionResponse(avatar=avatar, message="Primary avatar set")


@router.delete("/{avatar_id}", response_model=AvatarActionResponse)
async def delete_avatar(
    avatar_id: str,
    user_session: UserSession = Depends(require_session),
    service: AvatarService = Depends(get_avatar_service)
):
    """Delete an avatar and, best effort, its image"""
    avatar = service.delete_avatar(user_session.user_id, avatar_id)
    return AvatarActionResponse(avatar=avatar, message="Avatar deleted")
