from supabase import Client
from metaverse_sns.core.image_storage import ImageStorage, ImageUpload
from metaverse_sns.modules.avatars.schemas import AvatarDraft, AvatarResponse
from typing import List, Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class AvatarService:
    def __init__(self, supabase: Client, storage: Optional[ImageStorage] = None):
        self.supabase = supabase
        self.storage = storage or ImageStorage(supabase)

    def list_avatars(self, user_id: str) -> List[AvatarResponse]:
        """All avatars owned by the identity, newest first"""
        try:
            result = self.supabase.table("avatars")\
                .select("*")\
                .eq("user_id", user_id)\
                .order("created_at", desc=True)\
                .execute()
            return [AvatarResponse(**avatar) for avatar in result.data or []]
        except Exception as e:
            logger.error(f"Error loading avatars for {user_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to load avatars")

    def create_avatar(self, user_id: str, draft: AvatarDraft, image: Optional[ImageUpload] = None) -> AvatarResponse:
        """Create an avatar; the identity's first avatar becomes primary"""
        if not draft.name.strip() or not draft.platform.strip():
            raise HTTPException(status_code=400, detail="Avatar name and platform are required")
        try:
            existing = self.supabase.table("avatars")\
                .select("id")\
                .eq("user_id", user_id)\
                .execute()

            image_url = draft.image_url
            if image is not None:
                image_url = self.storage.upload_image(user_id, image)

            result = self.supabase.table("avatars").insert({
                "user_id": user_id,
                "name": draft.name,
                "platform": draft.platform,
                "description": draft.description or None,
                "image_url": image_url or None,
                "is_primary": len(existing.data or []) == 0,
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create avatar")

            return AvatarResponse(**result.data[0])
        except Exception as e:
            logger.error(f"Error creating avatar for {user_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to create avatar")

    def update_avatar_image(self, user_id: str, avatar_id: str, image: Optional[ImageUpload]) -> AvatarResponse:
        """Point an avatar at a newly uploaded image. The previous object is left in storage."""
        if image is None:
            raise HTTPException(status_code=400, detail="Please select an image")
        try:
            image_url = self.storage.upload_image(user_id, image)

            result = self.supabase.table("avatars")\
                .update({"image_url": image_url})\
                .eq("id", avatar_id)\
                .eq("user_id", user_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Failed to update avatar image")

            return AvatarResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error updating image of avatar {avatar_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to update avatar image")

    def set_primary(self, user_id: str, avatar_id: str) -> AvatarResponse:
        """Flag an avatar as primary. Other avatars keep their flag."""
        try:
            result = self.supabase.table("avatars")\
                .update({"is_primary": True})\
                .eq("id", avatar_id)\
                .eq("user_id", user_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Failed to set primary avatar")

            return AvatarResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error setting primary avatar {avatar_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to set primary avatar")

    def delete_avatar(self, user_id: str, avatar_id: str) -> AvatarResponse:
        """Remove the avatar's image (best effort), then the row itself"""
        try:
            found = self.supabase.table("avatars")\
                .select("*")\
                .eq("id", avatar_id)\
                .eq("user_id", user_id)\
                .maybe_single()\
                .execute()

            if not found or not found.data:
                raise HTTPException(status_code=404, detail="Failed to delete avatar")

            avatar = AvatarResponse(**found.data)
            if avatar.image_url:
                self.storage.delete_image(user_id, avatar.image_url)

            self.supabase.table("avatars")\
                .delete()\
                .eq("id", avatar_id)\
                .eq("user_id", user_id)\
                .execute()

            return avatar
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error deleting avatar {avatar_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to delete avatar")
