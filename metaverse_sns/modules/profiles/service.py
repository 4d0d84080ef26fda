from supabase import Client
from metaverse_sns.core.image_storage import ImageStorage, ImageUpload
from metaverse_sns.modules.profiles.schemas import ProfileForm, ProfileResponse
from typing import Optional
from datetime import datetime, timezone
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class ProfileService:
    def __init__(self, supabase: Client, storage: Optional[ImageStorage] = None):
        self.supabase = supabase
        self.storage = storage or ImageStorage(supabase)

    def create_profile(self, user_id: str, username: str) -> None:
        """Insert the profile row for a freshly created identity. Raises on failure."""
        self.supabase.table("profiles").insert({
            "id": user_id,
            "username": username,
        }).execute()

    def get_profile(self, user_id: str) -> ProfileResponse:
        """Get exactly one profile row for the identity"""
        try:
            result = self.supabase.table("profiles")\
                .select("*")\
                .eq("id", user_id)\
                .single()\
                .execute()
            return ProfileResponse(**result.data)
        except Exception as e:
            logger.error(f"Error loading profile {user_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to load profile")

    def load_profile_form(self, user_id: str) -> ProfileForm:
        profile = self.get_profile(user_id)
        return ProfileForm(
            username=profile.username,
            bio=profile.bio or "",
            avatar_url=profile.avatar_url or "",
        )

    def save_profile(self, user_id: str, form: ProfileForm) -> ProfileForm:
        """Insert or update the profile row with the form values"""
        if not form.username.strip():
            raise HTTPException(status_code=400, detail="Username is required")
        try:
            self.supabase.table("profiles").upsert({
                "id": user_id,
                "username": form.username,
                "bio": form.bio or None,
                "avatar_url": form.avatar_url or None,
                "updated_at": _now(),
            }).execute()
        except Exception as e:
            logger.error(f"Error saving profile {user_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to update profile")
        return form

    def upload_profile_image(self, user_id: str, image: Optional[ImageUpload]) -> str:
        """
        Replace the profile image. The new object is uploaded first; the old one
        is removed on a best-effort basis before the row points at the new URL.
        """
        if image is None:
            raise HTTPException(status_code=400, detail="Please select an image")
        try:
            current = self.supabase.table("profiles")\
                .select("avatar_url")\
                .eq("id", user_id)\
                .maybe_single()\
                .execute()
            previous_url = current.data.get("avatar_url") if current and current.data else None

            image_url = self.storage.upload_image(user_id, image)

            if previous_url:
                self.storage.delete_image(user_id, previous_url)

            self.supabase.table("profiles").upsert({
                "id": user_id,
                "avatar_url": image_url,
                "updated_at": _now(),
            }).execute()
            return image_url
        except Exception as e:
            logger.error(f"Error updating profile image for {user_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to update profile image")
