import logging
import uuid
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlparse

from fastapi import HTTPException, UploadFile
from supabase import Client

from metaverse_sns.config import settings

logger = logging.getLogger(__name__)


@dataclass
class ImageUpload:
    filename: str
    content: bytes
    content_type: str = "application/octet-stream"


async def read_image_upload(file: Optional[UploadFile]) -> Optional[ImageUpload]:
    """Read a multipart file field; an empty field means no file was selected."""
    if file is None or not file.filename:
        return None
    content_type = file.content_type or "application/octet-stream"
    if not content_type.startswith("image/"):
        raise HTTPException(status_code=400, detail="Only image files are accepted")
    return ImageUpload(filename=file.filename, content=await file.read(), content_type=content_type)


class ImageStorage:
    def __init__(self, supabase: Client, bucket_name: Optional[str] = None):
        self.supabase = supabase
        self.bucket_name = bucket_name or settings.avatar_bucket

    @staticmethod
    def build_path(user_id: str, filename: str) -> str:
        """{user_id}/{random uuid}.{extension of the original file}"""
        extension = filename.rsplit(".", 1)[-1]
        return f"{user_id}/{uuid.uuid4()}.{extension}"

    @staticmethod
    def path_from_url(url: str) -> str:
        """Object path from a public URL: its last two path segments."""
        segments = [s for s in urlparse(url).path.split("/") if s]
        return "/".join(segments[-2:])

    def upload_image(self, user_id: str, image: ImageUpload) -> str:
        """Upload (overwrite allowed) and return the public URL"""
        path = self.build_path(user_id, image.filename)
        bucket = self.supabase.storage.from_(self.bucket_name)
        bucket.upload(
            path,
            image.content,
            {"content-type": image.content_type, "upsert": "true"},
        )
        logger.info(f"Uploaded image {path} to bucket {self.bucket_name}")
        return bucket.get_public_url(path)

    def delete_image(self, user_id: str, url: str) -> bool:
        """Best-effort removal of the object behind a public URL.

        Only objects under the owner's own folder are removed; a URL that
        points anywhere else is left alone.
        """
        path = self.path_from_url(url)
        if not path.startswith(f"{user_id}/"):
            logger.warning(f"Skipping removal of {path}: not owned by {user_id}")
            return False
        try:
            self.supabase.storage.from_(self.bucket_name).remove([path])
            return True
        except Exception as e:
            logger.warning(f"Failed to delete image {path}: {e}")
            return False
