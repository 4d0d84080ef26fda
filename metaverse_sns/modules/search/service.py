import asyncio
import logging
from typing import List, Sequence

from fastapi import HTTPException
from starlette.concurrency import run_in_threadpool
from supabase import Client

from metaverse_sns.modules.avatars.schemas import AvatarResponse
from metaverse_sns.modules.profiles.schemas import ProfileResponse
from metaverse_sns.modules.search.schemas import SearchResults

logger = logging.getLogger(__name__)

PROFILE_SEARCH_COLUMNS = ("username", "bio")
AVATAR_SEARCH_COLUMNS = ("name", "platform", "description")


def ilike_any(columns: Sequence[str], query: str) -> str:
    """PostgREST or-filter: any column case-insensitively contains the query"""
    value = query.replace("\\", "\\\\").replace('"', '\\"')
    return ",".join(f'{column}.ilike."%{value}%"' for column in columns)


class SearchService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def search_profiles(self, query: str) -> List[ProfileResponse]:
        result = self.supabase.table("profiles")\
            .select("*")\
            .or_(ilike_any(PROFILE_SEARCH_COLUMNS, query))\
            .order("username")\
            .execute()
        return [ProfileResponse(**row) for row in result.data or []]

    def search_avatars(self, query: str) -> List[AvatarResponse]:
        result = self.supabase.table("avatars")\
            .select("*")\
            .or_(ilike_any(AVATAR_SEARCH_COLUMNS, query))\
            .order("is_primary", desc=True)\
            .execute()
        return [AvatarResponse(**row) for row in result.data or []]

    async def search(self, query: str) -> SearchResults:
        """
        Query profiles and avatars concurrently. A blank query returns empty
        results without touching the backend; if either query fails the
        whole search fails.
        """
        if not query.strip():
            return SearchResults()
        try:
            profiles, avatars = await asyncio.gather(
                run_in_threadpool(self.search_profiles, query),
                run_in_threadpool(self.search_avatars, query),
            )
        except Exception as e:
            logger.error(f"Search for {query!r} failed: {e}")
            raise HTTPException(status_code=500, detail="Search failed")
        return SearchResults(profiles=profiles, avatars=avatars)
