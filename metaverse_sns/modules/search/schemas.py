from pydantic import BaseModel, computed_field
from typing import List
from metaverse_sns.modules.avatars.schemas import AvatarResponse
from metaverse_sns.modules.profiles.schemas import ProfileResponse


class SearchResults(BaseModel):
    profiles: List[ProfileResponse] = []
    avatars: List[AvatarResponse] = []

    @property
    def is_empty(self) -> bool:
        return not self.profiles and not self.avatars


class SearchState(BaseModel):
    query: str = ""
    profiles: List[ProfileResponse] = []
    avatars: List[AvatarResponse] = []
    loading: bool = False
    searched: bool = False  # last completed search was for a non-empty query

    @computed_field
    @property
    def no_results(self) -> bool:
        return self.searched and not self.loading and not self.profiles and not self.avatars


class SearchResponse(BaseModel):
    query: str
    profiles: List[ProfileResponse]
    avatars: List[AvatarResponse]
    no_results: bool
