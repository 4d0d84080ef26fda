from fastapi import APIRouter, Depends
from metaverse_sns.core.dependencies import require_session
from metaverse_sns.core.session import UserSession
from metaverse_sns.modules.search.schemas import SearchResponse
from metaverse_sns.modules.search.service import SearchService

router = APIRouter(prefix="/search", tags=["search"])


def get_search_service(user_session: UserSession = Depends(require_session)) -> SearchService:
    return SearchService(user_session.client)


async def run_search(service: SearchService, q: str) -> SearchResponse:
    results = await service.search(q)
    return SearchResponse(
        query=q,
        profiles=results.profiles,
        avatars=results.avatars,
        no_results=bool(q.strip()) and results.is_empty,
    )


@router.get("", response_model=SearchResponse)
async def search(
    q: str = "",
    service: SearchService = Depends(get_search_service)
):
    """Search profiles and avatars right away, without debouncing"""
    return await run_search(service, q)
