"""Album router: search, counts, recent releases and type distribution."""

from typing import Optional

from fastapi import APIRouter, Query

from app.core.exceptions import NotFoundException
from app.dependencies import DbSession, PageWindow, SearchCriteria
from app.schemas.album import AlbumResponse
from app.schemas.common import ApiResponse, DistributionEntry
from app.schemas.criteria import clamp_limit
from app.schemas.track import TrackResponse
from app.services.album_service import AlbumService
from app.services.track_service import TrackService

router = APIRouter()


@router.get(
    "",
    response_model=ApiResponse[list[AlbumResponse]],
    summary="List albums",
)
async def list_albums(db: DbSession, window: PageWindow):
    return ApiResponse(data=await AlbumService.search(db, window))


@router.get(
    "/search",
    response_model=ApiResponse[list[AlbumResponse]],
    summary="Search albums",
)
async def search_albums(db: DbSession, criteria: SearchCriteria):
    """
    Paginated album search.

    - searchTerm matches album names case-insensitively
    - typeFilter: single, album, compilation or all
    - sortBy: popularity, name or release_date
    """
    return ApiResponse(data=await AlbumService.search(db, criteria))


@router.get(
    "/count",
    response_model=ApiResponse[int],
    summary="Count albums matching a search",
)
async def count_albums(db: DbSession, criteria: SearchCriteria):
    return ApiResponse(data=await AlbumService.count(db, criteria))


@router.get(
    "/recent",
    response_model=ApiResponse[list[AlbumResponse]],
    summary="Get recently released albums",
)
async def recent_albums(
    db: DbSession,
    limit: Optional[str] = Query(None, description="Number of albums to return"),
):
    return ApiResponse(data=await AlbumService.recent(db, clamp_limit(limit)))


@router.get(
    "/search/type-distribution",
    response_model=ApiResponse[list[DistributionEntry]],
    summary="Album type distribution of a search",
)
async def type_distribution(db: DbSession, criteria: SearchCriteria):
    return ApiResponse(data=await AlbumService.type_distribution(db, criteria))


@router.get(
    "/{album_id}",
    response_model=ApiResponse[AlbumResponse],
    summary="Get album by id",
)
async def get_album(album_id: str, db: DbSession):
    album = await AlbumService.by_id(db, album_id)
    if album is None:
        raise NotFoundException("Album not found")
    return ApiResponse(data=album)


@router.get(
    "/{album_id}/tracks",
    response_model=ApiResponse[list[TrackResponse]],
    summary="Get tracks of an album",
)
async def get_album_tracks(album_id: str, db: DbSession):
    return ApiResponse(data=await TrackService.by_album(db, album_id))
