"""Track router: search, counts, details, lyrics and similar tracks."""

from typing import Optional

from fastapi import APIRouter, Query

from app.core.exceptions import NotFoundException
from app.dependencies import DbSession, PageWindow, SearchCriteria
from app.schemas.common import ApiResponse
from app.schemas.track import SimilarTrackResponse, TrackResponse
from app.services.similarity_service import SimilarityService
from app.services.track_service import TrackService

router = APIRouter()


@router.get(
    "",
    response_model=ApiResponse[list[TrackResponse]],
    summary="List tracks",
)
async def list_tracks(db: DbSession, window: PageWindow):
    return ApiResponse(data=await TrackService.search(db, window))


@router.get(
    "/search",
    response_model=ApiResponse[list[TrackResponse]],
    summary="Search tracks",
)
async def search_tracks(db: DbSession, criteria: SearchCriteria):
    """
    Paginated track search.

    - searchTerm matches track names case-insensitively
    - emotionFilter: one of the ten emotion labels, or All
    - sortBy: release_date, name or duration_ms
    """
    return ApiResponse(data=await TrackService.search(db, criteria))


@router.get(
    "/count",
    response_model=ApiResponse[int],
    summary="Count tracks matching a search",
)
async def count_tracks(db: DbSession, criteria: SearchCriteria):
    return ApiResponse(data=await TrackService.count(db, criteria))


@router.get(
    "/{track_id}",
    response_model=ApiResponse[TrackResponse],
    summary="Get track by id",
)
async def get_track(track_id: str, db: DbSession):
    track = await TrackService.by_id(db, track_id)
    if track is None:
        raise NotFoundException("Track not found")
    return ApiResponse(data=track)


@router.get(
    "/{track_id}/similar",
    response_model=ApiResponse[list[SimilarTrackResponse]],
    summary="Get similar tracks",
)
async def similar_tracks(
    track_id: str,
    db: DbSession,
    limit: Optional[str] = Query(None, description="Number of tracks to return (default 3)"),
):
    """
    Nearest tracks by audio features, closest first.

    Tracks without the compared features have no neighbours; the result is
    then an empty list.
    """
    return ApiResponse(data=await SimilarityService.similar(db, track_id, limit))


@router.get(
    "/{track_id}/lyrics",
    response_model=ApiResponse[Optional[str]],
    summary="Get track lyrics",
)
async def get_lyrics(track_id: str, db: DbSession):
    return ApiResponse(data=await TrackService.lyrics(db, track_id))
