"""Artist router: search, counts, distributions, collaborators and details."""

from typing import Optional

from fastapi import APIRouter, Query

from app.core.exceptions import NotFoundException
from app.dependencies import DbSession, PageWindow, SearchCriteria, SessionFactory
from app.schemas.album import AlbumResponse
from app.schemas.artist import ArtistOverviewResponse, ArtistResponse, CollaboratorResponse
from app.schemas.common import ApiResponse, DistributionEntry
from app.schemas.criteria import FilterCriteria, clamp_limit
from app.schemas.track import TrackResponse
from app.services.album_service import AlbumService
from app.services.artist_service import ArtistService
from app.services.collaboration_service import CollaborationService
from app.services.track_service import TrackService
from app.utils.batch_queries import gather_queries

router = APIRouter()


# ============== Collection endpoints ==============

@router.get(
    "",
    response_model=ApiResponse[list[ArtistResponse]],
    summary="List artists",
)
async def list_artists(db: DbSession, window: PageWindow):
    """List artists by popularity."""
    return ApiResponse(data=await ArtistService.search(db, window))


@router.get(
    "/search",
    response_model=ApiResponse[list[ArtistResponse]],
    summary="Search artists",
)
async def search_artists(db: DbSession, criteria: SearchCriteria):
    """
    Paginated artist search.

    - searchTerm matches artist names case-insensitively
    - genreFilter keeps artists with a genre containing the value
    - sortBy: popularity, name or followers
    """
    return ApiResponse(data=await ArtistService.search(db, criteria))


@router.get(
    "/count",
    response_model=ApiResponse[int],
    summary="Count artists matching a search",
)
async def count_artists(db: DbSession, criteria: SearchCriteria):
    """Count with the same filters as /search; paging params are ignored."""
    return ApiResponse(data=await ArtistService.count(db, criteria))


@router.get(
    "/trending",
    response_model=ApiResponse[list[ArtistResponse]],
    summary="Get trending artists",
)
async def trending_artists(
    db: DbSession,
    limit: Optional[str] = Query(None, description="Number of artists to return"),
):
    """Most popular artists first."""
    return ApiResponse(data=await ArtistService.trending(db, clamp_limit(limit)))


@router.get(
    "/genre-count",
    response_model=ApiResponse[int],
    summary="Count distinct genres",
)
async def genre_count(db: DbSession):
    return ApiResponse(data=await ArtistService.genre_count(db))


@router.get(
    "/genre-distribution",
    response_model=ApiResponse[list[DistributionEntry]],
    summary="Genre distribution of matching artists",
)
async def genre_distribution(db: DbSession, criteria: SearchCriteria):
    return ApiResponse(data=await ArtistService.genre_distribution(db, criteria))


@router.get(
    "/emotion-distribution",
    response_model=ApiResponse[list[DistributionEntry]],
    summary="Emotion distribution of matching artists' tracks",
)
async def emotion_distribution(db: DbSession, criteria: SearchCriteria):
    return ApiResponse(data=await ArtistService.emotion_distribution(db, criteria))


# ============== Single artist endpoints ==============

@router.get(
    "/{artist_id}",
    response_model=ApiResponse[ArtistResponse],
    summary="Get artist by id",
)
async def get_artist(artist_id: str, db: DbSession):
    artist = await ArtistService.by_id(db, artist_id)
    if artist is None:
        raise NotFoundException("Artist not found")
    return ApiResponse(data=artist)


@router.get(
    "/{artist_id}/collaborators",
    response_model=ApiResponse[list[CollaboratorResponse]],
    summary="Get artist collaborators",
)
async def get_collaborators(artist_id: str, db: DbSession):
    """Co-credited artists ordered by number of shared tracks."""
    return ApiResponse(data=await CollaborationService.collaborators(db, artist_id))


@router.get(
    "/{artist_id}/genre-distribution",
    response_model=ApiResponse[list[DistributionEntry]],
    summary="Genre distribution of one artist",
)
async def artist_genre_distribution(artist_id: str, db: DbSession):
    criteria = FilterCriteria(ids=[artist_id])
    return ApiResponse(data=await ArtistService.genre_distribution(db, criteria))


@router.get(
    "/{artist_id}/emotion-distribution",
    response_model=ApiResponse[list[DistributionEntry]],
    summary="Emotion distribution of one artist's tracks",
)
async def artist_emotion_distribution(artist_id: str, db: DbSession):
    criteria = FilterCriteria(ids=[artist_id])
    return ApiResponse(data=await ArtistService.emotion_distribution(db, criteria))


@router.get(
    "/{artist_id}/albums",
    response_model=ApiResponse[list[AlbumResponse]],
    summary="Get albums by artist",
)
async def get_artist_albums(artist_id: str, db: DbSession, window: PageWindow):
    albums = await AlbumService.by_artist(db, artist_id, window.limit, window.offset)
    return ApiResponse(data=albums)


@router.get(
    "/{artist_id}/albums/count",
    response_model=ApiResponse[int],
    summary="Count albums by artist",
)
async def count_artist_albums(artist_id: str, db: DbSession):
    return ApiResponse(data=await AlbumService.count_by_artist(db, artist_id))


@router.get(
    "/{artist_id}/tracks",
    response_model=ApiResponse[list[TrackResponse]],
    summary="Get tracks by artist",
)
async def get_artist_tracks(artist_id: str, db: DbSession, window: PageWindow):
    tracks = await TrackService.by_artist(db, artist_id, window.limit, window.offset)
    return ApiResponse(data=tracks)


@router.get(
    "/{artist_id}/tracks/count",
    response_model=ApiResponse[int],
    summary="Count tracks by artist",
)
async def count_artist_tracks(artist_id: str, db: DbSession):
    return ApiResponse(data=await TrackService.count_by_artist(db, artist_id))


@router.get(
    "/{artist_id}/overview",
    response_model=ApiResponse[ArtistOverviewResponse],
    summary="Get complete artist details",
)
async def get_artist_overview(artist_id: str, session_factory: SessionFactory):
    """
    Artist details with first pages of albums and tracks, counts,
    distributions and collaborators.

    The sub-queries are independent and run concurrently, each on its own
    session; the response is built only once all of them have finished.
    """
    artist_only = FilterCriteria(ids=[artist_id])
    (
        artist,
        albums,
        album_count,
        tracks,
        track_count,
        genres,
        emotions,
        collaborators,
    ) = await gather_queries(
        session_factory,
        lambda db: ArtistService.by_id(db, artist_id),
        lambda db: AlbumService.by_artist(db, artist_id),
        lambda db: AlbumService.count_by_artist(db, artist_id),
        lambda db: TrackService.by_artist(db, artist_id),
        lambda db: TrackService.count_by_artist(db, artist_id),
        lambda db: ArtistService.genre_distribution(db, artist_only),
        lambda db: ArtistService.emotion_distribution(db, artist_only),
        lambda db: CollaborationService.collaborators(db, artist_id),
    )

    if artist is None:
        raise NotFoundException("Artist not found")

    return ApiResponse(data=ArtistOverviewResponse(
        artist=artist,
        albums=albums,
        album_count=album_count,
        tracks=tracks,
        track_count=track_count,
        genre_distribution=genres,
        emotion_distribution=emotions,
        collaborators=collaborators,
    ))
