"""Track catalog queries."""
from typing import Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.emotion import emotion_expression
from app.models.album import Album
from app.models.track import Track, track_artists
from app.schemas.criteria import DEFAULT_LIMIT, MAX_LIMIT, FilterCriteria
from app.schemas.track import TrackResponse
from app.utils.query_composer import ComposedQuery, QueryComposer, credited_to, id_set
from app.utils.query_runner import run_query

# Tracks sort by their album's release date; uncategorized tracks sort last
track_release_date = (
    select(Album.release_date)
    .where(Album.id == Track.album_id)
    .scalar_subquery()
)

track_composer = QueryComposer(
    id_column=Track.id,
    search_columns=(Track.name,),
    sort_columns={
        "release_date": track_release_date,
        "name": Track.name,
        "duration_ms": Track.duration_ms,
    },
    default_sort="release_date",
)


class TrackService:
    """Read-only queries over tracks."""

    @staticmethod
    def compose(criteria: FilterCriteria) -> ComposedQuery:
        extra = [
            emotion_expression(Track.energy, Track.valence) == criteria.emotion_filter.value
            if criteria.emotion_filter else None,
            credited_to(Track.id, track_artists.c.track_id, track_artists.c.artist_id, criteria.artist_ids),
            id_set(Track.album_id, criteria.album_ids),
        ]
        return track_composer.compose(criteria, extra)

    @classmethod
    async def search(cls, db: AsyncSession, criteria: FilterCriteria) -> list[TrackResponse]:
        query = cls.compose(criteria)
        result = await run_query(db, query.page(select(Track)), query="tracks", params=criteria)
        return [TrackResponse.model_validate(track) for track in result.scalars().all()]

    @classmethod
    async def count(cls, db: AsyncSession, criteria: FilterCriteria) -> int:
        query = cls.compose(criteria)
        result = await run_query(db, query.count(Track.id), query="track count", params=criteria)
        return result.scalar_one()

    @classmethod
    async def by_id(cls, db: AsyncSession, track_id: str) -> Optional[TrackResponse]:
        tracks = await cls.search(db, FilterCriteria(ids=[track_id], limit=1))
        return tracks[0] if tracks else None

    @classmethod
    async def by_artist(
        cls,
        db: AsyncSession,
        artist_id: str,
        limit: int = DEFAULT_LIMIT,
        offset: int = 0,
    ) -> list[TrackResponse]:
        criteria = FilterCriteria(artist_ids=[artist_id], limit=limit, offset=offset)
        return await cls.search(db, criteria)

    @classmethod
    async def count_by_artist(cls, db: AsyncSession, artist_id: str) -> int:
        return await cls.count(db, FilterCriteria(artist_ids=[artist_id]))

    @classmethod
    async def by_album(cls, db: AsyncSession, album_id: str) -> list[TrackResponse]:
        """Every track of an album (bounded by the page size cap), by name."""
        criteria = FilterCriteria(
            album_ids=[album_id],
            sort_by="name",
            sort_order="ASC",
            limit=MAX_LIMIT,
        )
        return await cls.search(db, criteria)

    @staticmethod
    async def lyrics(db: AsyncSession, track_id: str) -> Optional[str]:
        """Lyrics text, or None for unknown tracks and tracks without lyrics."""
        result = await run_query(
            db,
            select(Track.lyrics).where(Track.id == track_id),
            query="lyrics",
            params={"track_id": track_id},
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def by_ids_ordered(db: AsyncSession, track_ids: Sequence[str]) -> list[TrackResponse]:
        """Tracks for track_ids in the given order; unknown ids are skipped."""
        if not track_ids:
            return []
        result = await run_query(
            db,
            select(Track).where(Track.id.in_(list(track_ids))),
            query="tracks by id",
            params={"track_ids": list(track_ids)},
        )
        tracks = {track.id: track for track in result.scalars().all()}
        return [
            TrackResponse.model_validate(tracks[track_id])
            for track_id in track_ids
            if track_id in tracks
        ]
