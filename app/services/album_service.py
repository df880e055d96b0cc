"""Album catalog queries."""
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.album import Album, album_artists
from app.schemas.album import AlbumResponse
from app.schemas.common import DistributionEntry
from app.schemas.criteria import DEFAULT_LIMIT, FilterCriteria
from app.utils.distribution import distribution_from_counts
from app.utils.query_composer import ComposedQuery, QueryComposer, credited_to
from app.utils.query_runner import run_query

album_composer = QueryComposer(
    id_column=Album.id,
    search_columns=(Album.name,),
    sort_columns={
        "popularity": Album.popularity,
        "name": Album.name,
        "release_date": Album.release_date,
    },
    default_sort="popularity",
)


class AlbumService:
    """Read-only queries over albums."""

    @staticmethod
    def compose(criteria: FilterCriteria) -> ComposedQuery:
        extra = [
            Album.album_type == criteria.type_filter if criteria.type_filter else None,
            credited_to(Album.id, album_artists.c.album_id, album_artists.c.artist_id, criteria.artist_ids),
        ]
        return album_composer.compose(criteria, extra)

    @classmethod
    async def search(cls, db: AsyncSession, criteria: FilterCriteria) -> list[AlbumResponse]:
        query = cls.compose(criteria)
        result = await run_query(db, query.page(select(Album)), query="albums", params=criteria)
        return [AlbumResponse.model_validate(album) for album in result.scalars().all()]

    @classmethod
    async def count(cls, db: AsyncSession, criteria: FilterCriteria) -> int:
        query = cls.compose(criteria)
        result = await run_query(db, query.count(Album.id), query="album count", params=criteria)
        return result.scalar_one()

    @classmethod
    async def by_id(cls, db: AsyncSession, album_id: str) -> Optional[AlbumResponse]:
        albums = await cls.search(db, FilterCriteria(ids=[album_id], limit=1))
        return albums[0] if albums else None

    @classmethod
    async def by_artist(
        cls,
        db: AsyncSession,
        artist_id: str,
        limit: int = DEFAULT_LIMIT,
        offset: int = 0,
    ) -> list[AlbumResponse]:
        """Albums crediting the artist, newest first."""
        criteria = FilterCriteria(
            artist_ids=[artist_id],
            sort_by="release_date",
            limit=limit,
            offset=offset,
        )
        return await cls.search(db, criteria)

    @classmethod
    async def count_by_artist(cls, db: AsyncSession, artist_id: str) -> int:
        return await cls.count(db, FilterCriteria(artist_ids=[artist_id]))

    @classmethod
    async def recent(cls, db: AsyncSession, limit: int = DEFAULT_LIMIT) -> list[AlbumResponse]:
        """Most recently released albums."""
        criteria = FilterCriteria(sort_by="release_date", sort_order="DESC", limit=limit)
        return await cls.search(db, criteria)

    @classmethod
    async def type_distribution(
        cls,
        db: AsyncSession,
        criteria: FilterCriteria,
    ) -> list[DistributionEntry]:
        """Album type distribution over the albums matching criteria."""
        query = cls.compose(criteria)
        stmt = query.filter(
            select(Album.album_type, func.count(Album.id))
        ).group_by(Album.album_type)

        result = await run_query(db, stmt, query="album type distribution", params=criteria)
        return distribution_from_counts(dict(result.all()))
