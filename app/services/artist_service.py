"""
Artist catalog queries.

Search, count, trending, and the two artist-scoped distributions: genre
(one membership per artist genre) and emotion (over the tracks credited to
the matching artists).
"""
from typing import Optional

from sqlalchemy import distinct, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.emotion import emotion_expression
from app.models.artist import Artist, ArtistGenre
from app.models.track import Track, track_artists
from app.schemas.artist import ArtistResponse
from app.schemas.common import DistributionEntry
from app.schemas.criteria import FilterCriteria
from app.utils.distribution import distribution_from_counts
from app.utils.query_composer import ComposedQuery, QueryComposer
from app.utils.query_runner import run_query

TRENDING_LIMIT = 10

artist_composer = QueryComposer(
    id_column=Artist.id,
    search_columns=(Artist.name,),
    sort_columns={
        "popularity": Artist.popularity,
        "name": Artist.name,
        "followers": Artist.followers,
    },
    default_sort="popularity",
)


def has_genre(term: str):
    """Artist has at least one genre containing term."""
    return (
        select(ArtistGenre.artist_id)
        .where(
            ArtistGenre.artist_id == Artist.id,
            ArtistGenre.genre.icontains(term, autoescape=True),
        )
        .exists()
    )


class ArtistService:
    """Read-only queries over artists."""

    @staticmethod
    def compose(criteria: FilterCriteria) -> ComposedQuery:
        extra = [has_genre(criteria.genre_filter)] if criteria.genre_filter else []
        return artist_composer.compose(criteria, extra)

    @classmethod
    def matching_ids(cls, criteria: FilterCriteria):
        """Subquery selecting ids of every artist matching criteria (unpaged)."""
        return cls.compose(criteria).filter(select(Artist.id))

    @classmethod
    async def search(cls, db: AsyncSession, criteria: FilterCriteria) -> list[ArtistResponse]:
        query = cls.compose(criteria)
        result = await run_query(db, query.page(select(Artist)), query="artists", params=criteria)
        return [ArtistResponse.model_validate(artist) for artist in result.scalars().all()]

    @classmethod
    async def count(cls, db: AsyncSession, criteria: FilterCriteria) -> int:
        query = cls.compose(criteria)
        result = await run_query(db, query.count(Artist.id), query="artist count", params=criteria)
        return result.scalar_one()

    @classmethod
    async def by_id(cls, db: AsyncSession, artist_id: str) -> Optional[ArtistResponse]:
        """Single artist, or None when the id is unknown."""
        artists = await cls.search(db, FilterCriteria(ids=[artist_id], limit=1))
        return artists[0] if artists else None

    @classmethod
    async def trending(cls, db: AsyncSession, limit: int = TRENDING_LIMIT) -> list[ArtistResponse]:
        """Most popular artists first."""
        criteria = FilterCriteria(sort_by="popularity", sort_order="DESC", limit=limit)
        return await cls.search(db, criteria)

    @staticmethod
    async def genre_count(db: AsyncSession) -> int:
        """Number of distinct genres across the catalog."""
        result = await run_query(
            db,
            select(func.count(distinct(ArtistGenre.genre))),
            query="genre count",
        )
        return result.scalar_one()

    @classmethod
    async def genre_distribution(
        cls,
        db: AsyncSession,
        criteria: FilterCriteria,
    ) -> list[DistributionEntry]:
        """
        Genre distribution over artists matching the search term and id set.

        Each artist counts once per genre it carries. The genre filter
        selects which genre labels are reported, so ratios are relative to
        the matching genre memberships.
        """
        matching = artist_composer.compose(criteria).filter(select(Artist.id))
        stmt = (
            select(ArtistGenre.genre, func.count(ArtistGenre.artist_id))
            .where(ArtistGenre.artist_id.in_(matching))
            .group_by(ArtistGenre.genre)
        )
        if criteria.genre_filter:
            stmt = stmt.where(ArtistGenre.genre.icontains(criteria.genre_filter, autoescape=True))

        result = await run_query(db, stmt, query="artist genre distribution", params=criteria)
        return distribution_from_counts(dict(result.all()))

    @classmethod
    async def emotion_distribution(
        cls,
        db: AsyncSession,
        criteria: FilterCriteria,
    ) -> list[DistributionEntry]:
        """
        Emotion distribution over the distinct tracks credited to any artist
        matching criteria. Tracks without energy or valence count as Other.
        """
        track_ids = select(track_artists.c.track_id).where(
            track_artists.c.artist_id.in_(cls.matching_ids(criteria))
        )
        labelled = (
            select(emotion_expression(Track.energy, Track.valence).label("emotion"))
            .where(Track.id.in_(track_ids))
            .subquery()
        )
        stmt = select(labelled.c.emotion, func.count()).group_by(labelled.c.emotion)

        result = await run_query(db, stmt, query="emotion distribution", params=criteria)
        return distribution_from_counts(dict(result.all()))