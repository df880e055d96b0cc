"""
Artist collaboration graph.

Two artists collaborate when both are credited on the same track; the edge
weight is the number of distinct shared tracks. The neighbour query is a
set-based self-join on track credits, so no graph is built in memory.
"""
from sqlalchemy import distinct, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.artist import Artist
from app.models.track import track_artists
from app.schemas.artist import ArtistResponse, CollaboratorResponse
from app.utils.query_runner import run_query


class CollaborationService:
    """Co-credit queries over track_artists."""

    @staticmethod
    def collaboration_counts(artist_id: str):
        """Subquery: (artist_id, collaboration_count) for every co-credited artist."""
        own = track_artists.alias("own")
        other = track_artists.alias("other")
        return (
            select(
                other.c.artist_id.label("artist_id"),
                func.count(distinct(own.c.track_id)).label("collaboration_count"),
            )
            .select_from(own.join(other, other.c.track_id == own.c.track_id))
            .where(own.c.artist_id == artist_id, other.c.artist_id != artist_id)
            .group_by(other.c.artist_id)
            .subquery()
        )

    @classmethod
    async def collaborators(cls, db: AsyncSession, artist_id: str) -> list[CollaboratorResponse]:
        """
        Artists sharing track credits with artist_id.

        Ordered by shared track count descending, then name, then id. The
        artist itself never appears; an unknown artist has no collaborators.
        """
        counts = cls.collaboration_counts(artist_id)
        stmt = (
            select(Artist, counts.c.collaboration_count)
            .join(counts, counts.c.artist_id == Artist.id)
            .order_by(
                counts.c.collaboration_count.desc(),
                Artist.name.asc(),
                Artist.id.asc(),
            )
        )
        result = await run_query(db, stmt, query="collaborators", params={"artist_id": artist_id})
        return [
            CollaboratorResponse(
                artist=ArtistResponse.model_validate(artist),
                collaboration_count=collaboration_count,
            )
            for artist, collaboration_count in result.all()
        ]
