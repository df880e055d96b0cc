"""
Catalog-wide insights.

- love distribution: emotions of tracks whose lyrics mention "love"
- lyric words: words used by the most tracks of a genre
- popularity growth: change between each artist's two latest albums
- emotion variety: how evenly an artist's tracks spread over emotions
"""
import logging
import re
from itertools import groupby
from typing import Optional

import numpy as np
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.emotion import EmotionLabel, classify, emotion_expression
from app.models.album import Album, album_artists
from app.models.artist import Artist
from app.models.track import Track, track_artists
from app.schemas.common import DistributionEntry
from app.schemas.criteria import DEFAULT_LIMIT, FilterCriteria
from app.schemas.insight import EmotionVarietyResponse, PopularityGrowthResponse
from app.services.artist_service import ArtistService
from app.utils.distribution import distribute, distribute_many, distribution_from_counts
from app.utils.query_runner import run_query

logger = logging.getLogger(__name__)

LOVE_TERM = "love"
DEFAULT_WORD_GENRE = "pop"
MIN_WORD_LENGTH = 3

WORD_PATTERN = re.compile(r"[a-z']+")

STOP_WORDS = frozenset({
    "the", "and", "you", "your", "for", "with", "that", "this", "are", "was",
    "but", "not", "all", "can", "just", "into", "from", "what", "when", "she",
    "her", "him", "his", "they", "them", "our", "out", "got", "get", "don't",
    "i'm", "it's", "you're", "can't", "won't", "there", "then", "than", "have",
    "has", "had", "who", "how", "why", "yeah", "ooh", "let", "too", "now",
})


def tokenize_lyrics(lyrics: str) -> set[str]:
    """Distinct content words of a lyric, lowercased."""
    words = (word.strip("'") for word in WORD_PATTERN.findall(lyrics.lower()))
    return {word for word in words if len(word) >= MIN_WORD_LENGTH and word not in STOP_WORDS}


def known_emotion(energy: Optional[float], valence: Optional[float]) -> Optional[str]:
    """Emotion label, or None for tracks that cannot be classified."""
    label = classify(energy, valence)
    return None if label == EmotionLabel.OTHER else label.value


def emotion_entropy(entries: list[DistributionEntry]) -> float:
    """Shannon entropy (bits) of a distribution; 0 for one label or none."""
    if not entries:
        return 0.0
    ratios = np.array([entry.ratio for entry in entries])
    return max(0.0, float(-(ratios * np.log2(ratios)).sum()))


def growth_percent(previous: int, current: int) -> float:
    return (current - previous) / previous * 100


class InsightService:
    """Aggregates across the whole catalog."""

    @staticmethod
    async def love_distribution(db: AsyncSession) -> list[DistributionEntry]:
        """Emotion distribution of tracks whose lyrics contain "love"."""
        labelled = (
            select(emotion_expression(Track.energy, Track.valence).label("emotion"))
            .where(Track.lyrics.icontains(LOVE_TERM, autoescape=True))
            .subquery()
        )
        stmt = select(labelled.c.emotion, func.count()).group_by(labelled.c.emotion)

        result = await run_query(db, stmt, query="love distribution")
        return distribution_from_counts(dict(result.all()))

    @staticmethod
    async def lyric_words(
        db: AsyncSession,
        genre: Optional[str] = DEFAULT_WORD_GENRE,
        limit: int = DEFAULT_LIMIT,
    ) -> list[DistributionEntry]:
        """
        Most used lyric words across tracks by artists of a genre.

        A word counts once per track, so count is the number of tracks using
        it and ratio is relative to all (track, word) memberships. A blank
        genre means every artist.
        """
        genre_artists = ArtistService.matching_ids(FilterCriteria(genre_filter=genre))
        track_ids = select(track_artists.c.track_id).where(track_artists.c.artist_id.in_(genre_artists))
        stmt = select(Track.lyrics).where(Track.id.in_(track_ids), Track.lyrics.is_not(None))

        result = await run_query(db, stmt, query="lyric words", params={"genre": genre})
        lyrics = result.scalars().all()
        logger.info(f"[InsightService] Counting lyric words over {len(lyrics)} tracks (genre={genre!r})")
        return distribute_many(lyrics, tokenize_lyrics)[:limit]

    @staticmethod
    async def popularity_growth(db: AsyncSession, limit: int = DEFAULT_LIMIT) -> list[PopularityGrowthResponse]:
        """
        Popularity change from each artist's second latest to latest album.

        Only albums with a release date are considered. Artists with fewer
        than two such albums, or whose previous album has zero popularity,
        are skipped. Largest growth first.
        """
        stmt = (
            select(
                album_artists.c.artist_id,
                Artist.name.label("artist_name"),
                Album.id.label("album_id"),
                Album.name.label("album_name"),
                Album.release_date,
                Album.popularity,
            )
            .select_from(album_artists)
            .join(Artist, Artist.id == album_artists.c.artist_id)
            .join(Album, Album.id == album_artists.c.album_id)
            .where(Album.release_date.is_not(None))
            .order_by(album_artists.c.artist_id, Album.release_date, Album.id)
        )
        result = await run_query(db, stmt, query="artist popularity growth")

        growth = []
        for _, rows in groupby(result.all(), key=lambda row: row.artist_id):
            rows = list(rows)
            if len(rows) < 2:
                continue
            prev, curr = rows[-2], rows[-1]
            if not prev.popularity:
                continue
            growth.append(PopularityGrowthResponse(
                artist_id=curr.artist_id,
                artist=curr.artist_name,
                prev_album_id=prev.album_id,
                prev_album=prev.album_name,
                prev_release_date=prev.release_date,
                prev_popularity=prev.popularity,
                curr_album_id=curr.album_id,
                curr_album=curr.album_name,
                curr_release_date=curr.release_date,
                curr_popularity=curr.popularity,
                popularity_growth_ratio=growth_percent(prev.popularity, curr.popularity),
            ))

        growth.sort(key=lambda item: (-item.popularity_growth_ratio, item.artist, item.artist_id))
        return growth[:limit]

    @staticmethod
    async def emotion_variety(db: AsyncSession, limit: int = DEFAULT_LIMIT) -> list[EmotionVarietyResponse]:
        """
        Emotion variety per artist, most varied first.

        Variety is the entropy of the artist's emotion distribution over the
        tracks that can be classified; tracks missing energy or valence
        still count towards track_count.
        """
        stmt = (
            select(track_artists.c.artist_id, Artist.name, Track.energy, Track.valence)
            .select_from(track_artists)
            .join(Artist, Artist.id == track_artists.c.artist_id)
            .join(Track, Track.id == track_artists.c.track_id)
            .order_by(track_artists.c.artist_id)
        )
        result = await run_query(db, stmt, query="artist emotion variety")

        varieties = []
        for (artist_id, name), rows in groupby(result.all(), key=lambda row: (row.artist_id, row.name)):
            rows = list(rows)
            entries = distribute(rows, lambda row: known_emotion(row.energy, row.valence))
            varieties.append(EmotionVarietyResponse(
                id=artist_id,
                name=name,
                variety=emotion_entropy(entries),
                emotion_count=len(entries),
                track_count=len(rows),
                dominant_emotion=entries[0].label if entries else None,
            ))

        varieties.sort(key=lambda item: (-item.variety, item.name, item.id))
        return varieties[:limit]
