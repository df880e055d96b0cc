"""
Track similarity by audio-feature distance.

Tracks are compared on a fixed feature subset with a weighted Euclidean
distance. The [0, 1] features are used as-is; tempo (BPM) is min-max scaled
over the candidate pool first so it does not dominate the sum. Tracks
missing any compared feature cannot be placed in the space and are never
candidates.
"""
import logging
from typing import Optional, Sequence

import numpy as np
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.track import Track
from app.schemas.criteria import coerce_int
from app.schemas.track import SimilarTrackResponse
from app.services.track_service import TrackService
from app.utils.query_runner import run_query

logger = logging.getLogger(__name__)

FEATURES = ("energy", "valence", "danceability", "acousticness", "tempo")
TEMPO_INDEX = FEATURES.index("tempo")

# Scoring weights
FEATURE_WEIGHTS = {
    "energy": 1.0,
    "valence": 1.0,
    "danceability": 1.0,
    "acousticness": 1.0,
    "tempo": 0.5,
}

DEFAULT_SIMILAR_LIMIT = 3
MAX_SIMILAR_LIMIT = 50


def clamp_similar_limit(limit) -> int:
    """Parse and bound k to [1, MAX_SIMILAR_LIMIT]."""
    return max(1, min(coerce_int(limit, DEFAULT_SIMILAR_LIMIT), MAX_SIMILAR_LIMIT))


def _scale_tempo(matrix: np.ndarray) -> np.ndarray:
    tempo = matrix[:, TEMPO_INDEX]
    low, high = tempo.min(), tempo.max()
    scaled = matrix.copy()
    if high > low:
        scaled[:, TEMPO_INDEX] = (tempo - low) / (high - low)
    else:
        scaled[:, TEMPO_INDEX] = 0.0
    return scaled


def rank_by_distance(
    reference_id: str,
    reference: Sequence[float],
    candidates: Sequence[tuple[str, Sequence[float]]],
) -> list[tuple[str, float]]:
    """
    Rank candidates by weighted distance to the reference vector.

    Args:
        reference_id: Id of the reference track; excluded from the result
        reference: Feature values in FEATURES order
        candidates: (track id, feature values) pairs, FEATURES order

    Returns:
        (track id, distance) pairs, nearest first, ties by id ascending.
        The ordering does not depend on how many results are taken, so a
        shorter ranking is always a prefix of a longer one.
    """
    pool = [(track_id, vector) for track_id, vector in candidates if track_id != reference_id]
    if not pool:
        return []

    matrix = _scale_tempo(np.array([reference] + [vector for _, vector in pool], dtype=float))
    weights = np.array([FEATURE_WEIGHTS[name] for name in FEATURES])
    diffs = matrix[1:] - matrix[0]
    distances = np.sqrt((weights * diffs ** 2).sum(axis=1))

    return sorted(
        zip((track_id for track_id, _ in pool), distances.tolist()),
        key=lambda pair: (pair[1], pair[0]),
    )


class SimilarityService:
    """Nearest tracks in audio-feature space."""

    @staticmethod
    def _feature_columns():
        return [getattr(Track, name) for name in FEATURES]

    @classmethod
    async def _reference_vector(cls, db: AsyncSession, track_id: str) -> Optional[list[float]]:
        result = await run_query(
            db,
            select(*cls._feature_columns()).where(Track.id == track_id),
            query="similarity reference",
            params={"track_id": track_id},
        )
        row = result.first()
        if row is None or any(value is None for value in row):
            return None
        return list(row)

    @classmethod
    async def _candidates(cls, db: AsyncSession) -> list[tuple[str, list[float]]]:
        columns = cls._feature_columns()
        result = await run_query(
            db,
            select(Track.id, *columns)
            .where(*[column.is_not(None) for column in columns])
            .order_by(Track.id),
            query="similarity candidates",
        )
        return [(row[0], list(row[1:])) for row in result.all()]

    @classmethod
    async def similar(
        cls,
        db: AsyncSession,
        track_id: str,
        limit=DEFAULT_SIMILAR_LIMIT,
    ) -> list[SimilarTrackResponse]:
        """
        Up to limit tracks nearest to track_id, excluding itself.

        An unknown track, or one missing any compared feature, has no
        neighbours and yields an empty list.
        """
        k = clamp_similar_limit(limit)
        reference = await cls._reference_vector(db, track_id)
        if reference is None:
            logger.info(f"[SimilarityService] No comparable features for track {track_id}")
            return []

        ranked = rank_by_distance(track_id, reference, await cls._candidates(db))[:k]
        distances = dict(ranked)
        tracks = await TrackService.by_ids_ordered(db, [track for track, _ in ranked])
        return [
            SimilarTrackResponse(**track.model_dump(), distance=distances[track.id])
            for track in tracks
        ]
