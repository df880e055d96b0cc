"""Insight schemas for API responses."""

from typing import Optional

from pydantic import BaseModel


class PopularityGrowthResponse(BaseModel):
    """Popularity change between an artist's two latest dated albums."""
    artist_id: str
    artist: str

    prev_album_id: str
    prev_album: str
    prev_release_date: str
    prev_popularity: int

    curr_album_id: str
    curr_album: str
    curr_release_date: str
    curr_popularity: int

    # Percent change relative to the previous album
    popularity_growth_ratio: float


class EmotionVarietyResponse(BaseModel):
    """How evenly an artist's tracks spread over the emotion labels."""
    id: str
    name: str
    variety: float  # Shannon entropy in bits; 0 = single emotion
    emotion_count: int
    track_count: int
    dominant_emotion: Optional[str] = None
