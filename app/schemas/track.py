"""Track schemas for API responses."""

from typing import Optional

from pydantic import BaseModel


class TrackResponse(BaseModel):
    """Track row with audio features and its derived emotion."""
    id: str
    name: str
    duration_ms: int = 0
    explicit: bool = False

    # Album info
    album_id: Optional[str] = None
    album_name: Optional[str] = None
    release_date: Optional[str] = None

    # Credited artists in display order
    artist_ids: list[str] = []
    artist_names: list[str] = []

    # Audio features (None = not computed)
    energy: Optional[float] = None
    valence: Optional[float] = None
    danceability: Optional[float] = None
    acousticness: Optional[float] = None
    instrumentalness: Optional[float] = None
    liveness: Optional[float] = None
    speechiness: Optional[float] = None
    loudness: Optional[float] = None
    tempo: Optional[float] = None
    key: Optional[int] = None
    mode: Optional[int] = None
    time_signature: Optional[int] = None

    emotion: str  # Derived from energy/valence, never stored

    model_config = {"from_attributes": True}


class SimilarTrackResponse(TrackResponse):
    """Track ranked by distance to a reference track."""
    distance: float
