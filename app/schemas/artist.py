"""Artist schemas for API responses."""

from pydantic import BaseModel

from app.schemas.album import AlbumResponse
from app.schemas.common import DistributionEntry
from app.schemas.track import TrackResponse


class ArtistResponse(BaseModel):
    """Artist row as returned by search and lookups."""
    id: str
    name: str
    popularity: int = 0
    followers: int = 0
    image_urls: list[str] = []
    genres: list[str] = []
    album_count: int = 0
    track_count: int = 0
    collaborator_count: int = 0

    model_config = {"from_attributes": True}


class CollaboratorResponse(BaseModel):
    """A co-credited artist and the number of tracks they share."""
    artist: ArtistResponse
    collaboration_count: int


class ArtistOverviewResponse(BaseModel):
    """Complete artist details assembled from concurrent sub-queries."""
    artist: ArtistResponse
    albums: list[AlbumResponse] = []
    album_count: int = 0
    tracks: list[TrackResponse] = []
    track_count: int = 0
    genre_distribution: list[DistributionEntry] = []
    emotion_distribution: list[DistributionEntry] = []
    collaborators: list[CollaboratorResponse] = []
