"""Album schemas for API responses."""

from typing import Optional

from pydantic import BaseModel


class AlbumResponse(BaseModel):
    """Album row with its credited artists in display order."""
    id: str
    name: str
    release_date: Optional[str] = None
    popularity: int = 0
    image_urls: list[str] = []
    track_count: int = 0
    album_type: str
    artist_ids: list[str] = []
    artist_names: list[str] = []

    model_config = {"from_attributes": True}
