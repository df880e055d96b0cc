# Import all models so relationships resolve against one registry
from app.models.artist import Artist, ArtistGenre
from app.models.album import Album, album_artists
from app.models.track import Track, track_artists

__all__ = [
    "Artist",
    "ArtistGenre",
    "Album",
    "album_artists",
    "Track",
    "track_artists",
]
