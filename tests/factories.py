"""Row builders and seeding helpers for tests."""

from sqlalchemy import insert
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Album, Artist, ArtistGenre, Track, album_artists, track_artists


def make_artist(artist_id: str, name: str, popularity: int = 50, followers: int = 0, genres=()) -> Artist:
    return Artist(
        id=artist_id,
        name=name,
        popularity=popularity,
        followers=followers,
        image_urls=[f"https://img.example/{artist_id}.jpg"],
        genre_rows=[ArtistGenre(genre=genre) for genre in genres],
    )


def make_album(album_id: str, name: str, release_date: str, album_type: str = "album", popularity: int = 50) -> Album:
    return Album(
        id=album_id,
        name=name,
        release_date=release_date,
        album_type=album_type,
        popularity=popularity,
        image_urls=[],
        track_count=0,
    )


def make_track(
    track_id: str,
    name: str,
    album_id=None,
    energy=None,
    valence=None,
    danceability=None,
    acousticness=None,
    tempo=None,
    duration_ms: int = 200_000,
    lyrics=None,
) -> Track:
    return Track(
        id=track_id,
        name=name,
        album_id=album_id,
        energy=energy,
        valence=valence,
        danceability=danceability,
        acousticness=acousticness,
        tempo=tempo,
        duration_ms=duration_ms,
        explicit=False,
        lyrics=lyrics,
    )


async def seed(
    session: AsyncSession,
    artists=(),
    albums=(),
    tracks=(),
    album_credits: dict[str, list[str]] | None = None,
    track_credits: dict[str, list[str]] | None = None,
) -> None:
    """Insert rows and credit links, then commit."""
    session.add_all([*artists, *albums, *tracks])
    await session.flush()

    album_links = [
        {"album_id": album_id, "artist_id": artist_id, "position": position}
        for album_id, artist_ids in (album_credits or {}).items()
        for position, artist_id in enumerate(artist_ids)
    ]
    track_links = [
        {"track_id": track_id, "artist_id": artist_id, "position": position}
        for track_id, artist_ids in (track_credits or {}).items()
        for position, artist_id in enumerate(artist_ids)
    ]
    if album_links:
        await session.execute(insert(album_artists), album_links)
    if track_links:
        await session.execute(insert(track_artists), track_links)
    await session.commit()


TRACK_CREDITS = {
    "t1": ["a1"],
    "t2": ["a1", "a2"],
    "t3": ["a1", "a3"],
    "t4": ["a1", "a3", "a2"],
    "t5": ["a2"],
    "t6": ["a2", "a1"],
    "t7": ["a4"],
    "t8": ["a5"],
}

ALBUM_CREDITS = {
    "al1": ["a1"],
    "al2": ["a1", "a3"],
    "al3": ["a2"],
    "al4": ["a5"],
}


def catalog_rows():
    """Artists, albums and tracks of the standard test catalog."""
    artists = [
        make_artist("a1", "Alpha", popularity=90, followers=1000, genres=["pop", "rock"]),
        make_artist("a2", "Beta", popularity=70, followers=5000, genres=["jazz"]),
        make_artist("a3", "Gamma", popularity=80, followers=200, genres=["pop", "pop rock"]),
        make_artist("a4", "Delta", popularity=40, followers=50),
        make_artist("a5", "Echo", popularity=60, followers=10, genres=["electronic"]),
    ]
    albums = [
        make_album("al1", "First Light", "2020-01-01", "album", popularity=70),
        make_album("al2", "Second Wind", "2021-06-15", "single", popularity=50),
        make_album("al3", "Third Eye", "2019-03-03", "compilation", popularity=60),
        make_album("al4", "Fourth Wall", "2022-09-09", "album", popularity=30),
    ]
    tracks = [
        make_track("t1", "Morning", "al1", 0.9, 0.1, 0.5, 0.2, 120, duration_ms=180_000, lyrics="Rise and shine"),
        make_track("t2", "Noon", "al1", 0.5, 0.5, 0.6, 0.3, 100, duration_ms=210_000),
        make_track("t3", "Night", "al2", 0.1, 0.9, 0.4, 0.8, 80, duration_ms=240_000, lyrics="Love in the night, love in the dark"),
        make_track("t4", "Dusk", "al2", 0.5, 0.8, 0.7, 0.1, 110, duration_ms=200_000, lyrics="Sunset love, golden light"),
        make_track("t5", "Dawn", "al3", 0.8, 0.8, 0.9, 0.05, 128, duration_ms=190_000, lyrics="Morning light on the city"),
        make_track("t6", "Static", "al3", None, 0.4, 0.5, 0.5, 90, duration_ms=230_000),
        make_track("t7", "Lonely", None, 0.2, 0.2, 0.3, 0.9, 70, duration_ms=250_000),
        make_track("t8", "Pulse", "al4", 0.85, 0.5, 0.8, 0.1, 140, duration_ms=170_000, lyrics="Lovely pulse of the city night"),
    ]
    return artists, albums, tracks
