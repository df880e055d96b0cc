"""Track model with audio features and track/artist credits."""

from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, Column, Float, ForeignKey, Integer, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.emotion import classify
from app.database import Base

if TYPE_CHECKING:
    from app.models.album import Album
    from app.models.artist import Artist

# Credited artists; position is display order only
track_artists = Table(
    "track_artists",
    Base.metadata,
    Column("track_id", ForeignKey("tracks.id", ondelete="CASCADE"), primary_key=True),
    Column("artist_id", ForeignKey("artists.id", ondelete="CASCADE"), primary_key=True, index=True),
    Column("position", Integer, nullable=False, default=0),
)


class Track(Base):
    """
    Catalog track.

    Every audio feature is nullable: a missing value means the feature was
    never computed, which is not the same as zero.
    """

    __tablename__ = "tracks"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), index=True)
    duration_ms: Mapped[int] = mapped_column(Integer, default=0)
    explicit: Mapped[bool] = mapped_column(Boolean, default=False)
    album_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("albums.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    lyrics: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Audio features, [0, 1] unless noted
    energy: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    valence: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    danceability: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    acousticness: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    instrumentalness: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    liveness: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    speechiness: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    loudness: Mapped[Optional[float]] = mapped_column(Float, nullable=True)  # dB
    tempo: Mapped[Optional[float]] = mapped_column(Float, nullable=True)  # BPM
    key: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)  # 0-11
    mode: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)  # major=1, minor=0
    time_signature: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    # Relationships
    album: Mapped[Optional["Album"]] = relationship(lazy="selectin")
    artists: Mapped[list["Artist"]] = relationship(
        secondary=track_artists,
        order_by=track_artists.c.position,
        lazy="selectin",
    )

    @property
    def emotion(self) -> str:
        return classify(self.energy, self.valence).value

    @property
    def album_name(self) -> Optional[str]:
        return self.album.name if self.album else None

    @property
    def release_date(self) -> Optional[str]:
        return self.album.release_date if self.album else None

    @property
    def artist_ids(self) -> list[str]:
        return [artist.id for artist in self.artists]

    @property
    def artist_names(self) -> list[str]:
        return [artist.name for artist in self.artists]

    def __repr__(self) -> str:
        return f"<Track {self.name}>"
