"""Album model and album/artist credits."""

from typing import TYPE_CHECKING, Optional

from sqlalchemy import Column, ForeignKey, Integer, String, Table, JSON
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base

if TYPE_CHECKING:
    from app.models.artist import Artist

ALBUM_TYPES = ("single", "album", "compilation")

# Credited artists; position is display order only
album_artists = Table(
    "album_artists",
    Base.metadata,
    Column("album_id", ForeignKey("albums.id", ondelete="CASCADE"), primary_key=True),
    Column("artist_id", ForeignKey("artists.id", ondelete="CASCADE"), primary_key=True, index=True),
    Column("position", Integer, nullable=False, default=0),
)


class Album(Base):
    """Catalog album."""

    __tablename__ = "albums"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), index=True)
    release_date: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)  # ISO date
    popularity: Mapped[int] = mapped_column(Integer, default=0)
    image_urls: Mapped[list[str]] = mapped_column(JSON, default=list)
    track_count: Mapped[int] = mapped_column(Integer, default=0)
    album_type: Mapped[str] = mapped_column(String(20), default="album")

    artists: Mapped[list["Artist"]] = relationship(
        secondary=album_artists,
        order_by=album_artists.c.position,
        lazy="selectin",
    )

    @property
    def artist_ids(self) -> list[str]:
        return [artist.id for artist in self.artists]

    @property
    def artist_names(self) -> list[str]:
        return [artist.name for artist in self.artists]

    def __repr__(self) -> str:
        return f"<Album {self.name}>"
