"""Artist model and its genre tags."""

from sqlalchemy import ForeignKey, Integer, String, JSON
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class Artist(Base):
    """Catalog artist with denormalized counters."""

    __tablename__ = "artists"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), index=True)
    popularity: Mapped[int] = mapped_column(Integer, default=0)  # 0-100
    followers: Mapped[int] = mapped_column(Integer, default=0)
    image_urls: Mapped[list[str]] = mapped_column(JSON, default=list)

    # Denormalized counters maintained by ingestion
    album_count: Mapped[int] = mapped_column(Integer, default=0)
    track_count: Mapped[int] = mapped_column(Integer, default=0)
    collaborator_count: Mapped[int] = mapped_column(Integer, default=0)

    genre_rows: Mapped[list["ArtistGenre"]] = relationship(
        back_populates="artist",
        lazy="selectin",
        cascade="all, delete-orphan",
    )

    @property
    def genres(self) -> list[str]:
        return sorted(row.genre for row in self.genre_rows)

    def __repr__(self) -> str:
        return f"<Artist {self.name}>"


class ArtistGenre(Base):
    """One genre tag of an artist. An artist's tags form a set."""

    __tablename__ = "artist_genres"

    artist_id: Mapped[str] = mapped_column(
        ForeignKey("artists.id", ondelete="CASCADE"),
        primary_key=True,
    )
    genre: Mapped[str] = mapped_column(String(255), primary_key=True, index=True)

    artist: Mapped["Artist"] = relationship(back_populates="genre_rows")

    def __repr__(self) -> str:
        return f"<ArtistGenre {self.artist_id}: {self.genre}>"
