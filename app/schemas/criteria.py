"""
Filter criteria for catalog search, filter, sort and pagination.

Every input is optional. Malformed values are clamped or defaulted rather
than rejected, and empty strings mean "no filter", never "match the empty
string". Id-set filters are the exception: a present but empty id set is
kept as ``[]`` so the query matches nothing.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.emotion import EmotionLabel, parse_emotion
from app.models.album import ALBUM_TYPES

DEFAULT_LIMIT = 10
MAX_LIMIT = 100

SORT_KEYS = frozenset({"popularity", "name", "followers", "release_date", "duration_ms"})
SORT_ORDERS = ("ASC", "DESC")


def coerce_int(value: Any, default: int) -> int:
    """Best-effort integer parse; anything unparseable yields the default."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return default


def clamp_limit(value: Any) -> int:
    return max(0, min(coerce_int(value, DEFAULT_LIMIT), MAX_LIMIT))


def clamp_offset(value: Any) -> int:
    return max(0, coerce_int(value, 0))


def page_to_offset(page: Any, limit: int) -> Optional[int]:
    """
    Translate a 1-based page number into an offset.

    Returns None when no usable page was given so callers keep their
    explicit offset. Pages below 1 are treated as page 1.
    """
    if page is None or str(page).strip() == "":
        return None
    return (max(coerce_int(page, 1), 1) - 1) * limit


class FilterCriteria(BaseModel):
    """Normalized search/filter/sort/paginate request."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    search_term: Optional[str] = Field(None, alias="searchTerm")
    genre_filter: Optional[str] = Field(None, alias="genreFilter")
    type_filter: Optional[str] = Field(None, alias="typeFilter")
    emotion_filter: Optional[EmotionLabel] = Field(None, alias="emotionFilter")

    # Id-set filters: None = not applied, [] = match nothing
    ids: Optional[list[str]] = None
    artist_ids: Optional[list[str]] = Field(None, alias="artistIds")
    album_ids: Optional[list[str]] = Field(None, alias="albumIds")

    sort_by: Optional[str] = Field(None, alias="sortBy")
    sort_order: str = Field("DESC", alias="sortOrder")
    limit: int = DEFAULT_LIMIT
    offset: int = 0

    @field_validator("search_term", "genre_filter", mode="before")
    @classmethod
    def _blank_is_none(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        value = str(value).strip()
        return value or None

    @field_validator("type_filter", mode="before")
    @classmethod
    def _known_type(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        value = str(value).strip().lower()
        return value if value in ALBUM_TYPES else None

    @field_validator("emotion_filter", mode="before")
    @classmethod
    def _known_emotion(cls, value: Any) -> Optional[EmotionLabel]:
        return parse_emotion(value) if isinstance(value, str) else None

    @field_validator("ids", "artist_ids", "album_ids", mode="before")
    @classmethod
    def _id_set(cls, value: Any) -> Optional[list[str]]:
        if value is None:
            return None
        if isinstance(value, str):
            value = [value]
        seen: dict[str, None] = {}
        for item in value:
            if item is None:
                continue
            item = str(item).strip()
            if item:
                seen.setdefault(item, None)
        return list(seen)

    @field_validator("sort_by", mode="before")
    @classmethod
    def _known_sort_key(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        value = str(value).strip().lower()
        return value if value in SORT_KEYS else None

    @field_validator("sort_order", mode="before")
    @classmethod
    def _known_sort_order(cls, value: Any) -> str:
        value = str(value or "").strip().upper()
        return value if value in SORT_ORDERS else "DESC"

    @field_validator("limit", mode="before")
    @classmethod
    def _clamp_limit(cls, value: Any) -> int:
        return clamp_limit(value)

    @field_validator("offset", mode="before")
    @classmethod
    def _clamp_offset(cls, value: Any) -> int:
        return clamp_offset(value)

    def with_page(self, limit: Any, offset: Any = 0) -> "FilterCriteria":
        """Copy with different paging, re-validated."""
        return FilterCriteria.model_validate(
            {**self.model_dump(), "limit": limit, "offset": offset}
        )
