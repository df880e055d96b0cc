from typing import Annotated, Optional

from fastapi import Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.database import get_db, get_session_factory
from app.schemas.criteria import FilterCriteria, clamp_limit, page_to_offset


def search_criteria(
    search_term: Optional[str] = Query(None, alias="searchTerm", description="Case-insensitive name match"),
    genre_filter: Optional[str] = Query(None, alias="genreFilter", description="Substring of an artist genre"),
    type_filter: Optional[str] = Query(None, alias="typeFilter", description="single, album, compilation or all"),
    emotion_filter: Optional[str] = Query(None, alias="emotionFilter", description="Emotion label or All"),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    sort_order: Optional[str] = Query(None, alias="sortOrder", description="ASC or DESC"),
    limit: Optional[str] = Query(None, description="Page size (clamped)"),
    offset: Optional[str] = Query(None, description="Rows to skip (clamped)"),
    page: Optional[str] = Query(None, description="1-based page; overrides offset"),
    ids: Optional[list[str]] = Query(None, description="Restrict to these ids"),
    ids_brackets: Optional[list[str]] = Query(None, alias="ids[]", include_in_schema=False),
) -> FilterCriteria:
    """
    Dependency that turns query parameters into FilterCriteria.

    Malformed values are clamped by FilterCriteria rather than rejected.
    When page is given, offset is derived as (page - 1) * limit.

    Usage:
        @router.get("/search")
        async def search(criteria: SearchCriteria):
            ...
    """
    page_offset = page_to_offset(page, clamp_limit(limit))
    id_filter = None
    if ids is not None or ids_brackets is not None:
        id_filter = (ids or []) + (ids_brackets or [])

    return FilterCriteria(
        search_term=search_term,
        genre_filter=genre_filter,
        type_filter=type_filter,
        emotion_filter=emotion_filter,
        sort_by=sort_by,
        sort_order=sort_order,
        limit=limit,
        offset=page_offset if page_offset is not None else offset,
        ids=id_filter,
    )


def page_window(
    limit: Optional[str] = Query(None, description="Page size (clamped)"),
    offset: Optional[str] = Query(None, description="Rows to skip (clamped)"),
) -> FilterCriteria:
    """Dependency for routes that only page (no filters)."""
    return FilterCriteria(limit=limit, offset=offset)


# Type aliases for cleaner dependency injection
DbSession = Annotated[AsyncSession, Depends(get_db)]
SessionFactory = Annotated[async_sessionmaker[AsyncSession], Depends(get_session_factory)]
SearchCriteria = Annotated[FilterCriteria, Depends(search_criteria)]
PageWindow = Annotated[FilterCriteria, Depends(page_window)]
