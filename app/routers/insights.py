"""Insights router: catalog-wide lyric, emotion and popularity aggregates."""

from typing import Optional

from fastapi import APIRouter, Query

from app.dependencies import DbSession
from app.schemas.common import ApiResponse, DistributionEntry
from app.schemas.criteria import clamp_limit
from app.schemas.insight import EmotionVarietyResponse, PopularityGrowthResponse
from app.services.insight_service import DEFAULT_WORD_GENRE, InsightService

router = APIRouter()


@router.get(
    "/love-distribution",
    response_model=ApiResponse[list[DistributionEntry]],
    summary="Emotions of tracks whose lyrics mention love",
)
async def love_distribution(db: DbSession):
    return ApiResponse(data=await InsightService.love_distribution(db))


@router.get(
    "/pop-words",
    response_model=ApiResponse[list[DistributionEntry]],
    summary="Most used lyric words of a genre",
)
async def pop_words(
    db: DbSession,
    genre: Optional[str] = Query(DEFAULT_WORD_GENRE, alias="genreFilter", description="Artist genre, blank for all"),
    limit: Optional[str] = Query(None, description="Number of words to return"),
):
    """
    Words ranked by the number of tracks using them.

    Short words and common filler words are ignored.
    """
    return ApiResponse(data=await InsightService.lyric_words(db, genre, clamp_limit(limit)))


@router.get(
    "/artist-popularity-growth",
    response_model=ApiResponse[list[PopularityGrowthResponse]],
    summary="Popularity change between each artist's two latest albums",
)
async def artist_popularity_growth(
    db: DbSession,
    limit: Optional[str] = Query(None, description="Number of artists to return"),
):
    return ApiResponse(data=await InsightService.popularity_growth(db, clamp_limit(limit)))


@router.get(
    "/artist-emotion-variety",
    response_model=ApiResponse[list[EmotionVarietyResponse]],
    summary="Artists ranked by how many emotions their tracks span",
)
async def artist_emotion_variety(
    db: DbSession,
    limit: Optional[str] = Query(None, description="Number of artists to return"),
):
    return ApiResponse(data=await InsightService.emotion_variety(db, clamp_limit(limit)))
