import logging
from typing import Annotated

from fastapi import APIRouter, Body, Depends, Response, status
from fastapi.responses import JSONResponse

from book_discovery_api.dependencies.catalog import get_recommendation_service
from book_discovery_api.schemas.bookmark import RecommendationRequest
from book_discovery_api.schemas.recommendation import ErrorResponse, RecommendationsResponse
from book_discovery_api.services.recommendation_service import RecommendationService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["recommendations"])

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}


@router.post(
    "/recommendations",
    response_model=RecommendationsResponse,
    summary="Recommend Books From Bookmarks",
    description=(
        "Infers subject and author interests from the bookmarked books, queries the catalog "
        "for related works and returns up to five new books, each with an explanation."
    ),
    responses={500: {"model": ErrorResponse, "description": "Recommendation pipeline failed"}},
)
def recommend_books(
    svc: Annotated[RecommendationService, Depends(get_recommendation_service)],
    payload: Annotated[RecommendationRequest | None, Body()] = None,
) -> RecommendationsResponse | JSONResponse:
    if payload is None or not payload.books:
        return RecommendationsResponse(recommendations=[])

    try:
        recommendations = svc.recommend(payload.books)
    except Exception:
        logger.exception("Recommendation pipeline failed")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(error="Failed to compute recommendations").model_dump(),
        )

    return RecommendationsResponse(recommendations=recommendations)


@router.options("/recommendations", include_in_schema=False)
def recommend_books_preflight() -> Response:
    return Response(status_code=status.HTTP_200_OK, headers=CORS_HEADERS)
