from book_discovery_api.schemas.book import CatalogBook, PaginatedBooks
from book_discovery_api.schemas.bookmark import BookmarkedBook, RecommendationRequest
from book_discovery_api.schemas.recommendation import (
    Candidate,
    ErrorResponse,
    RecommendationResult,
    RecommendationsResponse,
)

__all__ = [
    "BookmarkedBook",
    "Candidate",
    "CatalogBook",
    "ErrorResponse",
    "PaginatedBooks",
    "RecommendationRequest",
    "RecommendationResult",
    "RecommendationsResponse",
]
