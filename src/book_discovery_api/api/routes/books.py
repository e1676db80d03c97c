from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from book_discovery_api.dependencies.catalog import get_search_service
from book_discovery_api.errors import CatalogUnavailableError
from book_discovery_api.schemas.book import PaginatedBooks
from book_discovery_api.schemas.recommendation import ErrorResponse
from book_discovery_api.services.search_service import SearchService

router = APIRouter(prefix="/books", tags=["books"])


@router.get(
    "/search",
    response_model=PaginatedBooks,
    responses={502: {"model": ErrorResponse, "description": "Catalog unavailable"}},
)
def search_books(
    svc: Annotated[SearchService, Depends(get_search_service)],
    q: str = Query(..., description="Title or author to search for"),
    page: int = Query(1, ge=1, description="Page number"),
    size: int = Query(10, ge=1, le=100, description="Items per page"),
    subject: str | None = Query(None, description="Restrict results to a catalog subject"),
    year_from: int | None = Query(None, description="Earliest first publication year"),
    year_to: int | None = Query(None, description="Latest first publication year"),
) -> PaginatedBooks:
    """Search the catalog by title or author."""
    if not q.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Query param 'q' must not be blank",
        )

    try:
        return svc.search_books(
            q.strip(),
            page=page,
            size=size,
            subject=subject,
            year_from=year_from,
            year_to=year_to,
        )
    except CatalogUnavailableError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc
