from collections.abc import Iterator
from typing import Annotated

import httpx
from fastapi import Depends

from book_discovery_api.config import settings
from book_discovery_api.repositories.catalog_repository import CatalogRepository
from book_discovery_api.services.recommendation_service import (
    PipelineLimits,
    RecommendationService,
)
from book_discovery_api.services.search_service import SearchService


def get_http_client() -> Iterator[httpx.Client]:
    client = httpx.Client(
        base_url=settings.catalog_base_url,
        timeout=settings.catalog_timeout_seconds,
        follow_redirects=True,
        headers={"User-Agent": f"{settings.log_service_name}/{settings.app_version}"},
    )
    try:
        yield client
    finally:
        client.close()


def get_catalog_repository(
    client: Annotated[httpx.Client, Depends(get_http_client)],
) -> CatalogRepository:
    return CatalogRepository(
        client=client,
        subject_limit=settings.subject_fetch_limit,
        author_limit=settings.author_fetch_limit,
        max_authors_per_candidate=settings.max_authors_per_candidate,
    )


def get_recommendation_service(
    repo: Annotated[CatalogRepository, Depends(get_catalog_repository)],
) -> RecommendationService:
    return RecommendationService(
        repo=repo,
        catalog_base_url=settings.catalog_base_url,
        limits=PipelineLimits(
            max_subjects=settings.max_subjects,
            max_authors=settings.max_authors,
            min_subject_candidates=settings.min_subject_candidates,
            max_recommendations=settings.max_recommendations,
        ),
    )


def get_search_service(
    repo: Annotated[CatalogRepository, Depends(get_catalog_repository)],
) -> SearchService:
    return SearchService(repo=repo, covers_base_url=settings.covers_base_url)
