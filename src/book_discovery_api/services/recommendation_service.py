import json
import logging
import time
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from book_discovery_api.domain import IdentityKey, Provenance
from book_discovery_api.normalization import identity_key
from book_discovery_api.repositories.catalog_repository import CandidateBatch, CatalogRepository
from book_discovery_api.schemas.bookmark import BookmarkedBook
from book_discovery_api.schemas.recommendation import Candidate, RecommendationResult
from book_discovery_api.services.interest_service import InterestProfile, extract_interests

logger = logging.getLogger(__name__)

SUBJECT_CLAUSE = 'Matches subject "{subject}"'
AUTHOR_CLAUSE = "By an author related to your bookmarks"
FALLBACK_CLAUSE = "Shares topics with your bookmarked books"


@dataclass(frozen=True)
class PipelineLimits:
    max_subjects: int = 3
    max_authors: int = 5
    min_subject_candidates: int = 10
    max_recommendations: int = 5


def aggregate_candidates(
    batches: Iterable[Iterable[Candidate]],
    owned_keys: frozenset[IdentityKey],
    limit: int = 5,
) -> tuple[Candidate, ...]:
    """Greedy single pass over the batches in the order given.

    The first candidate seen for an identity wins, so subject batches placed
    before author batches take precedence. Candidates after the limit is
    reached are never looked at.
    """
    if limit <= 0:
        return ()

    accepted: list[Candidate] = []
    emitted: set[IdentityKey] = set()

    for batch in batches:
        for candidate in batch:
            if not candidate.title:
                continue
            key = identity_key(candidate.title, candidate.primary_author)
            if key in owned_keys or key in emitted:
                continue
            emitted.add(key)
            accepted.append(candidate)
            if len(accepted) >= limit:
                return tuple(accepted)
    return tuple(accepted)


def compose_explanation(candidate: Candidate) -> str:
    parts = []
    if candidate.source_subject:
        parts.append(SUBJECT_CLAUSE.format(subject=candidate.source_subject))
    if candidate.provenance is Provenance.AUTHOR:
        parts.append(AUTHOR_CLAUSE)
    if not parts:
        parts.append(FALLBACK_CLAUSE)
    return "; ".join(parts)


def catalog_url(base_url: str, key: str) -> str | None:
    if not key.startswith("/"):
        return None
    return f"{base_url.rstrip('/')}{key}"


def to_result(candidate: Candidate, base_url: str) -> RecommendationResult:
    return RecommendationResult(
        title=candidate.title,
        authors=list(candidate.authors),
        year=candidate.year,
        key=candidate.external_key,
        explanation=compose_explanation(candidate),
        open_library_url=catalog_url(base_url, candidate.external_key),
    )


class RecommendationService:
    def __init__(
        self,
        repo: CatalogRepository,
        catalog_base_url: str,
        limits: PipelineLimits | None = None,
    ) -> None:
        self.repo = repo
        self.catalog_base_url = catalog_base_url
        self.limits = limits or PipelineLimits()

    def fetch_subject_batches(self, subjects: Sequence[str]) -> tuple[CandidateBatch, ...]:
        return tuple(self.repo.fetch_by_subject(subject) for subject in subjects)

    def fetch_author_batches(self, authors: Sequence[str]) -> tuple[CandidateBatch, ...]:
        return tuple(
            self.repo.fetch_by_author(author) for author in authors[: self.limits.max_authors]
        )

    def collect_batches(self, profile: InterestProfile) -> tuple[CandidateBatch, ...]:
        subject_batches = self.fetch_subject_batches(profile.top_subjects)
        pool_size = sum(batch.record_count for batch in subject_batches)

        author_batches: tuple[CandidateBatch, ...] = ()
        if pool_size < self.limits.min_subject_candidates and profile.authors:
            author_batches = self.fetch_author_batches(profile.authors)

        return subject_batches + author_batches

    def recommend(self, books: Sequence[BookmarkedBook]) -> list[RecommendationResult]:
        if not books:
            return []

        start_time = time.perf_counter()

        profile = extract_interests(books, max_subjects=self.limits.max_subjects)
        batches = self.collect_batches(profile)
        accepted = aggregate_candidates(
            batches, profile.owned_keys, limit=self.limits.max_recommendations
        )
        results = [to_result(candidate, self.catalog_base_url) for candidate in accepted]

        latency_ms = int((time.perf_counter() - start_time) * 1000)
        log_event = {
            "event_name": "recommendation_request",
            "bookmark_count": len(books),
            "top_subjects": list(profile.top_subjects),
            "author_count": len(profile.authors),
            "subject_fetches": len(profile.top_subjects),
            "author_fetches": len(batches) - len(profile.top_subjects),
            "candidate_count": sum(len(batch.candidates) for batch in batches),
            "returned_count": len(results),
            "latency_ms": latency_ms,
        }
        logger.info("TELEMETRY: %s", json.dumps(log_event))

        return results
