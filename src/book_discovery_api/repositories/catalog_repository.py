import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

import httpx

from book_discovery_api.domain import Provenance
from book_discovery_api.errors import CatalogUnavailableError
from book_discovery_api.normalization import (
    clean_strings,
    coerce_int,
    resolve_external_key,
    slugify,
)
from book_discovery_api.schemas.recommendation import Candidate

logger = logging.getLogger(__name__)

SEARCH_FIELDS = (
    "key,title,author_name,first_publish_year,isbn,subject,"
    "edition_key,cover_edition_key,cover_i"
)


def _str_or_none(value: Any) -> str | None:
    return value if isinstance(value, str) and value else None


def _work_author_names(authors: Any) -> list[str]:
    if not isinstance(authors, list):
        return []
    return clean_strings([a.get("name") for a in authors if isinstance(a, dict)])


def _raw_records(data: Any, field: str) -> list[Any]:
    if not isinstance(data, dict):
        return []
    records = data.get(field)
    if not isinstance(records, list):
        return []
    return records


def _records(data: Any, field: str) -> list[dict[str, Any]]:
    return [r for r in _raw_records(data, field) if isinstance(r, dict)]


@dataclass(frozen=True)
class CandidateBatch:
    """Candidates mapped from one catalog response.

    ``record_count`` is every record the catalog listed, including untitled or
    malformed ones that could not become a candidate.
    """

    candidates: tuple[Candidate, ...] = ()
    record_count: int = 0

    def __iter__(self) -> Iterator[Candidate]:
        return iter(self.candidates)


EMPTY_BATCH = CandidateBatch()


class CatalogRepository:
    """Read-only access to the Open Library style catalog.

    The two candidate fetchers never raise: any transport error, non-2xx status
    or undecodable body is logged and treated as "no candidates from this source".
    """

    def __init__(
        self,
        client: httpx.Client,
        subject_limit: int = 20,
        author_limit: int = 20,
        max_authors_per_candidate: int = 3,
    ) -> None:
        self.client = client
        self.subject_limit = subject_limit
        self.author_limit = author_limit
        self.max_authors_per_candidate = max_authors_per_candidate

    def _get_json(self, path: str, params: dict[str, Any]) -> Any:
        response = self.client.get(path, params=params)
        response.raise_for_status()
        return response.json()

    def fetch_by_subject(self, subject: str) -> CandidateBatch:
        slug = slugify(subject)
        if not slug:
            logger.debug("Skipping subject with empty slug subject=%r", subject)
            return EMPTY_BATCH

        try:
            data = self._get_json(f"/subjects/{slug}.json", {"limit": self.subject_limit})
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Subject fetch failed subject=%r: %s", subject, exc)
            return EMPTY_BATCH

        works = _raw_records(data, "works")
        candidates = []
        for work in works:
            if not isinstance(work, dict):
                continue
            title = _str_or_none(work.get("title"))
            if title is None:
                continue
            candidates.append(
                Candidate(
                    title=title,
                    authors=tuple(_work_author_names(work.get("authors"))),
                    year=coerce_int(work.get("first_publish_year")),
                    source_subject=subject,
                    provenance=Provenance.SUBJECT,
                    external_key=resolve_external_key(
                        _str_or_none(work.get("key")),
                        _str_or_none(work.get("cover_edition_key")),
                        title,
                    ),
                )
            )
        return CandidateBatch(candidates=tuple(candidates), record_count=len(works))

    def fetch_by_author(self, author: str) -> CandidateBatch:
        try:
            data = self._get_json("/search.json", {"author": author, "limit": self.author_limit})
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Author fetch failed author=%r: %s", author, exc)
            return EMPTY_BATCH

        docs = _raw_records(data, "docs")
        candidates = []
        for doc in docs:
            if not isinstance(doc, dict):
                continue
            title = _str_or_none(doc.get("title"))
            if title is None:
                continue
            authors = clean_strings(doc.get("author_name"))[: self.max_authors_per_candidate]
            subjects = clean_strings(doc.get("subject"))
            candidates.append(
                Candidate(
                    title=title,
                    authors=tuple(authors),
                    year=coerce_int(doc.get("first_publish_year")),
                    source_subject=subjects[0] if subjects else None,
                    provenance=Provenance.AUTHOR,
                    external_key=resolve_external_key(
                        _str_or_none(doc.get("key")),
                        _str_or_none(doc.get("cover_edition_key")),
                        title,
                    ),
                )
            )
        return CandidateBatch(candidates=tuple(candidates), record_count=len(docs))

    def search(
        self, query: str, limit: int, offset: int, subject: str | None = None
    ) -> tuple[list[dict[str, Any]], int]:
        """
        Runs a free-text catalog search and returns (docs, num_found).
        """
        params: dict[str, Any] = {
            "q": query,
            "fields": SEARCH_FIELDS,
            "limit": limit,
            "offset": offset,
        }
        if subject:
            params["subject"] = subject

        try:
            data = self._get_json("/search.json", params)
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Catalog search failed q=%r: %s", query, exc)
            raise CatalogUnavailableError("Catalog search is unavailable") from exc

        docs = _records(data, "docs")
        num_found = data.get("numFound") if isinstance(data, dict) else None
        total = num_found if isinstance(num_found, int) else len(docs)
        return docs, total
