import logging
from typing import Any

from book_discovery_api.normalization import clean_strings, coerce_int
from book_discovery_api.repositories.catalog_repository import CatalogRepository
from book_discovery_api.schemas.book import CatalogBook, PaginatedBooks

logger = logging.getLogger(__name__)


def build_query(text: str) -> str:
    return f'title:"{text}" OR author:"{text}"'


def cover_url(doc: dict[str, Any], covers_base_url: str) -> str | None:
    """Cover image URL for a search doc, preferring ISBN, then cover edition, then cover id."""
    base = covers_base_url.rstrip("/")
    isbns = clean_strings(doc.get("isbn"))
    if isbns:
        return f"{base}/b/isbn/{isbns[0]}-M.jpg?default=false"
    cover_edition_key = doc.get("cover_edition_key")
    if isinstance(cover_edition_key, str) and cover_edition_key:
        return f"{base}/b/olid/{cover_edition_key}-M.jpg?default=false"
    cover_id = coerce_int(doc.get("cover_i"))
    if cover_id is not None:
        return f"{base}/b/id/{cover_id}-M.jpg?default=false"
    return None


def to_catalog_book(doc: dict[str, Any], covers_base_url: str) -> CatalogBook | None:
    title = doc.get("title")
    if not isinstance(title, str) or not title:
        return None
    authors = clean_strings(doc.get("author_name"))
    key = doc.get("key")
    if not isinstance(key, str) or not key:
        key = f"{title}|{authors[0] if authors else ''}"
    return CatalogBook(
        key=key,
        title=title,
        authors=authors,
        year=coerce_int(doc.get("first_publish_year")),
        subjects=clean_strings(doc.get("subject")),
        cover_url=cover_url(doc, covers_base_url),
    )


def in_year_window(year: int | None, year_from: int | None, year_to: int | None) -> bool:
    if year_from is None and year_to is None:
        return True
    if year is None:
        return False
    if year_from is not None and year < year_from:
        return False
    if year_to is not None and year > year_to:
        return False
    return True


class SearchService:
    def __init__(self, repo: CatalogRepository, covers_base_url: str) -> None:
        self.repo = repo
        self.covers_base_url = covers_base_url

    def search_books(
        self,
        text: str,
        page: int = 1,
        size: int = 10,
        subject: str | None = None,
        year_from: int | None = None,
        year_to: int | None = None,
    ) -> PaginatedBooks:
        offset = (page - 1) * size
        docs, total = self.repo.search(
            build_query(text), limit=size, offset=offset, subject=subject
        )

        # Dedup by key runs before the year filter.
        seen: set[str] = set()
        items = []
        for doc in docs:
            book = to_catalog_book(doc, self.covers_base_url)
            if book is None or book.key in seen:
                continue
            seen.add(book.key)
            if not in_year_window(book.year, year_from, year_to):
                continue
            items.append(book)

        logger.debug("Catalog search q=%r kept %d of %d docs", text, len(items), len(docs))

        return PaginatedBooks(items=items, total=total, page=page, size=size)
