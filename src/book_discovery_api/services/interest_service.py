from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass

from book_discovery_api.domain import IdentityKey
from book_discovery_api.normalization import identity_key
from book_discovery_api.schemas.bookmark import BookmarkedBook


@dataclass(frozen=True)
class InterestProfile:
    top_subjects: tuple[str, ...]
    authors: tuple[str, ...]
    owned_keys: frozenset[IdentityKey]


def count_subjects(books: Sequence[BookmarkedBook]) -> Counter[str]:
    """Occurrences of every subject across all bookmarks, in first-seen order.

    A subject listed twice on the same book counts twice.
    """
    counts: Counter[str] = Counter()
    for book in books:
        counts.update(book.subject)
    return counts


def rank_subjects(counts: Counter[str], limit: int = 3) -> tuple[str, ...]:
    # Counter.most_common is a stable sort, so ties keep insertion order.
    return tuple(subject for subject, _ in counts.most_common(limit))


def distinct_primary_authors(books: Sequence[BookmarkedBook]) -> tuple[str, ...]:
    seen: dict[str, None] = {}
    for book in books:
        author = book.primary_author
        if author:
            seen.setdefault(author, None)
    return tuple(seen)


def extract_interests(
    books: Sequence[BookmarkedBook], max_subjects: int = 3
) -> InterestProfile:
    return InterestProfile(
        top_subjects=rank_subjects(count_subjects(books), limit=max_subjects),
        authors=distinct_primary_authors(books),
        owned_keys=frozenset(identity_key(b.title, b.primary_author) for b in books),
    )
