import re
from typing import Any

from book_discovery_api.domain import ExternalKey, IdentityKey

_NON_ALNUM_RUN = re.compile(r"[^a-z0-9]+")


def identity_key(title: str | None, author: str | None) -> IdentityKey:
    """Canonical ``title|author`` string used to decide whether two records are the same book."""
    return IdentityKey(f"{(title or '').lower()}|{(author or '').lower()}")


def slugify(subject: str) -> str:
    """Turn a subject name into the path segment the catalog uses for it.

    ``"Science Fiction"`` becomes ``"science_fiction"``. Applying it twice is a no-op.
    """
    return _NON_ALNUM_RUN.sub("_", subject.lower()).strip("_")


def resolve_external_key(
    key: str | None, cover_edition_key: str | None, title: str | None
) -> ExternalKey:
    # Priority: catalog path, cover edition key, title.
    for candidate in (key, cover_edition_key, title):
        if candidate:
            return ExternalKey(candidate)
    return ExternalKey("")


def clean_strings(values: Any) -> list[str]:
    """Non-empty strings from a catalog list field; anything else is dropped."""
    if not isinstance(values, list):
        return []
    return [v for v in values if isinstance(v, str) and v]


def coerce_int(value: Any) -> int | None:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None
