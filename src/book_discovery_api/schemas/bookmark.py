from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _clean(item: Any) -> str:
    return "" if item is None else str(item).strip()


def _as_list(value: Any) -> list[Any]:
    if isinstance(value, str):
        return [value]
    if isinstance(value, list | tuple):
        return list(value)
    return []


def _as_string_list(value: Any) -> list[str]:
    return [text for text in map(_clean, _as_list(value)) if text]


def _as_author_list(value: Any) -> list[str]:
    # The first slot is the primary author even when it is blank.
    items = _as_list(value)
    if not items:
        return []
    return [_clean(items[0]), *_as_string_list(items[1:])]


class BookmarkedBook(BaseModel):
    """A book the user has bookmarked, in the shape the catalog search returns it."""

    title: str = Field(default="", description="Title of the book", examples=["Dune"])
    author_name: list[str] = Field(
        default_factory=list,
        description=(
            "Author names, primary author first. A single string is accepted. "
            "A blank first entry is kept as an empty primary author."
        ),
        examples=[["Frank Herbert"]],
    )
    subject: list[str] = Field(
        default_factory=list,
        description="Catalog subjects attached to the book",
        examples=[["Science Fiction", "Adventure"]],
    )

    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator("title", mode="before")
    @classmethod
    def _coerce_title(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value).strip()

    @field_validator("author_name", mode="before")
    @classmethod
    def _coerce_authors(cls, value: Any) -> list[str]:
        return _as_author_list(value)

    @field_validator("subject", mode="before")
    @classmethod
    def _coerce_subjects(cls, value: Any) -> list[str]:
        return _as_string_list(value)

    @property
    def primary_author(self) -> str | None:
        if not self.author_name:
            return None
        return self.author_name[0] or None


class RecommendationRequest(BaseModel):
    books: list[BookmarkedBook] = Field(
        default_factory=list, description="The user's bookmarked books"
    )

    model_config = ConfigDict(extra="ignore")

    @field_validator("books", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value
