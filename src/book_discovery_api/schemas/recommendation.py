from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializerFunctionWrapHandler,
    model_serializer,
    model_validator,
)

from book_discovery_api.domain import ExternalKey, Provenance


class Candidate(BaseModel):
    """A work fetched from the catalog that may end up as a recommendation."""

    title: str
    authors: tuple[str, ...] = ()
    year: int | None = None
    source_subject: str | None = None
    provenance: Provenance
    external_key: ExternalKey

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _check_origin(self) -> "Candidate":
        if not self.external_key:
            raise ValueError("external_key must not be empty")
        if self.provenance is Provenance.SUBJECT and not self.source_subject:
            raise ValueError("subject-sourced candidates must carry their source_subject")
        return self

    @property
    def primary_author(self) -> str | None:
        return self.authors[0] if self.authors else None


class RecommendationResult(BaseModel):
    title: str = Field(description="Title of the recommended book", examples=["Children of Dune"])
    authors: list[str] = Field(
        default_factory=list,
        description="Author names as listed by the catalog",
        examples=[["Frank Herbert"]],
    )
    year: int | None = Field(
        default=None, description="First publication year, if known", examples=[1976]
    )
    key: str = Field(
        description="Catalog key, cover edition key or title", examples=["/works/OL893502W"]
    )
    explanation: str = Field(
        min_length=1,
        description="Why this book was recommended",
        examples=['Matches subject "Science Fiction"'],
    )
    open_library_url: str | None = Field(
        default=None,
        alias="openLibraryUrl",
        description="Catalog page for the book; only present for catalog-relative keys",
        examples=["https://openlibrary.org/works/OL893502W"],
    )

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @model_serializer(mode="wrap")
    def _omit_missing_url(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        for name in ("openLibraryUrl", "open_library_url"):
            if name in data and data[name] is None:
                del data[name]
        return data


class RecommendationsResponse(BaseModel):
    recommendations: list[RecommendationResult] = Field(
        default_factory=list, description="At most five recommended books"
    )


class ErrorResponse(BaseModel):
    error: str = Field(description="Human-readable error message")
