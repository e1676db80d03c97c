from pydantic import BaseModel, Field


class CatalogBook(BaseModel):
    key: str = Field(
        description="Catalog key, or title|author when the catalog has none",
        examples=["/works/OL893415W"],
    )
    title: str
    authors: list[str] = Field(default_factory=list)
    year: int | None = None
    subjects: list[str] = Field(default_factory=list)
    cover_url: str | None = None


class PaginatedBooks(BaseModel):
    items: list[CatalogBook]
    total: int
    page: int
    size: int
