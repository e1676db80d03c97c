from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "Book Discovery API"
    app_version: str = "0.1.0"
    app_description: str = "Catalog search and bookmark-based book recommendations."
    catalog_base_url: str = "https://openlibrary.org"
    catalog_timeout_seconds: float = 10.0
    covers_base_url: str = "https://covers.openlibrary.org"
    subject_fetch_limit: int = 20
    author_fetch_limit: int = 20
    max_subjects: int = 3
    max_authors: int = 5
    max_authors_per_candidate: int = 3
    min_subject_candidates: int = 10
    max_recommendations: int = 5
    cors_allow_origins: list[str] = ["*"]
    log_level: str = "INFO"
    log_format: str = "json"
    log_service_name: str = "book-discovery-api"

    model_config = SettingsConfigDict(
        env_prefix="BOOK_DISCOVERY_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )


settings = Settings()
