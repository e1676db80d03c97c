class CatalogError(Exception):
    """Base exception for failures talking to the external catalog."""

    pass


class CatalogUnavailableError(CatalogError):
    """Raised when the catalog cannot be reached or answers with an unusable response."""

    pass
