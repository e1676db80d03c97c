from collections.abc import Iterator

import httpx
import pytest
from fastapi.testclient import TestClient

from book_discovery_api.dependencies.catalog import get_http_client
from book_discovery_api.main import app
from book_discovery_api.repositories.catalog_repository import CatalogRepository
from tests.fakes import FakeCatalog


@pytest.fixture(autouse=True)
def clear_dependency_overrides() -> Iterator[None]:
    app.dependency_overrides.clear()
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def catalog() -> FakeCatalog:
    return FakeCatalog()


@pytest.fixture
def http_client(catalog: FakeCatalog) -> Iterator[httpx.Client]:
    client = catalog.client()
    try:
        yield client
    finally:
        client.close()


@pytest.fixture
def catalog_repo(http_client: httpx.Client) -> CatalogRepository:
    return CatalogRepository(client=http_client)


@pytest.fixture
def client(catalog: FakeCatalog) -> Iterator[TestClient]:
    def override_get_http_client() -> Iterator[httpx.Client]:
        http_client = catalog.client()
        try:
            yield http_client
        finally:
            http_client.close()

    app.dependency_overrides[get_http_client] = override_get_http_client

    with TestClient(app) as test_client:
        yield test_client
