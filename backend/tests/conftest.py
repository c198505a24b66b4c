"""
Storefront Backend - Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped, created fresh for each test):
    ├── images_root: Temporary images tree with two category folders
    ├── order_store: Empty OrderStore (ids start at 1)
    ├── catalog_service: CatalogService over images_root
    ├── app: FastAPI app wired to the two services above
    └── test_client: HTTPX AsyncClient for API endpoint testing
"""

import os

# Override settings for testing BEFORE any storefront imports
# Never created; every fixture passes its own images_root
os.environ["IMAGES_ROOT"] = os.path.join(os.path.dirname(__file__), "no-such-images")
os.environ["PUBLIC_BASE_URL"] = "http://test"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from storefront.main import create_app
from storefront.services.catalog_service import CatalogService
from storefront.services.order_store import OrderStore

BASE_URL = "http://cdn.test"


@pytest.fixture
def images_root(tmp_path):
    """
    Temporary images tree:

        images/
        ├── Keychains/
        │   ├── cat keychain.png
        │   ├── moon.jpg
        │   └── drafts/          (sub-folder, never listed)
        └── Stickers/
            └── star#1.png
    """
    root = tmp_path / "images"
    keychains = root / "Keychains"
    keychains.mkdir(parents=True)
    (keychains / "cat keychain.png").write_bytes(b"\x89PNG fake")
    (keychains / "moon.jpg").write_bytes(b"\xff\xd8 fake")
    (keychains / "drafts").mkdir()
    stickers = root / "Stickers"
    stickers.mkdir()
    (stickers / "star#1.png").write_bytes(b"\x89PNG fake")
    return root


@pytest.fixture
def order_store():
    return OrderStore(admin_username="admin")


@pytest.fixture
def catalog_service(images_root):
    return CatalogService(
        images_root=str(images_root),
        base_url=BASE_URL,
        categories=["Keychains", "Stickers"],
    )


@pytest.fixture
def app(order_store, catalog_service):
    return create_app(order_store=order_store, catalog_service=catalog_service)


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient talking to the app through ASGITransport (no server).

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
