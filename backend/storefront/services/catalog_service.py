"""
Storefront Backend - Catalog Service
=====================================

What:  Turns an images sub-folder into a list of products with public URLs.
How:   Lists the folder with aiofiles (off the event loop), skips
       sub-directories, numbers the remaining files 1..N and builds
       `<base_url>/images/<category>/<percent-encoded file name>` for each.
Who:   Called by the catalog routes.
When:  On every catalog request; nothing is cached, ids are per-listing.

Directory Structure:
    images/
    ├── Keychains/
    │   ├── cat keychain.png   → .../images/Keychains/cat%20keychain.png
    │   └── moon.jpg
    └── Stickers/
        └── ...

The same tree is mounted as static files under /images/ by main.py, so every
URL produced here resolves against this server when `public_base_url` points
at it.
"""

import logging
from pathlib import Path
from typing import List, Optional
from urllib.parse import quote

import aiofiles.os
from fastapi import Request

from storefront.config import settings
from storefront.exceptions import CatalogReadError, ValidationError
from storefront.models.order import Product

logger = logging.getLogger(__name__)

# URL segment under which the images tree is served
IMAGES_SEGMENT = "/images/"


class CatalogService:
    """
    Lists category folders as products.

    Stateless apart from its configuration, so concurrent listings are
    independent and need no locking.
    """

    def __init__(
        self,
        images_root: Optional[str] = None,
        base_url: Optional[str] = None,
        categories: Optional[List[str]] = None,
    ):
        """
        Args:
            images_root: Override settings.images_root (used in tests).
            base_url: Override settings.public_base_url (used in tests).
            categories: Override settings.catalog_categories_list.
        """
        self.images_root = Path(images_root or settings.images_root).resolve()
        self.base_url = (base_url if base_url is not None else settings.public_base_url).rstrip("/")
        self.categories = list(
            categories if categories is not None else settings.catalog_categories_list
        )

    def build_url(self, category: str, filename: str) -> str:
        """
        Public URL of one file in a category.

        Every reserved character in the file name is percent-encoded (spaces,
        '#', '?', '%', and '/' too), so any file name maps to a single path segment.
        """
        return f"{self.base_url}{IMAGES_SEGMENT}{quote(category, safe='')}/{quote(filename, safe='')}"

    async def list_folder(self, folder: str, category: str) -> List[Product]:
        """
        List the regular files of `folder` as products of `category`.

        Entries are enumerated in file-name order; callers must still treat
        the ids as local to this one response.

        Raises:
            CatalogReadError: The folder is missing, unreadable, or not a
                directory. Nothing is returned in that case.
        """
        try:
            names = sorted(await aiofiles.os.listdir(folder))
            files = [
                name for name in names
                if not await aiofiles.os.path.isdir(Path(folder) / name)
            ]
        except OSError as e:
            logger.error("Failed to read images directory %s: %s", folder, e)
            raise CatalogReadError(
                cause=str(e),
                context={"folder": str(folder), "category": category},
            )

        products = [
            Product(id=index, url=self.build_url(category, name))
            for index, name in enumerate(files, start=1)
        ]
        logger.debug("Listed %d products in category %s", len(products), category)
        return products

    async def list_category(self, category: str) -> List[Product]:
        """
        List `<images_root>/<category>` as products.

        Raises:
            ValidationError: `category` is empty or would escape the images root.
            CatalogReadError: The category folder cannot be read.
        """
        if not category or category in {".", ".."} or "/" in category or "\\" in category:
            raise ValidationError(
                message=f"Invalid category name '{category}'",
                field="category",
            )
        return await self.list_folder(str(self.images_root / category), category)

    def alias_for(self, category: str) -> str:
        """Route segment of a category's alias endpoint (/api/keychains for Keychains)."""
        return category.lower()

    async def is_readable(self) -> bool:
        """Whether the images root exists and is a directory (used by /health)."""
        return await aiofiles.os.path.isdir(self.images_root)


# ── FastAPI Dependency ────────────────────────────────────────────────────
def get_catalog_service(request: Request) -> CatalogService:
    """Resolve the application's CatalogService for a request."""
    return request.app.state.catalog_service
