"""
Storefront Backend - Catalog Route Handlers
============================================

What:  Product listings for image category folders.
How:   Extracts the category, delegates to CatalogService, returns JSON.
Who:   Called by the storefront client's category pages.

Routes:
    GET /api/categories          → configured category names
    GET /api/categories/{name}   → products in images/<name>
    GET /api/<alias>             → products in one configured category
                                   (/api/keychains → images/Keychains, ...)

Product ids are positions within one response; they are recomputed on every
call and must not be stored by clients.
"""

import logging
from typing import Callable, Iterable, List

from fastapi import APIRouter, Depends

from storefront.schemas.order import ErrorResponse, ProductSchema
from storefront.services.catalog_service import CatalogService, get_catalog_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Catalog"])

LISTING_RESPONSES = {
    200: {"description": "Products in the category"},
    400: {"description": "Invalid category name", "model": ErrorResponse},
    500: {"description": "Category folder could not be read", "model": ErrorResponse},
}


@router.get(
    "/categories",
    response_model=List[str],
    summary="List configured categories",
)
async def list_categories(
    catalog: CatalogService = Depends(get_catalog_service),
) -> List[str]:
    return catalog.categories


@router.get(
    "/categories/{name}",
    response_model=List[ProductSchema],
    responses=LISTING_RESPONSES,
    summary="List products in a category folder",
    description=(
        "Returns one product per regular file in images/<name>, numbered from 1. "
        "Sub-folders are skipped. Fails with 500 if the folder cannot be read."
    ),
)
async def list_category(
    name: str,
    catalog: CatalogService = Depends(get_catalog_service),
) -> List[ProductSchema]:
    products = await catalog.list_category(name)
    return [ProductSchema.model_validate(p) for p in products]


def _alias_endpoint(category: str) -> Callable:
    async def list_alias(
        catalog: CatalogService = Depends(get_catalog_service),
    ) -> List[ProductSchema]:
        products = await catalog.list_category(category)
        return [ProductSchema.model_validate(p) for p in products]

    return list_alias


def build_alias_router(
    catalog: CatalogService, taken_paths: Iterable[str] = ()
) -> APIRouter:
    """
    One GET route per configured category, named after the folder in lowercase.

    Built per application because the category set comes from configuration.
    A category whose alias path is in `taken_paths` (/api/orders for a folder
    called "Orders") gets no alias; it stays reachable via /api/categories/{name}.
    """
    taken = set(taken_paths)
    alias_router = APIRouter(prefix="/api", tags=["Catalog"])
    for category in catalog.categories:
        alias = catalog.alias_for(category)
        path = f"/api/{alias}"
        if path in taken:
            logger.warning(
                "Category %s would shadow route %s; alias not registered", category, path
            )
            continue
        taken.add(path)
        alias_router.add_api_route(
            f"/{alias}",
            _alias_endpoint(category),
            methods=["GET"],
            response_model=List[ProductSchema],
            responses=LISTING_RESPONSES,
            name=f"list_{alias}",
            summary=f"List products in {category}",
        )
        logger.debug("Registered catalog alias /api/%s → %s", alias, category)
    return alias_router
