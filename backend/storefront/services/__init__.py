# Services package init
"""
Storefront Backend - Services Layer
====================================

Service Inventory:
    - CatalogService: Lists image folders as products with public URLs
    - OrderStore: In-memory order collection behind one exclusive lock

Both are created per application by `create_app()` and reach route handlers
through FastAPI dependencies (`get_catalog_service`, `get_order_store`), so
each test can work against a fresh instance.
"""
