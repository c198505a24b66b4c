"""
Storefront Backend - Application Package Initializer
=====================================================

What: Marks the `storefront` directory as a Python package.
Who:  Used by uvicorn (`storefront.main:app`), pytest, and the `storefront` console script.

Architecture Note:
    The backend is split into thin layers:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Catalog listing, order store
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← Dataclass records + Pydantic
    └─────────────────────────────────────┘

    There is no persistence layer: orders live in memory for the lifetime
    of the process, product listings are read from the images directory on
    every request.
"""

__version__ = "1.0.0"
