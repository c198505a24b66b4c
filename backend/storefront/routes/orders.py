"""
Storefront Backend - Orders Route Handlers
===========================================

What:  HTTP surface of the in-memory order store.
How:   Extracts query/path/body values, delegates to OrderStore, sets status codes.
Who:   Called by the storefront client (customers) and its admin screen.

Routes:
    GET    /api/orders?username=U    → orders visible to U (admin sees all)
    POST   /api/orders               → 201 with the stored order
    DELETE /api/orders/{id}          → 204, 404 if unknown
    DELETE /api/orders?username=U    → 200 with the number removed
    POST   /api/hideOrder?id=N       → 200 always

Errors (400/404) are raised by the store and formatted by the global
exception handlers in main.py.
"""

import logging
import re
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, Response

from storefront.models.order import Product
from storefront.schemas.order import (
    DeleteOrdersResponse,
    ErrorResponse,
    OrderCreate,
    OrderResponse,
)
from storefront.services.order_store import OrderStore, get_order_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Orders"])

# Plain ASCII decimal, optional minus. int() alone also takes "1_0", "+5",
# " 5 " and non-ASCII digits.
ORDER_ID_PATTERN = r"^-?[0-9]+$"


def parse_order_id(raw: str) -> Optional[int]:
    """Order id from a query/path string, or None when it is not a plain integer."""
    if not re.fullmatch(ORDER_ID_PATTERN, raw):
        return None
    return int(raw)


@router.get(
    "/orders",
    response_model=List[OrderResponse],
    summary="List orders visible to a user",
    description=(
        "The admin user gets every order, hidden ones included, in creation order. "
        "Any other user gets their own orders that are not hidden."
    ),
)
async def list_orders(
    username: str = Query(default="", description="Requesting user"),
    store: OrderStore = Depends(get_order_store),
) -> List[OrderResponse]:
    return [OrderResponse.model_validate(o) for o in store.list_orders(username)]


@router.post(
    "/orders",
    status_code=201,
    response_model=OrderResponse,
    responses={
        201: {"description": "Order stored", "model": OrderResponse},
        400: {"description": "Missing username or malformed body", "model": ErrorResponse},
    },
    summary="Place an order",
)
async def create_order(
    payload: OrderCreate,
    store: OrderStore = Depends(get_order_store),
) -> OrderResponse:
    """
    Store a new order.

    The id, created_at and hidden flag of the stored order are assigned by
    the server; values sent by the client for them are ignored.
    """
    items = [Product(id=p.id, url=p.url) for p in payload.items or []]
    order = store.create(payload.username, items)
    return OrderResponse.model_validate(order)


@router.delete(
    "/orders/{order_id}",
    status_code=204,
    responses={
        204: {"description": "Order deleted"},
        400: {"description": "Order id is not an integer", "model": ErrorResponse},
        404: {"description": "No such order", "model": ErrorResponse},
    },
    summary="Delete one order",
)
async def delete_order(
    order_id: str = Path(pattern=ORDER_ID_PATTERN, description="Order id"),
    store: OrderStore = Depends(get_order_store),
) -> Response:
    store.delete(int(order_id))
    return Response(status_code=204)


@router.delete(
    "/orders",
    response_model=DeleteOrdersResponse,
    responses={
        400: {"description": "Missing username", "model": ErrorResponse},
    },
    summary="Delete every order of a user",
)
async def delete_orders_by_username(
    username: str = Query(default="", description="User whose orders are removed"),
    store: OrderStore = Depends(get_order_store),
) -> DeleteOrdersResponse:
    removed = store.delete_by_username(username)
    return DeleteOrdersResponse(deleted=removed)


@router.post(
    "/hideOrder",
    status_code=200,
    summary="Hide an order from its owner",
    description=(
        "Marks the order hidden; the admin still sees it. Always answers 200, "
        "including for unknown or non-numeric ids."
    ),
)
async def hide_order(
    raw_id: str = Query(default="", alias="id", description="Order id"),
    store: OrderStore = Depends(get_order_store),
) -> Response:
    order_id = parse_order_id(raw_id)
    if order_id is None:
        logger.warning("Hide requested with non-numeric id %r; ignoring", raw_id)
    else:
        store.hide(order_id)
    return Response(status_code=200)
