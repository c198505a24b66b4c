"""
Storefront Backend - In-Memory Domain Records
==============================================

What:  Plain dataclasses for the records the services work with.
How:   `Product` is produced by the catalog lister; `Order` is held by the
       order store. Schemas in `storefront.schemas.order` read them via
       `from_attributes`.

Lifecycle of an Order:
    1. Created by OrderStore.create() (id, created_at, hidden assigned there)
    2. Optionally hidden (hidden: False → True, never back)
    3. Removed by delete / delete_by_username (absence from the store)
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import List


@dataclass(frozen=True)
class Product:
    """A catalog entry. `id` is only meaningful within one listing."""

    id: int
    url: str


@dataclass
class Order:
    id: int
    username: str
    created_at: datetime
    items: List[Product] = field(default_factory=list)
    hidden: bool = False

    def snapshot(self) -> "Order":
        """Detached copy handed out by the store; products are immutable so a shallow list copy suffices."""
        return replace(self, items=list(self.items))

    def __repr__(self) -> str:
        return (
            f"<Order(id={self.id}, username='{self.username}', "
            f"items={len(self.items)}, hidden={self.hidden})>"
        )
