"""
Cart items assembled from a chosen bookable slot.
"""

import uuid
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Iterator, List, Optional

from .models import Professional, Service


def new_item_id() -> str:
    """Generate a short random cart item id."""
    return uuid.uuid4().hex[:9]


@dataclass(frozen=True)
class CartItem:
    """
    A booking candidate: one service at one date and time.

    ``professional`` is None when the client has no preference.
    """
    service: Service
    professional: Optional[Professional]
    date: date
    time: str  # "HH:MM"
    location_name: str
    price: Decimal
    id: str = field(default_factory=new_item_id)

    def professional_name(self) -> str:
        """Display name of the professional, or the no-preference label."""
        return self.professional.name if self.professional else "Sem preferência"


class Cart:
    """Ordered collection of cart items with a running total."""

    def __init__(self):
        self._items: List[CartItem] = []

    def add(self, item: CartItem) -> None:
        """Append an item to the cart."""
        self._items.append(item)

    def remove(self, item_id: str) -> bool:
        """
        Remove an item by id.

        Returns:
            True if an item was removed
        """
        remaining = [item for item in self._items if item.id != item_id]
        removed = len(remaining) != len(self._items)
        self._items = remaining
        return removed

    def clear(self) -> None:
        """Empty the cart."""
        self._items = []

    @property
    def items(self) -> List[CartItem]:
        return list(self._items)

    @property
    def total(self) -> Decimal:
        """Sum of all item prices."""
        return sum((item.price for item in self._items), Decimal("0"))

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[CartItem]:
        return iter(list(self._items))
