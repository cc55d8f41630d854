"""
Domain layer - Pure business logic without external dependencies.
"""

from .availability import AvailabilityEngine, select_professionals
from .cart import Cart, CartItem
from .models import (
    ANY_PROFESSIONAL,
    Location,
    Professional,
    Review,
    Service,
    Subscription,
    WorkDay,
    WorkWindow,
)

__all__ = [
    "ANY_PROFESSIONAL",
    "AvailabilityEngine",
    "Cart",
    "CartItem",
    "Location",
    "Professional",
    "Review",
    "Service",
    "Subscription",
    "WorkDay",
    "WorkWindow",
    "select_professionals",
]
