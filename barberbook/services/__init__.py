"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .booking_flow import BookingFlow, BookingStep

__all__ = ["BookingFlow", "BookingStep"]
