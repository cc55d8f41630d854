"""
barberbook - Booking slot scheduler for multi-location barbershops.
"""

__version__ = "0.1.0"
