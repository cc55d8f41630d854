"""
Adapters layer - Catalog data and professional management.
"""

from .catalog_store import CatalogStore, parse_schedule
from .professional_directory import ProfessionalDirectory, default_schedule

__all__ = ["CatalogStore", "ProfessionalDirectory", "default_schedule", "parse_schedule"]
