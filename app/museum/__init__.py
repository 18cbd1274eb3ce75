"""
Museum Module

Serves the aggregated cultural catalog for browsing: search, category
filters and per-category counts.
"""

from .services import CatalogService
from .routes import create_museum_routes
from .factory import create_museum_module

__all__ = ["CatalogService", "create_museum_routes", "create_museum_module"]
