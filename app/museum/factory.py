"""
Factory for creating the museum module.
"""
from heritage_service.catalog import ContentApiClient
from .services import CatalogService
from .routes import create_museum_routes


def create_museum_module(catalog_client: ContentApiClient) -> dict:
    """
    Create the museum module with all its components.

    Args:
        catalog_client: Client used to load the catalog

    Returns:
        Dictionary containing:
            - service: CatalogService instance
            - blueprint: Flask blueprint for routes
    """
    service = CatalogService(catalog_client)
    blueprint = create_museum_routes(service)

    return {
        "service": service,
        "blueprint": blueprint
    }
