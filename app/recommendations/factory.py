"""
Factory for creating the recommendations module.
"""
from config_manager import RecommendationConfig
from heritage_service.recommendations import build_default_engine
from .services import RecommendationService
from .routes import create_recommendation_routes


def create_recommendations_module(catalog_service, recommendation_config: RecommendationConfig) -> dict:
    """
    Create the recommendations module with all its components.

    Args:
        catalog_service: CatalogService instance from the museum module
        recommendation_config: Engine limits and similarity policy

    Returns:
        Dictionary containing:
            - service: RecommendationService instance
            - blueprint: Flask blueprint for routes
    """
    engine = build_default_engine(
        limit=recommendation_config.limit,
        max_catalog_size=recommendation_config.max_catalog_size,
        null_origin_matches=recommendation_config.null_origin_matches,
    )
    service = RecommendationService(engine, catalog_service)
    blueprint = create_recommendation_routes(service)

    return {
        "service": service,
        "blueprint": blueprint
    }
