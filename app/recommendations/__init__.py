"""
Recommendations module exposing the ranking engine over HTTP.
"""

from .services import RecommendationService
from .routes import create_recommendation_routes
from .factory import create_recommendations_module

__all__ = ['RecommendationService', 'create_recommendation_routes', 'create_recommendations_module']
