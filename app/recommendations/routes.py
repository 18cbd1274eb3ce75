"""
Recommendation routes for API endpoints.
"""
from flask import Blueprint, jsonify, request

from heritage_service.recommendations import (
    CatalogTooLargeError,
    InvalidStrategyError,
    StrategyName,
)
from .services import RecommendationService


def _ranked_response(strategy, ranked):
    # applied_strategy differs from strategy when the context forced the popular fallback
    return jsonify({
        "strategy": strategy,
        "applied_strategy": ranked[0].strategy if ranked else strategy,
        "items": [entry.to_dict() for entry in ranked],
        "count": len(ranked)
    })


def create_recommendation_routes(recommendation_service: RecommendationService) -> Blueprint:
    """Create recommendation routes blueprint."""
    bp = Blueprint('recommendations', __name__, url_prefix='/api/recommendations')

    @bp.errorhandler(InvalidStrategyError)
    def handle_invalid_strategy(error):
        return jsonify({"error": "invalid-strategy", "message": str(error)}), 400

    @bp.errorhandler(CatalogTooLargeError)
    def handle_catalog_too_large(error):
        return jsonify({"error": "catalog-too-large", "message": str(error)}), 413

    @bp.route('/strategies', methods=['GET'])
    def list_strategies():
        """List the available ranking strategies."""
        return jsonify({"strategies": [s.value for s in StrategyName]})

    @bp.route('', methods=['POST'])
    def rank():
        """
        Rank a catalog.

        JSON body:
            - strategy: One of the strategy names (required)
            - catalog: Items to rank (defaults to the museum catalog)
            - current_item: Item being viewed, for "similar"
            - history: Items the user interacted with, for "personalized"
        """
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            return jsonify({"error": "invalid-body", "message": "Expected a JSON object"}), 400

        catalog = payload.get("catalog")
        if catalog is not None and not isinstance(catalog, list):
            return jsonify({"error": "invalid-body", "message": "catalog must be a list"}), 400
        history = payload.get("history") or []
        if not isinstance(history, list):
            return jsonify({"error": "invalid-body", "message": "history must be a list"}), 400

        strategy = payload.get("strategy")
        ranked = recommendation_service.recommend(
            strategy,
            current_item=payload.get("current_item"),
            history=history,
            catalog=catalog,
        )
        return _ranked_response(StrategyName.parse(strategy).value, ranked)

    @bp.route('/<strategy>', methods=['GET'])
    def rank_catalog(strategy):
        """
        Rank the museum catalog.

        Query parameters:
            - current_id: Id of the item being viewed
            - history_ids: Comma-separated ids the user interacted with
        """
        current_id = request.args.get('current_id') or None
        history_ids = [
            item_id.strip()
            for item_id in request.args.get('history_ids', '').split(',')
            if item_id.strip()
        ]
        ranked = recommendation_service.recommend_by_ids(
            strategy, current_id=current_id, history_ids=history_ids
        )
        return _ranked_response(StrategyName.parse(strategy).value, ranked)

    return bp
