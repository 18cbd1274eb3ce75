"""
Museum routes for API endpoints.
"""
from flask import Blueprint, jsonify, request
from .services import CatalogService


def create_museum_routes(catalog_service: CatalogService) -> Blueprint:
    """Create museum routes blueprint."""
    bp = Blueprint('museum', __name__, url_prefix='/api/museum')

    @bp.route('/items', methods=['GET'])
    def list_items():
        """
        List catalog items.

        Query parameters:
            - search: Case-insensitive text matched against title and description
            - category: Category value, or "all" (default)
        """
        search = request.args.get('search', '')
        category = request.args.get('category', 'all')
        items = catalog_service.search(search_term=search, category=category)
        return jsonify({
            "items": [item.to_dict() for item in items],
            "count": len(items)
        })

    @bp.route('/items/<path:item_id>', methods=['GET'])
    def get_item(item_id):
        item = catalog_service.get_item(item_id)
        if item is None:
            return jsonify({"error": "not-found", "id": item_id}), 404
        return jsonify(item.to_dict())

    @bp.route('/categories', methods=['GET'])
    def get_categories():
        """Per-category item counts."""
        counts = catalog_service.get_category_counts()
        return jsonify({
            "categories": counts,
            "total": sum(counts.values())
        })

    @bp.route('/refresh', methods=['POST'])
    def refresh():
        """Reload the catalog from its source."""
        count = catalog_service.refresh()
        return jsonify({"status": "ok", "count": count})

    return bp
