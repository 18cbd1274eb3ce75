import argparse
import logging
from typing import Optional

from flask import Flask, jsonify
from werkzeug.middleware.proxy_fix import ProxyFix

from config_manager import ConfigManager
from heritage_service.catalog import ContentApiClient

from app.museum.factory import create_museum_module
from app.recommendations.factory import create_recommendations_module

_LOG = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Application factory
# -----------------------------------------------------------------------------

def create_app(
    manager: Optional[ConfigManager] = None,
    catalog_client: Optional[ContentApiClient] = None,
) -> Flask:
    """Build the Flask application.

    Args:
        manager: Configuration source; a fresh ConfigManager when omitted
        catalog_client: Catalog source; built from the catalog config when omitted
    """
    manager = manager or ConfigManager()
    catalog_config = manager.get_catalog_config()
    recommendation_config = manager.get_recommendation_config()

    flask_app = Flask(__name__)
    flask_app.json.ensure_ascii = False
    flask_app.wsgi_app = ProxyFix(
        flask_app.wsgi_app,
        x_proto=1,      # trust 1 hop for X-Forwarded-Proto
        x_host=1,       # trust 1 hop for X-Forwarded-Host
        x_prefix=1)     # trust 1 hop for X-Forwarded-Prefix

    if catalog_client is None:
        catalog_client = ContentApiClient(
            base_url=catalog_config.api_base_url,
            timeout=catalog_config.timeout,
            fallback_path=catalog_config.static_catalog_path or None,
        )

    museum_module = create_museum_module(catalog_client)
    recommendations_module = create_recommendations_module(
        catalog_service=museum_module["service"],
        recommendation_config=recommendation_config,
    )

    flask_app.register_blueprint(museum_module["blueprint"])
    flask_app.register_blueprint(recommendations_module["blueprint"])
    flask_app.extensions["heritage"] = {
        "catalog_service": museum_module["service"],
        "recommendation_service": recommendations_module["service"],
    }

    @flask_app.route("/health")
    def health():
        loaded_at = museum_module["service"].loaded_at
        return jsonify({
            "status": "ok",
            "catalog_loaded_at": loaded_at.isoformat() if loaded_at else None
        })

    return flask_app


app = create_app()


# -----------------------------------------------------------------------------
# Entry point
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    from config_manager import get_app_config
    from heritage_service.logging_config import setup_logging

    parser = argparse.ArgumentParser(description="Cultural heritage recommendation API")
    parser.add_argument("--port", type=int, help="Port to run the server on")
    parser.add_argument("--host", type=str, help="Host to bind the server to")
    parser.add_argument("--debug", action="store_true", help="Enable debug mode")
    args = parser.parse_args()

    app_config = get_app_config()
    if args.port:
        app_config.port = args.port
    if args.host:
        app_config.host = args.host
    if args.debug:
        app_config.debug = args.debug

    setup_logging(debug=app_config.debug)
    _LOG.info("Serving on %s:%s", app_config.host, app_config.port)
    app.run(
        host=app_config.host,
        port=app_config.port,
        debug=app_config.debug
    )
