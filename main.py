"""Flask app entrypoint for Pantry Recipe Finder.

Serves the browser page from public/ and exposes a single proxy route,
GET /api/recipes, which forwards an ingredient list to Spoonacular and
relays the result.

Run locally with:
    python main.py
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from flask import Flask, Response, request, jsonify
from flask_cors import CORS

from app_models import (
    IngredientQuery,
    ValidationError,
    ExternalAPIError,
    SchemaMismatchError,
)
from app_services import SpoonacularService
from config import Settings

PUBLIC_DIR = Path(__file__).resolve().parent / "public"

MISSING_INGREDIENTS_ERROR = "Ingredients are required"
UPSTREAM_ERROR = "Error fetching recipes"
SCHEMA_MISMATCH_ERROR = "Unexpected response from recipe provider"

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    spoonacular_service: Optional[SpoonacularService] = None,
) -> Flask:
    """
    Build the Flask app.

    Args:
        settings: Startup configuration (defaults to Settings.from_env())
        spoonacular_service: Outbound service (defaults to one built from settings)

    Returns:
        Configured Flask app
    """
    if settings is None:
        settings = Settings.from_env()
    if spoonacular_service is None:
        spoonacular_service = SpoonacularService.from_settings(settings)

    logging.getLogger().setLevel(settings.log_level)
    if not settings.spoonacular_configured:
        logger.warning("Missing SPOONACULAR_API_KEY - recipe lookups will fail")

    app = Flask(__name__, static_folder=str(PUBLIC_DIR), static_url_path="")

    origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()] or "*"
    CORS(app, resources={r"/api/*": {
        "origins": origins,
        "methods": ["GET", "OPTIONS"],
        "allow_headers": ["Content-Type"],
        "max_age": 3600,
    }})

    start_time = datetime.now()

    @app.route("/", methods=["GET"])
    def index():
        """Serve the recipe finder page."""
        return app.send_static_file("index.html")

    @app.route("/api/recipes", methods=["GET"])
    def get_recipes():
        """
        Proxy endpoint: forward ?ingredients=... to Spoonacular.

        Response (success): the upstream JSON body, byte for byte
        Response (error):   {"error": "..."} with 400, 500 or 502
        """
        try:
            query = IngredientQuery.from_args(request.args)
        except ValidationError as e:
            logger.warning(f"Validation error: {e.message}")
            return jsonify({"error": MISSING_INGREDIENTS_ERROR}), 400

        logger.info(f"Searching recipes for ingredients: {query.ingredients[:100]}")

        try:
            result = spoonacular_service.search_recipes_by_ingredients(query)
        except SchemaMismatchError as e:
            logger.error(f"Spoonacular schema mismatch: {e.message}")
            return jsonify({"error": SCHEMA_MISMATCH_ERROR}), 502
        except ExternalAPIError as e:
            logger.error(f"External API error: {e.message}")
            return jsonify({"error": UPSTREAM_ERROR}), 500
        except Exception as e:
            logger.exception(f"Unexpected error in /api/recipes: {str(e)}")
            return jsonify({"error": UPSTREAM_ERROR}), 500

        logger.info(f"Successfully returned {len(result.recipes)} recipes")
        return Response(result.content, status=200, mimetype="application/json")

    @app.route("/health", methods=["GET"])
    def health_check():
        """Health check endpoint for deployment monitoring."""
        uptime_seconds = (datetime.now() - start_time).total_seconds()
        return jsonify({
            "status": "ok",
            "uptime_seconds": int(uptime_seconds),
            "timestamp": datetime.now().isoformat(),
            "spoonacular_configured": settings.spoonacular_configured,
        }), 200

    @app.errorhandler(404)
    def handle_not_found(e):
        """Handle 404 errors."""
        return jsonify({"error": "Endpoint not found"}), 404

    @app.errorhandler(500)
    def handle_server_error(e):
        """Handle 500 errors."""
        logger.error(f"Server error: {str(e)}")
        return jsonify({"error": "Internal server error"}), 500

    return app


if __name__ == "__main__":
    settings = Settings.from_env()
    app = create_app(settings)

    logger.info(f"Starting Flask app on port {settings.port} (debug={settings.debug})")
    logger.info(f"CORS allowed origins: {settings.cors_origins}")
    logger.info(f"Spoonacular API: {'configured' if settings.spoonacular_configured else 'NOT SET'}")

    app.run(host="0.0.0.0", port=settings.port, debug=settings.debug)
