"""Flask application exposing keyword lookups over the item index."""

from __future__ import annotations

import logging

from flask import Flask, Response, jsonify, request
from werkzeug.exceptions import MethodNotAllowed

from menumap.search.service import MenuSearchService

logger = logging.getLogger(__name__)

SERVICE_KEY = "MENUMAP_SERVICE"


def create_app(service: MenuSearchService, config: dict | None = None) -> Flask:
    """Create the app with the one query route and a plain-text 404 fallback."""

    app = Flask(__name__)
    if config:
        app.config.update(config)
    app.config[SERVICE_KEY] = service

    @app.before_request
    def _log_request() -> None:
        logger.debug("started %s %s", request.method, request.path)

    @app.get("/query/<path:text>")
    def query(text: str) -> Response:
        items = service.search(text)
        logger.debug("query %r matched %d items", text, len(items))
        return jsonify([item.to_dict() for item in items])

    @app.errorhandler(404)
    def not_found(_error: Exception) -> tuple[str, int, dict[str, str]]:
        logger.warning("Undefined route called: %s", request.path)
        return f"No route {request.path}", 404, {"Content-Type": "text/plain; charset=utf-8"}

    @app.errorhandler(405)
    def method_not_allowed(error: MethodNotAllowed) -> tuple[str, int, dict[str, str]]:
        logger.warning("Unsupported method %s for %s", request.method, request.path)
        headers = {"Content-Type": "text/plain; charset=utf-8"}
        if error.valid_methods:
            headers["Allow"] = ", ".join(error.valid_methods)
        return f"Method {request.method} not allowed for {request.path}", 405, headers

    @app.errorhandler(500)
    def server_error(error: Exception) -> tuple[str, int, dict[str, str]]:
        logger.error("something went wrong: %s", error)
        return "Internal server error", 500, {"Content-Type": "text/plain; charset=utf-8"}

    return app
