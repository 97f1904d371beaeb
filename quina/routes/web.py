"""Static client routes and CORS headers."""

from __future__ import annotations

from flask import Blueprint, Flask, Response, current_app, send_from_directory


web_bp = Blueprint("web", __name__)

CORS_ALLOW_HEADERS = "Origin, X-Requested-With, Content-Type, Accept"


@web_bp.get("/")
def index() -> Response:
    return send_from_directory(current_app.config["STATIC_DIR"], "index.html")


@web_bp.get("/<path:filename>")
def static_file(filename: str) -> Response:
    return send_from_directory(current_app.config["STATIC_DIR"], filename)


def register_cors(app: Flask) -> None:
    """Allow any origin, so the page can also be hosted elsewhere."""

    @app.after_request
    def _add_cors_headers(response: Response) -> Response:
        response.headers["Access-Control-Allow-Origin"] = "*"
        response.headers["Access-Control-Allow-Headers"] = CORS_ALLOW_HEADERS
        return response
