"""Health check routes."""

from __future__ import annotations

import logging

from flask import Blueprint

from quina.db import check_connection
from quina.errors import DatabaseUnavailableError
from quina.utils.responses import ok

logger = logging.getLogger(__name__)

health_bp = Blueprint("health", __name__)


@health_bp.get("/health")
def health_check():
    """Health check endpoint; probes the storage backend."""

    try:
        check_connection()
    except DatabaseUnavailableError as exc:
        logger.warning("Health check failed: %s", exc.message)
        return ok({"status": "error", "database": "disconnected", "error": exc.message}, status_code=500)

    return ok({"status": "ok", "database": "connected"})
