"""Development server entrypoint.

Also exposes `app` for platforms that look for it in `main.py`.
"""

import logging

from quina import create_app

app = create_app()

logger = logging.getLogger("quina.main")


if __name__ == "__main__":
    port = int(app.config["PORT"])
    logger.info("API Server running at http://localhost:%s", port)
    logger.info("API endpoint: http://localhost:%s/api/results", port)
    logger.info("Health check: http://localhost:%s/health", port)
    if app.config["DB_BACKEND"] == "sql" and str(app.config["DATABASE_URL"]).startswith("sqlite"):
        logger.warning("DATABASE_URL not set; using file database %s", app.config["DATABASE_URL"])
    app.run(host="0.0.0.0", port=port, debug=bool(app.config.get("DEBUG", False)))
