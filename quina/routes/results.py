"""Results API (controllers). No business logic here."""

from __future__ import annotations

from datetime import datetime, timezone

from flask import Blueprint, current_app

from quina.repositories.results_repository import get_results_repository
from quina.schemas.draw_result import RecentResultsSchema
from quina.services.results_service import ResultsService
from quina.utils.responses import ok

results_bp = Blueprint("results", __name__)

_schema = RecentResultsSchema()


def _utc_timestamp() -> str:
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@results_bp.get("/results")
def get_results():
    """Latest draw plus the previous ones, newest first."""

    service = ResultsService(get_results_repository())
    limit = int(current_app.config.get("RESULTS_LIMIT", 11))
    recent = service.get_latest_and_previous(limit)

    return ok(
        _schema.dump(
            {
                "latest": recent.latest,
                "previous": recent.previous,
                "last_updated": _utc_timestamp(),
            }
        )
    )
