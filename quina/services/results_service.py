"""Business logic for reading the most recent Quina results."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from quina.errors import ResultsQueryError
from quina.repositories.results_repository import ResultsRepository
from quina.services.normalizer import (
    EXTENDED_ALIASES,
    PRIMARY_ALIASES,
    DrawResult,
    draw_sort_key,
    normalize_rows,
)

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 11  # latest + 10 previous


@dataclass(frozen=True)
class RecentResults:
    latest: DrawResult | None
    previous: list[DrawResult] = field(default_factory=list)


class ResultsService:
    """Recent-results use-cases on top of any results repository."""

    def __init__(self, repository: ResultsRepository) -> None:
        self._repo = repository

    def get_recent_results(self, limit: int = DEFAULT_LIMIT) -> list[DrawResult]:
        """Return up to `limit` results, newest first.

        A missing table means nothing was stored yet and yields an empty list.
        If the primary query fails, a looser `SELECT *` style query is tried
        once before giving up with `ResultsQueryError`.
        """

        try:
            if not self._repo.table_exists():
                logger.info("Results table does not exist yet")
                return []
        except Exception as exc:
            raise ResultsQueryError(str(exc)) from exc

        try:
            rows = self._repo.fetch_recent_rows(limit)
            results = normalize_rows(rows, PRIMARY_ALIASES)
        except Exception as exc:
            logger.info("Primary results query failed, trying alternative column names: %s", exc)
            try:
                rows = self._repo.fetch_recent_rows_loose(limit)
                results = normalize_rows(rows, EXTENDED_ALIASES)
            except Exception as alt_exc:
                logger.exception("Fallback results query failed")
                raise ResultsQueryError(str(alt_exc)) from alt_exc

        if not results:
            logger.info("No results found in database")

        # Storage ordering is not guaranteed across backends.
        return sorted(results, key=draw_sort_key)

    def get_latest_and_previous(self, limit: int = DEFAULT_LIMIT) -> RecentResults:
        results = self.get_recent_results(limit)
        if not results:
            return RecentResults(latest=None, previous=[])
        return RecentResults(latest=results[0], previous=results[1:])
