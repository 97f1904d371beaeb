"""ORM models."""

from quina.models.quina_result import QuinaResult

__all__ = ["QuinaResult"]
