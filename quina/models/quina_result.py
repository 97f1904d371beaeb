"""Quina results table as laid out by the bootstrap script.

Columns:
- id (PK, autoincrement)
- drawNumber (unique)
- date (free text, e.g. "19th December 2025")
- numbers (JSON array text, e.g. "[23, 41, 46, 58, 66]")
- createdAt
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Integer, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from quina.models.base import Base


class QuinaResult(Base):
    """One row per draw."""

    __tablename__ = "quina_results"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    draw_number: Mapped[int] = mapped_column("drawNumber", Integer, unique=True, nullable=False)
    date: Mapped[str] = mapped_column(Text, nullable=False)
    numbers: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime | None] = mapped_column("createdAt", DateTime, server_default=func.current_timestamp())
