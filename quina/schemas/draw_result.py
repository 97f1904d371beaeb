"""Marshmallow schemas for draw results."""

from __future__ import annotations

from marshmallow import Schema, fields


class DrawResultSchema(Schema):
    """Serialize DrawResult."""

    draw_number = fields.Str(required=True, data_key="drawNumber")
    date = fields.Str(required=True)
    numbers = fields.List(fields.Raw(), required=True)


class RecentResultsSchema(Schema):
    """Serialize the `/api/results` payload."""

    latest = fields.Nested(DrawResultSchema, allow_none=True)
    previous = fields.List(fields.Nested(DrawResultSchema))
    last_updated = fields.Str(data_key="lastUpdated")
