"""Helpers for consistent JSON responses."""

from __future__ import annotations

from typing import Any

from flask import Response, jsonify


def ok(data: Any, status_code: int = 200) -> tuple[Response, int]:
    """Success response; the payload is sent as-is."""

    return jsonify(data), status_code


def fail(error: str, message: str, status_code: int) -> tuple[Response, int]:
    """Error response with a machine-readable `error`/`message` pair."""

    return jsonify({"error": error, "message": message}), status_code
