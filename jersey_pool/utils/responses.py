"""Helpers for the JSON envelope every endpoint returns.

Shape: ``{"success": bool, "data": ..., "error": {...} | null}``.
"""

from __future__ import annotations

from typing import Any

from flask import Response, jsonify

ResponseReturn = tuple[Response, int]


def ok(data: Any, status_code: int = 200) -> ResponseReturn:
    """Success response."""

    return jsonify({"success": True, "data": data, "error": None}), status_code


def fail(code: str, message: str, status_code: int, details: Any | None = None) -> ResponseReturn:
    """Error response."""

    body = {
        "success": False,
        "data": None,
        "error": {"code": code, "message": message, "details": details},
    }
    return jsonify(body), status_code
