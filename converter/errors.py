"""API error types and the JSON handler that renders them."""

from __future__ import annotations

import logging
from typing import Any

from flask import Flask, jsonify

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Base class for errors returned to API clients as JSON."""

    status_code: int = 400

    def __init__(self, message: str, *, payload: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.payload = dict(payload or {})

    def to_dict(self) -> dict[str, Any]:
        """Body of the error response.

        Errors tied to one input field also report it under ``field_errors`` so
        clients can render the message next to that field.
        """

        body: dict[str, Any] = {"message": self.message, **self.payload}
        field = self.payload.get("field")
        if field:
            body["field_errors"] = {str(field): [self.message]}
        return body


class ValidationError(APIError):
    """A currency code, date or amount was rejected."""

    status_code = 422


class NotFoundError(APIError):
    """No exchange rate is known for the requested pair."""

    status_code = 404


class UpstreamError(APIError):
    """The rate source could not deliver data."""

    status_code = 502


def register_error_handlers(app: Flask) -> None:
    """Render every :class:`APIError` as ``{"message": ..., ...}`` JSON."""

    @app.errorhandler(APIError)
    def handle_api_error(error: APIError):
        if error.status_code >= 500:
            logger.warning(
                "Upstream failure answered with %s: %s",
                error.status_code,
                error.message,
                extra={"event": "api.upstream_error", **error.payload},
            )
        return jsonify(error.to_dict()), error.status_code
