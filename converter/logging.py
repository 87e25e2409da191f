"""Logging setup for the converter: JSON records, request and rate fetch context."""

from __future__ import annotations

import json
import logging
import time
import uuid
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

from flask import Flask, g, has_request_context, request
from werkzeug.exceptions import HTTPException

REQUEST_ID_HEADER = "X-Request-ID"
DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

request_logger = logging.getLogger("converter.requests")

# Attributes every LogRecord carries; anything else arrived through ``extra``.
_STANDARD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime", "taskName"}


class JSONLogFormatter(logging.Formatter):
    """Render records as one JSON object per line, extras included."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in vars(record).items():
            if key not in _STANDARD_ATTRS and not key.startswith("_"):
                entry[key] = value
        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=_encode_value, separators=(",", ":"))


def _encode_value(value: Any) -> Any:
    # Rates travel as Decimal; keep their exact digits.
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, set | frozenset):
        return sorted(value, key=str)
    return str(value)


def setup_logging(app: Flask) -> None:
    """Install one stream handler on the root logger according to app config."""

    if app.extensions.get("converter_logging"):
        return

    level = logging.getLevelName(str(app.config.get("LOG_LEVEL") or "INFO").upper())
    if not isinstance(level, int):
        level = logging.INFO

    handler = logging.StreamHandler()
    if app.config.get("LOG_JSON_ENABLED"):
        handler.setFormatter(JSONLogFormatter())
    else:
        handler.setFormatter(logging.Formatter(app.config.get("LOG_FORMAT") or DEFAULT_FORMAT))

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)

    # Flask and werkzeug records go through the root handler only.
    for name in ("werkzeug", app.logger.name):
        logger = logging.getLogger(name)
        logger.handlers = []
        logger.setLevel(level)
        logger.propagate = True

    app.extensions["converter_logging"] = True


def init_request_logging(app: Flask) -> None:
    """Log one record per request with its correlation ID and currency context."""

    if app.extensions.get("converter_request_logging"):
        return

    @app.before_request
    def _begin_request() -> None:
        g.request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        g.request_started = time.perf_counter()

    @app.after_request
    def _request_completed(response):
        response.headers.setdefault(REQUEST_ID_HEADER, g.get("request_id", ""))
        request_logger.info(
            "%s %s -> %s",
            request.method,
            request.path,
            response.status_code,
            extra=_request_context(app, event="request.completed", status=response.status_code),
        )
        g.request_logged = True
        return response

    @app.teardown_request
    def _request_failed(exc: BaseException | None) -> None:
        if exc is None or g.get("request_logged"):
            return
        status = exc.code if isinstance(exc, HTTPException) and exc.code else 500
        request_logger.error(
            "%s %s failed: %s",
            request.method,
            request.path,
            exc,
            extra=_request_context(app, event="request.failed", status=status, error=str(exc)),
        )

    app.extensions["converter_request_logging"] = True


def _request_context(app: Flask, *, event: str, status: int, error: str | None = None) -> dict:
    context: dict[str, Any] = {
        "event": event,
        "method": request.method,
        "route": request.url_rule.rule if request.url_rule else request.path,
        "status": status,
        "request_id": g.get("request_id"),
        "rate_source": getattr(app.extensions.get("rate_source"), "name", None),
        "error": error,
    }
    started = g.get("request_started")
    if started is not None:
        context["duration_ms"] = round((time.perf_counter() - started) * 1000, 3)
    context.update(_requested_currencies())
    return {key: value for key, value in context.items() if value is not None}


def _requested_currencies() -> dict[str, str]:
    """Currency codes named by the request path or JSON body, uppercased."""

    found: dict[str, str] = {}
    base = (request.view_args or {}).get("base")
    if base:
        found["base"] = str(base).upper()
    body = request.get_json(silent=True) if request.is_json else None
    if isinstance(body, dict):
        for key in ("base", "target"):
            if isinstance(body.get(key), str):
                found[key] = body[key].upper()
    return found


def rate_fetch_log_extra(
    *,
    source: str,
    base: str,
    event: str,
    status: str,
    duration_ms: float | None,
    error: str | None = None,
    failure_kind: str | None = None,
) -> dict[str, Any]:
    """Structured ``extra`` payload for rate fetch log records."""

    extra: dict[str, Any] = {
        "event": event,
        "source": source,
        "base": base,
        "status": status,
        "failure_kind": failure_kind,
        "error": error or None,
    }
    if duration_ms is not None:
        extra["duration_ms"] = round(duration_ms, 3)
    if has_request_context():
        extra["request_id"] = g.get("request_id")
    return {key: value for key, value in extra.items() if value is not None}
