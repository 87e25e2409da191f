"""Validation helpers for request payloads and CLI arguments."""

from __future__ import annotations

from datetime import date

from converter.errors import ValidationError


def validate_currency_code(value: str | None, *, field: str = "currency_code") -> str:
    """Ensure the value looks like a currency code and return it uppercased."""

    if value is None or not str(value).strip():
        raise ValidationError(f"'{field}' is required.", payload={"field": field})

    normalized = str(value).strip().upper()
    if not (normalized.isascii() and normalized.isalpha()):
        raise ValidationError(
            f"Unsupported currency code '{normalized}'. Codes must be alphabetic, e.g. USD.",
            payload={"field": field, "code": normalized},
        )
    return normalized


def validate_rate_date(value: str | None, *, field: str = "date") -> str:
    """Ensure a historical date is a real calendar day written as YYYY-MM-DD."""

    if value is None or not str(value).strip():
        raise ValidationError(f"'{field}' is required.", payload={"field": field})

    candidate = str(value).strip()
    try:
        parsed = date.fromisoformat(candidate)
    except ValueError as exc:
        raise ValidationError(
            f"Invalid date '{candidate}'. Expected format YYYY-MM-DD.",
            payload={"field": field},
        ) from exc
    if parsed.isoformat() != candidate:
        raise ValidationError(
            f"Invalid date '{candidate}'. Expected format YYYY-MM-DD.",
            payload={"field": field},
        )
    return candidate
