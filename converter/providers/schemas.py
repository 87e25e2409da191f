"""Raw payload structures returned by FX rate sources."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from .http_client import DecodeError


@dataclass(frozen=True)
class RawRatesPayload:
    """One deserialized rate response: lowercase base code and target -> rate map."""

    date: str
    base: str
    rates: Mapping[str, Decimal | float | int] = field(default_factory=dict)


def parse_rates_payload(body: Mapping[str, Any], base_code: str) -> RawRatesPayload:
    """Decode a response body into a :class:`RawRatesPayload`.

    The public currency API nests the rate map under a key named after the
    requested base code (``{"date": ..., "usd": {...}}``). A literal ``rates``
    key is accepted as well when the base-code key is missing.

    Raises:
        DecodeError: If the date or the rate map is missing or mistyped.
    """

    requested_base = base_code.strip().lower()
    base_value = body.get("base", requested_base)
    if not isinstance(base_value, str) or not base_value.strip():
        raise DecodeError(f"Rates payload has an invalid 'base' field: {base_value!r}")
    base = base_value.strip().lower()

    date = body.get("date")
    if not isinstance(date, str) or not date.strip():
        raise DecodeError("Rates payload missing 'date' field")

    rates = body.get(base)
    if rates is None:
        rates = body.get("rates")
    if not isinstance(rates, Mapping):
        raise DecodeError(f"Rates payload missing rate map under '{base}' or 'rates'")

    return RawRatesPayload(date=date, base=base, rates=dict(rates))
