"""Transform raw rate payloads into domain objects."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

from converter.models import Currency, ExchangeRate
from converter.providers.schemas import RawRatesPayload

from .fx_conversion import normalize_currency, to_decimal


class MappingError(ValueError):
    """Raised when a payload entry cannot be turned into a domain object."""


def to_exchange_rates(payload: RawRatesPayload) -> list[ExchangeRate]:
    """Build one :class:`ExchangeRate` per entry of the payload's rate map.

    Codes are uppercased; output order follows the rate map's iteration order.
    Non-finite values pass through unchanged.
    """

    base_currency = Currency(normalize_currency(payload.base))
    return [
        ExchangeRate(
            base_currency=base_currency,
            target_currency=Currency(normalize_currency(code)),
            rate=_rate_value(code, value),
        )
        for code, value in payload.rates.items()
    ]


def to_currency_code_list(payload: RawRatesPayload) -> list[str]:
    """Return the sorted, de-duplicated uppercase codes found in the payload."""

    codes = {normalize_currency(payload.base)}
    codes.update(normalize_currency(code) for code in payload.rates)
    return sorted(codes)


def _rate_value(code: str, value: object) -> Decimal:
    if isinstance(value, bool):
        raise MappingError(f"Rate for '{code}' is not numeric: {value!r}")
    try:
        return to_decimal(value)  # type: ignore[arg-type]
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise MappingError(f"Rate for '{code}' is not numeric: {value!r}") from exc
