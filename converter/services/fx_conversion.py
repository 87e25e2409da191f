"""Currency conversion against a list of known exchange rates."""

from __future__ import annotations

from collections.abc import Iterable
from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation, getcontext, localcontext

from converter.models import ConversionResult, Currency, ExchangeRate

ROUNDING_PRECISION = 28


def get_decimal_context():
    """Return the shared Decimal context used across FX conversions."""

    context = getcontext().copy()
    context.prec = ROUNDING_PRECISION
    context.rounding = ROUND_HALF_EVEN
    return context


def normalize_currency(code: str) -> str:
    """Normalize a currency code to canonical uppercase form."""

    if not code or not str(code).strip():
        raise ValueError("Currency code cannot be blank.")
    normalized = str(code).strip().upper()
    if not normalized.isascii():
        raise ValueError(f"Currency code must be ASCII: {code!r}")
    return normalized


def to_decimal(value: Decimal | int | float | str) -> Decimal:
    """Convert input into a Decimal using the shared context."""

    if isinstance(value, Decimal):
        return value
    context = get_decimal_context()
    with localcontext(context):
        return Decimal(str(value))


def find_rate(
    base: Currency, target: Currency, rates: Iterable[ExchangeRate]
) -> ExchangeRate | None:
    """Return the rate quoted from ``base`` to ``target``, comparing codes only.

    When a pair appears more than once the last entry wins.
    """

    found: ExchangeRate | None = None
    for rate in rates:
        if (
            rate.base_currency.code == base.code
            and rate.target_currency.code == target.code
        ):
            found = rate
    return found


def convert(
    amount: Decimal | int | float | str,
    base: Currency,
    target: Currency,
    rates: Iterable[ExchangeRate],
) -> ConversionResult | None:
    """Convert ``amount`` of ``base`` into ``target`` using the matching rate.

    Returns None when no rate for the pair is present. The amount is not
    validated and the result is not rounded.
    """

    match = find_rate(base, target, rates)
    if match is None:
        return None

    context = get_decimal_context()
    context.traps[InvalidOperation] = False
    with localcontext(context):
        amount_dec = to_decimal(amount)
        converted = amount_dec * match.rate

    return ConversionResult(
        amount=amount_dec,
        base_currency=base,
        converted_amount=converted,
        target_currency=target,
        exchange_rate=match.rate,
    )
