"""Domain models for currencies, exchange rates and conversion results."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True)
class Currency:
    """A currency identified by its uppercase code.

    Identity is the code alone; the display name never takes part in
    equality or hashing, so rate lookups compare codes only.
    """

    code: str
    name: str = field(default="", compare=False)

    def __str__(self) -> str:
        return self.code


@dataclass(frozen=True)
class ExchangeRate:
    """One unit of ``base_currency`` equals ``rate`` units of ``target_currency``."""

    base_currency: Currency
    target_currency: Currency
    rate: Decimal

    def to_dict(self) -> dict[str, object]:
        return {
            "base": self.base_currency.code,
            "target": self.target_currency.code,
            "rate": self.rate,
        }


@dataclass(frozen=True)
class ConversionResult:
    """Outcome of converting ``amount`` from the base into the target currency."""

    amount: Decimal
    base_currency: Currency
    converted_amount: Decimal
    target_currency: Currency
    exchange_rate: Decimal
