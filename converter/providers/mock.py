"""Mock rate source for testing and local development."""

from __future__ import annotations

from decimal import Decimal

from converter.utils.datetime import utc_now

from .base import BaseRateSource
from .schemas import RawRatesPayload

# Units of each currency per one USD.
_USD_RATES: dict[str, Decimal] = {
    "usd": Decimal("1"),
    "eur": Decimal("0.90"),
    "gbp": Decimal("0.78"),
    "jpy": Decimal("150.12"),
    "chf": Decimal("0.88"),
}


class MockRateSource(BaseRateSource):
    """Deterministic source returning synthetic rates cross-computed from USD."""

    name = "mock"

    def fetch_latest(self, base_code: str) -> RawRatesPayload:
        return self._payload(utc_now().date().isoformat(), base_code)

    def fetch_historical(self, date: str, base_code: str) -> RawRatesPayload:
        return self._payload(date, base_code)

    @staticmethod
    def _payload(date: str, base_code: str) -> RawRatesPayload:
        base = base_code.strip().lower()
        base_per_usd = _USD_RATES.get(base)
        if base_per_usd is None:
            return RawRatesPayload(date=date, base=base, rates={})
        rates = {
            code: value / base_per_usd for code, value in _USD_RATES.items() if code != base
        }
        return RawRatesPayload(date=date, base=base, rates=rates)
