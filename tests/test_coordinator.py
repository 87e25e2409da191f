from __future__ import annotations

from decimal import Decimal

import pytest

from converter.providers.base import BaseRateSource
from converter.providers.http_client import HTTPStatusError, TransportError
from converter.providers.mock import MockRateSource
from converter.providers.schemas import RawRatesPayload
from converter.services.coordinator import (
    CURRENCIES_ERROR,
    ConverterCoordinator,
    format_amount,
)
from converter.services.repository import ExchangeRateRepository

PAYLOADS = {
    "usd": RawRatesPayload(date="2024-01-01", base="usd", rates={"eur": 0.9, "gbp": 0.8}),
    "eur": RawRatesPayload(date="2024-01-01", base="eur", rates={"usd": 1.1, "chf": 0.95}),
}


class ScriptedSource(BaseRateSource):
    name = "scripted"

    def __init__(self, failing: set[str] | None = None):
        self.failing = failing or set()
        self.calls: list[str] = []

    def fetch_latest(self, base_code: str) -> RawRatesPayload:
        self.calls.append(base_code)
        if base_code in self.failing:
            raise HTTPStatusError("Server error 500", status_code=500)
        return PAYLOADS[base_code]

    def fetch_historical(self, date: str, base_code: str) -> RawRatesPayload:
        raise NotImplementedError


@pytest.fixture()
def source():
    return ScriptedSource()


@pytest.fixture()
def coordinator(source):
    return ConverterCoordinator(ExchangeRateRepository(source), base="USD", target="EUR", amount="10")


def test_start_loads_currencies_then_rates_and_converts(coordinator, source):
    coordinator.start()

    assert source.calls == ["usd", "usd"]
    assert coordinator.currencies == ["EUR", "GBP", "USD"]
    assert len(coordinator.rates) == 2
    assert coordinator.result == "9.00"
    assert coordinator.loading is False
    assert coordinator.error is None
    assert coordinator.last_conversion.exchange_rate == Decimal("0.9")


def test_select_base_refetches_and_replaces_rates(coordinator, source):
    coordinator.start()

    coordinator.select_base("eur")

    assert source.calls[-1] == "eur"
    assert coordinator.selected_base == "EUR"
    assert {rate.base_currency.code for rate in coordinator.rates} == {"EUR"}
    assert coordinator.currencies == ["CHF", "EUR", "USD"]
    assert coordinator.result == "N/A"


def test_select_base_is_noop_when_unchanged(coordinator, source):
    coordinator.start()
    calls = list(source.calls)

    coordinator.select_base("usd")

    assert source.calls == calls


def test_select_target_recomputes_without_fetching(coordinator, source):
    coordinator.start()
    calls = list(source.calls)

    coordinator.select_target("GBP")

    assert source.calls == calls
    assert coordinator.result == "8.00"


def test_set_amount_recomputes(coordinator):
    coordinator.start()

    coordinator.set_amount("2.5")
    assert coordinator.result == "2.25"

    coordinator.set_amount("-4")
    assert coordinator.result == "-3.60"


def test_unparseable_amount_converts_as_zero(coordinator):
    coordinator.start()

    coordinator.set_amount("abc")

    assert coordinator.result == "0.00"


def test_fetch_failure_sets_error_and_clears_rates():
    source = ScriptedSource(failing={"eur"})
    coordinator = ConverterCoordinator(ExchangeRateRepository(source))
    coordinator.start()

    coordinator.select_base("EUR")

    assert coordinator.error == "Failed to load exchange rates for EUR. Please try again later."
    assert coordinator.rates == []
    assert coordinator.result == "0.0"
    assert coordinator.loading is False
    assert coordinator.last_conversion is None


def test_currency_list_failure_sets_error():
    class DownSource(ScriptedSource):
        def fetch_latest(self, base_code):
            raise TransportError("down")

    coordinator = ConverterCoordinator(ExchangeRateRepository(DownSource()))

    coordinator.fetch_available_currencies()

    assert coordinator.error == CURRENCIES_ERROR
    assert coordinator.currencies == []


def test_start_keeps_currency_list_error_when_rates_load():
    class FlakySource(ScriptedSource):
        def fetch_latest(self, base_code):
            self.calls.append(base_code)
            if len(self.calls) == 1:
                raise TransportError("connection reset")
            return PAYLOADS[base_code]

    source = FlakySource()
    coordinator = ConverterCoordinator(ExchangeRateRepository(source), amount="10")

    coordinator.start()

    assert source.calls == ["usd", "usd"]
    assert coordinator.error == CURRENCIES_ERROR
    assert coordinator.result == "9.00"
    assert coordinator.currencies == ["EUR", "GBP", "USD"]

    coordinator.fetch_available_currencies()

    assert coordinator.error is None


def test_successful_fetch_clears_previous_error():
    source = ScriptedSource(failing={"eur"})
    coordinator = ConverterCoordinator(ExchangeRateRepository(source))
    coordinator.fetch_latest_rates("EUR")
    assert coordinator.error is not None

    coordinator.fetch_latest_rates("USD")

    assert coordinator.error is None
    assert coordinator.result == "0.90"


def test_subscribers_receive_slot_updates(coordinator):
    events: list[tuple[str, object]] = []
    unsubscribe = coordinator.subscribe(lambda slot, value: events.append((slot, value)))

    coordinator.fetch_latest_rates("USD")

    slots = [slot for slot, _ in events]
    assert slots[:3] == ["loading", "error", "selected_base"]
    assert ("loading", False) in events
    assert events[-1] == ("result", "9.00")

    unsubscribe()
    coordinator.set_amount("1")
    assert events[-1] == ("result", "9.00")


def test_get_rejects_unknown_slots(coordinator):
    assert coordinator.get("amount") == "10"
    with pytest.raises(KeyError):
        coordinator.get("history")


def test_convert_without_rates_reports_no_result(coordinator):
    coordinator.convert()

    assert coordinator.result == "0.0"


def test_coordinator_with_mock_source_cross_rates():
    coordinator = ConverterCoordinator(
        ExchangeRateRepository(MockRateSource()), base="GBP", target="USD", amount="78"
    )

    coordinator.start()

    assert coordinator.result == "100.00"
    assert "JPY" in coordinator.currencies


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (Decimal("9"), "9.00"),
        (Decimal("1.005"), "1.01"),
        (Decimal("0.125"), "0.13"),
        (Decimal("-2.345"), "-2.35"),
        (Decimal("1E+30"), "1000000000000000000000000000000.00"),
        (Decimal("NaN"), "NaN"),
    ],
)
def test_format_amount(value, expected):
    assert format_amount(value) == expected
