"""Session coordinator wiring selections to the fetch-and-convert pipeline."""

from __future__ import annotations

import logging
from collections.abc import Callable
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Any

from converter.models import ConversionResult, Currency, ExchangeRate

from .fx_conversion import convert
from .repository import ExchangeRateRepository

logger = logging.getLogger(__name__)

Subscriber = Callable[[str, Any], None]

SLOTS = (
    "currencies",
    "rates",
    "selected_base",
    "selected_target",
    "amount",
    "result",
    "loading",
    "error",
)

NO_RESULT = "0.0"
CENTS = Decimal("0.01")
RATE_UNAVAILABLE = "N/A"
CURRENCIES_ERROR = "Failed to load available currencies."
RATES_ERROR = "Failed to load exchange rates for {base}. Please try again later."


class ConverterCoordinator:
    """Holds one user's selections and the last fetched rate set.

    Each change to an observable slot is pushed to every subscriber as
    ``callback(slot, value)``. Fetches run synchronously, so the stored rates
    always belong to the currently selected base.
    """

    def __init__(
        self,
        repository: ExchangeRateRepository,
        *,
        base: str = "USD",
        target: str = "EUR",
        amount: str = "1.0",
    ) -> None:
        self._repository = repository
        self._subscribers: list[Subscriber] = []
        self._state: dict[str, Any] = {
            "currencies": [],
            "rates": [],
            "selected_base": base.strip().upper(),
            "selected_target": target.strip().upper(),
            "amount": amount,
            "result": NO_RESULT,
            "loading": False,
            "error": None,
        }
        self.last_conversion: ConversionResult | None = None
        self._currencies_error: str | None = None

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register ``callback`` and return a function that unregisters it."""

        self._subscribers.append(callback)

        def _unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return _unsubscribe

    def get(self, slot: str) -> Any:
        if slot not in SLOTS:
            raise KeyError(f"Unknown slot '{slot}'")
        return self._state[slot]

    def snapshot(self) -> dict[str, Any]:
        return dict(self._state)

    @property
    def currencies(self) -> list[str]:
        return self._state["currencies"]

    @property
    def rates(self) -> list[ExchangeRate]:
        return self._state["rates"]

    @property
    def selected_base(self) -> str:
        return self._state["selected_base"]

    @property
    def selected_target(self) -> str:
        return self._state["selected_target"]

    @property
    def amount(self) -> str:
        return self._state["amount"]

    @property
    def result(self) -> str:
        return self._state["result"]

    @property
    def loading(self) -> bool:
        return self._state["loading"]

    @property
    def error(self) -> str | None:
        return self._state["error"]

    def start(self) -> None:
        """Load the currency list, then the rates for the selected base."""

        self.fetch_available_currencies()
        self.fetch_latest_rates(self.selected_base)

    def fetch_available_currencies(self) -> None:
        result = self._repository.get_available_currency_codes()
        if result.is_ok:
            self._currencies_error = None
            self._set("currencies", result.value)
            if self.error == CURRENCIES_ERROR:
                self._set("error", None)
        else:
            self._currencies_error = CURRENCIES_ERROR
            self._set("error", CURRENCIES_ERROR)

    def fetch_latest_rates(self, base_code: str) -> None:
        base = base_code.strip().upper()
        self._set("loading", True)
        # a failed currency-list load stays visible across rate fetches
        self._set("error", self._currencies_error)
        self._set("selected_base", base)

        result = self._repository.get_latest_exchange_rates(base)
        self._set("loading", False)

        if not result.is_ok:
            self._set("error", RATES_ERROR.format(base=base))
            self._set("rates", [])
            self._set("result", NO_RESULT)
            self.last_conversion = None
            return

        rates: list[ExchangeRate] = result.value
        self._set("rates", rates)
        codes = sorted({rate.target_currency.code for rate in rates} | {base})
        if not self.currencies or self.currencies != codes:
            self._set("currencies", codes)
        self.convert()

    def select_base(self, code: str) -> None:
        base = code.strip().upper()
        if base != self.selected_base:
            self.fetch_latest_rates(base)

    def select_target(self, code: str) -> None:
        target = code.strip().upper()
        if target != self.selected_target:
            self._set("selected_target", target)
            self.convert()

    def set_amount(self, text: str) -> None:
        self._set("amount", text)
        self.convert()

    def convert(self) -> None:
        """Recompute the formatted result from the current selections."""

        rates = self.rates
        if not rates:
            self.last_conversion = None
            self._set("result", NO_RESULT)
            return

        conversion = convert(
            _parse_amount(self.amount),
            Currency(self.selected_base),
            Currency(self.selected_target),
            rates,
        )
        self.last_conversion = conversion
        if conversion is None:
            self._set("result", RATE_UNAVAILABLE)
        else:
            self._set("result", format_amount(conversion.converted_amount))

    def _set(self, slot: str, value: Any) -> None:
        self._state[slot] = value
        for callback in list(self._subscribers):
            callback(slot, value)


def format_amount(value: Decimal) -> str:
    """Render a converted amount with two decimal places, rounding half up."""

    if not value.is_finite():
        return str(value)
    with localcontext() as context:
        context.prec = max(28, value.adjusted() + 3)
        return str(value.quantize(CENTS, rounding=ROUND_HALF_UP))


def _parse_amount(text: str | None) -> Decimal:
    if text is None:
        return Decimal("0")
    try:
        value = Decimal(str(text).strip())
    except InvalidOperation:
        logger.debug("Ignoring unparseable amount %r", text)
        return Decimal("0")
    if not value.is_finite():
        return Decimal("0")
    return value
