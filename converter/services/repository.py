"""Exchange rate repository: fetch, map and absorb failures into results."""

from __future__ import annotations

import logging
from collections.abc import Callable
from time import perf_counter
from typing import TypeVar

from converter.logging import rate_fetch_log_extra
from converter.models import ExchangeRate
from converter.providers.base import BaseRateSource
from converter.providers.http_client import (
    DecodeError,
    HTTPClientError,
    HTTPStatusError,
    TransportError,
)
from converter.providers.schemas import RawRatesPayload

from .mapper import to_currency_code_list, to_exchange_rates
from .result import Err, FailureKind, Ok, Result

logger = logging.getLogger(__name__)

T = TypeVar("T")

CURRENCY_LIST_BASE = "usd"


class ExchangeRateRepository:
    """Single boundary between the rate source and its callers.

    Every failure raised by the source or the mapper is logged and returned as
    :class:`Err`; nothing is re-raised past this class. The repository keeps
    no state between calls.
    """

    def __init__(
        self,
        source: BaseRateSource,
        *,
        currency_list_base: str = CURRENCY_LIST_BASE,
    ) -> None:
        self._source = source
        self._currency_list_base = currency_list_base.strip().lower()

    @property
    def source_name(self) -> str:
        return getattr(self._source, "name", self._source.__class__.__name__)

    def get_latest_exchange_rates(self, base_code: str) -> Result[list[ExchangeRate]]:
        code = base_code.strip().lower()
        return self._fetch(
            code,
            event="rates.latest",
            fetch=lambda: self._source.fetch_latest(code),
            transform=to_exchange_rates,
        )

    def get_historical_exchange_rates(
        self, date: str, base_code: str
    ) -> Result[list[ExchangeRate]]:
        code = base_code.strip().lower()
        return self._fetch(
            code,
            event="rates.historical",
            fetch=lambda: self._source.fetch_historical(date, code),
            transform=to_exchange_rates,
        )

    def get_available_currency_codes(self) -> Result[list[str]]:
        """Return every known code, always read from the currency-list base."""

        code = self._currency_list_base
        return self._fetch(
            code,
            event="rates.currencies",
            fetch=lambda: self._source.fetch_latest(code),
            transform=to_currency_code_list,
        )

    def _fetch(
        self,
        base_code: str,
        *,
        event: str,
        fetch: Callable[[], RawRatesPayload],
        transform: Callable[[RawRatesPayload], T],
    ) -> Result[T]:
        start = perf_counter()
        try:
            payload = fetch()
        except Exception as exc:
            return self._failed(base_code, event, start, exc, _classify_fetch(exc))

        try:
            value = transform(payload)
        except Exception as exc:
            failure = Err(kind=FailureKind.MAPPING, detail=str(exc))
            return self._failed(base_code, event, start, exc, failure)

        duration = (perf_counter() - start) * 1000
        logger.debug(
            "Fetched exchange rates for %s",
            base_code,
            extra=rate_fetch_log_extra(
                source=self.source_name,
                base=base_code,
                event=event,
                status="success",
                duration_ms=duration,
            ),
        )
        return Ok(value, date=payload.date)

    def _failed(
        self,
        base_code: str,
        event: str,
        start: float,
        exc: Exception,
        failure: Err,
    ) -> Err:
        logger.error(
            "Failed to fetch exchange rates for %s: %s",
            base_code,
            exc,
            exc_info=exc,
            extra=rate_fetch_log_extra(
                source=self.source_name,
                base=base_code,
                event=event,
                status="error",
                duration_ms=(perf_counter() - start) * 1000,
                error=str(exc),
                failure_kind=failure.kind.value,
            ),
        )
        return failure


def _classify_fetch(exc: Exception) -> Err:
    if isinstance(exc, TransportError):
        kind = FailureKind.TIMEOUT if exc.timeout else FailureKind.TRANSPORT
        return Err(kind=kind, detail=str(exc))
    if isinstance(exc, HTTPStatusError):
        return Err(kind=FailureKind.HTTP, detail=str(exc), status_code=exc.status_code)
    if isinstance(exc, DecodeError):
        return Err(kind=FailureKind.DECODE, detail=str(exc))
    if isinstance(exc, HTTPClientError):
        return Err(kind=FailureKind.TRANSPORT, detail=str(exc))
    return Err(kind=FailureKind.SOURCE, detail=str(exc) or exc.__class__.__name__)


def init_repository(app) -> ExchangeRateRepository:
    """Create the configured rate source and repository on the Flask app."""

    from converter.providers.registry import get_source

    source = app.extensions.get("rate_source")
    if source is None:
        with app.app_context():
            source = get_source(app.config.get("RATE_SOURCE"))
        app.extensions["rate_source"] = source

    repository = ExchangeRateRepository(
        source,
        currency_list_base=app.config.get("CURRENCY_LIST_BASE", CURRENCY_LIST_BASE),
    )
    app.extensions["rate_repository"] = repository
    return repository


def get_repository(app) -> ExchangeRateRepository:
    repository = app.extensions.get("rate_repository")
    if repository is None:
        repository = init_repository(app)
    return repository
