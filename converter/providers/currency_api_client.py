from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from converter.providers.base import BaseRateSource
from converter.providers.http_client import HTTPClient, HTTPClientConfig
from converter.providers.schemas import RawRatesPayload, parse_rates_payload

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://cdn.jsdelivr.net/npm/@fawazahmed0/currency-api@latest/v1/currencies"


class CurrencyApiClientConfig:
    """Configuration parameters for the currency API client."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        connect_timeout: float = 30.0,
        read_timeout: float = 30.0,
    ) -> None:
        self.base_url = base_url
        self.connect_timeout = connect_timeout
        self.read_timeout = read_timeout


class CurrencyApiClient(BaseRateSource):
    """Client for the fawazahmed0 currency API served from jsDelivr.

    Every call is a single attempt; transport, status and decode failures
    propagate as :class:`~converter.providers.http_client.HTTPClientError`
    subclasses.
    """

    name = "currency_api"

    def __init__(
        self,
        config: CurrencyApiClientConfig | None = None,
        client: HTTPClient | None = None,
    ) -> None:
        self._config = config or CurrencyApiClientConfig()
        self._client = client or HTTPClient(
            HTTPClientConfig(
                base_url=self._config.base_url,
                connect_timeout=self._config.connect_timeout,
                read_timeout=self._config.read_timeout,
            )
        )

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> CurrencyApiClient:
        base_url_value = config.get("RATES_API_BASE_URL")
        if not isinstance(base_url_value, str) or not base_url_value.strip():
            base_url = DEFAULT_BASE_URL
        else:
            base_url = base_url_value
        client_config = CurrencyApiClientConfig(
            base_url=base_url,
            connect_timeout=float(config.get("RATES_API_CONNECT_TIMEOUT_SECONDS", 30)),
            read_timeout=float(config.get("RATES_API_READ_TIMEOUT_SECONDS", 30)),
        )
        return cls(client_config)

    def fetch_latest(self, base_code: str) -> RawRatesPayload:
        code = base_code.strip().lower()
        body = self._client.get_json(f"/{code}.json")
        return parse_rates_payload(body, code)

    def fetch_historical(self, date: str, base_code: str) -> RawRatesPayload:
        code = base_code.strip().lower()
        body = self._client.get_json(f"/{date}/{code}.json")
        return parse_rates_payload(body, code)
