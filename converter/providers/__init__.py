"""Rate source interfaces and the currency API client."""

from .base import BaseRateSource, RateSourceError
from .currency_api_client import CurrencyApiClient, CurrencyApiClientConfig
from .http_client import (
    DecodeError,
    HTTPClient,
    HTTPClientConfig,
    HTTPClientError,
    HTTPStatusError,
    TransportError,
)
from .mock import MockRateSource
from .schemas import RawRatesPayload, parse_rates_payload

__all__ = [
    "BaseRateSource",
    "RateSourceError",
    "CurrencyApiClient",
    "CurrencyApiClientConfig",
    "DecodeError",
    "HTTPClient",
    "HTTPClientConfig",
    "HTTPClientError",
    "HTTPStatusError",
    "TransportError",
    "MockRateSource",
    "RawRatesPayload",
    "parse_rates_payload",
]
