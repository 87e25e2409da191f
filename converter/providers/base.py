"""Abstract interface for FX rate sources."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .schemas import RawRatesPayload


class RateSourceError(Exception):
    """Raised when a rate source cannot be resolved or configured."""


class BaseRateSource(ABC):
    """Defines the interface all FX rate sources must implement."""

    name: str

    @abstractmethod
    def fetch_latest(self, base_code: str) -> RawRatesPayload:
        """Retrieve the most recent rates for the given base currency."""

    @abstractmethod
    def fetch_historical(self, date: str, base_code: str) -> RawRatesPayload:
        """Retrieve the rates published on ``date`` (``YYYY-MM-DD``) for the base currency."""
