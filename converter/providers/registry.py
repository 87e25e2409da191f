"""Registry and factory for FX rate sources."""

from __future__ import annotations

import os
from typing import Callable, Dict, Iterable, List

from .base import BaseRateSource, RateSourceError

RateSourceFactory = Callable[[], BaseRateSource]

_SOURCE_FACTORIES: Dict[str, RateSourceFactory] = {}


def _default_factories() -> Iterable[tuple[str, RateSourceFactory]]:
    from flask import current_app

    from .currency_api_client import CurrencyApiClient
    from .mock import MockRateSource

    def currency_api_factory() -> CurrencyApiClient:
        return CurrencyApiClient.from_config(current_app.config)

    return [
        (MockRateSource.name, MockRateSource),
        (CurrencyApiClient.name, currency_api_factory),
    ]


def register_source(name: str, factory: RateSourceFactory) -> None:
    """Register a rate source factory under the given name."""

    if not name:
        raise ValueError("Rate source name cannot be empty.")
    _SOURCE_FACTORIES[name.lower()] = factory


def unregister_source(name: str) -> None:
    """Remove a rate source factory; primarily for testing."""

    _SOURCE_FACTORIES.pop(name.lower(), None)


def list_sources() -> List[str]:
    """Return the list of registered rate source identifiers."""

    return sorted(_SOURCE_FACTORIES.keys())


def _resolve_name(name: str | None = None) -> str:
    return (name or os.getenv("RATE_SOURCE") or "mock").lower()


def get_source(name: str | None = None) -> BaseRateSource:
    """Instantiate a rate source using the supplied or configured name."""

    source_name = _resolve_name(name)
    try:
        factory = _SOURCE_FACTORIES[source_name]
    except KeyError as exc:
        available = ", ".join(list_sources()) or "none registered"
        raise RateSourceError(
            f"Unknown rate source '{source_name}'. Available sources: {available}"
        ) from exc
    return factory()


def reset_registry(default_factories: Iterable[tuple[str, RateSourceFactory]] | None = None) -> None:
    """Reset the source registry; useful for tests."""

    _SOURCE_FACTORIES.clear()

    factories = default_factories or _default_factories()
    for name, factory in factories:
        register_source(name, factory)


reset_registry()
