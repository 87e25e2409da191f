"""Application configuration classes."""

from __future__ import annotations

import os

SUPPORTED_RATE_SOURCES = {"currency_api", "fawazahmed0", "mock"}
RATE_SOURCE_ALIASES = {"fawazahmed0": "currency_api"}

DEFAULT_RATES_API_BASE_URL = (
    "https://cdn.jsdelivr.net/npm/@fawazahmed0/currency-api@latest/v1/currencies"
)


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name)
    return value if value is not None else default


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "currency-converter"
    TESTING = False
    RATE_SOURCE = _get_env("RATE_SOURCE", "currency_api")
    RATES_API_BASE_URL = _get_env("RATES_API_BASE_URL", DEFAULT_RATES_API_BASE_URL)
    RATES_API_CONNECT_TIMEOUT_SECONDS = float(_get_env("RATES_API_CONNECT_TIMEOUT_SECONDS", "30"))
    RATES_API_READ_TIMEOUT_SECONDS = float(_get_env("RATES_API_READ_TIMEOUT_SECONDS", "30"))
    CURRENCY_LIST_BASE = _get_env("CURRENCY_LIST_BASE", "usd")
    DEFAULT_BASE_CURRENCY = _get_env("DEFAULT_BASE_CURRENCY", "USD")
    DEFAULT_TARGET_CURRENCY = _get_env("DEFAULT_TARGET_CURRENCY", "EUR")
    DEFAULT_AMOUNT = _get_env("DEFAULT_AMOUNT", "1.0")
    LOG_LEVEL = _get_env("LOG_LEVEL", "INFO")
    LOG_JSON_ENABLED = _get_env("LOG_JSON_ENABLED", "false").lower() == "true"
    LOG_FORMAT = _get_env("LOG_FORMAT", "%(asctime)s %(levelname)s [%(name)s] %(message)s")


class DevelopmentConfig(BaseConfig):
    """Configuration for local development."""

    DEBUG = True


class ProductionConfig(BaseConfig):
    """Configuration for production deployments."""

    DEBUG = False


class TestingConfig(BaseConfig):
    """Configuration used by the test-suite; never touches the network."""

    DEBUG = False
    TESTING = True
    RATE_SOURCE = "mock"


CONFIG_BY_ENV = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}


def get_config(config_name: str | None = None) -> type[BaseConfig]:
    """Return the config class for the requested environment.

    Args:
        config_name: Optional explicit config identifier. If omitted, the
            APP_ENV environment variable is consulted.

    Raises:
        KeyError: If the requested configuration is not defined.
        ValueError: If the configured rate source is not supported.
    """

    env_candidate = config_name if config_name is not None else os.getenv("APP_ENV", "development")
    env_name = (env_candidate or "development").lower()
    try:
        config_cls = CONFIG_BY_ENV[env_name]
    except KeyError as exc:
        raise KeyError(f"Unknown APP_ENV '{env_name}'") from exc

    _validate_rate_source(config_cls)
    return config_cls


def _validate_rate_source(config_cls: type[BaseConfig]) -> None:
    normalized = _normalize_rate_source(config_cls.RATE_SOURCE)
    if normalized not in SUPPORTED_RATE_SOURCES:
        raise ValueError(
            f"Unsupported RATE_SOURCE '{config_cls.RATE_SOURCE}'. "
            f"Allowed values: {sorted(SUPPORTED_RATE_SOURCES)}"
        )
    config_cls.RATE_SOURCE = normalized


def _normalize_rate_source(value: str | None) -> str:
    if not value:
        return ""
    normalized = value.strip().lower()
    return RATE_SOURCE_ALIASES.get(normalized, normalized)
