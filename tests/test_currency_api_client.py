from __future__ import annotations

from decimal import Decimal

import pytest
import requests
import responses

from converter.providers.currency_api_client import (
    DEFAULT_BASE_URL,
    CurrencyApiClient,
    CurrencyApiClientConfig,
)
from converter.providers.http_client import DecodeError, HTTPStatusError, TransportError

BASE_URL = "https://rates.example.com/v1/currencies"


@pytest.fixture()
def client():
    return CurrencyApiClient(CurrencyApiClientConfig(base_url=BASE_URL, connect_timeout=2, read_timeout=2))


@responses.activate
def test_fetch_latest_lowercases_base_and_reads_nested_rates(client, load_json_fixture):
    responses.add(
        responses.GET,
        f"{BASE_URL}/usd.json",
        json=load_json_fixture("latest_usd.json"),
        status=200,
    )

    payload = client.fetch_latest("USD")

    assert payload.date == "2024-01-01"
    assert payload.base == "usd"
    assert payload.rates == {
        "eur": Decimal("0.9"),
        "gbp": Decimal("0.8"),
        "jpy": Decimal("141.25"),
    }


@responses.activate
def test_fetch_historical_uses_dated_path(client, load_json_fixture):
    responses.add(
        responses.GET,
        f"{BASE_URL}/2023-06-30/eur.json",
        json=load_json_fixture("historical_eur.json"),
        status=200,
    )

    payload = client.fetch_historical("2023-06-30", "Eur")

    assert payload.date == "2023-06-30"
    assert payload.base == "eur"
    assert payload.rates["usd"] == Decimal("1.0866")


@responses.activate
def test_fetch_latest_accepts_literal_rates_field(client):
    responses.add(
        responses.GET,
        f"{BASE_URL}/usd.json",
        json={"date": "2024-01-01", "base": "usd", "rates": {"eur": 0.9}},
        status=200,
    )

    payload = client.fetch_latest("usd")

    assert payload.rates == {"eur": Decimal("0.9")}


@responses.activate
def test_fetch_latest_raises_status_error(client):
    responses.add(responses.GET, f"{BASE_URL}/usd.json", status=500)

    with pytest.raises(HTTPStatusError) as exc_info:
        client.fetch_latest("usd")

    assert exc_info.value.status_code == 500
    assert len(responses.calls) == 1


@responses.activate
def test_fetch_latest_raises_decode_error_for_unexpected_shape(client):
    responses.add(
        responses.GET,
        f"{BASE_URL}/usd.json",
        json={"date": "2024-01-01", "eur": {"usd": 1.1}},
        status=200,
    )

    with pytest.raises(DecodeError):
        client.fetch_latest("usd")


@responses.activate
def test_fetch_latest_raises_decode_error_for_html_body(client):
    responses.add(
        responses.GET,
        f"{BASE_URL}/usd.json",
        body="<html>maintenance</html>",
        status=200,
        content_type="text/html",
    )

    with pytest.raises(DecodeError):
        client.fetch_latest("usd")


@responses.activate
def test_fetch_latest_wraps_connection_errors(client):
    responses.add(
        responses.GET,
        f"{BASE_URL}/usd.json",
        body=requests.exceptions.ConnectionError("connection reset"),
    )

    with pytest.raises(TransportError):
        client.fetch_latest("usd")


def test_from_config_reads_timeouts_and_falls_back_to_default_url():
    client = CurrencyApiClient.from_config(
        {
            "RATES_API_BASE_URL": "  ",
            "RATES_API_CONNECT_TIMEOUT_SECONDS": "5",
            "RATES_API_READ_TIMEOUT_SECONDS": 12,
        }
    )

    assert client._config.base_url == DEFAULT_BASE_URL  # type: ignore[attr-defined]
    assert client._config.connect_timeout == 5.0  # type: ignore[attr-defined]
    assert client._config.read_timeout == 12.0  # type: ignore[attr-defined]
