from __future__ import annotations

from converter.providers.base import BaseRateSource
from converter.providers.http_client import HTTPStatusError
from converter.services.repository import ExchangeRateRepository


class FailingSource(BaseRateSource):
    name = "failing"

    def fetch_latest(self, base_code):
        raise HTTPStatusError("Server error 503", status_code=503)

    def fetch_historical(self, date, base_code):
        raise HTTPStatusError("Server error 503", status_code=503)


def test_rates_latest_prints_pairs(app):
    runner = app.test_cli_runner()

    result = runner.invoke(args=["rates", "latest", "usd"])

    assert result.exit_code == 0
    assert "USD/EUR 0.90" in result.output
    assert "USD/JPY 150.12" in result.output


def test_rates_latest_with_date(app):
    runner = app.test_cli_runner()

    result = runner.invoke(args=["rates", "latest", "usd", "--date", "2023-06-30"])

    assert result.exit_code == 0
    assert "USD/GBP 0.78" in result.output


def test_rates_latest_rejects_bad_date(app):
    runner = app.test_cli_runner()

    result = runner.invoke(args=["rates", "latest", "usd", "--date", "yesterday"])

    assert result.exit_code == 2
    assert "YYYY-MM-DD" in result.output


def test_rates_currencies(app):
    runner = app.test_cli_runner()

    result = runner.invoke(args=["rates", "currencies"])

    assert result.exit_code == 0
    assert result.output.strip() == "CHF EUR GBP JPY USD"


def test_rates_convert_prints_formatted_result(app):
    runner = app.test_cli_runner()

    result = runner.invoke(args=["rates", "convert", "10", "usd", "gbp"])

    assert result.exit_code == 0
    assert result.output.strip() == "10 USD = 7.80 GBP"


def test_rates_convert_reports_fetch_failure(app):
    app.extensions["rate_repository"] = ExchangeRateRepository(FailingSource())
    runner = app.test_cli_runner()

    result = runner.invoke(args=["rates", "convert", "10", "usd", "gbp"])

    assert result.exit_code == 1
    assert "Failed to load exchange rates for USD" in result.output


def test_rates_convert_rejects_invalid_code(app):
    runner = app.test_cli_runner()

    result = runner.invoke(args=["rates", "convert", "10", "u$d", "gbp"])

    assert result.exit_code == 2
