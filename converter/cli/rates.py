"""CLI commands for fetching rates and converting amounts."""

from __future__ import annotations

import click
from flask import current_app
from flask.cli import AppGroup

from converter.errors import ValidationError
from converter.services.coordinator import ConverterCoordinator
from converter.services.repository import get_repository
from converter.validation import validate_currency_code, validate_rate_date

rates_cli = AppGroup("rates", help="Fetch exchange rates and convert amounts.")


def _validated_code(value: str, field: str) -> str:
    try:
        return validate_currency_code(value, field=field)
    except ValidationError as exc:
        raise click.BadParameter(exc.message, param_hint=field) from exc


@rates_cli.command("latest")
@click.argument("base")
@click.option("--date", "rate_date", default=None, help="Historical date (YYYY-MM-DD).")
def latest(base: str, rate_date: str | None) -> None:
    """Print the exchange rates quoted against BASE."""

    base_code = _validated_code(base, "base")
    repository = get_repository(current_app)
    if rate_date is None:
        result = repository.get_latest_exchange_rates(base_code)
    else:
        try:
            rate_date = validate_rate_date(rate_date)
        except ValidationError as exc:
            raise click.BadParameter(exc.message, param_hint="--date") from exc
        result = repository.get_historical_exchange_rates(rate_date, base_code)

    if not result.is_ok:
        raise click.ClickException(f"Failed to load exchange rates for {base_code}.")

    for rate in result.value:
        click.echo(f"{rate.base_currency.code}/{rate.target_currency.code} {rate.rate}")


@rates_cli.command("currencies")
def currencies() -> None:
    """Print every currency code the rate source knows."""

    result = get_repository(current_app).get_available_currency_codes()
    if not result.is_ok:
        raise click.ClickException("Failed to load available currencies.")
    click.echo(" ".join(result.value))


@rates_cli.command("convert")
@click.argument("amount")
@click.argument("base")
@click.argument("target")
def convert_amount(amount: str, base: str, target: str) -> None:
    """Convert AMOUNT from BASE into TARGET using the latest rates."""

    coordinator = ConverterCoordinator(
        get_repository(current_app),
        base=_validated_code(base, "base"),
        target=_validated_code(target, "target"),
        amount=amount,
    )
    coordinator.fetch_latest_rates(coordinator.selected_base)
    if coordinator.error:
        raise click.ClickException(coordinator.error)

    click.echo(
        f"{coordinator.amount} {coordinator.selected_base} = "
        f"{coordinator.result} {coordinator.selected_target}"
    )
