"""Routes for fetching exchange rates."""

from __future__ import annotations

from flask import current_app
from flask.views import MethodView

from converter.errors import UpstreamError
from converter.schemas import RatesQuerySchema, RatesResponseSchema
from converter.services.repository import get_repository
from converter.validation import validate_currency_code, validate_rate_date

from . import blp


@blp.route("/<string:base>")
class Rates(MethodView):
    @blp.arguments(RatesQuerySchema, location="query")
    @blp.response(200, RatesResponseSchema())
    def get(self, query, base):
        base_code = validate_currency_code(base, field="base")
        repository = get_repository(current_app)

        rate_date = query.get("date")
        if rate_date is None:
            result = repository.get_latest_exchange_rates(base_code)
        else:
            rate_date = validate_rate_date(rate_date)
            result = repository.get_historical_exchange_rates(rate_date, base_code)

        if not result.is_ok:
            raise UpstreamError(
                f"Failed to load exchange rates for {base_code}. Please try again later.",
                payload={"failure": result.kind.value},
            )

        return {
            "base": base_code,
            "date": result.date or rate_date,
            "rates": [rate.to_dict() for rate in result.value],
        }
