"""Routes for currency conversion."""

from __future__ import annotations

from flask import current_app
from flask.views import MethodView

from converter.errors import NotFoundError, UpstreamError
from converter.models import Currency
from converter.schemas import ConversionResultSchema, ConvertRequestSchema
from converter.services.coordinator import format_amount
from converter.services.fx_conversion import convert
from converter.services.repository import get_repository
from converter.validation import validate_currency_code

from . import blp


@blp.route("")
class Conversion(MethodView):
    @blp.arguments(ConvertRequestSchema)
    @blp.response(200, ConversionResultSchema())
    def post(self, data):
        base = Currency(validate_currency_code(data.get("base"), field="base"))
        target = Currency(validate_currency_code(data.get("target"), field="target"))

        result = get_repository(current_app).get_latest_exchange_rates(base.code)
        if not result.is_ok:
            raise UpstreamError(
                f"Failed to load exchange rates for {base.code}. Please try again later.",
                payload={"failure": result.kind.value},
            )

        conversion = convert(data["amount"], base, target, result.value)
        if conversion is None:
            raise NotFoundError(
                f"No exchange rate available for {base.code}/{target.code}.",
                payload={"base": base.code, "target": target.code},
            )

        return {
            "amount": conversion.amount,
            "base": conversion.base_currency.code,
            "converted_amount": conversion.converted_amount,
            "target": conversion.target_currency.code,
            "rate": conversion.exchange_rate,
            "display": format_amount(conversion.converted_amount),
        }
