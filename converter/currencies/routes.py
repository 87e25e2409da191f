"""Routes for the currency list."""

from __future__ import annotations

from flask import current_app
from flask.views import MethodView

from converter.errors import UpstreamError
from converter.schemas import CurrencyListSchema
from converter.services.repository import get_repository

from . import blp


@blp.route("")
class CurrencyList(MethodView):
    @blp.response(200, CurrencyListSchema())
    def get(self):
        result = get_repository(current_app).get_available_currency_codes()
        if not result.is_ok:
            raise UpstreamError(
                "Failed to load available currencies.",
                payload={"failure": result.kind.value},
            )
        return {"currencies": result.value}
