"""Route handlers for health checks."""

from __future__ import annotations

from flask import current_app
from flask.views import MethodView

from converter.schemas import HealthStatusSchema
from converter.services.repository import get_repository

from . import blp


@blp.route("")
class HealthStatus(MethodView):
    @blp.response(200, HealthStatusSchema())
    def get(self):
        repository = get_repository(current_app)
        return {
            "status": "ok",
            "app": current_app.config.get("APP_NAME", "currency-converter"),
            "source": repository.source_name,
        }
