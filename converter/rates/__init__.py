"""Rates blueprint exposing latest and historical exchange rates."""

from __future__ import annotations

from flask_smorest import Blueprint

blp = Blueprint("Rates", __name__, description="Exchange rates for a base currency")

from . import routes  # noqa: E402,F401
