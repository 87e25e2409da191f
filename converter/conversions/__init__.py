"""Conversions blueprint."""

from __future__ import annotations

from flask_smorest import Blueprint

blp = Blueprint("Conversions", __name__, description="Convert an amount between currencies")

from . import routes  # noqa: E402,F401
