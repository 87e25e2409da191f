"""Currencies blueprint listing the codes the rate source knows."""

from __future__ import annotations

from flask_smorest import Blueprint

blp = Blueprint("Currencies", __name__, description="Available currency codes")

from . import routes  # noqa: E402,F401
