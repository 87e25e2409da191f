"""Schemas for API requests and responses."""

from __future__ import annotations

from marshmallow import Schema, fields


class HealthStatusSchema(Schema):
    status = fields.String(required=True)
    app = fields.String()
    source = fields.String()


class CurrencyListSchema(Schema):
    currencies = fields.List(fields.String(), required=True)


class ExchangeRateSchema(Schema):
    base = fields.String(required=True)
    target = fields.String(required=True)
    rate = fields.Decimal(required=True, as_string=True)


class RatesQuerySchema(Schema):
    date = fields.String(load_default=None)


class RatesResponseSchema(Schema):
    base = fields.String(required=True)
    date = fields.String(allow_none=True)
    rates = fields.List(fields.Nested(ExchangeRateSchema), required=True)


class ConvertRequestSchema(Schema):
    amount = fields.Decimal(required=True)
    base = fields.String(required=True)
    target = fields.String(required=True)


class ConversionResultSchema(Schema):
    amount = fields.Decimal(required=True, as_string=True)
    base = fields.String(required=True)
    converted_amount = fields.Decimal(required=True, as_string=True)
    target = fields.String(required=True)
    rate = fields.Decimal(required=True, as_string=True)
    display = fields.String(required=True)


class ErrorMessageSchema(Schema):
    message = fields.String(required=True)
