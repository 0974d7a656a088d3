"""Pydantic schemas for orders.

This module exposes the request/response schemas used by the orders API.
Field names are snake_case in Python and camelCase on the wire.
"""

from dataclasses import asdict
from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel

from .domain import Order

TWO_PLACES = Decimal("0.01")


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreateOrderDTO(CamelModel):
    """Schema for creating an order.

    Unknown fields (including ``orderId``, which is always generated) are
    ignored. Blank optional strings are stored as missing values.

    Attributes:
        order_number: Client business key, required.
        amount: Non-negative amount with at most two decimal places.
        currency: Currency code, normalized to uppercase.
        payment_due_date: ISO date (``YYYY-MM-DD``).
    """

    order_number: str = Field(min_length=1, max_length=64)
    payment_description: str | None = Field(default=None, max_length=255)
    street: str | None = Field(default=None, max_length=255)
    town: str | None = Field(default=None, max_length=255)
    country: str | None = Field(default=None, max_length=128)
    amount: Decimal | None = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    currency: str | None = Field(default=None, max_length=3)
    payment_due_date: date | None = None

    @field_validator("order_number")
    @classmethod
    def strip_order_number(cls, v: str) -> str:
        v2 = v.strip()
        if not v2:
            raise ValueError("orderNumber must not be blank")
        return v2

    @field_validator("payment_description", "street", "town", "country", "currency", "payment_due_date", "amount", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("currency")
    @classmethod
    def upper_currency(cls, v: str | None) -> str | None:
        return v.upper() if v else v

    def to_domain(self) -> Order:
        """Build the domain ``Order`` the service will create."""
        return Order(**self.model_dump())


class OrderReadDTO(CamelModel):
    """Schema for returning an order.

    ``amount`` is rendered as a string with exactly two decimals.
    """

    id: int
    order_id: str
    order_number: str | None = None
    payment_description: str | None = None
    street: str | None = None
    town: str | None = None
    country: str | None = None
    amount: Decimal | None = None
    currency: str | None = None
    payment_due_date: date | None = None
    created_at: datetime
    updated_at: datetime

    @field_serializer("amount")
    def serialize_amount(self, v: Decimal | None) -> str | None:
        return None if v is None else str(v.quantize(TWO_PLACES))

    @classmethod
    def from_domain(cls, order: Order) -> "OrderReadDTO":
        return cls.model_validate(asdict(order))

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
