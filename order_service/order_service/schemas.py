"""Pydantic models for order requests and order events."""

import uuid
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .errors import UnsupportedDrinkError


class DrinkType(str, Enum):
    """Drinks the machine knows how to make."""

    ESPRESSO = "espresso"
    COFFEE = "coffee"
    CAPPUCCINO = "cappuccino"

    @classmethod
    def parse(cls, value: str) -> "DrinkType":
        """Return the drink named by ``value``.

        Raises:
            UnsupportedDrinkError: If ``value`` is not on the menu.
        """
        try:
            return cls(value)
        except ValueError:
            raise UnsupportedDrinkError(value) from None


class OrderRequest(BaseModel):
    """Body of ``POST /order``.

    The drink type is kept as a plain string so an unknown drink is reported
    as a menu rejection rather than a schema error.
    """

    type: str = Field(..., description="Drink to prepare")

    model_config = ConfigDict(json_schema_extra={"properties": {"type": {"example": "cappuccino"}}})


class OrderEvent(BaseModel):
    """An order placed on the ``order.placed`` topic.

    Attributes:
        order_id (str): Unique order identifier, a random UUID.
        drink_type (DrinkType): Drink to prepare, serialized as ``type``.
        timestamp (datetime): When the order was placed, in UTC.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    order_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    drink_type: DrinkType = Field(..., alias="type")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def to_json(self) -> str:
        """Serialize to the wire format ``{order_id, type, timestamp}``."""
        return self.model_dump_json(by_alias=True)


class OrderResponse(BaseModel):
    """Response for an accepted order."""

    message: str = "Order received"
    order_id: str


class ErrorResponse(BaseModel):
    """Error payload returned on rejected requests."""

    error: str


class QueueLength(BaseModel):
    """Number of orders waiting for the machine."""

    pending_coffee_orders: int
