"""Schemas for machine service data models."""

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class DrinkType(str, Enum):
    """Drinks the machine knows how to make."""

    ESPRESSO = "espresso"
    COFFEE = "coffee"
    CAPPUCCINO = "cappuccino"


class OrderOutcome(str, Enum):
    """Outcome of the last processed order."""

    NONE = "none"
    DONE = "done"


class OrderMessage(BaseModel):
    """An order event consumed from the ``order.placed`` topic.

    The drink type stays a plain string here: a well-formed event for an
    unknown drink is acknowledged as a failed fulfillment, not discarded as
    malformed.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    order_id: str = Field(..., min_length=1)
    drink_type: str = Field(..., alias="type")
    timestamp: datetime


class Stock(BaseModel):
    """Stock reported by the Inventory Service."""

    beans: int = Field(..., ge=0)
    milk: int = Field(..., ge=0)


class MachineStatus(BaseModel):
    """The single status slot describing the most recently completed order."""

    model_config = ConfigDict(frozen=True)

    ready: bool = True
    last_order_id: str = ""
    last_drink_type: str = ""
    last_outcome: OrderOutcome = OrderOutcome.NONE
    completed_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class LastOrder(BaseModel):
    """Details of the most recent processed order in the status response."""

    order_id: str
    type: str
    status: OrderOutcome
    finished_at: datetime


class StatusResponse(BaseModel):
    """JSON structure returned by ``GET /status``."""

    ready: bool
    last_order: LastOrder

    @classmethod
    def from_status(cls, status: MachineStatus) -> "StatusResponse":
        """Build the response from a status snapshot."""
        return cls(
            ready=status.ready,
            last_order=LastOrder(
                order_id=status.last_order_id,
                type=status.last_drink_type,
                status=status.last_outcome,
                finished_at=status.completed_at,
            ),
        )
