"""Pydantic models for the Inventory Service."""

from pydantic import BaseModel, ConfigDict, Field


class StockLevel(BaseModel):
    """Current stock of each ingredient.

    Attributes:
        beans (int): Units of coffee beans available.
        milk (int): Units of milk available.
    """

    model_config = ConfigDict(frozen=True)

    beans: int = Field(..., ge=0)
    milk: int = Field(..., ge=0)


class InventoryUpdate(BaseModel):
    """Quantities to add or remove; missing fields count as zero."""

    beans: int | None = Field(None, ge=0, le=4_294_967_295)
    milk: int | None = Field(None, ge=0, le=4_294_967_295)

    model_config = ConfigDict(
        json_schema_extra={
            "properties": {
                "beans": {"example": 4},
                "milk": {"example": 2},
            }
        }
    )

    @property
    def is_empty(self) -> bool:
        """True when neither ingredient carries a non-zero quantity."""
        return not (self.beans or self.milk)


class UpdateResponse(BaseModel):
    """Response for a successful refill or reservation."""

    message: str = "Inventory updated"
    beans: int
    milk: int


class ErrorResponse(BaseModel):
    """Error payload returned on rejected requests."""

    error: str
