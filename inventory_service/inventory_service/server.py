"""FastAPI entry point for the Inventory Service."""

from fastapi import APIRouter, FastAPI
from fastapi.responses import JSONResponse

from .config import settings
from .ledger import InventoryLedger, LedgerError
from .logger import logger
from .schemas import ErrorResponse, InventoryUpdate, StockLevel, UpdateResponse

app = FastAPI(title="Inventory Service")
router = APIRouter(tags=["Inventory"])

ledger = InventoryLedger(beans=settings.initial_beans, milk=settings.initial_milk)


def _error(message: str) -> JSONResponse:
    return JSONResponse(status_code=400, content=ErrorResponse(error=message).model_dump())


@router.get("/health")
def health_check():
    """Basic health check endpoint."""
    return {"status": "healthy"}


@router.get("/fill", response_model=StockLevel)
def get_fill():
    """Return current inventory levels."""
    return ledger.read()


@router.put("/fill", response_model=UpdateResponse, responses={400: {"model": ErrorResponse}})
def put_fill(update: InventoryUpdate):
    """Refill beans and/or milk.

    Args:
        update (InventoryUpdate): Quantities to add.

    Returns:
        UpdateResponse: New stock, or a 400 error on an empty update or overflow.
    """
    if update.is_empty:
        return _error("No values to update")
    try:
        stock = ledger.refill(beans=update.beans or 0, milk=update.milk or 0)
    except LedgerError as e:
        logger.warning(f"Refill rejected: {e}")
        return _error(str(e))
    logger.info(f"Inventory refilled: {stock.beans} beans, {stock.milk} milk")
    return UpdateResponse(beans=stock.beans, milk=stock.milk)


@router.delete("/fill", response_model=UpdateResponse, responses={400: {"model": ErrorResponse}})
def del_fill(update: InventoryUpdate):
    """Reserve beans and/or milk for an order.

    Args:
        update (InventoryUpdate): Quantities to remove.

    Returns:
        UpdateResponse: New stock, or a 400 error on an empty update or underflow.
    """
    if update.is_empty:
        return _error("No values to update")
    try:
        stock = ledger.reserve(beans=update.beans or 0, milk=update.milk or 0)
    except LedgerError as e:
        logger.warning(f"Reservation rejected: {e}")
        return _error(str(e))
    logger.info(f"Inventory reserved: {stock.beans} beans, {stock.milk} milk remaining")
    return UpdateResponse(beans=stock.beans, milk=stock.milk)


app.include_router(router)
logger.info("API router mounted.")
