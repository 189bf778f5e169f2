"""FastAPI entry point for the Machine Service."""

import threading
from contextlib import asynccontextmanager

from fastapi import FastAPI

from .config import settings
from .consumer import ConsumerState, OrderConsumer
from .fulfillment import Fulfiller
from .inventory_client import InventoryClient
from .logger import logger
from .schemas import StatusResponse
from .status import StatusTracker

status_tracker = StatusTracker()
fulfiller = Fulfiller(
    InventoryClient(settings.inventory_service_url, timeout=settings.inventory_timeout_seconds),
    status_tracker,
    preparation_seconds=settings.preparation_seconds,
)
order_consumer = OrderConsumer(
    settings.kafka_config(),
    settings.kafka_consumer_group,
    fulfiller,
    retry_base=settings.retry_base_seconds,
    retry_max=settings.retry_max_seconds,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    consumer_thread = threading.Thread(target=order_consumer.run, name="order-consumer", daemon=True)
    consumer_thread.start()
    logger.info("Consumer thread started")
    yield
    # Shutdown: let an order being brewed finish before exiting
    order_consumer.stop()
    consumer_thread.join(timeout=settings.preparation_seconds + settings.inventory_timeout_seconds * 2 + 5)
    logger.info("Shutdown complete")


app = FastAPI(title="Machine Service", lifespan=lifespan)


@app.get("/health")
async def health_check():
    """Basic health check endpoint."""
    return {"status": "healthy", "consumer": order_consumer.state.value}


@app.get("/health/ready")
async def readiness_check():
    """Ready while the consumer is attached to the order topic."""
    if order_consumer.state in (ConsumerState.SUBSCRIBED, ConsumerState.PROCESSING):
        return {"status": "ready", "kafka": "connected"}
    return {"status": "not ready", "kafka": order_consumer.state.value}


@app.get("/status", response_model=StatusResponse, tags=["Status"])
async def get_status():
    """Current status of the machine and its last completed order."""
    return StatusResponse.from_status(status_tracker.snapshot())
