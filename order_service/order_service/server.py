"""Order Service Server."""

from contextlib import asynccontextmanager

from confluent_kafka import KafkaException
from confluent_kafka.admin import AdminClient
from fastapi import APIRouter, FastAPI
from fastapi.responses import JSONResponse
from kafka_utils import declare_order_topic

from .backlog import fetch_queue_length
from .config import settings
from .errors import PublishError, UnsupportedDrinkError
from .logger import logger
from .producer import OrderProducer
from .schemas import ErrorResponse, OrderRequest, OrderResponse, QueueLength

UNSUPPORTED_DRINK_MESSAGE = "This is a coffee-only establishment ☕"
INTERNAL_ERROR_MESSAGE = "Internal server error"

producer = OrderProducer(settings.kafka_config(), publish_timeout=settings.publish_timeout_seconds)


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        declare_order_topic(AdminClient(settings.kafka_config()))
    except KafkaException as e:
        logger.warning(f"Could not declare order topic at startup: {e}")
    yield
    producer.close()


app = FastAPI(title="Order Service", lifespan=lifespan)
router = APIRouter()


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


@router.get("/health")
def health_check():
    """Check the health status of the service.

    Returns:
        dict: Contains Kafka connection status.
    """
    return {"kafka": _check_kafka_connection()}


@router.get("/health/ready")
def readiness_check():
    """Check if the service is ready to accept traffic.

    Returns:
        dict: Service readiness status and Kafka connection status.
    """
    kafka_ok = _check_kafka_connection()
    return {"status": "ready" if kafka_ok else "not_ready", "kafka": kafka_ok}


@router.post(
    "/order",
    status_code=202,
    response_model=OrderResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    tags=["Orders"],
)
def create_order(request: OrderRequest):
    """Accept a drink order and publish it for the machine.

    Args:
        request (OrderRequest): The drink to prepare.

    Returns:
        OrderResponse: The new order id once the broker has confirmed the event.
    """
    try:
        order_id = producer.submit(request.type)
    except UnsupportedDrinkError as e:
        logger.info(f"Rejected order: {e}")
        return _error(400, UNSUPPORTED_DRINK_MESSAGE)
    except PublishError as e:
        logger.error(f"Publish failed: {e}")
        return _error(500, INTERNAL_ERROR_MESSAGE)
    logger.info(f"Order published successfully: {order_id} ({request.type})")
    return OrderResponse(order_id=order_id)


@router.get(
    "/orders/queue-length",
    response_model=QueueLength,
    responses={500: {"model": ErrorResponse}},
    tags=["Orders"],
)
def get_queue_length():
    """Report how many orders are waiting for the machine."""
    try:
        pending = fetch_queue_length(settings.kafka_config(), settings.kafka_consumer_group)
    except KafkaException as e:
        logger.error(f"Queue length error: {e}")
        return _error(500, INTERNAL_ERROR_MESSAGE)
    return QueueLength(pending_coffee_orders=pending)


def _check_kafka_connection() -> bool:
    """Check if Kafka connection is available.

    Returns:
        bool: True if Kafka is accessible, False otherwise.
    """
    try:
        admin = AdminClient(settings.kafka_config())
        return bool(admin.list_topics(timeout=5))
    except KafkaException as e:
        logger.error(f"Kafka connection failed: {e}")
        return False


app.include_router(router)
logger.info("API router mounted.")
