"""Logger module for logging messages."""

from logging_utils.config import setup_service_logger

from .config import settings

logger = setup_service_logger(
    "order-service",
    log_level=settings.log_level,
    json_logs=settings.log_json,
)

__all__ = ["logger"]
