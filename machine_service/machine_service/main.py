"""Main entry point for the Machine Service."""

import uvicorn

from machine_service.config import settings
from machine_service.server import app

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=settings.service_port)
