"""
Observability helpers.

Configures process logging and wraps store operations with correlation IDs
and structured timing records.
"""

import sys
import time
import uuid
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from tracker.app.core.exceptions import ResourceNotFoundError

# Configure structured logger
logger = logging.getLogger("tracker")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: int = logging.INFO) -> None:
    """Send application logs to stdout using the shared format."""
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stdout)


@asynccontextmanager
async def track_operation(operation: str, **context) -> AsyncIterator[str]:
    """
    Time a storage operation and emit one structured log record for it.

    Yields the correlation ID assigned to the operation. Exceptions raised
    inside the block are logged and re-raised unchanged.
    """
    # 1. Generate Correlation ID
    correlation_id = str(uuid.uuid4())

    # 2. Start Timer
    start_time = time.monotonic()

    log_data = {"correlation_id": correlation_id, "operation": operation, **context}

    # 3. Run Operation
    try:
        yield correlation_id
    except Exception as exc:
        log_data["duration_ms"] = round((time.monotonic() - start_time) * 1000, 2)
        log_data["error"] = type(exc).__name__
        # Log level based on failure kind
        if isinstance(exc, ResourceNotFoundError):
            logger.warning("Store Operation Missed", extra=log_data)
        else:
            logger.error("Store Operation Failed", extra=log_data)
        raise

    # 4. Structured Log
    log_data["duration_ms"] = round((time.monotonic() - start_time) * 1000, 2)
    logger.debug("Store Operation", extra=log_data)
