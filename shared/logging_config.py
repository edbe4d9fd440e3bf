"""
logging_config.py - JSON Logging for the Storefront Client

PURPOSE:
    Provides structured JSON logging for the storefront core with timezone-aware
    timestamps and query-generation context, so stale/applied catalog responses
    can be traced in aggregated logs.

JSON LOG FIELDS:
    - timestamp: ISO 8601 with the configured timezone (e.g., "2026-10-19T09:12:03.114207+00:00")
    - level: Log level (INFO, ERROR, WARNING, DEBUG, CRITICAL)
    - logger: Module where the log originated (e.g., "storefront.query_controller")
    - message: The actual log message
    - service_name: Name of the embedding application (injected automatically)
    - generation: Optional catalog query generation the entry refers to
    - event_type: Optional event type being published on the event bus
    - exception: Full stack trace (only when exc_info is attached)

USAGE:
    from shared.logging_config import setup_logging
    setup_logging("storefront", level="INFO")

    logger = logging.getLogger(__name__)
    logger.info("Issued catalog query", extra={"generation": 3})

EXAMPLE JSON OUTPUT:
    {
        "timestamp": "2026-10-19T09:12:03.114207+00:00",
        "level": "DEBUG",
        "logger": "storefront.query_controller",
        "message": "Discarded stale catalog response",
        "service_name": "storefront",
        "generation": 2
    }
"""

import json
import logging
import sys
from datetime import datetime
from typing import Any, Dict
from zoneinfo import ZoneInfo

_HANDLER_NAME = "storefront-json"


class JsonFormatter(logging.Formatter):
    """Formatter that renders each record as one JSON object."""

    def __init__(self, tz_name: str = "UTC"):
        super().__init__()
        self.tz = ZoneInfo(tz_name)

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, self.tz).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if hasattr(record, "service_name"):
            log_data["service_name"] = record.service_name
        if hasattr(record, "generation"):
            log_data["generation"] = record.generation
        if hasattr(record, "event_type"):
            log_data["event_type"] = record.event_type

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class ServiceFilter(logging.Filter):
    """Stamps every record with the service name."""

    def __init__(self, service_name: str):
        super().__init__()
        self.service_name = service_name

    def filter(self, record: logging.LogRecord) -> bool:
        record.service_name = self.service_name
        return True


def setup_logging(service_name: str, level: str = "INFO", tz_name: str = "UTC") -> None:
    """Setup JSON logging on the root logger.

    Calling it again replaces the previously installed handler instead of
    stacking a second one.
    """
    root = logging.getLogger()
    root.setLevel(level)

    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(JsonFormatter(tz_name))
    # Filter on the handler so records from child loggers get the service name too
    handler.addFilter(ServiceFilter(service_name))
    root.addHandler(handler)
