"""
Structured logging setup for the API, the Lambda entrypoint and local tools.

PURPOSE:
- Configure consistent JSON-formatted logs so every process writes the same shape.
- Logs go to stdout; uvicorn, Lambda and Streamlit all capture it.

CONTEXT:
- Relies on structlog to enrich logs with timestamps, level and service metadata.
- User free text is never passed to the logger; callers log its length instead.
"""

from __future__ import annotations
import logging
import os
import sys
import structlog

SERVICE_NAME = "SmartAdvisor"


def configure_logging(service: str = SERVICE_NAME):
    """
    Configure structured JSON logging for the current process.

    returns:
    - structlog.BoundLogger – logger bound with service and env metadata.

    behaviour:
    - Reads log level from LOG_LEVEL (default INFO).
    - Renders each event as one JSON line, e.g.

      {"event": "recommendation.fallback", "level": "warning",
       "timestamp": "2026-10-17T09:00:00Z", "service": "SmartAdvisor",
       "env": "dev", "error": "ProviderError: ..."}
    """
    level = os.getenv("LOG_LEVEL", "INFO").upper()

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level, logging.INFO),
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    return structlog.get_logger().bind(service=service, env=os.getenv("ENV", "dev"))
