"""
Logging setup
"""

import logging
import sys

import structlog

from wifi_portal.core.config import settings


def configure_logging(level: str = None):
    """Configure structlog over stdlib logging"""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=(level or settings.LOG_LEVEL).upper(),
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer()
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
