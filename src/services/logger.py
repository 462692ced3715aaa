"""Structured JSON logging for the DoH responder."""

import logging
import sys
import uuid
from datetime import datetime, timezone
from typing import Any, Dict

from pythonjsonlogger import jsonlogger


# Per-process ID for correlating entries across replicas
INSTANCE_ID = str(uuid.uuid4())

# Third-party loggers routed through the JSON handler
_SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access", "httpx")


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter that adds instance_id and standardized fields."""

    def add_fields(
        self,
        log_record: Dict[str, Any],
        record: logging.LogRecord,
        message_dict: Dict[str, Any],
    ) -> None:
        """Add custom fields to log record.

        Args:
            log_record: The log record to modify.
            record: The original logging.LogRecord.
            message_dict: Additional fields from the logging call.
        """
        super().add_fields(log_record, record, message_dict)

        # Add timestamp in ISO 8601 format
        log_record["timestamp"] = datetime.now(timezone.utc).strftime(
            "%Y-%m-%dT%H:%M:%S.%fZ"
        )

        log_record["instance_id"] = INSTANCE_ID
        log_record["level"] = record.levelname
        log_record["logger"] = record.name


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Configure structured JSON logging for the application.

    Args:
        verbose: Log at DEBUG instead of INFO.

    Returns:
        logging.Logger: Configured root logger.
    """
    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    # Remove existing handlers to avoid duplicates
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    json_handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(message)s",
        timestamp=True,
    )
    json_handler.setFormatter(formatter)
    logger.addHandler(json_handler)

    # Let server and client libraries log through the root handler
    for name in _SERVER_LOGGERS:
        library_logger = logging.getLogger(name)
        library_logger.handlers = []
        library_logger.propagate = True
    logging.getLogger("httpx").setLevel(logging.WARNING)

    return logger


def log_dns_query(
    query_id: int,
    questions: list[str],
    answers: int,
    duration_ms: int,
) -> None:
    """Log structured per-request DoH result.

    Args:
        query_id: DNS transaction id.
        questions: Question names in the query.
        answers: Number of TXT answers returned.
        duration_ms: Processing time in milliseconds.
    """
    logger = logging.getLogger(__name__)
    logger.info(
        "DNS query answered",
        extra={
            "query_id": query_id,
            "questions": questions,
            "answers": answers,
            "duration_ms": duration_ms,
        },
    )


def log_upstream_failure(address: str, reason: str) -> None:
    """Log a failed abuse-contact lookup.

    The affected question is answered with no data.

    Args:
        address: Canonical address that was looked up.
        reason: Exception type and message, or response validation error.
    """
    logger = logging.getLogger(__name__)
    logger.warning(
        "Abuse-contact lookup failed",
        extra={
            "address": address,
            "reason": reason,
        },
    )
