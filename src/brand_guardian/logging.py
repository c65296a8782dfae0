"""
Privacy-first logging configuration for Brand Guardian.

Evaluated content is customer copy and must never be written to logs. Log
events carry metadata only (lengths, scores, risk levels, identifiers); the
processor and filter below strip any raw text that slips into an event.
"""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional, cast

import structlog
from structlog.types import FilteringBoundLogger

REDACTED = "[REDACTED]"

SENSITIVE_KEYS = frozenset(
    {
        "content",
        "text",
        "raw_text",
        "normalized_text",
        "enriched_text",
        "original_text",
        "user_input",
    }
)


class PrivacyFilter(logging.Filter):
    """
    Filter that prevents stdlib log records from carrying raw content.

    Records whose ``extra`` fields use a sensitive key are dropped entirely.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        for key in record.__dict__.keys():
            if key.lower() in SENSITIVE_KEYS:
                return False
        return True


class ContentRedactionProcessor:
    """
    Structlog processor that redacts sensitive fields from an event.

    Keys are kept so operators can see that a field was present; values
    are replaced with a placeholder.
    """

    def __call__(
        self, logger: FilteringBoundLogger, method_name: str, event_dict: Dict[str, Any]
    ) -> Dict[str, Any]:
        for key in list(event_dict.keys()):
            if key.lower() in SENSITIVE_KEYS:
                event_dict[key] = REDACTED
        return event_dict


def setup_logging(
    log_level: str = "INFO",
    log_format: str = "json",
    log_file: Optional[str] = None,
    enable_privacy_filter: bool = True,
) -> None:
    """
    Set up privacy-first logging configuration.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Log format (json, console)
        log_file: Optional log file path
        enable_privacy_filter: Whether to redact raw content fields
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if enable_privacy_filter:
        processors.append(ContentRedactionProcessor())

    if log_format == "json":
        processors.extend(
            [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
        )
    else:
        processors.extend([structlog.dev.ConsoleRenderer(colors=False)])

    structlog.configure(
        processors=processors,  # type: ignore[arg-type]
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handlers: list[logging.Handler] = []

    # Logs go to stderr so CLI output on stdout stays machine readable
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    if enable_privacy_filter:
        console_handler.addFilter(PrivacyFilter())

    if log_format == "json":
        console_formatter = logging.Formatter(
            '{"timestamp": "%(asctime)s", "level": "%(levelname)s", '
            '"logger": "%(name)s", "message": "%(message)s"}'
        )
    else:
        console_formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
    console_handler.setFormatter(console_formatter)
    handlers.append(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(level)
        if enable_privacy_filter:
            file_handler.addFilter(PrivacyFilter())
        file_handler.setFormatter(console_formatter)
        handlers.append(file_handler)

    logging.basicConfig(level=level, handlers=handlers, format="%(message)s", force=True)


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a privacy-aware structured logger.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger
    """
    return cast(FilteringBoundLogger, structlog.get_logger(name))


__all__ = [
    "PrivacyFilter",
    "ContentRedactionProcessor",
    "REDACTED",
    "SENSITIVE_KEYS",
    "setup_logging",
    "get_logger",
]
