# src/cfarag/logging_config.py
"""structlog configuration for the CLI and API server."""

import logging
import sys

import structlog
from structlog.contextvars import merge_contextvars


def configure_logging(level: str = "INFO", json_logs: bool = False) -> None:
    """Route structlog through stdlib logging on stderr.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ...)
        json_logs: Render JSON lines instead of the console format
    """
    log_level = getattr(logging, str(level or "INFO").upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logging.basicConfig(format="%(message)s", level=log_level, handlers=[handler], force=True)

    # LiteLLM and httpx are chatty at INFO
    for noisy in ("LiteLLM", "httpx"):
        logging.getLogger(noisy).setLevel(max(log_level, logging.WARNING))

    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    )

    structlog.configure(
        processors=[
            merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
