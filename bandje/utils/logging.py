"""Structured logging setup using structlog.

Implements a **dual-renderer pattern**: the same shared processor chain
(context vars, log level, timestamps, stack info) feeds into either a
coloured ConsoleRenderer for local development or a JSONRenderer for
production.  The renderer is selected from the ``APP_ENV`` environment
variable (default ``"development"``), or forced via the ``json_output`` flag.

Standard-library ``logging`` is rewired through the same structlog formatter
so uvicorn's access and error logs come out in the same format as the
application's own events.

# ─── LOGGER RESOLUTION ────────────────────────────────────────────────
#
# Every module holds a module-level ``_logger = get_logger(__name__)``.
# Those are lazy proxies, and they are NOT cached on first use: each call
# resolves against the *current* structlog configuration.  The dataset CLI
# relies on this: it reconfigures logging to stderr at WARNING after the
# service modules are imported, and their loggers must follow.
# ──────────────────────────────────────────────────────────────────────
"""

import logging
import os
import sys
from typing import TextIO

import structlog


def configure_logging(
    log_level: str = "INFO",
    json_output: bool = False,
    stream: TextIO | None = None,
) -> structlog.BoundLogger:
    """Configure structlog with environment-appropriate rendering.

    Args:
        log_level: Logging level string (DEBUG, INFO, WARNING, ERROR, FATAL).
        json_output: Force JSON output. When False, uses console rendering in
                     development and JSON in production (detected via APP_ENV).
        stream: Where log lines go.  ``None`` means stdout.  The CLI passes
                ``sys.stderr`` to keep stdout for command output.

    Returns:
        A configured structlog BoundLogger.
    """
    # "production" => machine-readable JSON; anything else => console.
    app_env = os.environ.get("APP_ENV", "development")
    use_json = json_output or app_env == "production"

    # Shared processor chain -- runs regardless of the output format.
    # contextvars first (request-scoped bindings), then level/timestamps,
    # then exception formatting.
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,  # Merge request-scoped context bindings
        structlog.processors.add_log_level,        # Inject "level" key
        structlog.processors.StackInfoRenderer(),  # Render stack_info if present
        structlog.dev.set_exc_info,                # Auto-attach exc_info on error()
        structlog.processors.TimeStamper(fmt="iso"),  # ISO-8601 timestamps
    ]

    # The final renderer is the only processor that differs between environments.
    if use_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        # No colour codes when writing to a redirected stream (CLI, pipes).
        renderer = structlog.dev.ConsoleRenderer(colors=stream is None)

    structlog.configure(
        processors=[
            *shared_processors,
            renderer,
        ],
        # Drops messages below log_level BEFORE the processor chain runs.
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(log_level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        # See LOGGER RESOLUTION above.
        cache_logger_on_first_use=False,
    )

    # Bridge stdlib logging (uvicorn, starlette) through the same pipeline.
    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *shared_processors,
            renderer,
        ],
    )

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()   # Remove default handlers to avoid duplicates
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level.upper())

    return structlog.get_logger()


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a named structlog logger.

    If structlog has not been configured yet, calls configure_logging() with defaults.

    Args:
        name: Logger name, typically the module name.

    Returns:
        A structlog BoundLogger bound with the given name.
    """
    if not structlog.is_configured():
        configure_logging()

    return structlog.get_logger(logger_name=name)
