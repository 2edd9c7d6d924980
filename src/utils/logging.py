"""structlog configuration for the media pipeline.

One processor chain (context vars, level, stack info, ISO timestamp) feeds
one of two renderers: a coloured console renderer while developing, or a
JSON renderer in production.  ``app_env`` picks the renderer; when it is not
passed, ``APP_ENV`` from the environment is used.

Stdlib ``logging`` records (httpx, Pillow) are formatted by the same chain,
so every line on stdout has the same shape.
"""

import logging
import os
import sys

import structlog

_QUIET_LIBRARIES = ("httpx", "httpcore", "PIL")


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]


def _renderer(use_json: bool) -> structlog.types.Processor:
    if use_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=True)


def configure_logging(
    log_level: str = "INFO",
    json_output: bool = False,
    app_env: str | None = None,
) -> structlog.BoundLogger:
    """Configure structlog and route stdlib logging through it.

    Args:
        log_level: DEBUG, INFO, WARNING or ERROR.
        json_output: Force the JSON renderer.
        app_env: ``"production"`` selects JSON.  Defaults to ``APP_ENV``.

    Returns:
        A configured structlog BoundLogger.
    """
    level_name = log_level.upper()
    env = app_env if app_env is not None else os.environ.get("APP_ENV", "development")
    processors = _shared_processors()
    renderer = _renderer(json_output or env == "production")

    structlog.configure(
        processors=[*processors, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(level_name)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *processors,
                renderer,
            ],
        )
    )
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level_name)

    # One INFO line per HTTP request (and Pillow plugin chatter) unless debugging.
    if level_name != "DEBUG":
        for name in _QUIET_LIBRARIES:
            logging.getLogger(name).setLevel(logging.WARNING)

    return structlog.get_logger()


def get_logger(name: str) -> structlog.BoundLogger:
    """Return a structlog logger bound to *name*.

    Falls back to the default configuration when nothing has configured
    structlog yet.
    """
    if not structlog.is_configured():
        configure_logging()

    return structlog.get_logger(logger_name=name)
