"""structlog setup for the résumé service and its CLI.

Every event is a snake_case name plus key/value context, e.g.
``resume_ingested name=... fragments=7``.  Local runs get a coloured console
line per event; with ``APP_ENV=production`` (or ``json_output=True``) each
event is one JSON object per line, ready for a log shipper.

Records emitted through the standard library (uvicorn access logs, httpx,
chromadb) go through the same processors so both kinds of output share one
format.  httpx and chromadb are held at WARNING because their INFO output
repeats every GitHub and OpenAI request.
"""

import logging
import os
import sys

import structlog

_CHATTY_LIBRARIES = ("httpx", "httpcore", "chromadb")


def _renderer(use_json: bool) -> structlog.types.Processor:
    if use_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


def configure_logging(log_level: str = "INFO", json_output: bool = False) -> structlog.BoundLogger:
    """Install the structlog pipeline and route stdlib logging through it.

    Args:
        log_level: Minimum level name, e.g. ``"INFO"`` for the server or
            ``"WARNING"`` for the CLI so progress lines stay readable.
        json_output: Emit JSON even outside production.

    Returns:
        The root structlog logger.
    """
    level_name = log_level.upper()
    use_json = json_output or os.environ.get("APP_ENV", "development") == "production"
    renderer = _renderer(use_json)

    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    structlog.configure(
        processors=[*pre_chain, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(level_name)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    stdlib_handler = logging.StreamHandler(sys.stdout)
    stdlib_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *pre_chain,
                renderer,
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(stdlib_handler)
    root.setLevel(level_name)
    for name in _CHATTY_LIBRARIES:
        logging.getLogger(name).setLevel(max(logging.WARNING, root.level))

    return structlog.get_logger()


def get_logger(name: str) -> structlog.BoundLogger:
    """Return a logger tagged with ``logger_name``, configuring defaults on first use."""
    if not structlog.is_configured():
        configure_logging()
    return structlog.get_logger(logger_name=name)
