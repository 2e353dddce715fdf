"""
structlog setup
- development: coloured console output
- production: one JSON object per line
"""
import logging
import sys

import structlog


def setup_logging(env='development', level=logging.INFO):
    """Configure structlog. Each call replaces the previous configuration,
    including for module-level loggers that have already logged.

    The stdlib root handler is only installed by the first call in a process.
    """
    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt='iso'),
        structlog.processors.StackInfoRenderer(),
    ]

    if env == 'production':
        shared_processors.append(structlog.processors.JSONRenderer())
    else:
        shared_processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=shared_processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )

    # werkzeug request lines go through the same stream
    logging.basicConfig(format='%(message)s', stream=sys.stdout, level=level)
