"""structlog setup for the ``mosaicpods`` command line.

Everything logs through the stdlib ``logging`` module (registry reloads
and load problems, template fallbacks, dropped definition keys).  This
module routes those records, and any structlog events, through one
stderr handler so stdout stays reserved for command results.

Levels for the ``mosaicpods`` logger tree:

==============  =========
``--verbose``   DEBUG
default         WARNING
``--quiet``     ERROR
==============  =========

Third-party loggers stay at WARNING in every mode.
"""

from __future__ import annotations

import logging
import sys

import structlog

PACKAGE_LOGGER = "mosaicpods"

_SHARED_PROCESSORS: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
]


def package_level(*, verbose: bool = False, quiet: bool = False) -> int:
    """Level for the ``mosaicpods`` loggers; verbose wins over quiet."""
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.ERROR
    return logging.WARNING


def _stderr_handler(*, log_json: bool) -> logging.Handler:
    renderer: structlog.types.Processor
    if log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_SHARED_PROCESSORS,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )
    return handler


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    log_json: bool = False,
) -> None:
    """Install the stderr handler and set the package log level.

    Safe to call more than once: the root handler is replaced, not added.

    Args:
        verbose: Show DEBUG records from mosaicpods.
        quiet: Only show ERROR records from mosaicpods.
        log_json: Emit one JSON object per record instead of console lines.
    """
    structlog.configure(
        processors=[
            *_SHARED_PROCESSORS,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(_stderr_handler(log_json=log_json))
    root.setLevel(logging.WARNING)

    logging.getLogger(PACKAGE_LOGGER).setLevel(package_level(verbose=verbose, quiet=quiet))
