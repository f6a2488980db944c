# src/quickprop/core/logging.py
"""Structured logging configuration for quickprop.

The engine emits DEBUG events (run start, shrink progress, outcome) and
INFO events (self-initialised seeds, laws or shrinkers that raised).
Runners decide how loud the output is by calling ``configure_logging``;
modules log through ``structlog.get_logger(__name__)``.

Both structlog and stdlib records are rendered by one
``ProcessorFormatter`` so the output format is the same whichever API a
module uses. Output goes to stderr by default: stdout belongs to the
console and TAP reporters.
"""

import logging
import sys
from typing import Any, TextIO

import structlog
from structlog.stdlib import ProcessorFormatter

SHARED_PROCESSORS: tuple[Any, ...] = (
    structlog.contextvars.merge_contextvars,
    structlog.processors.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.StackInfoRenderer(),
)


def _drop_formatter_bookkeeping(
    logger: logging.Logger | None,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    # Always added by ProcessorFormatter
    del event_dict["_record"]
    del event_dict["_from_structlog"]
    return event_dict


def _render_chain(json_output: bool) -> list[Any]:
    if json_output:
        return [
            _drop_formatter_bookkeeping,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    return [_drop_formatter_bookkeeping, structlog.dev.ConsoleRenderer(colors=False)]


def _parse_level(level: str) -> int:
    log_level = logging.getLevelNamesMapping().get(level.upper())
    if log_level is None:
        raise ValueError(f"Unknown log level: {level!r}")
    return log_level


def configure_logging(
    *,
    json_output: bool = False,
    level: str = "WARNING",
    stream: TextIO | None = None,
) -> None:
    """Route structlog and stdlib logging through one formatter.

    Args:
        json_output: One JSON object per event instead of console lines.
        level: Level name (DEBUG, INFO, WARNING, ERROR), any case.
        stream: Destination, stderr when None.

    Raises:
        ValueError: If level is not a known logging level name.
    """
    log_level = _parse_level(level)

    structlog.configure(
        processors=[*SHARED_PROCESSORS, ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Off so tests can reconfigure
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(
        ProcessorFormatter(
            processors=_render_chain(json_output),
            foreign_pre_chain=list(SHARED_PROCESSORS),
        )
    )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(log_level)
