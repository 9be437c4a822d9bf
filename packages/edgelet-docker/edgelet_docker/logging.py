"""edgelet-docker logging.

structlog events are routed through the stdlib root logger so that engine
records and third-party records share one formatter.  While a runtime call
is in flight its ``operation`` and ``target`` are added to every event.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any

import structlog
from structlog.types import EventDict, WrappedLogger

# Bound by operation_context, read by _inject_context_vars.
_ctx_operation: ContextVar[str | None] = ContextVar("operation", default=None)
_ctx_target: ContextVar[str | None] = ContextVar("target", default=None)


@contextmanager
def operation_context(operation: str, target: str | None = None) -> Iterator[None]:
    """Bind the current runtime operation to every record logged inside the block."""
    op_token = _ctx_operation.set(operation)
    target_token = _ctx_target.set(target)
    try:
        yield
    finally:
        _ctx_target.reset(target_token)
        _ctx_operation.reset(op_token)


# ---------------------------------------------------------------------------
# Custom processors
# ---------------------------------------------------------------------------


def _inject_context_vars(
    _logger: WrappedLogger, _method: str, event_dict: EventDict
) -> EventDict:
    """Copy the in-flight operation and target onto *event_dict*."""
    if (operation := _ctx_operation.get()) is not None:
        event_dict.setdefault("operation", operation)
    if (target := _ctx_target.get()) is not None:
        event_dict.setdefault("target", target)
    return event_dict


# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------


def configure_logging(
    level: str = "info",
    format: str = "console",
    log_file: str | None = None,
) -> None:
    """Route runtime logs to stdout (and *log_file*, if given).

    *format* is ``"json"`` or ``"console"``; anything else renders as console.
    Replaces the root logger handlers, so call it once per process.
    """
    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        _inject_context_vars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if format == "json":
        renderer: Any = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    for handler in handlers:
        handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers = handlers
    root.setLevel(level.upper())

    # Request-level chatter from the HTTP stack.
    for noisy in ("httpx", "httpcore", "asyncio"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Module-level logger; events are snake_case, e.g. ``module_created``."""
    return structlog.get_logger(name)
