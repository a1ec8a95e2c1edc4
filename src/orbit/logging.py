"""Diagnostics for the orbit CLI.

Modules log through stdlib ``logging``; structlog renders every record on
stderr so stdout stays reserved for command output. Each command binds the
workspace root and its own name, which then appear on every line.
"""

import logging
import sys
from pathlib import Path
from typing import TextIO

import structlog


def _pre_chain() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]


def _renderer(json_output: bool) -> structlog.types.Processor:
    if json_output:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=False)


def configure_logging(
    level: str,
    *,
    json_output: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Route stdlib and structlog records through one stderr handler.

    Unknown level names fall back to WARNING.
    """
    pre_chain = _pre_chain()
    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(json_output),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.WARNING))


def bind_command(root: Path, command: str) -> None:
    """Replace the log context with the workspace root and command name."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(root=str(root), command=command)
