# san_notation/utils/logging_config.py
"""
Routes structlog events and standard library records (python-chess logs
through `logging`) to stderr and, optionally, to a JSON lines file.

Stdout is never used, so command output stays machine readable even at
DEBUG level.
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional

import structlog
from structlog.types import Processor

_PRE_CHAIN: List[Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.TimeStamper(fmt="iso", utc=True),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.UnicodeDecoder(),
]


def _formatter(renderer: Processor) -> structlog.stdlib.ProcessorFormatter:
    return structlog.stdlib.ProcessorFormatter(foreign_pre_chain=_PRE_CHAIN, processor=renderer)


def setup_logging(
    log_level: str = "WARNING",
    log_file: Optional[Path] = None,
    force_json_console: bool = False,
) -> None:
    """
    Installs the stderr handler, plus a file handler when `log_file` is set,
    on the root logger, replacing any handlers from an earlier call.

    Args:
        log_level: Name of the root log level, case-insensitive.
        log_file: File that receives every record as one JSON object per line.
        force_json_console: Render stderr records as JSON instead of the
            human-readable console format.
    """
    structlog.configure(
        processors=[*_PRE_CHAIN, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    console_renderer: Processor = (
        structlog.processors.JSONRenderer()
        if force_json_console
        else structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    )
    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(_formatter(console_renderer))
    handlers: List[logging.Handler] = [stderr_handler]

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(_formatter(structlog.processors.JSONRenderer()))
        handlers.append(file_handler)

    logging.basicConfig(handlers=handlers, level=log_level.upper(), force=True)
