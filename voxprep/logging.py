"""Logging setup for voxprep.

Every module logs through ``get_logger(component)``; events are snake_case
names with keyword fields (``capture_started``, ``vad_calibrated``, ...).
structlog renders them through the stdlib root logger, either as coloured
console lines or as JSON lines, always on stderr so that command output on
stdout can be piped.

Environment:
    VOXPREP_LOG_FORMAT: ``console`` (default) or ``json``.
    VOXPREP_LOG_LEVEL: DEBUG, INFO (default), WARNING or ERROR.
"""

from __future__ import annotations

import logging
import os
import sys

import structlog

_FORMAT_ENV = "VOXPREP_LOG_FORMAT"
_LEVEL_ENV = "VOXPREP_LOG_LEVEL"

_configured = False


def _renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def configure_logging(
    log_format: str | None = None,
    level: str | None = None,
    *,
    force: bool = False,
) -> None:
    """Install the structlog pipeline on the root logger.

    Runs once per process; ``get_logger`` triggers it with the environment
    defaults. The CLI passes ``force=True`` to apply ``--log-level`` and
    ``--log-format`` on top.

    Args:
        log_format: ``json`` or ``console``. Falls back to VOXPREP_LOG_FORMAT.
        level: Level name. Falls back to VOXPREP_LOG_LEVEL; unknown names mean INFO.
        force: Replace an existing configuration.
    """
    global _configured
    if _configured and not force:
        return

    log_format = log_format or os.environ.get(_FORMAT_ENV, "console")
    level = level or os.environ.get(_LEVEL_ENV, "INFO")

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_format),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    _configured = True


def get_logger(component: str) -> structlog.stdlib.BoundLogger:
    """Logger with ``component`` bound, e.g. ``get_logger("capture.session")``."""
    configure_logging()
    return structlog.get_logger().bind(component=component)  # type: ignore[no-any-return]
