"""Structured logging configuration for DELTALINE.

Uses structlog processors on top of stdlib logging so the
``logging.getLogger(__name__)`` calls inside the library keep working.
The library itself never configures logging; applications call
:func:`setup_logging` once, or :func:`setup_logging_from_config` with a
loaded YAML config.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any

import structlog
from omegaconf import DictConfig, OmegaConf

LOGGER_NAME = "deltaline"


# --- structlog shared processors ---
_SHARED_PROCESSORS: list = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="%H:%M:%S", utc=False),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.UnicodeDecoder(),
]


def _renderer(log_json: bool):
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def _handlers(numeric_level: int, log_file: str | None) -> list[logging.Handler]:
    """Console handler, plus a file handler when *log_file* is given."""
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(str(path), encoding="utf-8"))
    for handler in handlers:
        handler.setLevel(numeric_level)
    return handlers


def _install(handlers: list[logging.Handler], numeric_level: int) -> None:
    """Replace the handlers on the ``deltaline`` logger."""
    logger = logging.getLogger(LOGGER_NAME)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()
    logger.setLevel(numeric_level)
    for handler in handlers:
        logger.addHandler(handler)
    logger.propagate = False


def setup_logging(
    level: str = "INFO",
    log_file: str | None = None,
    log_json: bool = False,
) -> None:
    """Configure structured logging for the ``deltaline`` logger tree.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR).
        log_file: Optional path to a log file. ``None`` disables file logging.
        log_json: If True, render log lines as JSON instead of human-readable.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    # --- structlog pipeline ---
    structlog.configure(
        processors=[
            *_SHARED_PROCESSORS,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _renderer(log_json),
        ],
    )

    # --- stdlib handlers on the deltaline logger ---
    handlers = _handlers(numeric_level, log_file)
    for handler in handlers:
        handler.setFormatter(formatter)
    _install(handlers, numeric_level)


def setup_logging_from_config(cfg: Any) -> None:
    """Configure logging from the ``deltaline.system`` section of a config."""
    if not isinstance(cfg, DictConfig):
        cfg = OmegaConf.create(cfg or {})
    system = OmegaConf.select(cfg, "deltaline.system", default=None)
    if system is None:
        setup_logging()
        return
    setup_logging(
        level=str(system.get("log_level", "INFO")),
        log_file=system.get("log_file"),
        log_json=bool(system.get("log_json", False)),
    )
