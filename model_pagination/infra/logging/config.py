"""Logging configuration setup.

The library only emits records through module loggers; applications (and
tests) decide where they go. ``setup_logging()`` applies ``LoggingSettings``
once per process, ``configure_logging()`` takes explicit parameters.
"""

from __future__ import annotations

import logging
import logging.config
from pathlib import Path
from typing import TYPE_CHECKING, Any

logger = logging.getLogger(__name__)
_LOGGING_INITIALIZED = False

if TYPE_CHECKING:
    from model_pagination.core.settings.logs import LoggingSettings

_TEXT_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    log_settings: LoggingSettings | None = None,
    *,
    force: bool = False,
    **configure_kwargs: Any,
) -> None:
    """Ensure logging is configured once across entrypoints.

    Args:
        log_settings: Optional logging settings instance. If omitted, settings
            are loaded via get_logging_settings().
        force: Reconfigure logging even if it was already initialized.
        **configure_kwargs: Explicit overrides for configure_logging().
    """
    global _LOGGING_INITIALIZED

    if _LOGGING_INITIALIZED and not force:
        return

    settings_obj = log_settings
    if settings_obj is None:
        from model_pagination.core.settings import get_logging_settings

        settings_obj = get_logging_settings()

    configure_logging(**{**settings_obj.to_logging_kwargs(), **configure_kwargs})
    _LOGGING_INITIALIZED = True


def configure_logging(
    log_level: str = "INFO",
    file_path: str | Path | None = None,
    json_logs: bool = True,
    console_enabled: bool = True,
    capture_warnings: bool = True,
    file_max_bytes: int = 10 * 1024 * 1024,
    file_backup_count: int = 5,
    service_name: str = "model-pagination",
    **kwargs: Any,
) -> None:
    """Configure the root logger with dictConfig.

    Args:
        log_level: Root logger level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        file_path: Path to a rotating log file. None disables file logging.
        json_logs: Emit JSON Lines instead of human-readable text.
        console_enabled: Log to stderr.
        capture_warnings: Forward Python warnings to logging system.
        file_max_bytes: Maximum log file size before rotation.
        file_backup_count: Number of rotated log files to keep.
        service_name: Static ``service`` field of JSON records.
        **kwargs: Ignored; logged at DEBUG.

    Example:
        from model_pagination.core.settings import get_logging_settings
        configure_logging(**get_logging_settings().to_logging_kwargs())

        configure_logging(log_level="DEBUG", json_logs=False)
    """
    logging.captureWarnings(capture_warnings)

    formatter_name = "json" if json_logs else "text"
    formatters: dict[str, Any] = {
        "json": {
            "()": "model_pagination.infra.logging.formatters.JSONFormatter",
            "static": {"service": service_name},
        },
        "text": {"format": _TEXT_FORMAT, "datefmt": _DATE_FORMAT},
    }

    handlers: dict[str, Any] = {}
    if console_enabled:
        handlers["console"] = {
            "class": "logging.StreamHandler",
            "formatter": formatter_name,
        }
    if file_path:
        path = Path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "formatter": formatter_name,
            "filename": str(path),
            "maxBytes": file_max_bytes,
            "backupCount": file_backup_count,
            "encoding": "utf-8",
        }

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": formatters,
            "handlers": handlers,
            "root": {"level": log_level.upper(), "handlers": list(handlers)},
        }
    )

    if kwargs:
        logger.debug("Unused logging kwargs supplied: %s", ", ".join(sorted(kwargs.keys())))
