"""Loguru logging configuration for the eligibility service.

Every record carries ``service`` and ``environment`` extras.  In text mode a
second stderr sink serializes only records bound with ``json_output=True``;
in JSON mode every record is serialized.  A rotating file sink is added when
a log directory is configured.
"""

import sys
from pathlib import Path

from loguru import logger

from eligibility_api.core.config import Settings

SERVICE_NAME = "eligibility-api"
LOG_FILE_NAME = f"{SERVICE_NAME}.log"

_LOG_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<8} | {extra[environment]} | "
    "{name}:{function}:{line} | {message}"
)


def _json_only(record: dict) -> bool:
    return bool(record["extra"].get("json_output", False))


def setup_logging(
    log_level: str = "INFO",
    log_dir: str | None = None,
    *,
    json_logs: bool = False,
    environment: str = "production",
) -> Path | None:
    """Configure Loguru sinks.

    Args:
        log_level: Minimum level; case-insensitive.
        log_dir: Directory for a rotating log file (24 h rotation, 7 days
            retention). Created if missing.
        json_logs: Serialize every record instead of using the text format.
        environment: Deployment name attached to each record.

    Returns:
        Path of the log file, or None when file logging is off.
    """
    level = log_level.upper()
    logger.remove()
    logger.configure(extra={"service": SERVICE_NAME, "environment": environment})

    if json_logs:
        logger.add(sys.stderr, level=level, serialize=True)
    else:
        logger.add(sys.stderr, level=level, format=_LOG_FORMAT)
        logger.add(sys.stderr, level=level, serialize=True, filter=_json_only)

    if not log_dir:
        return None

    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)
    log_file = log_path / LOG_FILE_NAME
    logger.add(
        log_file,
        level=level,
        format=_LOG_FORMAT,
        serialize=json_logs,
        rotation="24h",
        retention="7 days",
    )
    return log_file


def setup_logging_from_settings(settings: Settings) -> Path | None:
    """Configure logging from application settings."""
    return setup_logging(
        settings.log_level,
        log_dir=settings.log_dir,
        json_logs=settings.log_json,
        environment=settings.environment,
    )
