"""
QueryGate Logging Configuration

Provides centralized logging with:
- Console output
- Rotating file logs (prevents logs from growing too large)
- A dedicated audit log for rejected queries
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from src.core.config import settings

# Default log format
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

GATE_LOGGER_NAME = "gate.audit"


def create_rotating_file_handler(
    log_path: str,
    max_bytes: int = None,
    backup_count: int = None,
    level: int = logging.DEBUG
) -> RotatingFileHandler:
    """
    Create a rotating file handler with size limits.

    Args:
        log_path: Path to the log file
        max_bytes: Maximum size per log file (default from settings)
        backup_count: Number of backup files to keep (default from settings)
        level: Logging level for this handler

    Returns:
        Configured RotatingFileHandler
    """
    max_bytes = max_bytes or settings.log_max_bytes
    backup_count = backup_count or settings.log_backup_count

    # Ensure directory exists
    log_file = Path(log_path)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(
        log_path,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding='utf-8'
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.setLevel(level)

    return handler


def setup_logging(log_level: str | None = None) -> None:
    """
    Configure application logging with rotation.

    Args:
        log_level: Override log level from settings
    """
    level = log_level or settings.log_level

    logging.basicConfig(
        level=getattr(logging, level),
        format=LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout),
        ]
    )

    if settings.log_to_file:
        file_handler = create_rotating_file_handler(
            settings.log_file_path,
            level=getattr(logging, level)
        )
        logging.getLogger().addHandler(file_handler)

    # Quiet the HTTP stack
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.error").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    logging.info(
        f"QueryGate logging initialized at {level} level "
        f"(rotation: {settings.log_max_bytes / 1_000_000:.1f}MB, "
        f"keeping {settings.log_backup_count} backups)"
    )


def setup_gate_logging(log_path: str | None = None) -> logging.Logger:
    """
    Set up a dedicated logger for gate decisions with rotation.

    Every rejected tool query is written here with its reason code, so
    repeated attempts by a model to slip past the gate can be reviewed.

    Args:
        log_path: Path to the audit log file (default from settings)

    Returns:
        Configured logger for gate audit records
    """
    logger = logging.getLogger(GATE_LOGGER_NAME)
    logger.setLevel(logging.INFO)

    # Avoid duplicate handlers
    if not any(isinstance(h, RotatingFileHandler) for h in logger.handlers):
        handler = create_rotating_file_handler(log_path or settings.gate_audit_log_path, level=logging.INFO)
        logger.addHandler(handler)

    return logger


def get_gate_logger() -> logging.Logger:
    """
    Get the gate audit logger, initializing if needed.

    Returns:
        Logger instance for gate audit records
    """
    logger = logging.getLogger(GATE_LOGGER_NAME)

    if not logger.handlers:
        setup_gate_logging()

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: Module name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
