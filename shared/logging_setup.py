"""Standardized logging setup for the Shippo MCP server."""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(message)s"


def resolve_level(level: int | str) -> int:
    """Accept ``logging.DEBUG`` or a name such as ``"debug"``; unknown names mean INFO."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logger(
    name: str,
    log_dir: Path,
    log_filename: str,
    level: int | str = logging.INFO,
    max_bytes: int = 5_000_000,
    backup_count: int = 3,
) -> logging.Logger:
    """Create a logger with console + rotating file handlers.

    The console handler writes to stderr: under the stdio transport stdout
    carries the MCP protocol stream.

    Args:
        name: Logger name (e.g. "shippo_mcp")
        log_dir: Directory for log files (created if not exists)
        log_filename: Log file name (e.g. "shippo_mcp.log")
        level: Logging level, numeric or by name
        max_bytes: Max size per log file before rotation
        backup_count: Number of backup files to keep

    Returns:
        Configured logger instance
    """
    log_dir.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(name)
    logger.setLevel(resolve_level(level))

    if not logger.handlers:
        formatter = logging.Formatter(LOG_FORMAT)

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

        file_handler = RotatingFileHandler(
            log_dir / log_filename,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
