import json
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

_MAX_BYTES = 10 * 1024 * 1024  # 10MB
_BACKUP_COUNT = 5
_CONSOLE_FMT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Resolved once so the logs directory is only created on first use
_log_dir: Optional[Path] = None


class JsonFormatter(logging.Formatter):
    """
    Formatter that outputs JSON strings after parsing the LogRecord.
    """
    def format(self, record):
        log_record = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "funcName": record.funcName,
            "line": record.lineno
        }
        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_record)


def _resolve_log_dir() -> Path:
    """Read paths.logs_dir from config.json without importing common.config."""
    global _log_dir
    if _log_dir is not None:
        return _log_dir

    # common.config logs through this module, so config.json is read directly
    log_path = Path("logs")
    config_file = Path("config.json")
    if config_file.exists():
        try:
            with open(config_file, "r") as f:
                configured = json.load(f).get("paths", {}).get("logs_dir")
        except (OSError, ValueError):
            configured = None
        if configured:
            log_path = Path(configured)

    _log_dir = log_path
    return _log_dir


def setup_logger(name: str, log_dir: Optional[str] = None, level: int = logging.INFO, console_output: bool = True) -> logging.Logger:
    """
    Sets up a logger with both file and console handlers.

    Args:
        name: Name of the logger
        log_dir: Directory to store log files (default: paths.logs_dir)
        level: Console logging level (the file always records DEBUG+)
        console_output: Whether to output to console

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)

    # Avoid adding handlers multiple times
    if logger.handlers:
        return logger

    log_path = Path(log_dir) if log_dir else _resolve_log_dir()
    log_path.mkdir(parents=True, exist_ok=True)

    # File Handler - JSON formatted, DEBUG+
    file_handler = RotatingFileHandler(
        log_path / f"{name}.jsonl",
        maxBytes=_MAX_BYTES,
        backupCount=_BACKUP_COUNT
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(JsonFormatter())
    logger.addHandler(file_handler)

    # Console Handler - Human readable, at *level*
    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter(_CONSOLE_FMT))
        logger.addHandler(console_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Convenience function to get a logger with default settings"""
    return setup_logger(name)
