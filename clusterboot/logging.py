"""Logging configuration for the clusterboot package."""
import io
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from .config import Config, LoggingConfig


def setup_logger(name: str, level: int = logging.INFO, log_file: Optional[str] = None,
                 max_size_mb: int = 100, backup_count: int = 5) -> logging.Logger:
    """
    Set up a logger with the specified name and log level.

    Args:
        name: The name of the logger
        level: The logging level (default: logging.INFO)
        log_file: Optional path of a rotating log file
        max_size_mb: Maximum log file size before rotation
        backup_count: Number of rotated files to keep

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Don't add handlers if they're already configured
    if not logger.handlers:
        formatter = logging.Formatter(Config.LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')

        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

        if log_file:
            path = Path(log_file).expanduser().absolute()
            path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                filename=path,
                maxBytes=max_size_mb * 1024 * 1024,
                backupCount=backup_count
            )
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    return logger


def setup_from_config(name: str, config: LoggingConfig) -> logging.Logger:
    """Set up a logger from a LoggingConfig section."""
    return setup_logger(
        name,
        level=getattr(logging, config.level, logging.INFO),
        log_file=config.file,
        max_size_mb=config.max_size_mb,
        backup_count=config.backup_count,
    )


class LogWriter(io.TextIOBase):
    """Text stream that forwards each complete line to a logger.

    Used as the live output sink for host commands so their output shows up
    in the bootstrap log while the command is still running.
    """

    def __init__(self, logger: logging.Logger, level: int = logging.INFO) -> None:
        super().__init__()
        self.logger = logger
        self.level = level
        self._pending = ""

    def writable(self) -> bool:
        return True

    def write(self, s: str) -> int:
        self._pending += s
        while "\n" in self._pending:
            line, self._pending = self._pending.split("\n", 1)
            if line:
                self.logger.log(self.level, line)
        return len(s)

    def flush(self) -> None:
        if self._pending:
            self.logger.log(self.level, self._pending)
            self._pending = ""

    def close(self) -> None:
        self.flush()
        super().close()
