"""Logging service"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List

from ..config import LOGS_DIR


class LogService:
    """Centralized logging service"""

    def __init__(self, log_dir: Path = None):
        self.configure(log_dir or LOGS_DIR)

    def configure(self, log_dir: Path):
        """Point every channel at log_dir"""
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(exist_ok=True, parents=True)

        # Setup loggers
        self.error_logger = self._setup_logger("error", logging.ERROR)
        self.info_logger = self._setup_logger("info", logging.INFO)
        self.debug_logger = self._setup_logger("debug", logging.DEBUG)

    def _setup_logger(self, name: str, level: int) -> logging.Logger:
        """Setup a logger with rotating file handler"""
        logger = logging.getLogger(f"reelscout.{name}")
        logger.setLevel(level)

        log_file = (self.log_dir / f"{name}.log").resolve()

        # Prevent duplicate handlers, replace ones writing elsewhere
        for handler in list(logger.handlers):
            if getattr(handler, "baseFilename", None) == str(log_file):
                return logger
            logger.removeHandler(handler)
            handler.close()

        # Create rotating file handler (10MB max, 3 backups)
        handler = RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,
            backupCount=3,
        )

        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        handler.setFormatter(formatter)

        logger.addHandler(handler)
        return logger

    def error(self, message: str, **kwargs):
        """Log error message"""
        self.error_logger.error(message, extra=kwargs)

    def info(self, message: str, **kwargs):
        """Log info message"""
        self.info_logger.info(message, extra=kwargs)

    def debug(self, message: str, **kwargs):
        """Log request-level detail"""
        self.debug_logger.debug(message, extra=kwargs)

    def get_logs(self, log_type: str = "error", limit: int = 100) -> List[str]:
        """Read last N lines from log file"""
        log_file = self.log_dir / f"{log_type}.log"

        if not log_file.exists():
            return []

        try:
            with open(log_file, "r") as f:
                lines = f.readlines()
                lines = [line.rstrip("\n") for line in lines]
                return lines[-limit:] if len(lines) > limit else lines
        except OSError as e:
            self.error(f"Failed to read log file {log_type}: {e}")
            return []


# Global log service instance
log_service = LogService()
