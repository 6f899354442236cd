"""
Logging configuration for potsweep.

Levels can be set via:
- Environment variables (always win)
- The number of -v flags given on the command line
- Default fallback values
"""

import logging
import os
from dataclasses import asdict, dataclass
from typing import Dict, Optional

VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

LOGGER_FIELDS = {
    "potsweep": "app_level",
    "potsweep.monzo": "monzo_client_level",
    "potsweep.automation": "automation_level",
    "apscheduler": "scheduler_level",
    "urllib3": "urllib3_level",
    "requests": "requests_level",
    "sqlalchemy": "sqlalchemy_level",
}


@dataclass
class LoggingConfig:
    """Configuration for logging levels."""
    root_level: str = "WARNING"
    app_level: str = "WARNING"
    monzo_client_level: str = "WARNING"
    automation_level: str = "WARNING"
    scheduler_level: str = "WARNING"
    urllib3_level: str = "WARNING"
    requests_level: str = "WARNING"
    sqlalchemy_level: str = "WARNING"
    log_file: Optional[str] = None


def verbosity_level(verbosity: int) -> str:
    """Map the count of -v flags to a level name."""
    if verbosity <= 0:
        return "WARNING"
    if verbosity == 1:
        return "INFO"
    return "DEBUG"


class LoggingManager:
    """Manages logging configuration and provides runtime level changes."""

    def __init__(self, verbosity: int = 0):
        self.config = self._load_config(verbosity)
        self._configure_logging()

    def _load_config(self, verbosity: int) -> LoggingConfig:
        """Load logging configuration from environment variables, defaulting app loggers to the verbosity."""
        app_default = verbosity_level(verbosity)
        return LoggingConfig(
            root_level=os.getenv("LOG_ROOT_LEVEL", "WARNING"),
            app_level=os.getenv("LOG_APP_LEVEL", app_default),
            monzo_client_level=os.getenv("LOG_MONZO_CLIENT_LEVEL", app_default),
            automation_level=os.getenv("LOG_AUTOMATION_LEVEL", app_default),
            scheduler_level=os.getenv("LOG_SCHEDULER_LEVEL", app_default),
            urllib3_level=os.getenv("LOG_URLLIB3_LEVEL", "WARNING"),
            requests_level=os.getenv("LOG_REQUESTS_LEVEL", "WARNING"),
            sqlalchemy_level=os.getenv("LOG_SQLALCHEMY_LEVEL", "WARNING"),
            log_file=os.getenv("LOG_FILE") or None,
        )

    def _configure_logging(self):
        """Configure logging based on current configuration."""
        handlers = [logging.StreamHandler()]
        if self.config.log_file:
            handlers.append(logging.FileHandler(self.config.log_file))

        logging.basicConfig(
            level=self._level(self.config.root_level, logging.WARNING),
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
            handlers=handlers,
            force=True,
        )

        for logger_name, field_name in LOGGER_FIELDS.items():
            self._set_logger_level(logger_name, getattr(self.config, field_name))

    @staticmethod
    def _level(level_name: str, default: int) -> int:
        level = getattr(logging, str(level_name).upper(), None)
        return level if isinstance(level, int) else default

    def _set_logger_level(self, logger_name: str, level_name: str):
        """Set the level for a specific logger."""
        if str(level_name).upper() not in VALID_LEVELS:
            logging.warning(f"Invalid logging level '{level_name}' for logger '{logger_name}'")
            return
        logging.getLogger(logger_name).setLevel(getattr(logging, level_name.upper()))

    def get_current_config(self) -> Dict:
        """Get current logging configuration as a dictionary."""
        return asdict(self.config)

    def set_logger_level(self, logger_name: str, level: str) -> bool:
        """Set the level for a specific logger, keeping the config in step for known loggers."""
        level_upper = level.upper()
        if level_upper not in VALID_LEVELS:
            return False

        self._set_logger_level(logger_name, level_upper)
        field_name = LOGGER_FIELDS.get(logger_name)
        if field_name:
            setattr(self.config, field_name, level_upper)
        return True


# Global logging manager instance
_logging_manager: Optional[LoggingManager] = None


def configure_logging(verbosity: int = 0) -> LoggingManager:
    """(Re)configure logging for a CLI invocation."""
    global _logging_manager
    _logging_manager = LoggingManager(verbosity)
    return _logging_manager
