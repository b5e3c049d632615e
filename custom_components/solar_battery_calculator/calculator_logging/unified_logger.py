"""Structured event logger for the calculator.

Every entry is an event name plus key=value context, written to the
Home Assistant log. An optional rotating file log can be switched on; file
writes go through a queue so the event loop never blocks on disk I/O.
"""

from __future__ import annotations

import logging
import queue
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler
from pathlib import Path
from typing import Any

_LOGGER = logging.getLogger(__name__)


class CalculatorLogger:
    """Structured event logger.

    Features:
    - Event-style messages: ``EVENT | key=value | key=value``
    - Optional rotating file (max 5MB, 3 backups), off by default
    - File I/O runs on a QueueListener thread (non-blocking)
    """

    INFO = "info"
    DEBUG = "debug"
    WARNING = "warning"
    ERROR = "error"

    def __init__(
        self,
        name: str = "calculator",
        log_dir: Path | None = None,
        max_file_size_mb: int = 5,
        backup_count: int = 3,
    ) -> None:
        """Initialize the logger.

        Args:
            name: Logger name
            log_dir: Directory for the rotating file (default: component dir/log)
            max_file_size_mb: Max size of rotating log file
            backup_count: Number of backup files to keep
        """
        self.name = name
        self._max_file_size_mb = max_file_size_mb
        self._backup_count = backup_count

        if log_dir is None:
            log_dir = Path(__file__).parent.parent / "log"
        self.log_dir = log_dir
        self.log_file = self.log_dir / "calculator.log"

        self._ha_logger = logging.getLogger(
            f"custom_components.solar_battery_calculator.{name}"
        )

        self._queue_handler: QueueHandler | None = None
        self._listener: QueueListener | None = None

    @property
    def file_logging_enabled(self) -> bool:
        """Check if file logging is running."""
        return self._listener is not None

    def start_file_logging(self) -> None:
        """Start writing to the rotating log file.

        Creates the log directory, so call it from an executor job.
        """
        if self._listener is not None:
            return

        self.log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            self.log_file,
            maxBytes=self._max_file_size_mb * 1024 * 1024,
            backupCount=self._backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(levelname)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        file_handler.setLevel(logging.DEBUG)

        log_queue: queue.SimpleQueue = queue.SimpleQueue()
        self._queue_handler = QueueHandler(log_queue)
        self._ha_logger.addHandler(self._queue_handler)
        self._listener = QueueListener(log_queue, file_handler)
        self._listener.start()

        _LOGGER.info("File logging started: %s", self.log_file)

    def stop_file_logging(self) -> None:
        """Flush and stop the rotating log file."""
        if self._listener is None:
            return

        self._ha_logger.removeHandler(self._queue_handler)
        self._listener.stop()
        for handler in self._listener.handlers:
            handler.close()
        self._listener = None
        self._queue_handler = None

    def log(self, level: str, event: str, **data: Any) -> None:
        """Log an event at the given level.

        Args:
            level: Log level (info, debug, warning, error)
            event: Event name (e.g. "INPUT_CHANGED", "CHARGE_CALCULATED")
            **data: Additional context data
        """
        message = event
        if data:
            data_str = " | ".join(f"{k}={v}" for k, v in data.items())
            message = f"{event} | {data_str}"

        if level == self.ERROR:
            self._ha_logger.error(message)
        elif level == self.WARNING:
            self._ha_logger.warning(message)
        elif level == self.INFO:
            self._ha_logger.info(message)
        else:
            self._ha_logger.debug(message)

    def error(self, event: str, **data: Any) -> None:
        """Log error event."""
        self.log(self.ERROR, event, **data)

    def warning(self, event: str, **data: Any) -> None:
        """Log warning event."""
        self.log(self.WARNING, event, **data)

    def info(self, event: str, **data: Any) -> None:
        """Log info event."""
        self.log(self.INFO, event, **data)

    def debug(self, event: str, **data: Any) -> None:
        """Log debug event."""
        self.log(self.DEBUG, event, **data)


_logger_instance: CalculatorLogger | None = None


def get_logger() -> CalculatorLogger:
    """Get or create the singleton logger instance."""
    global _logger_instance
    if _logger_instance is None:
        _logger_instance = CalculatorLogger()
    return _logger_instance
