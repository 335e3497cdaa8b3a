"""Logging configuration for tag fetching runs."""

from __future__ import annotations

import logging
import sys

from moonwell_tags.utils.config import LOG_FILE


class PerformanceLogger:
    """Logger with per-run metrics tracking."""

    def __init__(self, name: str) -> None:
        """
        Initialize the logger.

        Args:
            name: Logger name (usually module name)
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.DEBUG)

        # Prevent duplicate handlers
        if not self.logger.handlers:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(logging.INFO)
            console_handler.setFormatter(
                logging.Formatter(
                    "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                    datefmt="%Y-%m-%d %H:%M:%S",
                )
            )
            self.logger.addHandler(console_handler)

            LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(LOG_FILE, encoding="utf-8")
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(
                logging.Formatter(
                    "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
                    datefmt="%Y-%m-%d %H:%M:%S",
                )
            )
            self.logger.addHandler(file_handler)

        self.metrics: dict[str, float] = {}

    def debug(self, message: str, *args: object, **kwargs: object) -> None:
        """Log debug message."""
        self.logger.debug(message, *args, **kwargs)

    def info(self, message: str, *args: object, **kwargs: object) -> None:
        """Log info message."""
        self.logger.info(message, *args, **kwargs)

    def warning(self, message: str, *args: object, **kwargs: object) -> None:
        """Log warning message."""
        self.logger.warning(message, *args, **kwargs)

    def error(self, message: str, *args: object, **kwargs: object) -> None:
        """Log error message."""
        self.logger.error(message, *args, **kwargs)

    def record_metric(self, name: str, value: float) -> None:
        """
        Record a run metric.

        Args:
            name: Metric name (e.g., "pages_fetched", "tags_produced")
            value: Metric value
        """
        self.metrics[name] = value
        self.debug(f"Metric {name}: {value:.2f}")

    def reset_metrics(self) -> None:
        """Forget metrics from a previous run."""
        self.metrics.clear()

    def log_summary(self) -> None:
        """Log summary of all recorded metrics."""
        if not self.metrics:
            return

        self.info("=== Run Summary ===")
        for name, value in self.metrics.items():
            self.info(f"{name}: {value:.0f}")
        self.info("===================")


def get_logger(name: str) -> PerformanceLogger:
    """
    Get or create a logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        PerformanceLogger instance
    """
    return PerformanceLogger(name)
