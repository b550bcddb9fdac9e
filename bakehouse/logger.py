"""
Structured logging for Bakehouse.

Provides centralized logging with console and optional file output,
plus counters for monitoring how often duplicate checks flag entries.
"""

import logging
import sys
from pathlib import Path
from typing import Optional
from datetime import datetime
import json


class StructuredLogger:
    """
    Centralized logger with support for console and file outputs.
    Tracks duplicate-check metrics.
    """

    def __init__(
        self,
        name: str = "bakehouse",
        level: str = "INFO",
        log_dir: Optional[Path] = None,
        enable_file: bool = True,
        enable_console: bool = True,
    ):
        """
        Initialize the structured logger.

        Args:
            name: Logger name
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_dir: Directory for log files (default: logs/)
            enable_file: Write logs to file
            enable_console: Output logs to console
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper()))
        self.logger.handlers.clear()  # Remove existing handlers

        self.metrics = {
            "checks_run": 0,
            "checks_flagged": 0,
            "exact_code_matches": 0,
            "name_matches": 0,
            "decisions": {"proceeded": 0, "cancelled": 0},
        }

        # Console handler
        if enable_console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(getattr(logging, level.upper()))
            console_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            console_handler.setFormatter(console_formatter)
            self.logger.addHandler(console_handler)

        # File handler
        if enable_file:
            if log_dir is None:
                log_dir = Path("logs")
            log_dir.mkdir(parents=True, exist_ok=True)

            log_file = log_dir / f"bakehouse_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)  # Always log everything to file
            file_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            file_handler.setFormatter(file_formatter)
            self.logger.addHandler(file_handler)

    def debug(self, message: str, **kwargs):
        """Log debug message with optional context."""
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs):
        """Log info message with optional context."""
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message with optional context."""
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs):
        """Log error message with optional context."""
        self._log(logging.ERROR, message, kwargs)

    def _log(self, level: int, message: str, context: dict):
        if context:
            message = f"{message} | Context: {json.dumps(context, default=str)}"
        self.logger.log(level, message)

    # Metric tracking methods

    def record_check(self, exact_matches: int, name_matches: int):
        """Record one duplicate check and how many matches of each kind it found."""
        self.metrics["checks_run"] += 1
        self.metrics["exact_code_matches"] += exact_matches
        self.metrics["name_matches"] += name_matches
        if exact_matches or name_matches:
            self.metrics["checks_flagged"] += 1

    def record_decision(self, decision: str):
        """Record how the user resolved a flagged check ('proceeded' or 'cancelled')."""
        decisions = self.metrics["decisions"]
        decisions[decision] = decisions.get(decision, 0) + 1

    def get_metrics(self) -> dict:
        """Return current metrics."""
        metrics_copy = dict(self.metrics)
        metrics_copy["decisions"] = dict(self.metrics["decisions"])
        checks = metrics_copy["checks_run"]
        metrics_copy["flag_rate"] = (
            round(metrics_copy["checks_flagged"] / checks, 3) if checks > 0 else 0.0
        )
        return metrics_copy

    def log_metrics_summary(self):
        """Log a summary of current metrics."""
        metrics = self.get_metrics()

        self.info("=== Duplicate Check Metrics ===")
        self.info(
            f"Checks: {metrics['checks_flagged']}/{metrics['checks_run']} flagged "
            f"({metrics['flag_rate'] * 100:.1f}%)"
        )
        self.info(f"Exact code matches: {metrics['exact_code_matches']}")
        self.info(f"Name matches: {metrics['name_matches']}")

        decisions = metrics["decisions"]
        if any(decisions.values()):
            self.info("Decisions:")
            for decision, count in decisions.items():
                self.info(f"  {decision}: {count}")


# Global logger instance
_global_logger: Optional[StructuredLogger] = None


def get_logger(
    name: str = "bakehouse",
    level: Optional[str] = None,
    **kwargs
) -> StructuredLogger:
    """
    Get or create the global logger instance.

    Level and file logging default to the BAKEHOUSE_LOG_LEVEL and
    BAKEHOUSE_LOG_DIR settings; file logging stays off when no
    directory is configured.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        **kwargs: Additional arguments passed to StructuredLogger

    Returns:
        StructuredLogger instance
    """
    global _global_logger

    if _global_logger is None:
        from .env import get_log_dir, get_log_level

        if level is None:
            level = get_log_level()
        if "log_dir" not in kwargs and "enable_file" not in kwargs:
            log_dir = get_log_dir()
            kwargs["log_dir"] = log_dir
            kwargs["enable_file"] = log_dir is not None
        _global_logger = StructuredLogger(name=name, level=level, **kwargs)

    return _global_logger


def reset_logger():
    """Reset the global logger (useful for testing)."""
    global _global_logger
    _global_logger = None
