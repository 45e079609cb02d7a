"""
Structured logging system for fuzzylookup.

Provides centralized logging with console and optional file output,
log levels, and metrics tracking for monitoring lookup outcomes.
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
    Tracks metrics for monitoring lookup outcomes.
    """

    def __init__(
        self,
        name: str = "fuzzylookup",
        level: str = "WARNING",
        log_dir: Optional[Path] = None,
        enable_file: bool = False,
        enable_console: bool = True,
    ):
        """
        Initialize the structured logger.

        Args:
            name: Logger name
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_dir: Directory for log files (default: logs/)
            enable_file: Write logs to file
            enable_console: Output logs to console (stderr, so CLI results stay on stdout)
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.DEBUG if enable_file else getattr(logging, level.upper()))
        self.logger.handlers.clear()
        self.logger.propagate = False

        self.metrics = {
            "lookups_attempted": 0,
            "matches_found": 0,
            "not_found": 0,
            "rows_scored": 0,
            "errors_by_type": {},
        }

        if enable_console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(getattr(logging, level.upper()))
            console_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            console_handler.setFormatter(console_formatter)
            self.logger.addHandler(console_handler)

        if enable_file:
            if log_dir is None:
                log_dir = Path("logs")
            log_dir.mkdir(parents=True, exist_ok=True)

            log_file = log_dir / f"fuzzylookup_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)  # Always log everything to file
            file_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            file_handler.setFormatter(file_formatter)
            self.logger.addHandler(file_handler)

        if not self.logger.handlers:
            self.logger.addHandler(logging.NullHandler())

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

    def critical(self, message: str, **kwargs):
        """Log critical message with optional context."""
        self._log(logging.CRITICAL, message, kwargs)

    def _log(self, level: int, message: str, context: dict):
        if not self.logger.isEnabledFor(level):
            return
        if context:
            message = f"{message} | Context: {json.dumps(context, default=str)}"
        self.logger.log(level, message)

    # Metric tracking methods

    def record_lookup(self):
        self.metrics["lookups_attempted"] += 1

    def record_match(self, rows_scored: int):
        self.metrics["matches_found"] += 1
        self.metrics["rows_scored"] += rows_scored

    def record_not_found(self, rows_scored: int):
        self.metrics["not_found"] += 1
        self.metrics["rows_scored"] += rows_scored

    def record_error(self, error_type: str):
        """Record a lookup that ended in an error sentinel."""
        if error_type not in self.metrics["errors_by_type"]:
            self.metrics["errors_by_type"][error_type] = 0
        self.metrics["errors_by_type"][error_type] += 1

    def get_metrics(self) -> dict:
        """Return current metrics, with the match rate filled in."""
        metrics_copy = dict(self.metrics)
        metrics_copy["errors_by_type"] = dict(self.metrics["errors_by_type"])
        attempted = metrics_copy["lookups_attempted"]
        if attempted > 0:
            metrics_copy["match_rate"] = round(metrics_copy["matches_found"] / attempted, 3)
        else:
            metrics_copy["match_rate"] = 0.0
        return metrics_copy

    def log_metrics_summary(self):
        """Log a summary of current metrics."""
        metrics = self.get_metrics()

        self.info("=== Lookup Session Metrics ===")
        self.info(f"Lookups: {metrics['lookups_attempted']}")
        self.info(
            f"Matches: {metrics['matches_found']} ({metrics['match_rate'] * 100:.1f}%), "
            f"not found: {metrics['not_found']}"
        )
        self.info(f"Rows scored: {metrics['rows_scored']}")

        if metrics["errors_by_type"]:
            self.info("Error Types:")
            for error_type, count in metrics["errors_by_type"].items():
                self.info(f"  {error_type}: {count}")


# Global logger instance
_global_logger: Optional[StructuredLogger] = None


def get_logger(
    name: str = "fuzzylookup",
    level: str = "WARNING",
    **kwargs
) -> StructuredLogger:
    """
    Get or create the global logger instance.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        **kwargs: Additional arguments passed to StructuredLogger

    Returns:
        StructuredLogger instance
    """
    global _global_logger

    if _global_logger is None:
        _global_logger = StructuredLogger(name=name, level=level, **kwargs)

    return _global_logger


def configure_logger(settings) -> StructuredLogger:
    """Replace the global logger with one built from LookupSettings."""
    global _global_logger

    log_dir = Path(settings.log_dir) if settings.log_dir else None
    _global_logger = StructuredLogger(
        level=settings.log_level,
        log_dir=log_dir,
        enable_file=log_dir is not None,
    )
    return _global_logger


def reset_logger():
    """Reset the global logger (useful for testing)."""
    global _global_logger
    _global_logger = None
