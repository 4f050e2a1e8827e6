r"""
Logging configuration module for the duplex IRC client.

Sets up colorlog output on stderr and keeps a per-category tally of
structured errors, broken down by the connection operation that failed.
"""

import atexit
import logging
import sys
import threading
import time
from collections import Counter, defaultdict, deque
from dataclasses import dataclass, field
from typing import Any

import colorlog

from .logs.logger import debug_enabled

LOGGER_NAME = "ircduplex"


@dataclass(frozen=True)
class ErrorRecord:
    timestamp: float
    message: str
    context: dict[str, Any] = field(default_factory=dict)

    @property
    def operation(self) -> str:
        return str(self.context.get("operation", "-"))


class ErrorAggregator:
    """Tally of structured errors per category.

    Each category keeps its latest ``history`` records. Summaries report the
    total, the count inside the trailing ``window`` seconds, an hourly rate
    and which operations (``inbound read``, ``outbound write``...) failed.
    """

    def __init__(self, history: int = 1000, window: float = 3600.0):
        self.history = history
        self.window = window
        self.lock = threading.Lock()
        self._records: dict[str, deque[ErrorRecord]] = defaultdict(self._new_bucket)
        self.start_time = time.time()

    def _new_bucket(self) -> deque[ErrorRecord]:
        return deque(maxlen=self.history)

    def record_error(self, error_type: str, message: str, context: dict[str, Any] = None) -> None:
        with self.lock:
            self._records[error_type].append(ErrorRecord(time.time(), message, dict(context or {})))

    def records(self, error_type: str) -> list[ErrorRecord]:
        with self.lock:
            return list(self._records.get(error_type, ()))

    def get_error_summary(self) -> dict[str, Any]:
        with self.lock:
            now = time.time()
            hours = max((now - self.start_time) / 3600, 1)
            summary = {}
            for error_type, bucket in self._records.items():
                if not bucket:
                    continue
                summary[error_type] = {
                    "total_count": len(bucket),
                    "recent_count": sum(1 for r in bucket if now - r.timestamp < self.window),
                    "rate_per_hour": len(bucket) / hours,
                    "operations": dict(Counter(r.operation for r in bucket)),
                    "last_message": bucket[-1].message,
                }
            return summary

    def should_alert(self, error_type: str, threshold_rate: float = 10.0) -> bool:
        stats = self.get_error_summary().get(error_type)
        return stats is not None and stats["rate_per_hour"] > threshold_rate

    def clear(self) -> None:
        with self.lock:
            self._records.clear()
            self.start_time = time.time()

    def log_summary_report(self) -> None:
        log = logging.getLogger(LOGGER_NAME)
        summary = self.get_error_summary()
        if not summary:
            log.info("No errors recorded in current session")
            return

        log.warning("🚨 ERROR SUMMARY REPORT")
        for error_type, stats in summary.items():
            operations = ", ".join(f"{op}={n}" for op, n in stats["operations"].items())
            log.warning(
                f"  {error_type}: {stats['total_count']} total, "
                f"{stats['recent_count']} recent, "
                f"{stats['rate_per_hour']:.1f}/hour ({operations})"
            )
            log.warning(f"    Last: {stats['last_message']}")


error_aggregator = ErrorAggregator()


def log_structured_error(
    error_type: str,
    message: str,
    exception: Exception = None,
    context: dict[str, Any] = None,
    level: int = logging.ERROR
) -> None:
    """Log an error with structured context and aggregation.

    Args:
        error_type: Category of the error (e.g., 'network', 'config', 'session')
        message: Descriptive error message
        exception: The exception that occurred (optional)
        context: Additional context data for debugging
        level: Logging level (default: ERROR)
    """
    parts = [f"[{error_type.upper()}] {message}"]
    if exception:
        parts.append(f"Exception: {type(exception).__name__}: {exception}")
    if context:
        parts.append("Context: " + " | ".join(f"{k}={v}" for k, v in context.items()))

    log = logging.getLogger(LOGGER_NAME)
    log.log(level, " | ".join(parts))

    error_aggregator.record_error(error_type, message, context)
    if error_aggregator.should_alert(error_type):
        rate = error_aggregator.get_error_summary()[error_type]["rate_per_hour"]
        log.critical(f"🚨 HIGH ERROR RATE ALERT: {error_type} occurring at {rate:.1f}/hour")


class LoggerConfigurator:
    """Handles logging configuration cleanly using colorlog.

    Supports environment variable configuration for log levels. Log output
    goes to stderr so that decoded messages printed on stdout stay clean.
    """

    def __init__(self, config=None):
        """Initialize the configurator.

        Args:
            config: Optional config dict; ``stream`` overrides the target stream.
        """
        self.config = config or {}

    def build_formatter(self) -> colorlog.ColoredFormatter:
        return colorlog.ColoredFormatter(
            "%(asctime)s %(log_color)s%(levelname)-8s%(reset)s %(message_log_color)s%(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            log_colors={
                "DEBUG": "cyan",
                "INFO": "green",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "magenta",
            },
            secondary_log_colors={
                "message": {
                    "ERROR": "red",
                    "CRITICAL": "magenta",
                }
            },
            reset=True,
        )

    def configure(self):
        """Configure logging with colored output using colorlog.

        Uses environment variables:
        - DEBUG: Set to 'true', '1', or 'yes' for DEBUG level, otherwise INFO
        """
        log_level = logging.DEBUG if debug_enabled() else logging.INFO
        formatter = self.build_formatter()

        handler = logging.StreamHandler(self.config.get("stream", sys.stderr))
        handler.setFormatter(formatter)

        logging.basicConfig(
            level=log_level,
            handlers=[handler],
            format="%(message)s",
            force=True,
        )

        root_logger = logging.getLogger()
        root_logger.setLevel(log_level)

        # asyncio reports every slow callback in debug mode
        logging.getLogger("asyncio").setLevel(logging.WARNING)

        atexit.register(self._log_final_error_summary)

    def _log_final_error_summary(self):
        """Log final error summary on application exit."""
        try:
            if error_aggregator.get_error_summary():
                logging.getLogger(LOGGER_NAME).info("📊 Final error summary before shutdown:")
                error_aggregator.log_summary_report()
        except Exception as e:  # noqa: BLE001
            logging.getLogger(LOGGER_NAME).error(f"Failed to log final error summary: {e}")
