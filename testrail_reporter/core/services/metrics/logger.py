"""
Structured logging for reporting events.

Provides JSON-formatted logs with timestamps and structured fields.
"""
import json
import logging
import sys
from datetime import datetime
from typing import Any, Optional


class StructuredFormatter(logging.Formatter):
    """JSON structured log formatter."""

    EXCLUDED_ATTRS = {
        'name', 'msg', 'args', 'levelname', 'levelno',
        'pathname', 'filename', 'module', 'exc_info',
        'exc_text', 'stack_info', 'lineno', 'funcName',
        'created', 'msecs', 'relativeCreated', 'thread',
        'threadName', 'processName', 'process', 'message',
        'asctime', 'taskName'
    }

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON formatted string
        """
        log_data = {
            "timestamp": datetime.now().isoformat(),
            "level": record.levelname,
            "event": record.getMessage(),
            "logger": record.name,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Extra fields
        for key, value in record.__dict__.items():
            if key not in self.EXCLUDED_ATTRS:
                try:
                    json.dumps(value)
                    log_data[key] = value
                except (TypeError, ValueError):
                    log_data[key] = str(value)

        return json.dumps(log_data)


class StructuredLogger:
    """Structured logger wrapper with reporting-specific helpers."""

    def __init__(
        self,
        name: str = "testrail_reporter",
        level: int = logging.INFO,
        enable_console: bool = True,
        enable_file: bool = False,
        log_file: Optional[str] = None
    ):
        """Initialize structured logger.

        Args:
            name: Logger name
            level: Logging level
            enable_console: Output to stderr
            enable_file: Output to file
            log_file: Path to log file
        """
        self._logger = logging.getLogger(name)
        self._logger.setLevel(level)
        self._logger.handlers = []

        formatter = StructuredFormatter()

        if enable_console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setFormatter(formatter)
            self._logger.addHandler(console_handler)

        if enable_file and log_file:
            file_handler = logging.FileHandler(log_file)
            file_handler.setFormatter(formatter)
            self._logger.addHandler(file_handler)

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def info(self, event: str, **kwargs: Any) -> None:
        self._logger.info(event, extra=kwargs)

    def warning(self, event: str, **kwargs: Any) -> None:
        self._logger.warning(event, extra=kwargs)

    def error(self, event: str, **kwargs: Any) -> None:
        self._logger.error(event, extra=kwargs)

    def debug(self, event: str, **kwargs: Any) -> None:
        self._logger.debug(event, extra=kwargs)

    def log_api_request(self, method: str, endpoint: str, status_code: Optional[int] = None) -> None:
        """Log a single TestRail API call."""
        self._logger.debug(
            "api_request",
            extra={"method": method.upper(), "endpoint": endpoint, "status_code": status_code}
        )

    def log_run(self, action: str, run_id: int, suite_id: Optional[int], name: str) -> None:
        """Log a run lifecycle change.

        Args:
            action: created, reused or closed
            run_id: Run ID
            suite_id: Suite the run belongs to
            name: Run display name
        """
        self._logger.info(
            f"run_{action}",
            extra={"run_id": run_id, "suite_id": suite_id, "run_name": name}
        )

    def log_result(
        self,
        run_id: int,
        case_id: int,
        status_id: int,
        elapsed: str
    ) -> None:
        """Log a recorded test result."""
        self._logger.info(
            "result_recorded",
            extra={
                "run_id": run_id,
                "case_id": case_id,
                "status_id": status_id,
                "elapsed": elapsed
            }
        )


_global_logger: Optional[StructuredLogger] = None


def get_logger() -> StructuredLogger:
    """Get or create the process-wide structured logger.

    No handler is attached; records propagate to the root logger so the
    host (pytest logging, an application config) decides level and output.
    """
    global _global_logger
    if _global_logger is None:
        _global_logger = StructuredLogger(level=logging.NOTSET, enable_console=False)
    return _global_logger
