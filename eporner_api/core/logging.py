"""Logging configuration with structured output and per-operation metrics"""

import json
import logging
import logging.handlers
import threading
import time
from datetime import datetime
from functools import wraps
from typing import Any, Dict, Optional

from .exceptions import EpornerError
from .settings import get_settings


class StructuredFormatter(logging.Formatter):
    """
    Custom formatter for structured JSON logging.

    Outputs logs in JSON format for better parsing and analysis.
    """

    RESERVED_ATTRS = {
        'name', 'msg', 'args', 'levelname', 'levelno', 'pathname',
        'filename', 'module', 'exc_info', 'exc_text', 'stack_info',
        'lineno', 'funcName', 'created', 'msecs', 'relativeCreated',
        'thread', 'threadName', 'processName', 'process', 'taskName',
        'message'
    }

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as structured JSON"""
        log_data = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
        }

        if record.exc_info:
            log_data['exception'] = {
                'type': record.exc_info[0].__name__,
                'message': str(record.exc_info[1]),
                'traceback': self.formatException(record.exc_info)
            }

        # Fields passed through ``extra=``
        extra_fields = {
            key: value for key, value in record.__dict__.items()
            if key not in self.RESERVED_ATTRS
        }
        if extra_fields:
            log_data['extra'] = extra_fields

        return json.dumps(log_data, default=str, ensure_ascii=False)


class PerformanceMetrics:
    """Track call counts and durations of client operations"""

    def __init__(self):
        self._metrics: Dict[str, Dict[str, Any]] = {}
        self._lock = threading.Lock()

    def record_operation(self, operation: str, duration: float, success: bool = True):
        """Record performance metrics for an operation"""
        with self._lock:
            if operation not in self._metrics:
                self._metrics[operation] = {
                    'total_calls': 0,
                    'successful_calls': 0,
                    'failed_calls': 0,
                    'total_duration': 0.0,
                    'min_duration': float('inf'),
                    'max_duration': 0.0,
                    'last_call': None
                }

            metrics = self._metrics[operation]
            metrics['total_calls'] += 1
            metrics['total_duration'] += duration
            metrics['min_duration'] = min(metrics['min_duration'], duration)
            metrics['max_duration'] = max(metrics['max_duration'], duration)
            metrics['last_call'] = datetime.now().isoformat()

            if success:
                metrics['successful_calls'] += 1
            else:
                metrics['failed_calls'] += 1

    def get_metrics(self, operation: Optional[str] = None) -> Dict[str, Any]:
        """Get performance metrics, with averages and success rates"""
        with self._lock:
            if operation:
                metrics = self._metrics.get(operation)
                return self._summarize(metrics) if metrics else {}
            return {op: self._summarize(metrics) for op, metrics in self._metrics.items()}

    @staticmethod
    def _summarize(metrics: Dict[str, Any]) -> Dict[str, Any]:
        summary = metrics.copy()
        summary['avg_duration'] = metrics['total_duration'] / metrics['total_calls']
        summary['success_rate'] = metrics['successful_calls'] / metrics['total_calls']
        return summary

    def reset(self, operation: Optional[str] = None):
        """Reset metrics"""
        with self._lock:
            if operation:
                self._metrics.pop(operation, None)
            else:
                self._metrics.clear()


# Global performance metrics instance
performance_metrics = PerformanceMetrics()


class LoggingManager:
    """
    Opt-in logging configuration for applications using the client.

    The library itself only emits through module loggers; nothing is
    configured until :meth:`setup_logging` is called.
    """

    def __init__(self):
        self.configured = False

    def setup_logging(self, force: bool = False):
        """Configure the ``eporner_api`` logger hierarchy"""
        if self.configured and not force:
            return

        settings = get_settings()
        level = getattr(logging, settings.log_level)

        package_logger = logging.getLogger('eporner_api')
        package_logger.setLevel(level)

        for handler in package_logger.handlers[:]:
            package_logger.removeHandler(handler)

        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)

        if settings.is_production:
            # Structured JSON logging for production
            console_handler.setFormatter(StructuredFormatter())
        else:
            # Human-readable logging for development
            console_format = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            console_handler.setFormatter(logging.Formatter(console_format))

        package_logger.addHandler(console_handler)

        if settings.log_file:
            file_handler = logging.handlers.RotatingFileHandler(
                settings.log_file,
                maxBytes=10 * 1024 * 1024,  # 10MB
                backupCount=3
            )
            file_handler.setLevel(level)
            file_handler.setFormatter(StructuredFormatter())
            package_logger.addHandler(file_handler)

        self.configured = True

        package_logger.info(
            "Logging system initialized",
            extra={
                'environment': settings.environment,
                'log_level': settings.log_level,
                'structured_logging': settings.is_production
            }
        )


# Global logging manager
logging_manager = LoggingManager()


def setup_logging(force: bool = False):
    """Initialize the logging system"""
    logging_manager.setup_logging(force=force)


def log_performance(operation: str):
    """
    Decorator logging start, completion and failure of a client operation.

    Args:
        operation: Name of the operation for metrics
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            logger = logging.getLogger(func.__module__)
            start_time = time.perf_counter()
            success = True

            logger.debug(f"Starting {operation}", extra={'operation': operation})

            try:
                return func(*args, **kwargs)

            except Exception as e:
                success = False
                # Client errors log at WARNING, unexpected exceptions at ERROR
                level = logging.WARNING if isinstance(e, EpornerError) else logging.ERROR
                logger.log(
                    level,
                    f"Operation {operation} failed: {e}",
                    extra={
                        'operation': operation,
                        'error_type': type(e).__name__,
                        'error_message': str(e)
                    }
                )
                raise

            finally:
                duration = time.perf_counter() - start_time
                performance_metrics.record_operation(
                    operation=operation,
                    duration=duration,
                    success=success
                )
                logger.info(
                    f"Completed {operation}",
                    extra={
                        'operation': operation,
                        'duration': duration,
                        'success': success
                    }
                )

        return wrapper

    return decorator


def get_performance_metrics(operation: Optional[str] = None) -> Dict[str, Any]:
    """Get performance metrics"""
    return performance_metrics.get_metrics(operation)


def reset_performance_metrics(operation: Optional[str] = None):
    """Reset performance metrics"""
    performance_metrics.reset(operation)
