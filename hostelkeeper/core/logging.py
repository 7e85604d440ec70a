"""
Logging utilities.

Request-scoped context variables and a logger adapter that merges them
into every record, plus a timing decorator for batch jobs.
"""

import asyncio
import logging
import time
from contextvars import ContextVar
from functools import wraps
from typing import Optional

# Context variables for request tracking
request_id: ContextVar[Optional[str]] = ContextVar('request_id', default=None)
user_id: ContextVar[Optional[str]] = ContextVar('user_id', default=None)


class LoggerAdapter:
    """Logger adapter merging the request context into every record"""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def _log(self, level: int, message: str, *args, **kwargs):
        extra = dict(kwargs.get('extra') or {})

        req_id = request_id.get()
        if req_id and 'request_id' not in extra:
            extra['request_id'] = req_id
        uid = user_id.get()
        if uid and 'user_id' not in extra:
            extra['user_id'] = uid

        kwargs['extra'] = extra
        self.logger.log(level, message, *args, **kwargs)

    def debug(self, message: str, *args, **kwargs):
        self._log(logging.DEBUG, message, *args, **kwargs)

    def info(self, message: str, *args, **kwargs):
        self._log(logging.INFO, message, *args, **kwargs)

    def warning(self, message: str, *args, **kwargs):
        self._log(logging.WARNING, message, *args, **kwargs)

    def error(self, message: str, *args, **kwargs):
        self._log(logging.ERROR, message, *args, **kwargs)

    def exception(self, message: str, *args, **kwargs):
        kwargs.setdefault('exc_info', True)
        self._log(logging.ERROR, message, *args, **kwargs)

    def critical(self, message: str, *args, **kwargs):
        self._log(logging.CRITICAL, message, *args, **kwargs)


def get_logger(name: Optional[str] = None) -> LoggerAdapter:
    """
    Get configured logger instance.

    Args:
        name: Logger name (defaults to caller's module)

    Returns:
        Logger adapter carrying request context
    """
    if name is None:
        import inspect
        frame = inspect.currentframe()
        caller_frame = frame.f_back
        name = caller_frame.f_globals.get('__name__', 'hostelkeeper')

    return LoggerAdapter(logging.getLogger(name))


def log_execution_time(logger_name: Optional[str] = None):
    """
    Decorator to log function execution time.

    Args:
        logger_name: Custom logger name
    """
    def decorator(func):
        logger = get_logger(logger_name or func.__module__)

        @wraps(func)
        async def async_wrapper(*args, **kwargs):
            start = time.perf_counter()
            try:
                return await func(*args, **kwargs)
            finally:
                logger.info(
                    f"{func.__name__} finished",
                    extra={'function': func.__name__, 'execution_time': time.perf_counter() - start},
                )

        @wraps(func)
        def sync_wrapper(*args, **kwargs):
            start = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                logger.info(
                    f"{func.__name__} finished",
                    extra={'function': func.__name__, 'execution_time': time.perf_counter() - start},
                )

        if asyncio.iscoroutinefunction(func):
            return async_wrapper
        return sync_wrapper

    return decorator


__all__ = [
    'get_logger',
    'log_execution_time',
    'LoggerAdapter',
    'request_id',
    'user_id',
]
