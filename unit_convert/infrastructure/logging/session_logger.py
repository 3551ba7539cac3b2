"""
Session Logging System

Buffered, thread-safe logger for converter sessions. Messages are
kept in memory and flushed to an optional log file under an exclusive
file lock; the stdlib ``logging`` tree is bridged in through
``SessionLogHandler``.
"""

import os
import sys
import logging
import threading
from datetime import datetime
from pathlib import Path
from io import StringIO
from typing import Optional, Dict, Any
from contextlib import contextmanager
import fcntl
import time

LOGGER_NAMES = ('unit_convert',)


class SessionLogger:
    """
    Buffered session logger

    Thread-safe logging with timestamped lines, auto-flush by buffer
    size or elapsed time, and usage statistics.
    """

    def __init__(self, log_file: Optional[str] = None,
                 overwrite: bool = False, buffer_size: int = 1000,
                 flush_interval: float = 10.0):
        """
        Initialize session logger

        Args:
            log_file: Path to log file (None keeps messages in memory and
                discards them whenever the buffer would be flushed)
            overwrite: Whether to overwrite existing log file
            buffer_size: Size of log buffer before auto-flush
            flush_interval: Time interval for auto-flush (seconds)
        """
        self.log_file_path = Path(log_file) if log_file else None
        if self.log_file_path is not None:
            self.log_file_path.parent.mkdir(parents=True, exist_ok=True)

        self.buffer = StringIO()
        self.buffer_size = buffer_size
        self.buffer_count = 0
        self.flush_interval = flush_interval
        self.last_flush_time = time.time()

        self._lock = threading.Lock()

        self.stats = {
            'messages_logged': 0,
            'bytes_written': 0,
            'flush_count': 0,
            'errors': 0,
            'dropped': 0
        }

        self._initialize_log_file(overwrite)

    def _initialize_log_file(self, overwrite: bool):
        """Initialize log file with header"""
        if self.log_file_path is None:
            return

        if overwrite and self.log_file_path.exists():
            self.log_file_path.unlink()

        header_lines = [
            "===== Unit Conversion Log =====",
            f"Started: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}",
            f"PID: {os.getpid()}",
            "=" * 31
        ]

        with self._acquire_file_lock('a') as f:
            for line in header_lines:
                f.write(f"{line}\n")

    def log(self, message: str, level: str = "INFO", category: str = None):
        """
        Log message with timestamp

        Args:
            message: Message to log
            level: Log level (INFO, WARNING, ERROR, DEBUG)
            category: Optional category for message
        """
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]

        category_str = f"[{category}] " if category else ""
        formatted_msg = f"{timestamp} {level:7s} - {category_str}{message}"

        with self._lock:
            self.buffer.write(f"{formatted_msg}\n")
            self.buffer_count += 1
            self.stats['messages_logged'] += 1

            current_time = time.time()
            if (self.buffer_count >= self.buffer_size or
                    current_time - self.last_flush_time >= self.flush_interval):
                self._flush_buffer()

    def info(self, message: str, category: str = None):
        """Log info message"""
        self.log(message, "INFO", category)

    def warning(self, message: str, category: str = None):
        """Log warning message"""
        self.log(message, "WARNING", category)

    def error(self, message: str, category: str = None):
        """Log error message"""
        self.log(message, "ERROR", category)
        with self._lock:
            self.stats['errors'] += 1

    def debug(self, message: str, category: str = None):
        """Log debug message"""
        self.log(message, "DEBUG", category)

    def flush(self):
        """Force flush buffer to file"""
        with self._lock:
            self._flush_buffer()

    def getvalue(self) -> str:
        """Unflushed buffer contents"""
        with self._lock:
            return self.buffer.getvalue()

    def _flush_buffer(self):
        """Internal buffer flush implementation"""
        if self.buffer_count == 0:
            return

        if self.log_file_path is None:
            self.stats['dropped'] += self.buffer_count
            self._reset_buffer()
            return

        buffer_content = self.buffer.getvalue()
        try:
            with self._acquire_file_lock('a') as f:
                f.write(buffer_content)
                f.flush()
                os.fsync(f.fileno())

            self.stats['bytes_written'] += len(buffer_content)
            self.stats['flush_count'] += 1
        except OSError as e:
            print(f"Failed to flush log buffer: {e}", file=sys.stderr)
            self.stats['errors'] += 1
        finally:
            self._reset_buffer()

    def _reset_buffer(self):
        self.buffer.truncate(0)
        self.buffer.seek(0)
        self.buffer_count = 0
        self.last_flush_time = time.time()

    @contextmanager
    def _acquire_file_lock(self, mode: str):
        """Context manager for exclusive file access"""
        with open(self.log_file_path, mode, buffering=1, encoding="utf-8") as f:
            fcntl.flock(f.fileno(), fcntl.LOCK_EX)
            try:
                yield f
            finally:
                fcntl.flock(f.fileno(), fcntl.LOCK_UN)

    def get_statistics(self) -> Dict[str, Any]:
        """Get logging statistics"""
        stats = self.stats.copy()
        log_size = 0
        if self.log_file_path is not None and self.log_file_path.exists():
            log_size = self.log_file_path.stat().st_size
        stats.update({
            'buffer_size': self.buffer_count,
            'log_file_size': log_size,
        })
        return stats

    def finalize(self):
        """Flush pending messages and write the log footer"""
        self.flush()

        if self.log_file_path is None:
            return

        footer_lines = [
            "=" * 31,
            f"Finished: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}",
            f"Total messages logged: {self.stats['messages_logged']}",
            "===== End of Log ====="
        ]
        with self._acquire_file_lock('a') as f:
            for line in footer_lines:
                f.write(f"{line}\n")


class SessionLogHandler(logging.Handler):
    """Logging handler forwarding records to a SessionLogger"""

    def __init__(self, session_logger: SessionLogger):
        super().__init__()
        self.session_logger = session_logger

    def emit(self, record):
        try:
            self.session_logger.log(self.format(record), record.levelname)
        except Exception:
            self.handleError(record)


# Global logger instance
_global_logger: Optional[SessionLogger] = None
_handlers = []


def setup_logging(log_file: Optional[str] = None,
                  overwrite: bool = False,
                  verbose: bool = False) -> SessionLogger:
    """
    Setup global session logging

    Args:
        log_file: Path to log file (None for in-memory only)
        overwrite: Whether to overwrite existing log
        verbose: Echo log records to stderr

    Returns:
        SessionLogger instance
    """
    global _global_logger

    if _global_logger is None:
        _global_logger = SessionLogger(log_file, overwrite)

        session_handler = SessionLogHandler(_global_logger)
        session_handler.setLevel(logging.DEBUG)
        session_handler.setFormatter(logging.Formatter('%(name)s - %(message)s'))

        stream_handler = logging.StreamHandler()
        stream_handler.setLevel(logging.DEBUG if verbose else logging.CRITICAL)
        stream_handler.setFormatter(logging.Formatter('%(levelname)s: %(name)s - %(message)s'))

        for name in LOGGER_NAMES:
            logger = logging.getLogger(name)
            logger.addHandler(session_handler)
            logger.addHandler(stream_handler)
            logger.setLevel(logging.DEBUG)
        _handlers.extend([session_handler, stream_handler])

    if verbose:
        for handler in _handlers:
            handler.setLevel(logging.DEBUG)

    return _global_logger


def get_logger() -> SessionLogger:
    """Get global logger instance"""
    if _global_logger is None:
        setup_logging()

    return _global_logger


def shutdown_logging():
    """Finalize the global logger and detach its handlers"""
    global _global_logger

    if _global_logger is None:
        return

    _global_logger.finalize()
    for name in LOGGER_NAMES:
        logger = logging.getLogger(name)
        for handler in _handlers:
            logger.removeHandler(handler)
    _handlers.clear()
    _global_logger = None
