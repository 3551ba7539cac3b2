from .session_logger import SessionLogger, SessionLogHandler, setup_logging, get_logger, shutdown_logging

__all__ = ['SessionLogger', 'SessionLogHandler', 'setup_logging', 'get_logger', 'shutdown_logging']
