"""
Infrastructure Module for Unit Conversion

Logging services shared by the engine and the command line.
"""

from .logging.session_logger import SessionLogger, setup_logging, get_logger, shutdown_logging

__all__ = [
    'SessionLogger',
    'setup_logging',
    'get_logger',
    'shutdown_logging',
]
