"""
Logging Framework Module
========================
Centralized logging configuration for the diagnostics engine.

Features:
- Console output with colored formatting
- Optional file logging (off by default, the engine is a library)
- Performance tracking decorator for the scoring entry point
"""

import logging
import sys
from pathlib import Path
from datetime import datetime
import functools
import time


# ================================================================================
# LOG LEVELS AND CONFIGURATION
# ================================================================================

class LogLevel:
    """Standard log levels with descriptions."""
    DEBUG = logging.DEBUG      # 10: per-analyzer scoring detail
    INFO = logging.INFO        # 20: one line per analysis run
    WARNING = logging.WARNING  # 30: degraded inputs (empty portfolio, unknown keys)
    ERROR = logging.ERROR      # 40: configuration errors
    CRITICAL = logging.CRITICAL


DEFAULT_CONFIG = {
    'console_level': LogLevel.WARNING,
    'file_level': LogLevel.DEBUG,
    'log_dir': 'logs',
    'enable_file_logging': False,
    'format': '%(asctime)s | %(levelname)-8s | %(name)-20s | %(message)s',
    'date_format': '%Y-%m-%d %H:%M:%S',
}


# ================================================================================
# CUSTOM FORMATTER WITH COLORS
# ================================================================================

class ColoredFormatter(logging.Formatter):
    """Formatter with ANSI color codes for console output."""

    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m'
    }

    def format(self, record):
        levelname = record.levelname
        if levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname}{self.COLORS['RESET']}"
        try:
            return super().format(record)
        finally:
            record.levelname = levelname


# ================================================================================
# LOGGER SETUP
# ================================================================================

def setup_logger(
    name: str,
    console_level: int = DEFAULT_CONFIG['console_level'],
    file_level: int = DEFAULT_CONFIG['file_level'],
    log_dir: str = DEFAULT_CONFIG['log_dir'],
    enable_file_logging: bool = DEFAULT_CONFIG['enable_file_logging']
) -> logging.Logger:
    """
    Configure and return a logger with console and optional file handlers.

    Args:
        name: Logger name (usually __name__ of the module)
        console_level: Minimum level for console output
        file_level: Minimum level for file output
        log_dir: Directory for log files
        enable_file_logging: Whether to enable file logging

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)  # Capture all, filter in handlers

    # Clear existing handlers to avoid duplicates
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(ColoredFormatter(
        fmt=DEFAULT_CONFIG['format'],
        datefmt=DEFAULT_CONFIG['date_format']
    ))
    logger.addHandler(console_handler)

    if enable_file_logging:
        log_path = Path(log_dir)
        log_path.mkdir(exist_ok=True)

        timestamp = datetime.now().strftime('%Y%m%d')
        log_file = log_path / f"{name.replace('.', '_')}_{timestamp}.log"

        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(file_level)
        file_handler.setFormatter(logging.Formatter(
            fmt=DEFAULT_CONFIG['format'],
            datefmt=DEFAULT_CONFIG['date_format']
        ))
        logger.addHandler(file_handler)

    return logger


# ================================================================================
# PERFORMANCE TRACKING DECORATOR
# ================================================================================

def log_performance(logger: logging.Logger):
    """
    Decorator to log function execution time.

    Usage:
        @log_performance(logger)
        def analyze_portfolio(...):
            ...
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            start_time = time.perf_counter()
            logger.debug(f"Starting {func.__name__}")

            try:
                result = func(*args, **kwargs)
            except Exception as e:
                elapsed = time.perf_counter() - start_time
                logger.error(f"Failed {func.__name__} after {elapsed * 1000:.1f}ms: {e}")
                raise

            elapsed = time.perf_counter() - start_time
            logger.debug(f"Completed {func.__name__} in {elapsed * 1000:.1f}ms")
            return result

        return wrapper
    return decorator


# ================================================================================
# MODULE-SPECIFIC LOGGERS
# ================================================================================

def get_logger(module_name: str) -> logging.Logger:
    """
    Get or create a logger for a specific module.

    Usage:
        from portfolio_diagnostics.utils.logger import get_logger
        logger = get_logger(__name__)
        logger.debug("Scoring risk management")
    """
    return setup_logger(module_name)


def set_console_level(level: int) -> None:
    """Change the console level of every engine logger already created (CLI --verbose)."""
    for name, candidate in logging.Logger.manager.loggerDict.items():
        if not name.startswith('portfolio_diagnostics') or not isinstance(candidate, logging.Logger):
            continue
        for handler in candidate.handlers:
            if isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler):
                handler.setLevel(level)


def silence_third_party_loggers():
    """Reduce verbosity of noisy third-party libraries."""
    logging.getLogger('numexpr').setLevel(logging.WARNING)
    logging.getLogger('yaml').setLevel(logging.WARNING)


# Initialize on import
silence_third_party_loggers()
