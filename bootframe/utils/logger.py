"""
Logging for bootframe

Two kinds of loggers live here:
- framework diagnostics (get_logger), printed to stdout
- the default application logger (create_file_logger), written to a file
  that rolls over every day
"""
import logging
import sys
from datetime import datetime
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Optional, Union


def setup_logger(
    name: str = "bootframe",
    level: Optional[int] = None,
    format_string: Optional[str] = None
) -> logging.Logger:
    """
    Set up a logger with consistent formatting
    
    Args:
        name: Logger name (default: "bootframe")
        level: Log level (default: INFO, or DEBUG if Config.DEBUG is True)
        format_string: Custom format string (optional)
    
    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    
    # Don't add handlers if they already exist
    if logger.handlers:
        return logger
    
    if level is None:
        # Import here to avoid circular dependency (bootframe.core imports this module)
        from ..core.config import Config
        level = logging.DEBUG if Config.DEBUG else logging.INFO
    logger.setLevel(level)
    
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    
    if format_string is None:
        format_string = "[%(levelname)s] %(name)s: %(message)s"
    
    handler.setFormatter(logging.Formatter(format_string))
    logger.addHandler(handler)
    
    # Prevent propagation to root logger
    logger.propagate = False
    
    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get or create a framework logger for a module
    
    Args:
        name: Module name (typically __name__)
    
    Returns:
        Logger instance
    """
    logger_name = name.split('.')[-1] if '.' in name else name
    return setup_logger(f"bootframe.{logger_name}")


class TemplateFormatter(logging.Formatter):
    """
    Formats records with a "{timestamp} [{level}] {message}" style template
    
    timestamp is local time with milliseconds and UTC offset
    (2024-05-01 13:45:12.042 +02:00); level is a three-letter code.
    """
    
    LEVEL_CODES = {
        logging.DEBUG: "DBG",
        logging.INFO: "INF",
        logging.WARNING: "WRN",
        logging.ERROR: "ERR",
        logging.CRITICAL: "FTL",
    }
    
    def __init__(self, template: str):
        super().__init__(fmt=template, style="{")
    
    def formatTime(self, record: logging.LogRecord, datefmt: Optional[str] = None) -> str:
        moment = datetime.fromtimestamp(record.created).astimezone()
        offset = moment.strftime("%z")
        offset = f"{offset[:3]}:{offset[3:]}" if offset else ""
        return f"{moment.strftime('%Y-%m-%d %H:%M:%S')}.{int(record.msecs):03d} {offset}".rstrip()
    
    def format(self, record: logging.LogRecord) -> str:
        record.timestamp = self.formatTime(record)
        record.level = self.LEVEL_CODES.get(record.levelno, record.levelname[:3].upper())
        return super().format(record)


def create_file_logger(
    path: Union[str, Path],
    name: str,
    template: str,
    level: int = logging.DEBUG
) -> logging.Logger:
    """
    Configure `name` to write to a file that rolls over at midnight
    
    No size limit and every rolled file is kept. Handlers from a previous
    call are closed and replaced.
    
    Args:
        path: Log file location (parent directories are created)
        name: Logger name
        template: Line template for TemplateFormatter
        level: Minimum level (default: DEBUG)
    
    Returns:
        The configured logger
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    
    logger = logging.getLogger(name)
    close_handlers(logger)
    
    handler = TimedRotatingFileHandler(
        str(path),
        when="midnight",
        backupCount=0,
        encoding="utf-8",
        delay=True,
    )
    handler.setLevel(level)
    handler.setFormatter(TemplateFormatter(template))
    
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger


def close_handlers(logger: logging.Logger) -> None:
    """Detach and close every handler of a logger"""
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


class LoggerFactory:
    """Hands out loggers below the application logger"""
    
    def __init__(self, root: logging.Logger):
        self.root = root
    
    def create_logger(self, name: Optional[str] = None) -> logging.Logger:
        """
        Args:
            name: Child name, e.g. "orders" gives "bootframe.app.orders" (default: the root logger)
        """
        if not name:
            return self.root
        return self.root.getChild(name)
