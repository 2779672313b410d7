import logging
from typing import Optional, Union

from pagemeta.core.config import settings


def setup_logging(level: Union[int, str, None] = None, log_file: Optional[str] = None) -> None:
    """
    Set up logging configuration for the pagemeta loggers

    Args:
        level: Logging level (defaults to settings.log_level)
        log_file: Optional file path for logging (defaults to settings.log_file)
    """
    if level is None:
        level = settings.log_level
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    if log_file is None:
        log_file = settings.log_file

    # Create formatter
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    package_logger = logging.getLogger("pagemeta")
    package_logger.setLevel(level)

    # setup_logging may be called more than once (e.g. by tests or an embedding app)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    # Create console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    package_logger.addHandler(console_handler)

    # Create file handler (if specified)
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        package_logger.addHandler(file_handler)

    # httpx logs every request at INFO; keep it in step with our level
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with the specified name
    """
    return logging.getLogger(name)
