# pingherd/logging_config.py
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

# Shared by log output and the progress bar so the two never interleave
console = Console(stderr=True)


def setup_logging(level: str = "INFO", log_file: str = None) -> logging.Logger:
    """
    Configure logging to the shared rich console (stderr).
    If log_file is provided, also log to that file.
    """
    # Get root logger
    logger = logging.getLogger()
    logger.setLevel(level.upper())

    # Clear any existing handlers
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)-20s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    # RichHandler renders time and level itself
    console_handler = RichHandler(console=console, show_path=False, rich_tracebacks=True)
    console_handler.setFormatter(logging.Formatter("%(name)s | %(message)s"))
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
        logger.info(f"Logging to file: {log_file}")

    def handle_exception(exc_type, exc_value, exc_traceback):
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_traceback)
            return
        logger.error("Uncaught exception", exc_info=(exc_type, exc_value, exc_traceback))

    sys.excepthook = handle_exception

    return logger
