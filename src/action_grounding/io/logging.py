"""Define utility functions to simplify logging to the CLI."""

import logging

from rich.console import Console
from rich.logging import RichHandler

logger = logging.getLogger(__name__)
console = Console()


def configure_logging(level: str = "INFO") -> None:
    """Route log records from the package through a rich handler at the given level."""
    handler = RichHandler(console=console, show_path=False, rich_tracebacks=True)
    package_logger = logging.getLogger("action_grounding")
    package_logger.handlers = [handler]
    package_logger.setLevel(level)
    package_logger.propagate = False


def log_info(message: str) -> None:
    """Log the given string to standard output."""
    logger.info(message)
