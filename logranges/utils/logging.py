import logging
import sys
import os
from pathlib import Path
from rich.console import Console
from rich.logging import RichHandler

PLAIN_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(log_level: str = "WARNING", log_file: Path = None):
    """
    Configure logging with Rich on stderr, plus an optional plain log file.
    stdout is left alone: it carries the range reports.
    """
    level = getattr(logging, log_level.upper(), logging.WARNING)

    if os.environ.get("NO_RICH_LOGGING"):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT))
        handlers = [handler]
    else:
        handlers = [
            RichHandler(console=Console(stderr=True), rich_tracebacks=True, markup=False)
        ]

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(PLAIN_FORMAT))
        handlers.append(file_handler)

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=handlers,
        force=True,
    )


def get_logger(name: str):
    return logging.getLogger(f"logranges.{name}")
