"""Utility functions for the localization tool."""

import os
import logging
from datetime import datetime
from typing import Optional

logger = logging.getLogger(__name__)

DATA_FILE_NAME = "ContentfulData.xlsx"


def get_data_file_path() -> str:
    """Get the default workbook location.

    Returns:
        Path of the workbook in the ``data`` directory next to the package
    """
    return os.path.join(os.path.dirname(os.path.abspath(__file__)), "data", DATA_FILE_NAME)


def default_log_file(operation: str) -> str:
    return f"contentful_{operation}_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"


def setup_logging(log_level: str = "INFO", log_file: Optional[str] = None) -> None:
    """Set up logging configuration.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional log file path
    """
    handlers = [logging.StreamHandler()]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers
    )
    # Request lines from the HTTP client would drown the page progress.
    logging.getLogger("httpx").setLevel(logging.WARNING)
