import sys
import os
from typing import Optional
from loguru import logger

from .config import config_manager


def setup_logging(debug_mode: Optional[bool] = None, log_dir: Optional[str] = None):
    """
    Configures Loguru logger.

    The library never calls this itself; applications embedding the layout
    engine opt in. ``debug_mode`` defaults to ``general.debug_mode`` of the
    active configuration. A file sink is only added when ``log_dir`` is given.
    """
    if debug_mode is None:
        debug_mode = config_manager.data.general.debug_mode

    # Remove default handler
    logger.remove()

    # Console Handler
    level = "DEBUG" if debug_mode else "INFO"
    logger.add(sys.stderr, level=level, format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>")

    # File Handler
    if log_dir:
        if not os.path.exists(log_dir):
            os.makedirs(log_dir)
        logger.add(os.path.join(log_dir, "splitlayout_{time}.log"), rotation="10 MB", retention="1 week", level="DEBUG")

    logger.info("Logging initialized.")
