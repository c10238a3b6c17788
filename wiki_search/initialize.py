"""
Application Initialization for Wiki Search

This module handles the startup of the Wiki Search application: it makes sure the
configuration has been loaded and logs the package version and environment.
"""

import logging

from . import __version__
from .config import config

logger = logging.getLogger(__name__)


def initialize() -> None:
    """Initialize the package."""
    try:
        # Get environment value
        env = config.environment

        # Log initialization
        logger.info(f"Initialized Wiki Search {__version__} in {env} environment")
    except Exception as e:
        logger.error(f"Failed to initialize: {e}")
        raise
