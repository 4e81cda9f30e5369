# runroutes/core/logger.py
from loguru import logger

from runroutes.core.config import settings
from runroutes.core.logging_config import setup_logging

setup_logging(settings.LOG_LEVEL)

__all__ = ["logger"]
