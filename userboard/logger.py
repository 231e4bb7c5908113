import logging
from .config import server

LOGGER_NAME = "userboard"

# Configure logging
logging.basicConfig(
    level=server.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)

def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """Get the service logger"""
    return logging.getLogger(name)
