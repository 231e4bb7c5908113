from contextlib import asynccontextmanager
from ..database import get_connection
from ..logger import get_logger
import asyncio

logger = get_logger()
connection = get_connection()

async def startup_event():
    """Open the shared Redis connection"""
    try:
        await connection.initialize()
        logger.info("Redis connection ready")
    except Exception as e:
        logger.error(f"Failed to initialize Redis connection: {e}")
        raise

async def shutdown_event():
    """Close the shared Redis connection"""
    try:
        # Set a timeout for the shutdown process
        async with asyncio.timeout(5.0):
            await connection.close()
            logger.info("Redis connection closed")
    except asyncio.TimeoutError:
        logger.warning("Shutdown timed out, Redis connection may not be closed cleanly")

@asynccontextmanager
async def lifespan(app):
    await startup_event()
    try:
        yield
    finally:
        await shutdown_event()
