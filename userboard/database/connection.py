import asyncio
from typing import Optional
import redis
from redis.asyncio import Redis
from ..config import store
from ..errors import StoreUnavailable
from ..logger import get_logger
from .user_record import UserRecord

logger = get_logger()

class RedisConnection:
    def __init__(self):
        self._client: Optional[Redis] = None
        self._initialized = False
        self._init_lock = asyncio.Lock()

    async def initialize(self):
        """Create the shared Redis client and check that it answers"""
        if self._initialized:
            return

        async with self._init_lock:
            if self._initialized:  # Double check after acquiring lock
                return

            try:
                self._client = Redis(
                    host=store.HOST,
                    port=store.PORT,
                    db=store.DB,
                    password=store.PASSWORD,
                    decode_responses=True,
                    socket_timeout=store.SOCKET_TIMEOUT,
                    socket_connect_timeout=store.SOCKET_TIMEOUT
                )
                await self._client.ping()
                self._initialized = True
                logger.info(f"Redis connection initialized at {store.HOST}:{store.PORT}/{store.DB}")
            except (redis.ConnectionError, redis.TimeoutError) as e:
                logger.error(f"Failed to initialize Redis connection: {e}")
                await self.close()
                raise StoreUnavailable(f"Cannot reach Redis at {store.HOST}:{store.PORT}") from e

    async def close(self):
        """Close the Redis client"""
        if self._client is not None:
            await self._client.aclose()
        self._client = None
        self._initialized = False

    @property
    def client(self) -> Redis:
        """Get the shared Redis client"""
        if not self._initialized:
            raise RuntimeError("Redis connection not initialized")
        return self._client

    def user(self, user_id) -> UserRecord:
        """Build a record bound to the shared client"""
        return UserRecord(user_id, self.client)

_connection = RedisConnection()

def get_connection() -> RedisConnection:
    """Get the process-wide Redis connection"""
    return _connection
