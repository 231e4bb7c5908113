from .connection import RedisConnection, get_connection
from .user_record import UserRecord

__all__ = ["RedisConnection", "UserRecord", "get_connection"]
