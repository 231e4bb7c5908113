from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional

class RedisConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix='REDIS_')

    HOST: str = 'localhost'
    PORT: int = 6379
    DB: int = 0
    PASSWORD: Optional[str] = None
    SOCKET_TIMEOUT: float = 5
    KEY_PREFIX: str = 'user'
    LEADERBOARD_KEY: str = 'leaderboard'

store = RedisConfig()

class AppConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix='APP_')

    HOST: str = '0.0.0.0'
    PORT: int = 8000
    LOG_LEVEL: str = 'INFO'

server = AppConfig()
