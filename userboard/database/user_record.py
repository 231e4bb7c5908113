import asyncio
from contextlib import contextmanager
from typing import Iterable, List, Union
import redis
from .keys import user_key, leaderboard_key
from ..errors import InvalidArgument, StoreUnavailable
from ..models.data import UserProfile
from ..logger import get_logger

logger = get_logger()

NAME = 'name'
SCORE = 'score'
BADGES = 'badges'

# Redis integers are signed 64-bit
INT_MIN = -2**63
INT_MAX = 2**63 - 1

# ZADD only runs once INCRBY has succeeded, so an overflow leaves both untouched
ADD_SCORE_SCRIPT = """
local score = redis.call('INCRBY', KEYS[1], ARGV[1])
redis.call('ZADD', KEYS[2], score, ARGV[2])
return redis.call('GET', KEYS[1])
"""

def parse_int(value, what: str) -> int:
    """Coerce an int or a numeric string to int, rejecting everything else"""
    if value is None:
        raise InvalidArgument(f"{what} is required")
    if isinstance(value, bool):
        raise InvalidArgument(f"{what} must be an integer, got {value!r}")
    if isinstance(value, int):
        number = value
    elif isinstance(value, str):
        try:
            number = int(value.strip())
        except ValueError:
            raise InvalidArgument(f"{what} must be an integer, got {value!r}") from None
    else:
        raise InvalidArgument(f"{what} must be an integer, got {value!r}")
    if not INT_MIN <= number <= INT_MAX:
        raise InvalidArgument(f"{what} is outside the 64-bit integer range, got {value!r}")
    return number

@contextmanager
def store_errors(target: str):
    """Re-raise client connection failures as StoreUnavailable"""
    try:
        yield
    except (redis.ConnectionError, redis.TimeoutError) as e:
        logger.error(f"Redis unavailable while accessing {target}: {e}")
        raise StoreUnavailable(f"Redis unavailable while accessing {target}") from e

class UserRecord:
    """
    Typed access to one user's attributes stored in Redis.

    Every attribute lives under its own key (``user:<id>:name``,
    ``user:<id>:score``, ``user:<id>:badges``) and the score is mirrored in
    the shared ``leaderboard`` sorted set. Nothing is cached: each call is a
    round trip to the store. Missing keys read back as defaults.
    """

    def __init__(self, user_id, redis_client):
        if user_id is None or (isinstance(user_id, str) and not user_id.strip()):
            raise InvalidArgument("user_id is required")
        if redis_client is None:
            raise InvalidArgument("redis_client is required")
        self._user_id = str(user_id)
        self.redis = redis_client
        self.name_key = user_key(self._user_id, NAME)
        self.score_key = user_key(self._user_id, SCORE)
        self.badges_key = user_key(self._user_id, BADGES)
        self.leaderboard_key = leaderboard_key()
        self._add_score_script = redis_client.register_script(ADD_SCORE_SCRIPT)

    @property
    def user_id(self) -> str:
        return self._user_id

    def __repr__(self):
        return f"UserRecord({self._user_id!r})"

    async def get_name(self) -> str:
        with store_errors(self.name_key):
            name = await self.redis.get(self.name_key)
        return name if name is not None else ''

    async def set_name(self, name: str) -> None:
        if not isinstance(name, str):
            raise InvalidArgument(f"name must be a string, got {name!r}")
        with store_errors(self.name_key):
            await self.redis.set(self.name_key, name)
        logger.debug(f"Set name for user {self._user_id}")

    async def get_score(self) -> int:
        with store_errors(self.score_key):
            score = await self.redis.get(self.score_key)
        return int(score) if score is not None else 0

    async def set_score(self, value) -> None:
        """Overwrite the score and its leaderboard entry in one transaction"""
        score = parse_int(value, 'score')
        with store_errors(self.score_key):
            async with self.redis.pipeline(transaction=True) as pipe:
                pipe.set(self.score_key, score)
                pipe.zadd(self.leaderboard_key, {self._user_id: score})
                await pipe.execute()
        logger.debug(f"Set score for user {self._user_id} to {score}")

    async def add_score(self, delta=None) -> int:
        """
        Atomically add ``delta`` to the score and return the new value.

        ``delta`` may be an int or a numeric string such as ``"-1"``. The
        increment happens server-side in one Lua script (INCRBY then ZADD), so
        concurrent callers never lose an update.
        """
        amount = parse_int(delta, 'delta')
        try:
            with store_errors(self.score_key):
                new_score = await self._add_score_script(
                    keys=[self.score_key, self.leaderboard_key],
                    args=[amount, self._user_id]
                )
        except redis.ResponseError as e:
            if 'overflow' not in str(e) and 'out of range' not in str(e):
                raise
            raise InvalidArgument(f"adding {amount} would overflow the score of user {self._user_id}") from e
        logger.debug(f"Added {amount} to score of user {self._user_id}, now {new_score}")
        return int(new_score)

    async def get_badges(self) -> List[int]:
        with store_errors(self.badges_key):
            members = await self.redis.smembers(self.badges_key)
        return sorted(int(m) for m in members)

    async def give_badge(self, badge_ids: Union[int, str, Iterable]) -> None:
        """Add one badge id or a sequence of them; present ids are left alone"""
        if isinstance(badge_ids, (int, str)) or badge_ids is None:
            badge_ids = [badge_ids]
        badges = [parse_int(badge_id, 'badge_id') for badge_id in badge_ids]
        if not badges:
            return
        with store_errors(self.badges_key):
            await self.redis.sadd(self.badges_key, *badges)
        logger.debug(f"Gave badges {badges} to user {self._user_id}")

    async def take_badge(self, badge_id) -> None:
        badge = parse_int(badge_id, 'badge_id')
        with store_errors(self.badges_key):
            await self.redis.srem(self.badges_key, badge)
        logger.debug(f"Took badge {badge} from user {self._user_id}")

    async def has_badge(self, badge_id=None) -> bool:
        badge = parse_int(badge_id, 'badge_id')
        with store_errors(self.badges_key):
            return bool(await self.redis.sismember(self.badges_key, badge))

    async def get_leaderboard_index(self) -> int:
        """Zero-based rank by descending score, or -1 if the user is unranked"""
        with store_errors(self.leaderboard_key):
            rank = await self.redis.zrevrank(self.leaderboard_key, self._user_id)
        return int(rank) if rank is not None else -1

    async def get_profile(self) -> UserProfile:
        name, score, badges, rank = await asyncio.gather(
            self.get_name(),
            self.get_score(),
            self.get_badges(),
            self.get_leaderboard_index()
        )
        return UserProfile(self._user_id, name, score, badges, rank)

    async def delete(self) -> None:
        """Remove every key of this user and its leaderboard entry"""
        with store_errors(f"user {self._user_id}"):
            async with self.redis.pipeline(transaction=True) as pipe:
                pipe.delete(self.name_key, self.score_key, self.badges_key)
                pipe.zrem(self.leaderboard_key, self._user_id)
                await pipe.execute()
        logger.debug(f"Deleted user {self._user_id}")
