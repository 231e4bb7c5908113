from ..config import store

def user_key(user_id: str, attribute: str) -> str:
    """Namespaced key for one attribute of one user, e.g. ``user:42:score``"""
    return f"{store.KEY_PREFIX}:{user_id}:{attribute}"

def leaderboard_key() -> str:
    """Key of the sorted set shared by all users"""
    return store.LEADERBOARD_KEY
