from typing import List

class UserProfile:
    __slots__ = ('user_id', 'name', 'score', 'badges', 'rank')
    def __init__(self, user_id: str, name: str, score: int, badges: List[int], rank: int):
        self.user_id = user_id
        self.name = name
        self.score = score
        self.badges = badges
        self.rank = rank

    def to_dict(self):
        return {
            'user_id': self.user_id,
            'name': self.name,
            'score': self.score,
            'badges': list(self.badges),
            'rank': self.rank
        }
