"""Redis mirror of repository writes.

Users are stored as JSON strings under ``user:<id>``; each game's score list
is a hash ``scores:<gameId>`` mapping score id to the JSON record.
"""

import json

import redis
from flask import current_app

from arcade.repositories import score_repository, user_repository


class RedisManager:
    def __init__(self, app=None):
        if app is not None:
            self.init_app(app)

    def init_app(self, app) -> None:
        # from_url does not connect until the first command
        app.extensions['redis'] = redis.Redis.from_url(app.config['REDIS_URL'], decode_responses=True)

    @property
    def client(self) -> redis.Redis:
        return current_app.extensions['redis']

    @staticmethod
    def user_key(user_id: str) -> str:
        return f"user:{user_id}"

    @staticmethod
    def scores_key(game_id: str) -> str:
        return f"scores:{game_id}"

    def persist_score(self, game_id: str, score_id: str) -> bool:
        record = next((s for s in score_repository.get_scores(game_id) if s['id'] == score_id), None)
        if record is None:
            current_app.logger.warning(f"[cache] score {score_id} not found in game={game_id}")
            return False
        self.client.hset(self.scores_key(game_id), score_id, json.dumps(record))
        return True

    def persist_game_scores(self, game_id: str) -> int:
        scores = score_repository.get_scores(game_id)
        key = self.scores_key(game_id)
        pipe = self.client.pipeline()
        pipe.delete(key)
        if scores:
            pipe.hset(key, mapping={s['id']: json.dumps(s) for s in scores})
        pipe.execute()
        return len(scores)

    def persist_user(self, user_id: str) -> bool:
        user = user_repository.get_user(user_id)
        if user is None:
            self.client.delete(self.user_key(user_id))
            return False
        self.client.set(self.user_key(user_id), json.dumps(user))
        return True


redis_manager = RedisManager()
