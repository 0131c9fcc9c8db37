"""Storage access for users, their ledgers, and per-game score lists.

Every method returns plain dicts in the same camelCase shape the HTTP layer
serializes, so handlers never hold ORM rows across a commit.
"""

from typing import Any, Dict, List, Optional

from arcade import db
from arcade.models import Score, Transaction, User


class UserRepository:
    def get_user(self, user_id: str) -> Optional[Dict[str, Any]]:
        if not user_id:
            return None
        user = User.query.filter_by(id=user_id).first()
        return user.to_dict() if user else None

    def get_all_users(self) -> List[Dict[str, Any]]:
        return [u.to_dict() for u in User.query.order_by(User.seq).all()]

    def save_user(self, data: Dict[str, Any]) -> Dict[str, Any]:
        user = User.query.filter_by(id=data['id']).first()
        if user is None:
            user = User(id=data['id'], name=data['name'])
        user.update_from_dict(data)
        db.session.add(user)
        db.session.commit()
        return user.to_dict()

    def add_transaction(self, user_id: str, transaction: Dict[str, Any]) -> Dict[str, Any]:
        row = Transaction(
            user_id=user_id,
            description=transaction['description'],
            amount=int(transaction['amount']),
            type=transaction.get('type', 'earn'),
        )
        db.session.add(row)
        db.session.commit()
        return row.to_dict()

    def get_transactions(self, user_id: str) -> List[Dict[str, Any]]:
        rows = Transaction.query.filter_by(user_id=user_id).order_by(Transaction.id).all()
        return [t.to_dict() for t in rows]


class ScoreRepository:
    def get_scores(self, game_id: str) -> List[Dict[str, Any]]:
        rows = Score.query.filter_by(game_id=game_id).order_by(Score.seq).all()
        return [s.to_dict() for s in rows]

    def add_score(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a single record; safe against concurrent writers to the same game."""
        row = Score.from_dict(data)
        db.session.add(row)
        db.session.commit()
        return row.to_dict()

    def save_scores_for_game(self, game_id: str, scores: List[Dict[str, Any]]) -> None:
        """Replace the stored list for a game with ``scores``.

        Records are immutable, so rows already present are left alone; rows
        missing from ``scores`` are removed and unseen ones are inserted.
        """
        keep_ids = {s['id'] for s in scores}
        existing = Score.query.filter_by(game_id=game_id).all()
        existing_ids = set()
        for row in existing:
            if row.id in keep_ids:
                existing_ids.add(row.id)
            else:
                db.session.delete(row)
        for s in scores:
            if s['id'] not in existing_ids:
                db.session.add(Score.from_dict({**s, 'gameId': game_id}))
        db.session.commit()


user_repository = UserRepository()
score_repository = ScoreRepository()
