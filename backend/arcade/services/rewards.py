import math
from typing import Any, Dict, Optional

from flask import current_app

from arcade.games import game_display_name
from arcade.repositories import user_repository


def compute_currency(score, divisor: Optional[int] = None) -> int:
    """Currency earned for a score: floor(score / divisor), default divisor 100."""
    if divisor is None:
        divisor = int(current_app.config.get('CURRENCY_DIVISOR', 100))
    return math.floor(score / divisor)


def reward_description(game_id: str, ranked: bool = True) -> str:
    name = game_display_name(game_id)
    if ranked:
        return f"{name} 플레이 보상"
    return f"{name} 플레이 보상 (랭킹 미기록)"


def award_currency(user: Dict[str, Any], game_id: str, amount: int, ranked: bool = True) -> Dict[str, Any]:
    """Credit ``amount`` to ``user`` in place and append the matching ledger entry.

    The caller is responsible for saving ``user``.
    """
    user['money'] = (user.get('money') or 0) + amount
    transaction = user_repository.add_transaction(user['id'], {
        'description': reward_description(game_id, ranked=ranked),
        'amount': amount,
        'type': 'earn',
    })
    current_app.logger.info(f"[rewards] user={user['id']} game={game_id} +{amount} ranked={ranked}")
    return transaction
