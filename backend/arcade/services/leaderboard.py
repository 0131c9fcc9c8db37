from typing import Any, Callable, Dict, Iterable, List, Optional

ANONYMOUS_USER_ID = 'anonymous'
ANONYMOUS_NAME = '익명'
DELETED_ACCOUNT_NAME = '삭제된 계정'
PLACEHOLDER_AVATAR_URL = 'https://api.dicebear.com/8.x/bottts/svg?seed={seed}'


def is_anonymous(user_id: Optional[str]) -> bool:
    return user_id == ANONYMOUS_USER_ID


def best_scores_per_identity(scores: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Keep each user's highest score; anonymous entries are never merged.

    Ties keep the earliest record. The result preserves first-seen order of
    identities, so a stable sort afterwards is deterministic.
    """
    best: Dict[str, Dict[str, Any]] = {}
    for entry in scores:
        if is_anonymous(entry.get('userId')):
            best[f"anonymous-{entry['id']}"] = entry
            continue
        current = best.get(entry['userId'])
        if current is None or entry['score'] > current['score']:
            best[entry['userId']] = entry
    return list(best.values())


def sort_by_score_desc(entries: List[Dict[str, Any]], key: str = 'score') -> List[Dict[str, Any]]:
    return sorted(entries, key=lambda e: e[key], reverse=True)


def placeholder_avatar(anonymous: bool) -> str:
    return PLACEHOLDER_AVATAR_URL.format(seed='anonymous' if anonymous else 'deleted')


def with_user_details(entry: Dict[str, Any], user: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    if user:
        return {
            **entry,
            'userName': user.get('name'),
            'userAvatar': user.get('avatar'),
            'userBirthday': user.get('birthday'),
            'cardEffect': user.get('cardEffect'),
            'cardDecoration': user.get('cardDecoration'),
        }
    anonymous = is_anonymous(entry.get('userId'))
    return {
        **entry,
        'userName': ANONYMOUS_NAME if anonymous else DELETED_ACCOUNT_NAME,
        'userAvatar': placeholder_avatar(anonymous),
        'userBirthday': None,
    }


def build_game_leaderboard(scores: Iterable[Dict[str, Any]],
                           get_user: Callable[[str], Optional[Dict[str, Any]]]) -> List[Dict[str, Any]]:
    ranked = sort_by_score_desc(best_scores_per_identity(scores))
    return [with_user_details(entry, get_user(entry['userId'])) for entry in ranked]


def build_money_ranking(users: Iterable[Dict[str, Any]], limit: int = 100) -> List[Dict[str, Any]]:
    rich = [u for u in users if u.get('money') is not None and u['money'] > 0]
    top = sort_by_score_desc(rich, key='money')[:limit]
    return [
        {
            'userId': u['id'],
            'userName': u.get('name'),
            'userAvatar': u.get('avatar'),
            'score': u['money'],
            'userBirthday': u.get('birthday'),
            'cardEffect': u.get('cardEffect'),
            'cardDecoration': u.get('cardDecoration'),
        }
        for u in top
    ]
