from typing import Dict, List, Optional

# Order matters: admin score deletion scans games in this order.
_GAMES: List[Dict[str, str]] = [
    {'id': 'tetris', 'name': '테트리스', 'category': 'puzzle'},
    {'id': 'snake', 'name': '스네이크', 'category': 'arcade'},
    {'id': '2048', 'name': '2048', 'category': 'puzzle'},
    {'id': 'minesweeper', 'name': '지뢰찾기', 'category': 'puzzle'},
    {'id': 'flappy', 'name': '플래피 버드', 'category': 'arcade'},
    {'id': 'memory', 'name': '카드 짝 맞추기', 'category': 'memory'},
    {'id': 'typing', 'name': '타자 연습', 'category': 'skill'},
]


def get_games() -> List[Dict[str, str]]:
    return [dict(g) for g in _GAMES]


def get_game(game_id: str) -> Optional[Dict[str, str]]:
    return next((g for g in get_games() if g['id'] == game_id), None)


def game_display_name(game_id: str) -> str:
    """Human-readable game name, falling back to the raw id for unknown games."""
    game = get_game(game_id)
    return game['name'] if game else game_id
