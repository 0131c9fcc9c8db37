import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List


def _num(ctx: Dict[str, Any], key: str) -> float:
    value = ctx.get(key, 0)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return value


# Each condition sees the updated stats, the event context ({gameId, **options})
# and the result context ({score, **options}).
_ACHIEVEMENTS: List[Dict[str, Any]] = [
    {
        'id': 'first_play',
        'name': '첫 발걸음',
        'description': '아무 게임이나 한 번 플레이하세요.',
        'condition': lambda stats, event, result: stats.get('totalPlays', 0) >= 1,
    },
    {
        'id': 'regular',
        'name': '단골 손님',
        'description': '게임을 10번 플레이하세요.',
        'rewardTitle': '단골',
        'condition': lambda stats, event, result: stats.get('totalPlays', 0) >= 10,
    },
    {
        'id': 'arcade_owner',
        'name': '오락실 주인',
        'description': '게임을 100번 플레이하세요.',
        'rewardEffect': 'golden_glow',
        'rewardTitle': '오락실 주인',
        'condition': lambda stats, event, result: stats.get('totalPlays', 0) >= 100,
    },
    {
        'id': 'explorer',
        'name': '탐험가',
        'description': '서로 다른 게임 3개를 플레이하세요.',
        'rewardTitle': '탐험가',
        'condition': lambda stats, event, result: len(stats.get('plays', {})) >= 3,
    },
    {
        'id': 'score_1000',
        'name': '천 점 돌파',
        'description': '한 판에 1,000점 이상을 기록하세요.',
        'condition': lambda stats, event, result: _num(result, 'score') >= 1000,
    },
    {
        'id': 'score_10000',
        'name': '만 점 돌파',
        'description': '한 판에 10,000점 이상을 기록하세요.',
        'rewardEffect': 'sparkle',
        'condition': lambda stats, event, result: _num(result, 'score') >= 10000,
    },
    {
        'id': 'tetris_lines_40',
        'name': '라인 클리어',
        'description': '테트리스에서 한 판에 40줄을 지우세요.',
        'rewardTitle': '테트리스 장인',
        'condition': lambda stats, event, result: event.get('gameId') == 'tetris' and _num(result, 'lines') >= 40,
    },
    {
        'id': 'snake_length_50',
        'name': '대왕 뱀',
        'description': '스네이크에서 길이 50을 달성하세요.',
        'rewardEffect': 'scales',
        'condition': lambda stats, event, result: event.get('gameId') == 'snake' and _num(result, 'length') >= 50,
    },
    {
        'id': 'tile_2048',
        'name': '2048 달성',
        'description': '2048 타일을 만드세요.',
        'rewardEffect': 'tile_2048',
        'condition': lambda stats, event, result: event.get('gameId') == '2048' and _num(result, 'maxTile') >= 2048,
    },
    {
        'id': 'minesweeper_hard',
        'name': '지뢰 해체반',
        'description': '지뢰찾기 어려움 난이도를 클리어하세요.',
        'rewardTitle': '지뢰 해체반',
        'condition': lambda stats, event, result: (
            event.get('gameId') == 'minesweeper'
            and event.get('difficulty') == 'hard'
            and bool(result.get('cleared'))
        ),
    },
]


@dataclass
class AchievementResult:
    updated_user: Dict[str, Any]
    unlocked_achievements: List[Dict[str, Any]] = field(default_factory=list)
    newly_unlocked_effects: List[str] = field(default_factory=list)
    newly_unlocked_titles: List[str] = field(default_factory=list)
    # True when updated_user differs from the input and must be saved
    changed: bool = False


def _public(definition: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in definition.items() if k != 'condition'}


def get_all_achievement_definitions() -> List[Dict[str, Any]]:
    return [_public(d) for d in _ACHIEVEMENTS]


def _record_play(stats: Dict[str, Any], game_id: str, score) -> None:
    stats['totalPlays'] = int(stats.get('totalPlays', 0)) + 1
    plays = stats.setdefault('plays', {})
    plays[game_id] = int(plays.get(game_id, 0)) + 1
    if isinstance(score, (int, float)) and not isinstance(score, bool):
        best = stats.setdefault('bestScores', {})
        if game_id not in best or score > best[game_id]:
            best[game_id] = score


def evaluate_achievements(user: Dict[str, Any], event_context: Dict[str, Any],
                          result_context: Dict[str, Any]) -> AchievementResult:
    """Record a finished play on a copy of ``user`` and unlock any achievements it satisfies.

    The input user is never mutated. Rewards (card effects and titles) are
    granted once; achievements already held are skipped.
    """
    updated = copy.deepcopy(user)
    stats = updated['stats'] = dict(updated.get('stats') or {})
    game_id = event_context.get('gameId')
    if game_id:
        _record_play(stats, game_id, result_context.get('score'))

    owned = updated['achievements'] = list(updated.get('achievements') or [])
    effects = updated['unlockedEffects'] = list(updated.get('unlockedEffects') or [])
    titles = updated['unlockedTitles'] = list(updated.get('unlockedTitles') or [])

    result = AchievementResult(updated_user=updated, changed=bool(game_id))
    for definition in _ACHIEVEMENTS:
        if definition['id'] in owned:
            continue
        if not definition['condition'](stats, event_context, result_context):
            continue
        owned.append(definition['id'])
        result.unlocked_achievements.append(_public(definition))
        effect = definition.get('rewardEffect')
        if effect and effect not in effects:
            effects.append(effect)
            result.newly_unlocked_effects.append(effect)
        title = definition.get('rewardTitle')
        if title and title not in titles:
            titles.append(title)
            result.newly_unlocked_titles.append(title)
        result.changed = True
    return result
