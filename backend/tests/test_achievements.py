import copy

from arcade.services.achievements import evaluate_achievements, get_all_achievement_definitions
from arcade.services.leaderboard import best_scores_per_identity


def _user(**fields):
    base = {'id': 'u1', 'name': 'Alice', 'money': None, 'achievements': [],
            'unlockedEffects': [], 'unlockedTitles': [], 'stats': {}}
    base.update(fields)
    return base


def test_evaluate_does_not_mutate_input():
    user = _user()
    snapshot = copy.deepcopy(user)
    result = evaluate_achievements(user, {'gameId': 'tetris'}, {'score': 20000})
    assert user == snapshot
    assert result.changed is True
    assert result.updated_user['stats']['totalPlays'] == 1
    assert result.updated_user['stats']['bestScores'] == {'tetris': 20000}
    ids = [a['id'] for a in result.unlocked_achievements]
    assert ids == ['first_play', 'score_1000', 'score_10000']
    assert result.newly_unlocked_effects == ['sparkle']


def test_explorer_needs_three_distinct_games():
    user = _user()
    for game in ('tetris', 'tetris', 'snake'):
        user = evaluate_achievements(user, {'gameId': game}, {'score': 1}).updated_user
    assert 'explorer' not in user['achievements']
    result = evaluate_achievements(user, {'gameId': '2048'}, {'score': 1})
    assert [a['id'] for a in result.unlocked_achievements] == ['explorer']
    assert result.newly_unlocked_titles == ['탐험가']


def test_rewards_are_granted_once():
    user = _user(unlockedEffects=['sparkle'])
    result = evaluate_achievements(user, {'gameId': 'tetris'}, {'score': 10000})
    assert 'score_10000' in [a['id'] for a in result.unlocked_achievements]
    # Effect was already owned, so it is not reported as new
    assert result.newly_unlocked_effects == []
    assert result.updated_user['unlockedEffects'] == ['sparkle']


def test_option_driven_achievements():
    user = _user(achievements=['first_play'])
    result = evaluate_achievements(
        user,
        {'gameId': 'minesweeper', 'difficulty': 'hard', 'cleared': True},
        {'score': 0, 'difficulty': 'hard', 'cleared': True},
    )
    assert [a['id'] for a in result.unlocked_achievements] == ['minesweeper_hard']
    assert result.newly_unlocked_titles == ['지뢰 해체반']


def test_non_numeric_option_values_are_ignored():
    result = evaluate_achievements(_user(), {'gameId': 'snake'}, {'score': 5, 'length': 'long'})
    assert 'snake_length_50' not in [a['id'] for a in result.unlocked_achievements]


def test_definitions_are_unique():
    ids = [d['id'] for d in get_all_achievement_definitions()]
    assert len(ids) == len(set(ids))


def test_best_scores_ties_keep_first_record():
    rows = [
        {'id': 's1', 'userId': 'u1', 'score': 50},
        {'id': 's2', 'userId': 'u1', 'score': 50},
        {'id': 's3', 'userId': 'anonymous', 'score': 50},
        {'id': 's4', 'userId': 'anonymous', 'score': 50},
    ]
    assert [r['id'] for r in best_scores_per_identity(rows)] == ['s1', 's3', 's4']
