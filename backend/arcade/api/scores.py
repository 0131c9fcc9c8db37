import math
from flask import Blueprint, jsonify, request, current_app
from flask_login import login_required, current_user
from arcade import db, socketio
from arcade.auth import master_required
from arcade.cache import redis_manager
from arcade.games import get_games
from arcade.models import new_id, utc_now_iso
from arcade.repositories import user_repository, score_repository
from arcade.services.achievements import evaluate_achievements, get_all_achievement_definitions
from arcade.services.leaderboard import build_game_leaderboard, build_money_ranking, is_anonymous
from arcade.services.rewards import award_currency, compute_currency


scores = Blueprint('scores', __name__)


def _is_number(value) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # int beyond float range
        return False


def _json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _is_id(value) -> bool:
    return isinstance(value, str) and bool(value)


def _bad_request(message='잘못된 요청입니다.'):
    return jsonify({'success': False, 'message': message}), 400


def _emit_leaderboard_update(game_id: str) -> None:
    socketio.emit('leaderboard_update', {'gameId': game_id}, to=f"leaderboard:{game_id}", namespace='/ws')


@scores.route('/games', methods=['GET'])
def list_games():
    return jsonify({'success': True, 'games': get_games()})


@scores.route('/achievements', methods=['GET'])
def list_achievements():
    try:
        definitions = get_all_achievement_definitions()
        return jsonify({'success': True, 'achievements': definitions})
    except Exception:
        current_app.logger.exception('[achievements] failed to load definitions')
        return jsonify({'success': False, 'message': '도전과제 목록을 불러오는 중 오류가 발생했습니다.'}), 500


@scores.route('/scores', methods=['POST'])
def submit_score():
    data = _json_body()
    game_id = data.get('gameId')
    score = data.get('score')
    user_id = data.get('userId')
    options = data.get('options')
    timestamp = data.get('timestamp')

    if not _is_id(game_id) or not _is_id(user_id) or not _is_number(score):
        return _bad_request('gameId, score, userId 값이 필요합니다.')
    if options is not None and not isinstance(options, dict):
        return _bad_request('options 값이 올바르지 않습니다.')
    if timestamp is not None and not isinstance(timestamp, str):
        return _bad_request('timestamp 값이 올바르지 않습니다.')
    options = options or {}

    new_score = {
        'id': new_id(),
        'gameId': game_id,
        'score': score,
        'userId': user_id,
        'options': options,
        'timestamp': timestamp or utc_now_iso(),
    }

    # Anonymous scores are never attributed to a user, so they only get stored
    if is_anonymous(user_id):
        stored = score_repository.add_score(new_score)
        redis_manager.persist_score(game_id, stored['id'])
        _emit_leaderboard_update(game_id)
        return jsonify({'success': True, 'score': stored})

    stored = score_repository.add_score(new_score)
    redis_manager.persist_game_scores(game_id)
    _emit_leaderboard_update(game_id)

    unlocked_achievements = []
    newly_unlocked_effects = []
    newly_unlocked_titles = []
    currency_gained = 0
    final_user = None

    existing_user = user_repository.get_user(user_id)
    if existing_user:
        result = evaluate_achievements(
            existing_user,
            {'gameId': game_id, **options},
            {'score': score, **options},
        )
        user_to_save = result.updated_user
        dirty = result.changed

        currency_gained = compute_currency(score)
        if currency_gained > 0:
            award_currency(user_to_save, game_id, currency_gained)
            dirty = True

        if dirty:
            user_to_save = user_repository.save_user(user_to_save)
            redis_manager.persist_user(user_to_save['id'])

        final_user = user_to_save
        unlocked_achievements = result.unlocked_achievements
        newly_unlocked_effects = result.newly_unlocked_effects
        newly_unlocked_titles = result.newly_unlocked_titles
        current_app.logger.info(
            f"[scores] game={game_id} user={user_id} score={score} gained={currency_gained} "
            f"unlocked={[a['id'] for a in unlocked_achievements]}"
        )

    return jsonify({
        'success': True,
        'score': stored,
        'unlockedAchievements': unlocked_achievements,
        'newlyUnlockedEffects': newly_unlocked_effects,
        'newlyUnlockedTitles': newly_unlocked_titles,
        'currencyGained': currency_gained,
        'user': final_user,
    })


@scores.route('/rankings/money', methods=['GET'])
def money_ranking():
    try:
        limit = int(current_app.config.get('MONEY_RANKING_LIMIT', 100))
        ranking = build_money_ranking(user_repository.get_all_users(), limit=limit)
        return jsonify({'success': True, 'scores': ranking})
    except Exception:
        current_app.logger.exception('[rankings] failed to build money ranking')
        db.session.rollback()
        return jsonify({'success': False, 'message': '소지금 랭킹을 불러오는 중 오류가 발생했습니다.'}), 500


@scores.route('/scores/<string:game_id>', methods=['GET'])
def game_leaderboard(game_id):
    try:
        all_scores = score_repository.get_scores(game_id)
        leaderboard = build_game_leaderboard(all_scores, user_repository.get_user)
        return jsonify({'success': True, 'scores': leaderboard})
    except Exception:
        current_app.logger.exception(f'[leaderboard] failed to load scores for game={game_id}')
        db.session.rollback()
        return jsonify({'success': False, 'message': '점수를 불러오는 중 오류가 발생했습니다.'}), 500


@scores.route('/scores/<string:score_id>', methods=['DELETE'])
@login_required
@master_required
def delete_score(score_id):
    data = _json_body()
    delete_all = bool(data.get('deleteAll'))

    # First game containing the id wins; score ids are unique across games
    for game in get_games():
        game_scores = score_repository.get_scores(game['id'])
        target = next((s for s in game_scores if s['id'] == score_id), None)
        if target is None:
            continue
        if delete_all:
            remaining = [s for s in game_scores if s['userId'] != target['userId']]
        else:
            remaining = [s for s in game_scores if s['id'] != score_id]
        score_repository.save_scores_for_game(game['id'], remaining)
        redis_manager.persist_game_scores(game['id'])
        _emit_leaderboard_update(game['id'])
        current_app.logger.info(
            f"[admin] {current_user.id} deleted {len(game_scores) - len(remaining)} score(s) "
            f"from game={game['id']} (score={score_id}, deleteAll={delete_all})"
        )
        return jsonify({'success': True, 'message': '랭킹이 삭제되었습니다.'})

    return jsonify({'success': False, 'message': '해당 랭킹을 찾을 수 없습니다.'}), 404


@scores.route('/game-over', methods=['POST'])
@login_required
def game_over():
    data = _json_body()
    game_id = data.get('gameId')
    score = data.get('score')
    user_id = data.get('userId')
    if not user_id or is_anonymous(user_id):
        return jsonify({'success': True, 'message': 'Anonymous user cannot earn currency.'})
    if not _is_id(game_id) or not _is_id(user_id) or not _is_number(score):
        return _bad_request('gameId, score 값이 필요합니다.')

    try:
        user = user_repository.get_user(user_id)
        if not user:
            return jsonify({'success': False, 'message': 'User not found'}), 404
        currency_gained = compute_currency(score)
        if currency_gained > 0:
            award_currency(user, game_id, currency_gained, ranked=False)
            user = user_repository.save_user(user)
            redis_manager.persist_user(user['id'])
        return jsonify({'success': True, 'user': user, 'currencyGained': currency_gained})
    except Exception:
        current_app.logger.exception(f'[game-over] failed for user={user_id} game={game_id}')
        db.session.rollback()
        return jsonify({'success': False, 'message': 'Error processing game over.'}), 500
