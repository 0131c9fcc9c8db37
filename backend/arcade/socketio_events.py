from flask_socketio import join_room, leave_room, emit
from arcade import socketio


def _room(game_id: str) -> str:
    return f"leaderboard:{game_id}"


def handle_connect():
    emit('connected', {'message': 'Connected to /ws'})


def handle_join_leaderboard(data):
    game_id = (data or {}).get('gameId')
    if not game_id:
        emit('error', {'message': 'gameId is required'})
        return
    room = _room(game_id)
    join_room(room)
    emit('joined', {'room': room})


def handle_leave_leaderboard(data):
    game_id = (data or {}).get('gameId')
    if not game_id:
        emit('error', {'message': 'gameId is required'})
        return
    room = _room(game_id)
    leave_room(room)
    emit('left', {'room': room})


def handle_ping(data):
    emit('pong', data or {})


def register_socketio_handlers(testing: bool = False) -> None:
    """Register Socket.IO event handlers.

    Always register on namespace '/ws'. When testing is True, also mirror
    handlers on the default namespace '/' to accommodate the test harness.
    """
    namespaces = ['/ws', '/'] if testing else ['/ws']
    for namespace in namespaces:
        socketio.on_event('connect', handle_connect, namespace=namespace)
        socketio.on_event('join_leaderboard', handle_join_leaderboard, namespace=namespace)
        socketio.on_event('leave_leaderboard', handle_leave_leaderboard, namespace=namespace)
        socketio.on_event('ping', handle_ping, namespace=namespace)
