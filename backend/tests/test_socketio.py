def test_socket_connect_and_join(sio_client):
    assert sio_client.is_connected('/ws')
    # Flush the connect greeting
    sio_client.get_received('/ws')

    sio_client.emit('join_leaderboard', {'gameId': 'tetris'}, namespace='/ws')
    received = sio_client.get_received('/ws')
    assert any(pkt['name'] == 'joined' and pkt['args'][0]['room'] == 'leaderboard:tetris' for pkt in received)


def test_join_without_game_id_errors(sio_client):
    sio_client.get_received('/ws')
    sio_client.emit('join_leaderboard', {}, namespace='/ws')
    received = sio_client.get_received('/ws')
    assert any(pkt['name'] == 'error' for pkt in received)


def test_score_submission_pushes_leaderboard_update(sio_client, client):
    sio_client.emit('join_leaderboard', {'gameId': 'snake'}, namespace='/ws')
    sio_client.get_received('/ws')  # flush

    client.post('/api/scores', json={'gameId': 'snake', 'score': 10, 'userId': 'anonymous'})
    events = sio_client.get_received('/ws')
    updates = [e for e in events if e['name'] == 'leaderboard_update']
    assert updates and updates[0]['args'][0] == {'gameId': 'snake'}


def test_other_rooms_are_not_notified(sio_client, client):
    sio_client.emit('join_leaderboard', {'gameId': 'snake'}, namespace='/ws')
    sio_client.get_received('/ws')

    client.post('/api/scores', json={'gameId': 'tetris', 'score': 10, 'userId': 'anonymous'})
    events = sio_client.get_received('/ws')
    assert not any(e['name'] == 'leaderboard_update' for e in events)


def test_leave_leaderboard(sio_client, client):
    sio_client.emit('join_leaderboard', {'gameId': 'snake'}, namespace='/ws')
    sio_client.emit('leave_leaderboard', {'gameId': 'snake'}, namespace='/ws')
    received = sio_client.get_received('/ws')
    assert any(pkt['name'] == 'left' for pkt in received)

    client.post('/api/scores', json={'gameId': 'snake', 'score': 10, 'userId': 'anonymous'})
    assert not any(e['name'] == 'leaderboard_update' for e in sio_client.get_received('/ws'))
