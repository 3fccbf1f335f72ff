def _point(client, team):
    res = client.post('/api/match/point', json={'team': team})
    assert res.status_code == 200
    return res.get_json()


def _play_match(client, session, sequence, ticks):
    assert client.post('/api/match/start').status_code == 201
    for _ in range(ticks):
        session.tick()
    for team in sequence:
        _point(client, team)
    res = client.post('/api/match/end')
    assert res.status_code == 200
    return res.get_json()['match']


def test_index(client):
    res = client.get('/')
    assert res.status_code == 200
    assert 'message' in res.get_json()


def test_state_before_any_match(client):
    res = client.get('/api/match/state')
    assert res.status_code == 200
    state = res.get_json()
    assert state['is_match_active'] is False
    assert state['match'] is None
    assert state['points'] == {'A': '0', 'B': '0'}
    assert state['health_sync'] is False


def test_scoring_flow_through_deuce(client):
    started = client.post('/api/match/start')
    assert started.status_code == 201
    assert started.get_json()['is_match_active'] is True
    assert started.get_json()['replaced_active'] is False

    for _ in range(4):
        state = _point(client, 'A')
    assert state['game_won'] is True
    assert state['games'] == {'A': 1, 'B': 0}
    assert state['points'] == {'A': '0', 'B': '0'}

    for team in 'ABABAB':
        state = _point(client, team)
    assert state['points'] == {'A': '40', 'B': '40'}
    state = _point(client, 'b')
    assert state['points'] == {'A': '40', 'B': 'AD'}
    state = _point(client, 'B')
    assert state['game_won'] is True
    assert state['games'] == {'A': 1, 'B': 1}


def test_invalid_team_is_rejected(client):
    res = client.post('/api/match/point', json={'team': 'C'})
    assert res.status_code == 400
    res = client.post('/api/match/point')
    assert res.status_code == 400


def test_undo_and_reset(client):
    client.post('/api/match/start')
    _point(client, 'A')
    _point(client, 'A')
    res = client.post('/api/match/undo').get_json()
    assert res['undone'] is True
    assert res['points'] == {'A': '15', 'B': '0'}
    res = client.post('/api/match/undo').get_json()
    assert res['undone'] is False
    assert res['points'] == {'A': '15', 'B': '0'}
    res = client.post('/api/match/reset').get_json()
    assert res['raw_points'] == {'A': 0, 'B': 0}
    assert res['is_match_active'] is True


def test_end_without_match(client):
    res = client.post('/api/match/end')
    assert res.status_code == 400


def test_start_twice_replaces_match(client):
    first = client.post('/api/match/start').get_json()['match']['id']
    second = client.post('/api/match/start').get_json()
    assert second['replaced_active'] is True
    assert second['match']['id'] != first
    assert client.get('/api/history').get_json() == []


def test_end_match_records_history_and_stats(client, session):
    match = _play_match(client, session, 'AAAA', ticks=120)
    assert match['isComplete'] is True
    assert match['endTime'] is not None
    assert match['teamAGames'] == 1
    assert match['winner'] == 'Team A'
    assert match['durationFormatted'] == '2:00'

    history = client.get('/api/history').get_json()
    assert [m['id'] for m in history] == [match['id']]

    stats = client.get('/api/stats').get_json()
    assert stats['totalMatches'] == 1
    assert stats['totalGames'] == 1
    assert stats['totalPlayTime'] == 120
    assert stats['totalEnergy'] == 16
    assert stats['averageDurationFormatted'] == '2m'
    assert stats['healthSync'] is False


def test_delete_history_entry(client, session):
    older = _play_match(client, session, 'AAAA', ticks=60)
    newer = _play_match(client, session, 'BBBBBBBB', ticks=30)
    assert client.delete('/api/history/7').status_code == 404

    res = client.delete('/api/history/0')
    assert res.status_code == 200
    assert res.get_json()['deleted'] == newer['id']
    history = client.get('/api/history').get_json()
    assert [m['id'] for m in history] == [older['id']]
    stats = client.get('/api/stats').get_json()
    assert stats['totalMatches'] == 1
    assert stats['totalPlayTime'] == 60


def test_history_survives_session_rebuild(flask_app, client, session):
    match = _play_match(client, session, 'AAAA', ticks=5)
    from padel_tracker.services import EXTENSION_KEY, get_session
    flask_app.extensions.pop(EXTENSION_KEY)
    rebuilt = get_session(flask_app)
    assert rebuilt is not session
    assert [m.id for m in rebuilt.lifecycle.history] == [match['id']]


def test_health_authorize_without_tracker(client):
    res = client.post('/api/health/authorize')
    assert res.status_code == 502
    assert res.get_json() == {'authorized': False}


def test_discard_live_match(client):
    assert client.post('/api/match/discard').status_code == 400
    client.post('/api/match/start')
    _point(client, 'A')
    res = client.post('/api/match/discard')
    assert res.status_code == 200
    body = res.get_json()
    assert body['state']['is_match_active'] is False
    assert body['state']['raw_points'] == {'A': 0, 'B': 0}
    assert client.get('/api/history').get_json() == []


def test_concurrent_first_access_builds_one_session(flask_app):
    import threading
    from padel_tracker.services import get_session

    barrier = threading.Barrier(8)
    seen = []

    def grab():
        barrier.wait()
        seen.append(get_session(flask_app))

    threads = [threading.Thread(target=grab) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(seen) == 8
    assert all(s is seen[0] for s in seen)
