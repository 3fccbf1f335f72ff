def test_socket_connect_and_join(sio_client):
    # Ensure we are connected to /ws
    if not sio_client.is_connected('/ws'):
        sio_client.connect(namespace='/ws')
    assert sio_client.is_connected('/ws')

    received = sio_client.get_received('/ws')
    assert any(pkt['name'] == 'connected' for pkt in received)

    sio_client.emit('join_scoreboard', {}, namespace='/ws')
    received = sio_client.get_received('/ws')
    joined = [pkt for pkt in received if pkt['name'] == 'joined']
    assert joined
    assert joined[0]['args'][0]['room'] == 'scoreboard'
    assert joined[0]['args'][0]['state']['is_match_active'] is False


def test_ping_pong(sio_client):
    sio_client.emit('ping', {'n': 1}, namespace='/ws')
    received = sio_client.get_received('/ws')
    assert any(pkt['name'] == 'pong' and pkt['args'][0] == {'n': 1} for pkt in received)


def test_scoring_broadcasts_state_updates(sio_client, client):
    sio_client.emit('join_scoreboard', {}, namespace='/ws')
    sio_client.get_received('/ws')  # flush

    client.post('/api/match/start')
    client.post('/api/match/point', json={'team': 'A'})
    updates = [pkt for pkt in sio_client.get_received('/ws') if pkt['name'] == 'state_update']
    assert len(updates) >= 2
    assert updates[-1]['args'][0]['points'] == {'A': '15', 'B': '0'}


def test_leave_stops_updates(sio_client, client):
    sio_client.emit('join_scoreboard', {}, namespace='/ws')
    sio_client.emit('leave_scoreboard', {}, namespace='/ws')
    received = sio_client.get_received('/ws')
    assert any(pkt['name'] == 'left' for pkt in received)

    client.post('/api/match/start')
    assert not any(pkt['name'] == 'state_update' for pkt in sio_client.get_received('/ws'))
