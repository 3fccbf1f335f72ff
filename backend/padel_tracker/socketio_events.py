from flask_socketio import join_room, leave_room, emit
from padel_tracker.services import SCOREBOARD_ROOM, get_session


def handle_connect():
    emit('connected', {'message': 'Connected to /ws'})


def handle_join_scoreboard(data=None):
    join_room(SCOREBOARD_ROOM)
    emit('joined', {'room': SCOREBOARD_ROOM, 'state': get_session().state()})


def handle_leave_scoreboard(data=None):
    leave_room(SCOREBOARD_ROOM)
    emit('left', {'room': SCOREBOARD_ROOM})


def handle_ping(data):
    emit('pong', data or {})


def register_socketio_handlers(testing: bool = False) -> None:
    """Register Socket.IO event handlers.

    Always register on namespace '/ws'. When testing is True, also mirror
    handlers on the default namespace '/' to accommodate the test harness.
    """
    from padel_tracker import socketio

    namespaces = ['/ws', '/'] if testing else ['/ws']
    for namespace in namespaces:
        socketio.on_event('connect', handle_connect, namespace=namespace)
        socketio.on_event('join_scoreboard', handle_join_scoreboard, namespace=namespace)
        socketio.on_event('leave_scoreboard', handle_leave_scoreboard, namespace=namespace)
        socketio.on_event('ping', handle_ping, namespace=namespace)
