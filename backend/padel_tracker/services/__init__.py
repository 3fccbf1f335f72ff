import threading

from flask import current_app

from padel_tracker import socketio
from padel_tracker.services.match import (
    DisabledWorkoutSync,
    MatchLifecycleManager,
    MatchTimer,
    ScoreboardSession,
    SqlHistoryStore,
    WebhookWorkoutSync,
)


EXTENSION_KEY = 'padel_tracker.session'
SCOREBOARD_ROOM = 'scoreboard'

_session_lock = threading.Lock()


def _broadcast_state(state: dict) -> None:
    socketio.emit('state_update', state, to=SCOREBOARD_ROOM, namespace='/ws')


def _build_session(app) -> ScoreboardSession:
    cfg = app.config
    testing = bool(cfg.get('TESTING'))

    sync_url = cfg.get('WORKOUT_SYNC_URL')
    if sync_url:
        workout_sync = WebhookWorkoutSync(
            sync_url,
            token=cfg.get('WORKOUT_SYNC_TOKEN'),
            timeout=float(cfg.get('WORKOUT_SYNC_TIMEOUT_SEC', 8)),
            transport=cfg.get('WORKOUT_SYNC_TRANSPORT'),
        )
    else:
        workout_sync = DisabledWorkoutSync()

    lifecycle = MatchLifecycleManager(
        store=SqlHistoryStore(app, key=cfg.get('HISTORY_KEY', 'savedMatches')),
        energy_rate=float(cfg.get('CALORIES_PER_HOUR', 500)),
    )
    timer = MatchTimer(
        enabled=not testing or bool(cfg.get('ENABLE_TIMER_IN_TESTS')),
        heartbeat_sec=int(cfg.get('TIMER_HEARTBEAT_SEC', 0)),
    )
    session = ScoreboardSession(
        lifecycle,
        timer,
        workout_sync=workout_sync,
        tick_interval=float(cfg.get('TICK_INTERVAL_SEC', 1)),
        notify=_broadcast_state,
    )
    # Side effects stay inline under test for deterministic assertions
    if not testing:
        session.run_async = socketio.start_background_task
    return session


def get_session(app=None) -> ScoreboardSession:
    """Return the app's scoreboard session, creating it on first use."""
    app = app or current_app._get_current_object()
    session = app.extensions.get(EXTENSION_KEY)
    if session is not None:
        return session
    with _session_lock:
        session = app.extensions.get(EXTENSION_KEY)
        if session is None:
            session = _build_session(app)
            app.extensions[EXTENSION_KEY] = session
            app.logger.info(f"[session] loaded history entries={len(session.lifecycle.history)}")
    return session


def shutdown_session(app) -> None:
    """Stop the clock and close collaborators of the app's session, if any."""
    with _session_lock:
        session = app.extensions.pop(EXTENSION_KEY, None)
    if session is not None:
        session.close()
