from padel_tracker import create_app, socketio
from padel_tracker.services import shutdown_session

app = create_app()

if __name__ == '__main__':
    # Use SocketIO server to enable websockets in dev
    try:
        socketio.run(app, debug=True)
    finally:
        shutdown_session(app)
