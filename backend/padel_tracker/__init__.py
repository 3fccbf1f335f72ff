from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import click
from config import Config

db = SQLAlchemy()
migrate = Migrate()
allowed_origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:5174",
    "http://127.0.0.1:5174",
]
socketio = SocketIO(cors_allowed_origins=allowed_origins, async_mode=None)

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    db.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from padel_tracker.main import main
    flask_app.register_blueprint(main)

    from padel_tracker.api.match import match
    flask_app.register_blueprint(match, url_prefix='/api/match')

    # Register Socket.IO event handlers
    try:
        from padel_tracker.socketio_events import register_socketio_handlers
        register_socketio_handlers(testing=flask_app.config.get('TESTING', False))
    except Exception as exc:
        flask_app.logger.warning(f"SocketIO events not loaded: {exc}")

    @click.command('db-init')
    def db_init_command():
        """Creates the history table if it does not exist."""
        import padel_tracker.models  # noqa: F401
        with flask_app.app_context():
            db.create_all()
            print('Database tables created.')

    @click.command('history-reset')
    def history_reset_command():
        """Deletes every completed match from the stored history."""
        from padel_tracker.services import get_session, shutdown_session
        with flask_app.app_context():
            get_session(flask_app).lifecycle.clear_history()
            shutdown_session(flask_app)
            print('Match history has been cleared!')

    @click.command('stats')
    def stats_command():
        """Prints lifetime statistics for the stored history."""
        from padel_tracker.services import get_session, shutdown_session
        with flask_app.app_context():
            summary = get_session(flask_app).statistics().to_dict()
            shutdown_session(flask_app)
            print(f"Matches played: {summary['totalMatches']}")
            print(f"Total games:    {summary['totalGames']}")
            print(f"Play time:      {summary['totalPlayTimeFormatted']}")
            print(f"Avg duration:   {summary['averageDurationFormatted']}")
            print(f"Calories:       {summary['totalEnergy']}")

    flask_app.cli.add_command(db_init_command)
    flask_app.cli.add_command(history_reset_command)
    flask_app.cli.add_command(stats_command)

    return flask_app
