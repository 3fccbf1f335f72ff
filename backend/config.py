import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///padel.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Match clock tick (seconds)
    TICK_INTERVAL_SEC = float(os.environ.get('TICK_INTERVAL_SEC', '1'))
    # Energy estimate rate (kcal per hour of play)
    CALORIES_PER_HOUR = float(os.environ.get('CALORIES_PER_HOUR', '500'))
    # Key of the stored match history blob
    HISTORY_KEY = os.environ.get('HISTORY_KEY', 'savedMatches')
    # Optional fitness-tracker endpoint. Empty disables workout sync.
    WORKOUT_SYNC_URL = os.environ.get('WORKOUT_SYNC_URL', '')
    WORKOUT_SYNC_TOKEN = os.environ.get('WORKOUT_SYNC_TOKEN')
    WORKOUT_SYNC_TIMEOUT_SEC = float(os.environ.get('WORKOUT_SYNC_TIMEOUT_SEC', '8'))
    # Optional: heartbeat interval for timer worker logs (sec). 0 disables.
    TIMER_HEARTBEAT_SEC = int(os.environ.get('TIMER_HEARTBEAT_SEC', '0'))
