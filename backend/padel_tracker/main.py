from flask import Blueprint, jsonify
from padel_tracker.services import get_session

main = Blueprint('main', __name__)

@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the Padel score tracker!'})

@main.route('/api/history', methods=['GET'])
def get_history():
    history = get_session().lifecycle.history
    return jsonify([m.to_summary() for m in history])

@main.route('/api/history/<int:index>', methods=['DELETE'])
def delete_history_entry(index):
    removed = get_session().delete_match(index)
    if removed is None:
        return jsonify({'error': 'No match at that position'}), 404
    return jsonify({'deleted': removed.id})

@main.route('/api/stats', methods=['GET'])
def get_stats():
    session = get_session()
    payload = session.statistics().to_dict()
    payload['healthSync'] = bool(session.workout_sync.is_authorized)
    return jsonify(payload)

@main.route('/api/health/authorize', methods=['POST'])
def authorize_health():
    authorized = get_session().authorize_workouts()
    return jsonify({'authorized': authorized}), 200 if authorized else 502
