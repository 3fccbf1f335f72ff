from flask import Blueprint, jsonify, request, current_app
from padel_tracker.services import get_session
from padel_tracker.services.match import Team


match = Blueprint('match', __name__)


@match.route('/state', methods=['GET'])
def get_match_state():
    return jsonify(get_session().state())


@match.route('/start', methods=['POST'])
def start_match():
    session = get_session()
    replaced = session.lifecycle.is_match_active
    record = session.start_match()
    current_app.logger.info(f"[start] match={record.id} replaced_active={replaced}")
    payload = session.state()
    payload['replaced_active'] = replaced
    return jsonify(payload), 201


@match.route('/point', methods=['POST'])
def point_won():
    data = request.get_json(silent=True) or {}
    try:
        team = Team.parse(data.get('team'))
    except ValueError:
        return jsonify({'error': 'team must be "A" or "B"'}), 400
    session = get_session()
    game_won = session.point_won_by(team)
    payload = session.state()
    payload['game_won'] = game_won
    return jsonify(payload)


@match.route('/undo', methods=['POST'])
def undo_point():
    session = get_session()
    undone = session.undo_last_point()
    payload = session.state()
    payload['undone'] = undone
    return jsonify(payload)


@match.route('/reset', methods=['POST'])
def reset_scores():
    session = get_session()
    session.reset_scores()
    return jsonify(session.state())


@match.route('/end', methods=['POST'])
def end_match():
    session = get_session()
    record = session.end_match()
    if record is None:
        return jsonify({'error': 'No active match'}), 400
    return jsonify({'match': record.to_summary(), 'state': session.state()})


@match.route('/discard', methods=['POST'])
def discard_match():
    session = get_session()
    record = session.discard_match()
    if record is None:
        return jsonify({'error': 'No active match'}), 400
    current_app.logger.info(f"[discard] match={record.id}")
    return jsonify({'discarded': record.id, 'state': session.state()})
