from flask import Blueprint, current_app, jsonify

from connect_four.services.games.errors import GameNotFound

games = Blueprint('games', __name__)


def _registry():
    return current_app.extensions['connect_four'].registry


@games.route('/open', methods=['GET'])
def list_open_games():
    """Names of games still waiting for a second player, oldest first."""
    return jsonify({'openGameNames': _registry().list_open_games()})


@games.route('/<string:name>/state', methods=['GET'])
def get_game_state(name):
    try:
        session = _registry().get(name)
    except GameNotFound as exc:
        return jsonify({'error': str(exc), 'reason': exc.code}), 404
    with session.lock:
        payload = session.to_dict()
    return jsonify(payload)
