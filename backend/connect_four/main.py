from flask import Blueprint, current_app, jsonify

main = Blueprint('main', __name__)

@main.route('/')
def index():
    dispatcher = current_app.extensions['connect_four']
    return jsonify({
        'message': 'Welcome to the Connect Four game server!',
        'games': len(dispatcher.registry),
        'connections': dispatcher.gateway.connection_count,
    })
