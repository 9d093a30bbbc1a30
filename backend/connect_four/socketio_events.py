from flask import current_app, request

from connect_four import socketio
from connect_four.dispatch import IntentDispatcher
from connect_four.intents import CreateGame, JoinGame, ListOpenGames, Move


def get_dispatcher() -> IntentDispatcher:
    return current_app.extensions['connect_four']


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def handle_connect(auth=None):
    get_dispatcher().gateway.register(_get_sid())
    current_app.logger.info(f"[connect] handle={_get_sid()}")


def handle_disconnect(reason=None):
    # Seats are kept: reconnecting to a game is not supported, and the
    # opponent can still see the final board through the HTTP state route.
    get_dispatcher().gateway.unregister(_get_sid())
    current_app.logger.info(f"[disconnect] handle={_get_sid()} reason={reason}")


def handle_get_list_of_open_games(data=None):
    get_dispatcher().handle_event(_get_sid(), ListOpenGames.event, data)


def handle_create_new_game(data=None):
    get_dispatcher().handle_event(_get_sid(), CreateGame.event, data)


def handle_add_player_to_game(data=None):
    get_dispatcher().handle_event(_get_sid(), JoinGame.event, data)


def handle_player_move(data=None):
    get_dispatcher().handle_event(_get_sid(), Move.event, data)


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register Socket.IO event handlers on ``namespace``."""
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event(ListOpenGames.event, handle_get_list_of_open_games, namespace=namespace)
    socketio.on_event(CreateGame.event, handle_create_new_game, namespace=namespace)
    socketio.on_event(JoinGame.event, handle_add_player_to_game, namespace=namespace)
    socketio.on_event(Move.event, handle_player_move, namespace=namespace)
