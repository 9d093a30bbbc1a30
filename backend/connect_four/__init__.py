import logging

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from config import Config

socketio = SocketIO(async_mode=None)


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(getattr(logging, str(flask_app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO))

    allowed_origins = flask_app.config.get('CORS_ALLOWED_ORIGINS', [])
    CORS(flask_app, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # Each app owns its registry so tests get isolated game catalogs
    from connect_four.dispatch import IntentDispatcher
    from connect_four.gateway import SocketIOGateway
    from connect_four.services.games.registry import SessionRegistry
    from connect_four.services.games.retention import RetentionScheduler

    namespace = flask_app.config.get('SOCKETIO_NAMESPACE', '/')
    registry = SessionRegistry(
        rows=int(flask_app.config.get('BOARD_ROWS', 6)),
        cols=int(flask_app.config.get('BOARD_COLS', 7)),
        connect_n=int(flask_app.config.get('CONNECT_N', 4)),
        max_name_length=int(flask_app.config.get('MAX_GAME_NAME_LENGTH', 64)),
    )
    gateway = SocketIOGateway(socketio, namespace=namespace)
    retention = RetentionScheduler(
        registry,
        ttl_sec=float(flask_app.config.get('FINISHED_GAME_TTL_SEC', 0)),
        start_task=socketio.start_background_task,
    )
    dispatcher = IntentDispatcher(
        registry,
        gateway,
        retention=retention,
        logger=flask_app.logger,
    )
    retention.on_evicted = lambda name: dispatcher.broadcast_open_games()
    flask_app.extensions['connect_four'] = dispatcher

    # Import and register blueprints here
    from connect_four.main import main
    flask_app.register_blueprint(main)

    from connect_four.api.games import games
    flask_app.register_blueprint(games, url_prefix='/api/games')

    # Register Socket.IO event handlers
    from connect_four.socketio_events import register_socketio_handlers
    register_socketio_handlers(namespace=namespace)

    return flask_app
