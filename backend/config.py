import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Comma separated list of origins allowed to open a socket
    CORS_ALLOWED_ORIGINS = [
        o.strip() for o in os.environ.get(
            'CORS_ALLOWED_ORIGINS',
            'http://localhost:5173,http://127.0.0.1:5173,http://localhost:5174,http://127.0.0.1:5174',
        ).split(',') if o.strip()
    ]
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/')
    # Board geometry (canonical Connect Four is 6x7, four in a row)
    BOARD_ROWS = int(os.environ.get('BOARD_ROWS', '6'))
    BOARD_COLS = int(os.environ.get('BOARD_COLS', '7'))
    CONNECT_N = int(os.environ.get('CONNECT_N', '4'))
    MAX_GAME_NAME_LENGTH = int(os.environ.get('MAX_GAME_NAME_LENGTH', '64'))
    # Seconds a finished game stays listed before eviction. 0 disables eviction.
    FINISHED_GAME_TTL_SEC = float(os.environ.get('FINISHED_GAME_TTL_SEC', '0'))
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
