import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Comma separated list of origins allowed to open a socket
    CORS_ORIGINS = [o.strip() for o in os.environ.get(
        'CORS_ORIGINS', 'http://localhost:5173,http://127.0.0.1:5173'
    ).split(',') if o.strip()]
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/')
    # Simulation cadence (ticks per second)
    TICK_RATE = int(os.environ.get('TICK_RATE', '60'))
    TICK_LOOP_AUTOSTART = os.environ.get('TICK_LOOP_AUTOSTART', '1') not in ('0', 'false', 'False', '')
    # Optional: heartbeat interval for tick loop logs (sec). 0 disables.
    TICK_HEARTBEAT_SEC = int(os.environ.get('TICK_HEARTBEAT_SEC', '0'))
    # Board and object geometry. Clients predicting locally must use the same values.
    BOARD_WIDTH = int(os.environ.get('BOARD_WIDTH', '800'))
    BOARD_HEIGHT = int(os.environ.get('BOARD_HEIGHT', '600'))
    PADDLE_WIDTH = int(os.environ.get('PADDLE_WIDTH', '10'))
    PADDLE_HEIGHT = int(os.environ.get('PADDLE_HEIGHT', '100'))
    PADDLE_OFFSET = int(os.environ.get('PADDLE_OFFSET', '20'))
    PADDLE_SPEED = float(os.environ.get('PADDLE_SPEED', '8'))
    BALL_SIZE = int(os.environ.get('BALL_SIZE', '10'))
    BALL_VELOCITY_X = float(os.environ.get('BALL_VELOCITY_X', '5'))
    BALL_VELOCITY_Y = float(os.environ.get('BALL_VELOCITY_Y', '3'))
    WINNING_SCORE = int(os.environ.get('WINNING_SCORE', '5'))
    # Lobby
    ROOM_CODE_LENGTH = int(os.environ.get('ROOM_CODE_LENGTH', '4'))
    ROOM_CODE_ATTEMPTS = int(os.environ.get('ROOM_CODE_ATTEMPTS', '32'))
    PLAYER_NAME_MAX_LENGTH = int(os.environ.get('PLAYER_NAME_MAX_LENGTH', '20'))
