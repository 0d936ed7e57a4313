from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
import click
from pongserver.config import Config

socketio = SocketIO(async_mode=None)

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    allowed_origins = flask_app.config.get('CORS_ORIGINS') or []
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # Game core: one settings value, one registry and one coordinator per app
    from pongserver.services.game.settings import GameSettings
    from pongserver.services.game.registry import RoomRegistry
    from pongserver.services.game.coordinator import SessionCoordinator
    from pongserver.services.game.events import SocketIOEventSink
    from pongserver.services.game.scheduler import TickLoop

    namespace = flask_app.config.get('SOCKETIO_NAMESPACE', '/')
    settings = GameSettings.from_config(flask_app.config)
    registry = RoomRegistry(
        settings,
        code_length=flask_app.config.get('ROOM_CODE_LENGTH', 4),
        code_attempts=flask_app.config.get('ROOM_CODE_ATTEMPTS', 32),
        name_max_length=flask_app.config.get('PLAYER_NAME_MAX_LENGTH', 20),
    )
    coordinator = SessionCoordinator(registry, SocketIOEventSink(socketio, namespace), flask_app.logger)
    tick_loop = TickLoop(
        socketio, coordinator, flask_app.logger,
        heartbeat_sec=flask_app.config.get('TICK_HEARTBEAT_SEC', 0),
    )
    flask_app.extensions['pongserver'] = {
        'settings': settings,
        'registry': registry,
        'coordinator': coordinator,
        'tick_loop': tick_loop,
    }

    # Import and register blueprints here
    from pongserver.main import main
    flask_app.register_blueprint(main)

    # Register Socket.IO event handlers
    from pongserver.socketio_events import register_socketio_handlers
    register_socketio_handlers(namespace=namespace)

    @click.command('show-config')
    def show_config_command():
        """Prints the game constants this server simulates with."""
        for key, value in settings.to_dict().items():
            click.echo(f'{key}: {value}')

    flask_app.cli.add_command(show_config_command)

    # Tests drive ticks by hand unless the loop is explicitly enabled
    testing = flask_app.config.get('TESTING') and not flask_app.config.get('ENABLE_TICK_LOOP_IN_TESTS')
    if flask_app.config.get('TICK_LOOP_AUTOSTART') and not testing:
        tick_loop.start()

    return flask_app
