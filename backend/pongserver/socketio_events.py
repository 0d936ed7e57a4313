from flask import current_app, request
from flask_socketio import emit
from pongserver import socketio
from pongserver.services.game.coordinator import SessionCoordinator


def _coordinator() -> SessionCoordinator:
    return current_app.extensions['pongserver']['coordinator']


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def handle_connect(auth=None):
    current_app.logger.info(f"[connect] sid={_get_sid()}")
    emit('connected', {'sid': _get_sid()})


def handle_disconnect(reason=None):
    current_app.logger.info(f"[disconnect] sid={_get_sid()} reason={reason}")
    _coordinator().disconnect(_get_sid())


def handle_create_room(data=None):
    _coordinator().create_room(_get_sid(), data)


def handle_join_room(data=None):
    _coordinator().join_room(_get_sid(), data)


def handle_player_ready(data=None):
    _coordinator().player_ready(_get_sid(), data)


def handle_paddle_move(data=None):
    _coordinator().paddle_move(_get_sid(), data)


def handle_ping(data=None):
    emit('pong', data or {})


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register Socket.IO event handlers on the given namespace."""
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('create_room', handle_create_room, namespace=namespace)
    socketio.on_event('join_room', handle_join_room, namespace=namespace)
    socketio.on_event('player_ready', handle_player_ready, namespace=namespace)
    socketio.on_event('paddle_move', handle_paddle_move, namespace=namespace)
    socketio.on_event('ping', handle_ping, namespace=namespace)
