from flask import Blueprint, current_app, jsonify

main = Blueprint('main', __name__)


def _extension():
    return current_app.extensions['pongserver']


@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the pong game server!'})


@main.route('/api/health')
def health():
    ext = _extension()
    stats = ext['coordinator'].stats()
    return jsonify({
        'status': 'ok',
        'rooms': stats['rooms'],
        'playing': stats['playing'],
        'tickLoop': ext['tick_loop'].is_running,
    })


@main.route('/api/config')
def game_config():
    """Game constants, so client-side prediction matches the server."""
    return jsonify(_extension()['settings'].to_dict())
