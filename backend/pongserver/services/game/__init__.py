"""Game domain services: simulation, rooms and the session loop.

This package contains the pure game logic (geometry, engine) and the
room lifecycle (registry, coordinator). It produces outbound events but
never touches the transport, which lives in `pongserver.socketio_events`.
"""
