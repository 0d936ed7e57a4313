import logging
import threading
from typing import Any, Dict, List, Optional

from pongserver.models import PLAYER_ONE
from .engine import tick
from .errors import NotApplicable, RoomError
from .events import EventSink, OutboundEvent, event
from .registry import RoomRegistry


def _payload(data) -> Dict[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise NotApplicable('Malformed message')
    return data


def _room_code(data: Dict[str, Any]) -> str:
    code = data.get('roomCode')
    if not isinstance(code, str) or not code.strip():
        raise NotApplicable('roomCode is required')
    return code.strip().upper()


class SessionCoordinator:
    """Turns client intents and timer ticks into registry/engine calls.

    Every intent and every tick runs under one lock, so no two operations
    ever observe the same room mid-update. Resulting events are gathered
    under the lock and published once it is released.
    """

    def __init__(self, registry: RoomRegistry, sink: EventSink, logger: Optional[logging.Logger] = None):
        self.registry = registry
        self.settings = registry.settings
        self.sink = sink
        self.logger = logger or logging.getLogger(__name__)
        self._lock = threading.RLock()

    # ---- intents ----

    def create_room(self, sid: str, data=None) -> List[OutboundEvent]:
        return self._dispatch('create_room', self._create_room, sid, data)

    def join_room(self, sid: str, data=None) -> List[OutboundEvent]:
        return self._dispatch('join_room', self._join_room, sid, data)

    def player_ready(self, sid: str, data=None) -> List[OutboundEvent]:
        return self._dispatch('player_ready', self._player_ready, sid, data)

    def paddle_move(self, sid: str, data=None) -> List[OutboundEvent]:
        return self._dispatch('paddle_move', self._paddle_move, sid, data)

    def disconnect(self, sid: str) -> List[OutboundEvent]:
        return self._dispatch('disconnect', self._disconnect, sid, None)

    def _dispatch(self, intent: str, handler, sid: str, data) -> List[OutboundEvent]:
        events: List[OutboundEvent] = []
        with self._lock:
            try:
                handler(sid, data, events)
            except RoomError as exc:
                self.logger.info(f"[intent-rejected] intent={intent} sid={sid} reason={exc.message}")
                events.append(event('error', {'message': exc.message}, [sid]))
        self._publish(events)
        return events

    def _create_room(self, sid, data, events):
        data = _payload(data)
        code = self.registry.create_room(sid, data.get('playerName'))
        self.logger.info(f"[room-created] room={code} sid={sid} slot={PLAYER_ONE}")
        events.append(event('room_created', {'roomCode': code, 'playerNumber': PLAYER_ONE}, [sid]))

    def _join_room(self, sid, data, events):
        data = _payload(data)
        code = _room_code(data)
        slot = self.registry.join_room(code, sid, data.get('playerName'))
        room = self.registry.get(code)
        self.logger.info(f"[room-joined] room={code} sid={sid} slot={slot}")
        events.append(event('room_joined', {'roomCode': code, 'playerNumber': slot}, [sid]))
        events.append(event(
            'player_joined',
            {'players': [p.to_dict(include_ready=False) for p in room.players.values()]},
            list(room.players),
        ))

    def _player_ready(self, sid, data, events):
        code = _room_code(_payload(data))
        room = self.registry.get(code)
        if room is None or sid not in room.players:
            return
        both_ready = self.registry.set_ready(code, sid)
        events.append(event(
            'player_ready_status',
            {'players': [p.to_dict() for p in room.players.values()]},
            list(room.players),
        ))
        if both_ready and self.registry.start_game(code):
            self.logger.info(f"[game-start] room={code}")
            events.append(event('game_start', {'gameState': room.state.to_dict()}, list(room.players)))

    def _paddle_move(self, sid, data, events):
        # No reply: the effect shows up in the next state broadcast.
        if not isinstance(data, dict):
            return
        code = data.get('roomCode')
        if not isinstance(code, str):
            return
        self.registry.apply_movement_intent(code.strip().upper(), sid, data.get('direction'))

    def _disconnect(self, sid, data, events):
        for code in self.registry.codes_for(sid):
            room = self.registry.remove_room(code)
            if room is None:
                continue
            others = [other for other in room.players if other != sid]
            events.append(event('opponent_disconnected', {'roomCode': code}, others))
            self.logger.info(f"[room-removed] room={code} reason=disconnect sid={sid}")

    # ---- simulation ----

    def tick_all(self) -> List[OutboundEvent]:
        """Advance every playing room by one step and broadcast the results."""
        events: List[OutboundEvent] = []
        with self._lock:
            for room in self.registry.rooms():
                if not room.state.is_playing:
                    continue
                try:
                    self._tick_room(room, events)
                except Exception:
                    self.logger.exception(f"[tick-error] room={room.code}")
        self._publish(events)
        return events

    def _tick_room(self, room, events):
        result = tick(room.state, self.settings)
        recipients = list(room.players)
        events.append(event('game_state', {'gameState': result.state.to_dict()}, recipients))
        if result.goal is not None:
            self.logger.info(
                f"[goal] room={room.code} scorer={result.goal} score={result.state.score.to_dict()}"
            )
            events.append(event(
                'goal_scored',
                {'playerScored': result.goal, 'score': result.state.score.to_dict()},
                recipients,
            ))
        if result.winner is not None:
            winner_name = room.name_of(result.winner)
            self.logger.info(f"[game-over] room={room.code} winner={result.winner} name={winner_name}")
            events.append(event('game_over', {'winner': result.winner, 'winnerName': winner_name}, recipients))
            # Readiness resets so both players can opt into a rematch.
            self.registry.reset_ready(room.code)

    def stats(self) -> Dict[str, int]:
        rooms = self.registry.rooms()
        return {'rooms': len(rooms), 'playing': sum(1 for r in rooms if r.state.is_playing)}

    def _publish(self, events: List[OutboundEvent]) -> None:
        for evt in events:
            try:
                self.sink.publish(evt)
            except Exception:
                self.logger.exception(f"[emit-error] event={evt.name} recipients={len(evt.recipients)}")
