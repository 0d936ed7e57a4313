import threading
from typing import Callable, Dict, List, Optional

from pongserver.models import (
    Membership, Room, PLAYER_ONE, PLAYER_TWO,
    create_initial_state, generate_room_code, new_ball,
)
from .errors import NotApplicable, RoomFull, RoomNotFound
from .settings import GameSettings

DIRECTIONS = ('up', 'down', 'stop')


class RoomRegistry:
    """In-memory store of rooms keyed by room code.

    The mapping itself is guarded by a lock so lookups, inserts and removals
    are safe from any thread. Mutating a room's contents is left to the
    caller, which must serialize access per room.
    """

    def __init__(self, settings: GameSettings, code_length: int = 4, code_attempts: int = 32,
                 name_max_length: int = 20, code_factory: Optional[Callable[[int], str]] = None):
        self.settings = settings
        self.code_length = code_length
        self.code_attempts = code_attempts
        self.name_max_length = name_max_length
        self._code_factory = code_factory or generate_room_code
        self._rooms: Dict[str, Room] = {}
        self._lock = threading.Lock()

    def __len__(self):
        with self._lock:
            return len(self._rooms)

    def __contains__(self, code):
        return self.get(code) is not None

    def get(self, code) -> Optional[Room]:
        if not code:
            return None
        with self._lock:
            return self._rooms.get(str(code).upper())

    def rooms(self) -> List[Room]:
        with self._lock:
            return list(self._rooms.values())

    def codes_for(self, sid: str) -> List[str]:
        """Codes of every room in which `sid` holds a membership."""
        with self._lock:
            return [code for code, room in self._rooms.items() if sid in room.players]

    def _clean_name(self, name, default: str) -> str:
        if not isinstance(name, str):
            return default
        name = name.strip()[:self.name_max_length]
        return name or default

    def create_room(self, creator_id: str, display_name=None) -> str:
        with self._lock:
            for _ in range(self.code_attempts):
                code = self._code_factory(self.code_length)
                if code not in self._rooms:
                    break
            else:
                raise NotApplicable('Could not allocate a room code, try again')
            room = Room(
                code=code,
                host=creator_id,
                state=create_initial_state(code, self.settings),
            )
            room.players[creator_id] = Membership(
                player_number=PLAYER_ONE,
                name=self._clean_name(display_name, 'Player 1'),
            )
            self._rooms[code] = room
        return code

    def join_room(self, code, joiner_id: str, display_name=None) -> int:
        room = self.get(code)
        if room is None:
            raise RoomNotFound()
        if room.is_full:
            raise RoomFull()
        if joiner_id in room.players:
            raise NotApplicable('You are already in this room')
        room.players[joiner_id] = Membership(
            player_number=PLAYER_TWO,
            name=self._clean_name(display_name, 'Player 2'),
        )
        return PLAYER_TWO

    def set_ready(self, code, connection_id: str) -> bool:
        """Mark a member ready. Returns True once both members are ready."""
        room = self.get(code)
        if room is None or connection_id not in room.players:
            return False
        room.players[connection_id].ready = True
        return room.all_ready

    def start_game(self, code) -> bool:
        """Flip a fully ready room into play with a fresh serve.

        Returns False if the room is gone, not fully ready, or already playing.
        """
        room = self.get(code)
        if room is None or not room.all_ready or room.state.is_playing:
            return False
        room.state.ball = new_ball(self.settings, self.settings.ball_velocity_x)
        room.state.is_playing = True
        return True

    def reset_ready(self, code) -> None:
        room = self.get(code)
        if room is None:
            return
        for membership in room.players.values():
            membership.ready = False

    def remove_room(self, code) -> Optional[Room]:
        if not code:
            return None
        with self._lock:
            return self._rooms.pop(str(code).upper(), None)

    def apply_movement_intent(self, code, connection_id: str, direction) -> bool:
        """Apply an up/down/stop intent to the caller's paddle.

        Silently ignored (returns False) when the room is missing, not in
        play, the caller is not a member, or the direction is unknown.
        """
        room = self.get(code)
        if room is None or not room.state.is_playing:
            return False
        slot = room.slot_of(connection_id)
        if slot is None or direction not in DIRECTIONS:
            return False
        paddle = room.state.paddle_for(slot)
        if direction == 'up':
            paddle.velocity_y = -self.settings.paddle_speed
            paddle.stop_requested = False
        elif direction == 'down':
            paddle.velocity_y = self.settings.paddle_speed
            paddle.stop_requested = False
        else:
            paddle.stop_requested = True
        return True
