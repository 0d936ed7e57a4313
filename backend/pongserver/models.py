from dataclasses import dataclass, field
from typing import Dict, Optional
import string
import random

from pongserver.services.game.settings import GameSettings

PLAYER_ONE = 1
PLAYER_TWO = 2


@dataclass
class GameObject:
    x: float
    y: float
    width: float
    height: float


@dataclass
class Paddle(GameObject):
    velocity_y: float = 0
    stop_requested: bool = False

    def to_dict(self):
        return {
            'x': self.x,
            'y': self.y,
            'width': self.width,
            'height': self.height,
            'velocityY': self.velocity_y,
            'stopPlayer': self.stop_requested,
        }


@dataclass
class Ball(GameObject):
    velocity_x: float = 0
    velocity_y: float = 0

    def to_dict(self):
        return {
            'x': self.x,
            'y': self.y,
            'width': self.width,
            'height': self.height,
            'velocityX': self.velocity_x,
            'velocityY': self.velocity_y,
        }


@dataclass
class Score:
    player1: int = 0
    player2: int = 0

    def add_goal(self, slot: int) -> int:
        if slot == PLAYER_ONE:
            self.player1 += 1
            return self.player1
        self.player2 += 1
        return self.player2

    def to_dict(self):
        return {'1': self.player1, '2': self.player2}


def new_paddle(settings: GameSettings, slot: int) -> Paddle:
    """Paddle for the given slot, offset from its near wall and vertically centered."""
    if slot == PLAYER_ONE:
        x = settings.paddle_offset
    else:
        x = settings.board_width - settings.paddle_width - settings.paddle_offset
    return Paddle(
        x=x,
        y=(settings.board_height - settings.paddle_height) / 2,
        width=settings.paddle_width,
        height=settings.paddle_height,
    )


def new_ball(settings: GameSettings, direction: float) -> Ball:
    """Centered ball serving horizontally at `direction` (signed speed)."""
    return Ball(
        x=settings.board_width / 2,
        y=settings.board_height / 2,
        width=settings.ball_size,
        height=settings.ball_size,
        velocity_x=direction,
        velocity_y=settings.ball_velocity_y,
    )


@dataclass
class GameState:
    game_id: str
    player1: Paddle
    player2: Paddle
    ball: Ball
    score: Score = field(default_factory=Score)
    is_playing: bool = False

    def paddle_for(self, slot: int) -> Paddle:
        return self.player1 if slot == PLAYER_ONE else self.player2

    def to_dict(self):
        return {
            'gameId': self.game_id,
            'isPlaying': self.is_playing,
            'score': self.score.to_dict(),
            'player1': self.player1.to_dict(),
            'player2': self.player2.to_dict(),
            'ball': self.ball.to_dict(),
        }


def create_initial_state(game_id: str, settings: GameSettings) -> GameState:
    return GameState(
        game_id=game_id,
        player1=new_paddle(settings, PLAYER_ONE),
        player2=new_paddle(settings, PLAYER_TWO),
        ball=new_ball(settings, settings.ball_velocity_x),
    )


@dataclass
class Membership:
    player_number: int
    name: str
    ready: bool = False

    def to_dict(self, include_ready=True):
        data = {'name': self.name, 'playerNumber': self.player_number}
        if include_ready:
            data['ready'] = self.ready
        return data


@dataclass
class Room:
    code: str
    host: str
    state: GameState
    players: Dict[str, Membership] = field(default_factory=dict)

    @property
    def is_full(self) -> bool:
        return len(self.players) >= 2

    @property
    def all_ready(self) -> bool:
        return self.is_full and all(p.ready for p in self.players.values())

    def slot_of(self, sid: str) -> Optional[int]:
        membership = self.players.get(sid)
        return membership.player_number if membership else None

    def name_of(self, slot: int) -> Optional[str]:
        for membership in self.players.values():
            if membership.player_number == slot:
                return membership.name
        return None


ROOM_CODE_ALPHABET = string.ascii_uppercase + string.digits


def generate_room_code(length=4):
    """Generate a short, human-typeable room code."""
    return ''.join(random.choices(ROOM_CODE_ALPHABET, k=length))
