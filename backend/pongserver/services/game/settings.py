from dataclasses import dataclass, asdict
from typing import Any, Dict, Mapping


@dataclass(frozen=True)
class GameSettings:
    """Fixed simulation constants shared by every room in the process."""

    board_width: int = 800
    board_height: int = 600
    paddle_width: int = 10
    paddle_height: int = 100
    paddle_offset: int = 20
    paddle_speed: float = 8
    ball_size: int = 10
    ball_velocity_x: float = 5
    ball_velocity_y: float = 3
    winning_score: int = 5
    tick_rate: int = 60

    def __post_init__(self):
        for name in ('board_width', 'board_height', 'paddle_width', 'paddle_height',
                     'ball_size', 'winning_score', 'tick_rate'):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)!r}")
        if self.paddle_height > self.board_height:
            raise ValueError("paddle_height cannot exceed board_height")

    @property
    def tick_interval(self) -> float:
        return 1.0 / self.tick_rate

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> 'GameSettings':
        """Build settings from a Flask config mapping, falling back to defaults."""
        defaults = cls()
        return cls(
            board_width=int(config.get('BOARD_WIDTH', defaults.board_width)),
            board_height=int(config.get('BOARD_HEIGHT', defaults.board_height)),
            paddle_width=int(config.get('PADDLE_WIDTH', defaults.paddle_width)),
            paddle_height=int(config.get('PADDLE_HEIGHT', defaults.paddle_height)),
            paddle_offset=int(config.get('PADDLE_OFFSET', defaults.paddle_offset)),
            paddle_speed=float(config.get('PADDLE_SPEED', defaults.paddle_speed)),
            ball_size=int(config.get('BALL_SIZE', defaults.ball_size)),
            ball_velocity_x=float(config.get('BALL_VELOCITY_X', defaults.ball_velocity_x)),
            ball_velocity_y=float(config.get('BALL_VELOCITY_Y', defaults.ball_velocity_y)),
            winning_score=int(config.get('WINNING_SCORE', defaults.winning_score)),
            tick_rate=int(config.get('TICK_RATE', defaults.tick_rate)),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        return {
            'boardWidth': data['board_width'],
            'boardHeight': data['board_height'],
            'paddleWidth': data['paddle_width'],
            'paddleHeight': data['paddle_height'],
            'paddleOffset': data['paddle_offset'],
            'paddleSpeed': data['paddle_speed'],
            'ballSize': data['ball_size'],
            'ballVelocityX': data['ball_velocity_x'],
            'ballVelocityY': data['ball_velocity_y'],
            'winningScore': data['winning_score'],
            'tickRate': data['tick_rate'],
        }
