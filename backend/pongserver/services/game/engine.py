from dataclasses import dataclass
from typing import Optional

from pongserver.models import GameState, Paddle, PLAYER_ONE, PLAYER_TWO, new_ball
from .geometry import overlaps, is_out_of_vertical_bounds
from .settings import GameSettings


@dataclass
class TickResult:
    state: GameState
    goal: Optional[int] = None
    winner: Optional[int] = None


def _move_paddle(paddle: Paddle, settings: GameSettings) -> None:
    # Motion only happens if the resulting position stays on the board.
    if is_out_of_vertical_bounds(paddle.y + paddle.velocity_y, paddle.height, settings.board_height):
        return
    if not paddle.stop_requested:
        paddle.y += paddle.velocity_y


def tick(state: GameState, settings: GameSettings) -> TickResult:
    """Advance one room's simulation by a single step.

    Order per tick: paddles, ball, wall bounce, paddle bounce, scoring,
    win check. A paused state is returned untouched with no events.
    """
    if not state.is_playing:
        return TickResult(state)

    _move_paddle(state.player1, settings)
    _move_paddle(state.player2, settings)

    ball = state.ball
    ball.x += ball.velocity_x
    ball.y += ball.velocity_y

    if ball.y <= 0 or ball.y + ball.height >= settings.board_height:
        ball.velocity_y *= -1

    if overlaps(ball, state.player1):
        if ball.x <= state.player1.x + state.player1.width:
            ball.velocity_x *= -1
    elif overlaps(ball, state.player2):
        if ball.x + ball.width >= state.player2.x:
            ball.velocity_x *= -1

    goal = None
    if ball.x < 0:
        goal = PLAYER_TWO
        state.ball = new_ball(settings, -settings.ball_velocity_x)
    elif ball.x + ball.width > settings.board_width:
        goal = PLAYER_ONE
        state.ball = new_ball(settings, settings.ball_velocity_x)

    winner = None
    if goal is not None:
        if state.score.add_goal(goal) >= settings.winning_score:
            state.is_playing = False
            winner = goal

    return TickResult(state, goal=goal, winner=winner)
