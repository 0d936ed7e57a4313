from pongserver.services.game.events import EventSink


def names(events):
    return [e.name for e in events]


def create_and_join(coordinator, sink):
    coordinator.create_room('sid-a', {'playerName': 'Alice'})
    code = sink.named('room_created')[0].payload['roomCode']
    coordinator.join_room('sid-b', {'roomCode': code, 'playerName': 'Bob'})
    return code


def start_game(coordinator, sink):
    code = create_and_join(coordinator, sink)
    coordinator.player_ready('sid-a', {'roomCode': code})
    coordinator.player_ready('sid-b', {'roomCode': code})
    return code


def score_for_player_one(coordinator, code):
    ball = coordinator.registry.get(code).state.ball
    ball.x, ball.y, ball.velocity_x = 795, 100, 5
    return coordinator.tick_all()


def test_create_room_replies_to_creator(coordinator, sink):
    coordinator.create_room('sid-a', {'playerName': 'Alice'})
    [created] = sink.events
    assert created.name == 'room_created'
    assert created.recipients == ('sid-a',)
    assert created.payload['playerNumber'] == 1
    assert created.payload['roomCode'] in coordinator.registry


def test_join_notifies_joiner_and_room(coordinator, sink):
    code = create_and_join(coordinator, sink)
    joined = sink.named('room_joined')[0]
    assert joined.recipients == ('sid-b',)
    assert joined.payload == {'roomCode': code, 'playerNumber': 2}
    announce = sink.named('player_joined')[0]
    assert set(announce.recipients) == {'sid-a', 'sid-b'}
    assert announce.payload['players'] == [
        {'name': 'Alice', 'playerNumber': 1},
        {'name': 'Bob', 'playerNumber': 2},
    ]


def test_join_errors_go_to_origin_only(coordinator, sink):
    events = coordinator.join_room('sid-b', {'roomCode': 'NOPE', 'playerName': 'Bob'})
    assert names(events) == ['error']
    assert events[0].recipients == ('sid-b',)
    assert events[0].payload == {'message': 'Room not found'}

    code = create_and_join(coordinator, sink)
    events = coordinator.join_room('sid-c', {'roomCode': code, 'playerName': 'Cara'})
    assert events[0].payload == {'message': 'Room is full'}


def test_malformed_join(coordinator):
    assert coordinator.join_room('sid-b', {})[0].payload == {'message': 'roomCode is required'}
    assert coordinator.join_room('sid-b', 'ABCD')[0].payload == {'message': 'Malformed message'}


def test_both_ready_starts_game_once(coordinator, sink):
    code = create_and_join(coordinator, sink)
    first = coordinator.player_ready('sid-a', {'roomCode': code})
    assert names(first) == ['player_ready_status']
    assert first[0].payload['players'][0]['ready'] is True
    assert first[0].payload['players'][1]['ready'] is False

    second = coordinator.player_ready('sid-b', {'roomCode': code})
    assert names(second) == ['player_ready_status', 'game_start']
    assert second[1].payload['gameState']['isPlaying'] is True

    again = coordinator.player_ready('sid-a', {'roomCode': code})
    assert 'game_start' not in names(again)
    assert len(sink.named('game_start')) == 1


def test_ready_for_missing_room_is_silent(coordinator):
    assert coordinator.player_ready('sid-a', {'roomCode': 'GONE'}) == []


def test_tick_skips_rooms_not_playing(coordinator, sink):
    create_and_join(coordinator, sink)
    assert coordinator.tick_all() == []


def test_tick_broadcasts_state_to_both_players(coordinator, sink):
    code = start_game(coordinator, sink)
    events = coordinator.tick_all()
    assert names(events) == ['game_state']
    assert set(events[0].recipients) == {'sid-a', 'sid-b'}
    assert events[0].payload['gameState']['gameId'] == code


def test_move_up_stop_up_resumes_at_configured_speed(coordinator, sink, settings):
    code = start_game(coordinator, sink)
    paddle = coordinator.registry.get(code).state.player1
    start_y = paddle.y

    assert coordinator.paddle_move('sid-a', {'roomCode': code, 'direction': 'up'}) == []
    coordinator.tick_all()
    assert paddle.y == start_y - settings.paddle_speed

    coordinator.paddle_move('sid-a', {'roomCode': code, 'direction': 'stop'})
    coordinator.tick_all()
    assert paddle.y == start_y - settings.paddle_speed

    coordinator.paddle_move('sid-a', {'roomCode': code, 'direction': 'up'})
    coordinator.tick_all()
    assert paddle.y == start_y - 2 * settings.paddle_speed
    assert paddle.velocity_y == -settings.paddle_speed


def test_malformed_move_is_ignored(coordinator, sink):
    start_game(coordinator, sink)
    assert coordinator.paddle_move('sid-a', None) == []
    assert coordinator.paddle_move('sid-a', {'direction': 'up'}) == []


def test_goal_event(coordinator, sink):
    code = start_game(coordinator, sink)
    events = score_for_player_one(coordinator, code)
    assert names(events) == ['game_state', 'goal_scored']
    assert events[1].payload == {'playerScored': 1, 'score': {'1': 1, '2': 0}}


def test_three_goals_win_and_reset_ready(coordinator, sink):
    code = start_game(coordinator, sink)
    for _ in range(2):
        assert 'game_over' not in names(score_for_player_one(coordinator, code))
    events = score_for_player_one(coordinator, code)
    assert names(events) == ['game_state', 'goal_scored', 'game_over']
    assert events[2].payload == {'winner': 1, 'winnerName': 'Alice'}

    room = coordinator.registry.get(code)
    assert room.state.is_playing is False
    assert all(not p.ready for p in room.players.values())
    assert room.state.score.to_dict() == {'1': 3, '2': 0}
    assert coordinator.tick_all() == []


def test_rematch_keeps_score(coordinator, sink):
    code = start_game(coordinator, sink)
    for _ in range(3):
        score_for_player_one(coordinator, code)
    coordinator.player_ready('sid-a', {'roomCode': code})
    events = coordinator.player_ready('sid-b', {'roomCode': code})
    assert 'game_start' in names(events)
    assert events[-1].payload['gameState']['score'] == {'1': 3, '2': 0}


def test_disconnect_notifies_opponent_and_removes_room(coordinator, sink):
    code = start_game(coordinator, sink)
    events = coordinator.disconnect('sid-a')
    assert names(events) == ['opponent_disconnected']
    assert events[0].recipients == ('sid-b',)
    assert code not in coordinator.registry
    # Late intents for the removed room are no-ops
    assert coordinator.paddle_move('sid-b', {'roomCode': code, 'direction': 'up'}) == []
    assert coordinator.player_ready('sid-b', {'roomCode': code}) == []
    assert coordinator.disconnect('sid-b') == []


def test_disconnect_of_lone_host(coordinator, sink):
    coordinator.create_room('sid-a', {'playerName': 'Alice'})
    events = coordinator.disconnect('sid-a')
    assert events[0].recipients == ()
    assert len(coordinator.registry) == 0


def test_failing_room_does_not_stop_others(coordinator, sink):
    broken = start_game(coordinator, sink)
    coordinator.create_room('sid-c', {'playerName': 'Cara'})
    healthy = sink.named('room_created')[-1].payload['roomCode']
    coordinator.join_room('sid-d', {'roomCode': healthy})
    coordinator.player_ready('sid-c', {'roomCode': healthy})
    coordinator.player_ready('sid-d', {'roomCode': healthy})

    coordinator.registry.get(broken).state.ball = None
    events = coordinator.tick_all()
    assert [e.payload['gameState']['gameId'] for e in events] == [healthy]


class ExplodingSink(EventSink):
    def __init__(self):
        self.attempts = 0

    def publish(self, evt):
        self.attempts += 1
        raise RuntimeError('transport down')


def test_sink_failure_does_not_break_intent(registry):
    from pongserver.services.game.coordinator import SessionCoordinator
    sink = ExplodingSink()
    coordinator = SessionCoordinator(registry, sink)
    events = coordinator.create_room('sid-a', {'playerName': 'Alice'})
    assert names(events) == ['room_created']
    assert sink.attempts == 1
    assert len(registry) == 1
