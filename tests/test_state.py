from falling_blocks.game import GameState, GameStateMachine


def test_initial_state_accepts_moves():
    machine = GameStateMachine()
    assert machine.state is GameState.ACTIVE
    assert machine.accepts_moves
    assert not machine.restarts_on_pause_key


def test_toggle_between_active_and_paused():
    machine = GameStateMachine()
    assert machine.toggle_pause()
    assert machine.state is GameState.PAUSED
    assert not machine.accepts_moves
    assert machine.restarts_on_pause_key
    assert machine.toggle_pause()
    assert machine.state is GameState.ACTIVE


def test_game_over_is_terminal_until_reset():
    machine = GameStateMachine()
    machine.finish()
    assert machine.state is GameState.GAME_OVER
    assert not machine.toggle_pause()
    assert machine.state is GameState.GAME_OVER
    assert machine.restarts_on_pause_key
    machine.reset()
    assert machine.state is GameState.ACTIVE
