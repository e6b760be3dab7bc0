from falling_blocks.game import GameState, InputController
from tests.helpers import make_game


def test_arrow_keys_move_piece():
    game = make_game(["T"])
    controller = InputController(game)
    assert controller.handle_key("ArrowLeft")
    assert game.active.x == 3
    assert controller.handle_key("ArrowRight")
    assert controller.handle_key("ArrowRight")
    assert game.active.x == 5
    assert controller.handle_key("ArrowDown")
    assert game.active.y == 1


def test_rotate_keys():
    game = make_game(["T"])
    controller = InputController(game)
    controller.handle_key("ArrowDown")
    for key in ("ArrowUp", "x", "X"):
        assert controller.handle_key(key)
    assert game.active.piece.rotation == 3


def test_unknown_keys_are_ignored():
    game = make_game(["T"])
    controller = InputController(game)
    assert not controller.handle_key("Enter")
    assert not controller.handle_key("z")
    assert not controller.handle_key(None)
    assert (game.active.x, game.active.y) == (4, 0)


def test_only_space_is_honoured_while_paused():
    game = make_game(["T"])
    controller = InputController(game)
    assert controller.handle_key(" ")
    assert game.state is GameState.PAUSED
    assert not controller.handle_key("ArrowLeft")
    assert not controller.handle_key("ArrowUp")
    assert game.active.x == 4
    assert controller.handle_key(" ")
    assert game.state is GameState.ACTIVE
