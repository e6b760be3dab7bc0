from falling_blocks.game import FallingBlockGame, GameConfig, TetrominoType


class ScriptedRandom:
    """RandomSource that hands out a fixed sequence of piece kinds, cycling."""

    def __init__(self, kinds):
        self.kinds = [TetrominoType[k] if isinstance(k, str) else k for k in kinds]
        self.calls = 0

    def choice(self, seq):
        kind = self.kinds[self.calls % len(self.kinds)]
        self.calls += 1
        assert kind in seq
        return kind


def make_game(kinds=("I",), scheduler=None, on_close=None):
    return FallingBlockGame(GameConfig(), rng=ScriptedRandom(kinds), scheduler=scheduler, on_close=on_close)
