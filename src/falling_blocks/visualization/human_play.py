from __future__ import annotations

import argparse
import logging
from typing import Callable, Dict, Optional

import pygame

from falling_blocks.game import FallingBlockGame, GameConfig, InputController, ManualScheduler
from .renderer import Renderer


logger = logging.getLogger(__name__)


PYGAME_KEY_NAMES: Dict[int, str] = {
    pygame.K_LEFT: "ArrowLeft",
    pygame.K_RIGHT: "ArrowRight",
    pygame.K_DOWN: "ArrowDown",
    pygame.K_UP: "ArrowUp",
    pygame.K_x: "x",
    pygame.K_SPACE: " ",
}


def key_name(event: pygame.event.Event) -> Optional[str]:
    name = PYGAME_KEY_NAMES.get(event.key)
    if name == "x" and event.mod & pygame.KMOD_SHIFT:
        return "X"
    return name


def run(seed: Optional[int] = None, cell_size: int = 28,
        on_close: Optional[Callable[[], None]] = None) -> None:
    """Mount a game in a pygame window until the player closes it.

    ``on_close`` is the host's return-to-chat hook.
    """
    pygame.init()
    try:
        clock = pygame.time.Clock()
        scheduler = ManualScheduler()
        running = True

        def back_to_chat() -> None:
            nonlocal running
            running = False
            if on_close is not None:
                on_close()

        game = FallingBlockGame(GameConfig(random_seed=seed), scheduler=scheduler, on_close=back_to_chat)
        controller = InputController(game)
        renderer = Renderer(cell_size=cell_size)

        screen = pygame.display.set_mode(renderer.window_size(game.config.width, game.config.height))
        pygame.display.set_caption("Falling Blocks")
        buttons = renderer.buttons(game.config.width)

        game.mount()
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    game.close()
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        game.close()
                    else:
                        controller.handle_key(key_name(event))
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    if buttons["pause"].collidepoint(event.pos):
                        game.toggle_pause()
                    elif buttons["close"].collidepoint(event.pos):
                        game.close()
                if not running:
                    break
            if not running:
                break

            # Gravity
            scheduler.advance(clock.tick(60))

            renderer.draw(screen, game.display_grid(), game.snapshot())
    finally:
        pygame.quit()


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Falling Blocks in a pygame window")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--cell-size", type=int, default=28)
    p.add_argument("--log-level", type=str, default="WARNING",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p


def main() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    run(seed=args.seed, cell_size=args.cell_size,
        on_close=lambda: logger.info("returning to chat"))


if __name__ == "__main__":  # pragma: no cover
    main()
