from __future__ import annotations

from typing import Dict, Tuple

import numpy as np
import pygame

from falling_blocks.game import COLORS, GameState, TetrominoType


EMPTY_COLOR = pygame.Color("#1a1a2e")


def _color_for_value(v: int) -> pygame.Color:
    # Falling cells are negative tokens; same palette
    if v == 0:
        return EMPTY_COLOR
    try:
        return pygame.Color(COLORS[TetrominoType(abs(v))])
    except ValueError:
        return pygame.Color(200, 200, 200)


class Renderer:
    def __init__(self, cell_size: int = 30, margin: int = 20, panel_width: int = 180) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_width = panel_width
        self._font: pygame.font.Font | None = None
        self._small: pygame.font.Font | None = None

    def window_size(self, width: int, height: int) -> Tuple[int, int]:
        return (
            width * self.cell_size + self.panel_width + self.margin * 3,
            height * self.cell_size + self.margin * 2,
        )

    def buttons(self, width: int) -> Dict[str, pygame.Rect]:
        """Clickable areas in the side panel, keyed by purpose."""
        left = self.margin * 2 + width * self.cell_size
        return {
            "pause": pygame.Rect(left, self.margin + 300, self.panel_width, 36),
            "close": pygame.Rect(left, self.margin + 346, self.panel_width, 36),
        }

    def _fonts(self) -> Tuple[pygame.font.Font, pygame.font.Font]:
        if self._font is None or self._small is None:
            self._font = pygame.font.SysFont(None, 36)
            self._small = pygame.font.SysFont(None, 22)
        return self._font, self._small

    def _grid_surface(self, state: np.ndarray) -> pygame.Surface:
        h, w = state.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill((30, 30, 36))
        for y in range(h):
            for x in range(w):
                rect = pygame.Rect(
                    x * self.cell_size,
                    y * self.cell_size,
                    self.cell_size - 1,
                    self.cell_size - 1,
                )
                pygame.draw.rect(surf, _color_for_value(int(state[y, x])), rect)
        return surf

    def _draw_panel(self, screen: pygame.Surface, snapshot: dict, width: int) -> None:
        font, small = self._fonts()
        left = self.margin * 2 + width * self.cell_size
        top = self.margin
        for label in ("score", "level", "lines"):
            screen.blit(small.render(label.upper(), True, (160, 160, 180)), (left, top))
            screen.blit(font.render(str(snapshot[label]), True, (255, 255, 255)), (left, top + 18))
            top += 60
        for line in ("<- -> : move", "down : soft drop", "up / X : rotate", "space : pause"):
            screen.blit(small.render(line, True, (140, 140, 160)), (left, top))
            top += 20

        paused = snapshot["state"] == GameState.PAUSED.value
        labels = {"pause": "Resume" if paused else "Pause", "close": "Back to chat"}
        for key, rect in self.buttons(width).items():
            pygame.draw.rect(screen, (60, 60, 80), rect, border_radius=4)
            text = small.render(labels[key], True, (255, 255, 255))
            screen.blit(text, text.get_rect(center=rect.center))

    def _draw_overlay(self, screen: pygame.Surface, snapshot: dict, grid_rect: pygame.Rect) -> None:
        state = snapshot["state"]
        if state == GameState.ACTIVE.value:
            return
        font, small = self._fonts()
        shade = pygame.Surface(grid_rect.size, pygame.SRCALPHA)
        shade.fill((0, 0, 0, 170))
        screen.blit(shade, grid_rect.topleft)
        if state == GameState.GAME_OVER.value:
            lines = ["GAME OVER", f"Final score: {snapshot['score']}", "Press space to restart"]
        else:
            lines = ["PAUSED", "Press space to continue"]
        y = grid_rect.centery - 30
        for i, line in enumerate(lines):
            text = (font if i == 0 else small).render(line, True, (255, 255, 255))
            screen.blit(text, text.get_rect(center=(grid_rect.centerx, y)))
            y += 32

    def draw(self, screen: pygame.Surface, state: np.ndarray, snapshot: dict) -> None:
        grid_surf = self._grid_surface(state)
        screen.fill((10, 10, 14))
        screen.blit(grid_surf, (self.margin, self.margin))
        grid_rect = grid_surf.get_rect(topleft=(self.margin, self.margin))
        self._draw_panel(screen, snapshot, state.shape[1])
        self._draw_overlay(screen, snapshot, grid_rect)
        pygame.display.flip()
