from __future__ import annotations

from typing import Optional, Sequence

import pygame

from cube2048.game import Tile
from .palette import BACKGROUND_COLOR, EMPTY_COLOR, color_for_value, text_color_for_value


class Renderer:
    """Draws the cube as its z-layers side by side, z = 0 on the left."""

    def __init__(self, size: int = 4, cell_size: int = 48, margin: int = 20, layer_gap: int = 24) -> None:
        self.size = size
        self.cell_size = cell_size
        self.margin = margin
        self.layer_gap = layer_gap
        self._font: Optional[pygame.font.Font] = None

    def window_size(self, header: int = 40) -> tuple[int, int]:
        layer_px = self.size * self.cell_size
        width = self.margin * 2 + self.size * layer_px + (self.size - 1) * self.layer_gap
        height = self.margin * 2 + layer_px + header
        return width, height

    def _cell_rect(self, x: int, y: int, z: int, top: int) -> pygame.Rect:
        layer_px = self.size * self.cell_size
        left = self.margin + z * (layer_px + self.layer_gap)
        # +y is up on screen
        return pygame.Rect(
            left + x * self.cell_size,
            top + (self.size - 1 - y) * self.cell_size,
            self.cell_size - 2,
            self.cell_size - 2,
        )

    def _get_font(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.SysFont(None, int(self.cell_size * 0.5))
        return self._font

    def _draw_tile(self, surf: pygame.Surface, tile: Tile, rect: pygame.Rect) -> None:
        pygame.draw.rect(surf, color_for_value(tile.value), rect)
        if tile.is_merged or tile.is_new:
            pygame.draw.rect(surf, (255, 255, 255), rect, width=2)
        text = self._get_font().render(str(tile.value), True, text_color_for_value(tile.value))
        surf.blit(text, text.get_rect(center=rect.center))

    def draw(self, screen: pygame.Surface, tiles: Sequence[Tile], status: str = "", header: int = 40) -> None:
        screen.fill(BACKGROUND_COLOR)
        top = self.margin + header
        for x in range(self.size):
            for y in range(self.size):
                for z in range(self.size):
                    pygame.draw.rect(screen, EMPTY_COLOR, self._cell_rect(x, y, z, top))
        for tile in tiles:
            self._draw_tile(screen, tile, self._cell_rect(*tile.position, top))
        if status:
            txt = self._get_font().render(status, True, (230, 230, 230))
            screen.blit(txt, (self.margin, self.margin))
        pygame.display.flip()
