from __future__ import annotations

from typing import Optional, Tuple

import pygame

from block_drop.game import pieces
from block_drop.game.core import GameView
from block_drop.game.grid import HIDDEN_ROW_COUNT, Board
from block_drop.game.pieces import TileType


BACKGROUND = (10, 10, 14)
BOARD_BG = (30, 30, 36)
EMPTY_CELL = (20, 20, 26)
TEXT = (230, 230, 230)
SIDE_PANEL_CELLS = 7


class Renderer:
    def __init__(self, cell_size: int = 28, margin: int = 20) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self._font: Optional[pygame.font.Font] = None
        self._big_font: Optional[pygame.font.Font] = None

    def window_size(self, board: Board) -> Tuple[int, int]:
        width = self.margin * 3 + (board.width + SIDE_PANEL_CELLS) * self.cell_size
        height = self.margin * 2 + (board.height - HIDDEN_ROW_COUNT) * self.cell_size
        return width, height

    def _fonts(self) -> Tuple[pygame.font.Font, pygame.font.Font]:
        if self._font is None or self._big_font is None:
            self._font = pygame.font.SysFont(None, 24)
            self._big_font = pygame.font.SysFont(None, 40)
        return self._font, self._big_font

    def _draw_tile(self, surf: pygame.Surface, kind: TileType, px: int, py: int) -> None:
        base, light, dark = pieces.colors(kind)
        size = self.cell_size
        pygame.draw.rect(surf, base, pygame.Rect(px, py, size - 1, size - 1))
        pygame.draw.line(surf, light, (px, py), (px + size - 2, py), 2)
        pygame.draw.line(surf, light, (px, py), (px, py + size - 2), 2)
        pygame.draw.line(surf, dark, (px, py + size - 2), (px + size - 2, py + size - 2), 2)
        pygame.draw.line(surf, dark, (px + size - 2, py), (px + size - 2, py + size - 2), 2)

    def _grid_surface(self, board: Board, view: GameView) -> pygame.Surface:
        rows = board.visible_rows()
        h, w = rows.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill(BOARD_BG)
        for y in range(h):
            for x in range(w):
                v = int(rows[y, x])
                rect = pygame.Rect(x * self.cell_size, y * self.cell_size, self.cell_size - 1, self.cell_size - 1)
                if v == 0:
                    pygame.draw.rect(surf, EMPTY_CELL, rect)
                else:
                    self._draw_tile(surf, TileType(v), rect.x, rect.y)

        if view.piece_type is not None and not view.is_game_over and not view.is_paused:
            for dx, dy in pieces.filled_cells(view.piece_type, view.piece_rotation):
                row = view.piece_row + dy - HIDDEN_ROW_COUNT
                if row < 0:
                    continue
                col = view.piece_col + dx
                self._draw_tile(surf, view.piece_type, col * self.cell_size, row * self.cell_size)
        return surf

    def _draw_side_panel(self, screen: pygame.Surface, board: Board, view: GameView) -> None:
        font, _ = self._fonts()
        x0 = self.margin * 2 + board.width * self.cell_size
        y0 = self.margin
        screen.blit(font.render(f"Level: {view.level}", True, TEXT), (x0, y0))
        screen.blit(font.render(f"Score: {view.score}", True, TEXT), (x0, y0 + 24))
        screen.blit(font.render("Next:", True, TEXT), (x0, y0 + 60))
        if view.next_type is not None:
            for dx, dy in pieces.filled_cells(view.next_type, 0):
                self._draw_tile(screen, view.next_type, x0 + dx * self.cell_size, y0 + 90 + dy * self.cell_size)

        controls = [
            "A/D or arrows: move",
            "Q/E: rotate",
            "S or Down: soft drop",
            "P: pause",
            "Enter: start",
        ]
        for i, txt in enumerate(controls):
            screen.blit(font.render(txt, True, TEXT), (x0, y0 + 230 + i * 22))

    def _draw_overlay(self, screen: pygame.Surface, board: Board, view: GameView) -> None:
        if view.is_new_game:
            message = "Press Enter to Play"
        elif view.is_game_over:
            message = "Game Over - Enter to restart"
        elif view.is_paused:
            message = "Paused"
        else:
            return
        _, big = self._fonts()
        text = big.render(message, True, (255, 255, 255))
        center_x = self.margin + board.width * self.cell_size // 2
        center_y = self.margin + (board.height - HIDDEN_ROW_COUNT) * self.cell_size // 2
        screen.blit(text, text.get_rect(center=(center_x, center_y)))

    def draw(self, screen: pygame.Surface, board: Board, view: GameView) -> None:
        grid_surf = self._grid_surface(board, view)
        screen.fill(BACKGROUND)
        screen.blit(grid_surf, (self.margin, self.margin))
        self._draw_side_panel(screen, board, view)
        self._draw_overlay(screen, board, view)
        pygame.display.flip()
