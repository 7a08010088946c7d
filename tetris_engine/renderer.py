"""
Pygame renderer for the game session.

Draws a StepResult: the visible board rows, the active piece, the next piece
preview, and a sidebar with score / level / lines. The renderer never reads
the session's internals; it only projects the emitted facts.

The occupancy grid carries no piece identity, so the renderer keeps its own
color overlay: cells are painted with the kind reported on lock and shifted
down with every cleared row, mirroring the board.
"""

from __future__ import annotations

import numpy as np

try:
    import pygame
except ImportError:
    pygame = None  # type: ignore[assignment]

from tetris_engine.game.board import HEIGHT, VISIBLE_HEIGHT, WIDTH
from tetris_engine.game.pieces import PieceKind, display_color, piece_cells
from tetris_engine.game.tetris import StepResult


# ── Color constants ───────────────────────────────────────────────────────
BACKGROUND_COLOR = (30, 30, 30)
GRID_LINE_COLOR = (60, 60, 60)
BORDER_COLOR = (200, 200, 200)
TEXT_COLOR = (255, 255, 255)
SIDEBAR_BG_COLOR = (20, 20, 20)
EMPTY_CELL_COLOR = (40, 40, 40)
# Fallback for occupied cells with no tracked kind
LOCKED_CELL_COLOR = (150, 150, 160)
NO_KIND = -1


class TetrisRenderer:
    """Pygame-based renderer.

    The window is divided into:
      - Left: board area (cell_size * 10) x (cell_size * 20)
      - Right: sidebar with next piece, score, level, lines

    Attributes:
        cell_size: Pixel size of each grid cell.
        board_pixel_width: Pixel width of the board area.
        board_pixel_height: Pixel height of the board area.
        sidebar_width: Pixel width of the sidebar.
        window_width: Total window width.
        window_height: Total window height.
        screen: Pygame display surface (created on first render).
    """

    SIDEBAR_WIDTH_CELLS: int = 7

    def __init__(self, cell_size: int = 30) -> None:
        """Initialize the renderer.

        Does NOT create the Pygame window yet; that happens on the first
        call to render().

        Args:
            cell_size: Size of each grid cell in pixels.
        """
        if pygame is None:
            raise ImportError("pygame is required for rendering. Install it: pip install pygame")

        self.cell_size = cell_size
        self.board_pixel_width = cell_size * WIDTH
        self.board_pixel_height = cell_size * VISIBLE_HEIGHT
        self.sidebar_width = cell_size * self.SIDEBAR_WIDTH_CELLS
        self.window_width = self.board_pixel_width + self.sidebar_width
        self.window_height = self.board_pixel_height

        self.screen: pygame.Surface | None = None
        self._font: pygame.font.Font | None = None
        self._initialized: bool = False
        # Piece kind per board cell, NO_KIND where empty or unknown
        self._colors = np.full((HEIGHT, WIDTH), NO_KIND, dtype=np.int8)

    def render(self, state: StepResult) -> None:
        """Draw a session snapshot and flip the display."""
        if not self._initialized:
            self._init_pygame()

        self._track_colors(state)
        self.screen.fill(BACKGROUND_COLOR)
        self._draw_board(state)
        self._draw_active_piece(state)
        self._draw_sidebar(state)

        pygame.draw.rect(
            self.screen,
            BORDER_COLOR,
            (0, 0, self.board_pixel_width, self.board_pixel_height),
            2,
        )
        if state.game_over:
            self._draw_game_over_overlay()

        pygame.display.flip()

    def _init_pygame(self) -> None:
        pygame.init()
        self.screen = pygame.display.set_mode((self.window_width, self.window_height))
        pygame.display.set_caption("Tetris")
        self._font = pygame.font.SysFont("monospace", 20)
        self._initialized = True

    def _track_colors(self, state: StepResult) -> None:
        """Update the color overlay from one step's lock and clear facts."""
        colors = self._colors
        if state.piece_locked and state.locked_kind is not None:
            for col, row in state.locked_cells:
                colors[row, col] = int(state.locked_kind)
        for row in state.cleared_rows:
            colors[row:-1] = colors[row + 1:]
            colors[-1] = NO_KIND
        # Drops anything the board no longer holds (reset, missed frames)
        colors[~state.board] = NO_KIND

    def _cell_color(self, col: int, row: int) -> tuple[int, int, int]:
        kind = int(self._colors[row, col])
        if kind == NO_KIND:
            return LOCKED_CELL_COLOR
        return display_color(PieceKind(kind))

    def _cell_rect(self, col: int, row: int) -> tuple[int, int, int, int]:
        # Row 0 is the floor: flip to screen coordinates
        x = col * self.cell_size
        y = (VISIBLE_HEIGHT - 1 - row) * self.cell_size
        return (x, y, self.cell_size, self.cell_size)

    def _draw_cell(self, rect: tuple[int, int, int, int], color: tuple[int, int, int]) -> None:
        pygame.draw.rect(self.screen, color, rect)
        darker = tuple(max(0, c - 40) for c in color)
        pygame.draw.rect(self.screen, darker, rect, 1)

    def _draw_board(self, state: StepResult) -> None:
        """Draw the visible rows; the two buffer rows stay hidden."""
        grid = state.board
        for row in range(VISIBLE_HEIGHT):
            for col in range(WIDTH):
                rect = self._cell_rect(col, row)
                if grid[row, col]:
                    self._draw_cell(rect, self._cell_color(col, row))
                else:
                    pygame.draw.rect(self.screen, EMPTY_CELL_COLOR, rect)
                pygame.draw.rect(self.screen, GRID_LINE_COLOR, rect, 1)

    def _draw_active_piece(self, state: StepResult) -> None:
        if state.active_kind is None:
            return
        color = display_color(state.active_kind)
        for col, row in state.active_cells:
            if 0 <= row < VISIBLE_HEIGHT and 0 <= col < WIDTH:
                self._draw_cell(self._cell_rect(col, row), color)

    def _draw_sidebar(self, state: StepResult) -> None:
        sidebar_x = self.board_pixel_width
        pygame.draw.rect(
            self.screen,
            SIDEBAR_BG_COLOR,
            (sidebar_x, 0, self.sidebar_width, self.window_height),
        )
        pygame.draw.line(
            self.screen,
            BORDER_COLOR,
            (sidebar_x, 0),
            (sidebar_x, self.window_height),
            2,
        )

        x = sidebar_x + 15
        self._draw_piece_preview(state.next_kind, x, 20, "NEXT")

        text_y = 180
        for label, value in (("SCORE", state.score), ("LEVEL", state.level), ("LINES", state.lines)):
            self._draw_text(label, x, text_y)
            self._draw_text(str(value), x, text_y + 25)
            text_y += 65

    def _draw_piece_preview(self, kind: PieceKind, x_offset: int, y_offset: int, label: str) -> None:
        """Draw the spawn orientation of a piece in a small box."""
        preview_cell = self.cell_size * 2 // 3
        box_size = preview_cell * 5

        self._draw_text(label, x_offset, y_offset)
        box_y = y_offset + 25
        pygame.draw.rect(self.screen, EMPTY_CELL_COLOR, (x_offset, box_y, box_size, box_size))
        pygame.draw.rect(self.screen, BORDER_COLOR, (x_offset, box_y, box_size, box_size), 1)

        color = display_color(kind)
        origin_x = x_offset + preview_cell // 2
        origin_y = box_y + preview_cell // 2
        for dx, dy in piece_cells(kind, 0):
            px = origin_x + dx * preview_cell
            py = origin_y + (3 - dy) * preview_cell
            self._draw_cell((px, py, preview_cell, preview_cell), color)

    def _draw_game_over_overlay(self) -> None:
        overlay = pygame.Surface((self.board_pixel_width, self.board_pixel_height), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 150))
        self.screen.blit(overlay, (0, 0))

        cx = self.board_pixel_width // 2
        cy = self.board_pixel_height // 2
        for text, dy, color in (
            ("GAME OVER", -40, (255, 50, 50)),
            ("Press R to restart", 10, TEXT_COLOR),
            ("Press ESC to quit", 40, (200, 200, 200)),
        ):
            surface = self._font.render(text, True, color)
            self.screen.blit(surface, (cx - surface.get_width() // 2, cy + dy))

    def _draw_text(self, text: str, x: int, y: int, color: tuple[int, int, int] = TEXT_COLOR) -> None:
        surface = self._font.render(text, True, color)
        self.screen.blit(surface, (x, y))

    def close(self) -> None:
        """Shut down Pygame and close the window."""
        if self._initialized:
            pygame.quit()
            self._initialized = False
