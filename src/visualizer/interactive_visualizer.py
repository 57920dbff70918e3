"""
Interactive pygame viewer that steps through a solved puzzle.

Left pane: the board with the exit gap on the prisoner's row
Right pane: move counter and controls
"""

from enum import Enum
from typing import List

import pygame

from src.game.board import SIZE
from src.game.movement import Move, piece_label
from src.game.pieces import PieceRegistry
from src.game.visualization import Colors, describe_move


class VisualizationMode(Enum):
    AUTO = "auto"
    MANUAL = "manual"


class SolutionVisualizer:
    """Pygame window that steps through a solution."""

    def __init__(
        self,
        states: List[PieceRegistry],
        moves: List[Move],
        cell_size: int = 60,
        fps: int = 30,
    ):
        self.states = states
        self.moves = moves
        self.index = 0
        self.cell_size = cell_size
        self.fps = fps

        pygame.init()

        self.board_margin = 20
        self.board_size = SIZE * cell_size
        self.info_panel_width = 260

        self.window_width = (
            self.board_size + self.info_panel_width + (2 * self.board_margin)
        )
        self.window_height = max(self.board_size + (2 * self.board_margin), 420)

        self.screen = pygame.display.set_mode((self.window_width, self.window_height))
        pygame.display.set_caption("Unblock Solution")

        self.clock = pygame.time.Clock()
        self.font = pygame.font.Font(None, 28)
        self.small_font = pygame.font.Font(None, 20)

        self.mode = VisualizationMode.MANUAL
        self.step_delay = 500
        self.auto_step_timer = 0

    def run(self) -> None:
        running = True

        while running:
            dt = self.clock.tick(self.fps)

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    running = self._handle_keypress(event.key)

            if self.mode == VisualizationMode.AUTO:
                self.auto_step_timer += dt
                if self.auto_step_timer >= self.step_delay:
                    self.auto_step_timer = 0
                    self.step(1)

            self._draw()

        pygame.quit()

    def step(self, delta: int) -> None:
        self.index = max(0, min(len(self.states) - 1, self.index + delta))

    def _handle_keypress(self, key: int) -> bool:
        if key == pygame.K_ESCAPE or key == pygame.K_q:
            return False
        elif key in (pygame.K_SPACE, pygame.K_RIGHT, pygame.K_RETURN):
            self.step(1)
        elif key == pygame.K_LEFT:
            self.step(-1)
        elif key == pygame.K_r:
            self.index = 0
        elif key == pygame.K_1:
            self.mode = VisualizationMode.AUTO
        elif key == pygame.K_2:
            self.mode = VisualizationMode.MANUAL
        return True

    def _draw(self) -> None:
        self.screen.fill(Colors.WHITE)
        self._draw_board()
        self._draw_pieces()
        self._draw_info_panel()
        pygame.display.flip()

    def _draw_board(self) -> None:
        for y in range(SIZE):
            for x in range(SIZE):
                rect = pygame.Rect(
                    x * self.cell_size + self.board_margin,
                    y * self.cell_size + self.board_margin,
                    self.cell_size,
                    self.cell_size,
                )
                pygame.draw.rect(self.screen, Colors.LIGHT_GRAY, rect)
                pygame.draw.rect(self.screen, Colors.GRAY, rect, 1)

        # Outer walls, with the exit gap on the prisoner's row
        left = self.board_margin
        top = self.board_margin
        right = left + self.board_size
        bottom = top + self.board_size
        exit_row = self.states[self.index].prisoner.y
        gap_top = top + exit_row * self.cell_size
        gap_bottom = gap_top + self.cell_size

        pygame.draw.line(self.screen, Colors.BLACK, (left, top), (right, top), 6)
        pygame.draw.line(self.screen, Colors.BLACK, (left, bottom), (right, bottom), 6)
        pygame.draw.line(self.screen, Colors.BLACK, (left, top), (left, bottom), 6)
        pygame.draw.line(self.screen, Colors.BLACK, (right, top), (right, gap_top), 6)
        pygame.draw.line(
            self.screen, Colors.BLACK, (right, gap_bottom), (right, bottom), 6
        )

    def _draw_pieces(self) -> None:
        inset = 4
        for piece in self.states[self.index]:
            width = piece.length if piece.is_horizontal else 1
            height = 1 if piece.is_horizontal else piece.length
            rect = pygame.Rect(
                piece.x * self.cell_size + self.board_margin + inset,
                piece.y * self.cell_size + self.board_margin + inset,
                width * self.cell_size - 2 * inset,
                height * self.cell_size - 2 * inset,
            )
            color = Colors.RED if piece.is_prisoner else Colors.BROWN
            pygame.draw.rect(self.screen, color, rect, border_radius=8)
            pygame.draw.rect(self.screen, Colors.DARK_BROWN, rect, 2, border_radius=8)

            label = "Z" if piece.is_prisoner else piece_label(piece.piece_id)
            text = self.font.render(label, True, Colors.WHITE)
            self.screen.blit(text, text.get_rect(center=rect.center))

    def _draw_info_panel(self) -> None:
        panel_x = self.board_size + 2 * self.board_margin + 10
        y_offset = self.board_margin

        if self.index == 0:
            move_line = "Start position"
        else:
            move = self.moves[self.index - 1]
            move_line = f"Last move: {describe_move(self.states[self.index - 1], move)}"

        info_lines = [
            f"Move {self.index}/{len(self.moves)}",
            move_line,
            f"Mode: {self.mode.value}",
            "",
            "Controls:",
            "SPACE/RIGHT - Next move",
            "LEFT - Previous move",
            "R - Restart",
            "1 - Auto play",
            "2 - Manual",
            "ESC/Q - Quit",
        ]
        if self.index == len(self.states) - 1:
            info_lines.insert(2, "The prisoner is free!")

        for i, line in enumerate(info_lines):
            text = self.small_font.render(line, True, Colors.BLACK)
            self.screen.blit(text, (panel_x, y_offset + i * 22))
