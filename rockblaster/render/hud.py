"""Heads-up display drawing."""
from __future__ import annotations

from typing import List, Optional

import pygame

from rockblaster.render.state import GameOverSummary, SessionSnapshot
from rockblaster.world.session import format_clock

TEXT_COLOR = (255, 255, 255)
COMBO_COLOR = (255, 217, 61)
HIGHLIGHT_COLOR = (78, 205, 196)
FPS_COLOR = (0, 255, 0)
OVERLAY_COLOR = (0, 0, 0, 170)
MARGIN = 16


def score_label(score: int, combo: int) -> str:
    if combo > 1:
        return f"{score} x{combo}"
    return str(score)


def status_lines(snapshot: SessionSnapshot) -> List[str]:
    return [
        f"Score: {score_label(snapshot.score, snapshot.world.combo)}",
        f"High Score: {snapshot.high_score}",
        f"Level: {snapshot.world.level}",
        f"Time: {format_clock(snapshot.elapsed_ms)}",
        f"Difficulty: {snapshot.difficulty.title()}",
    ]


def game_over_lines(summary: GameOverSummary) -> List[str]:
    lines = [
        "GAME OVER",
        f"Final Score: {summary.final_score}",
        f"Best Score: {summary.best_score}",
        f"Level Reached: {summary.level}",
        f"Time Survived: {format_clock(summary.elapsed_ms)}",
    ]
    if summary.new_high_score:
        lines.insert(1, f"New High Score: {summary.final_score}!")
    lines.append("Press R to play again")
    return lines


class HUD:
    def __init__(self, surface: pygame.Surface) -> None:
        self.surface = surface
        self.font = pygame.font.SysFont("consolas", 20)
        self.big_font = pygame.font.SysFont("consolas", 48, bold=True)
        self.small_font = pygame.font.SysFont("consolas", 14)

    def draw(self, snapshot: SessionSnapshot, fps: Optional[int] = None) -> None:
        y = MARGIN
        for index, line in enumerate(status_lines(snapshot)):
            color = COMBO_COLOR if index == 0 and snapshot.world.combo > 1 else TEXT_COLOR
            text = self.font.render(line, True, color)
            self.surface.blit(text, (MARGIN, y))
            y += text.get_height() + 4
        if fps is not None:
            text = self.small_font.render(f"FPS: {fps}", True, FPS_COLOR)
            self.surface.blit(text, (self.surface.get_width() - text.get_width() - MARGIN, MARGIN))
        if snapshot.state == "paused":
            self._draw_overlay(["PAUSED", "Press P to resume"])
        elif snapshot.game_over is not None:
            self._draw_overlay(game_over_lines(snapshot.game_over))

    def _draw_overlay(self, lines: List[str]) -> None:
        shade = pygame.Surface(self.surface.get_size(), pygame.SRCALPHA)
        shade.fill(OVERLAY_COLOR)
        self.surface.blit(shade, (0, 0))
        rendered = []
        for index, line in enumerate(lines):
            font = self.big_font if index == 0 else self.font
            color = HIGHLIGHT_COLOR if line.startswith("New High Score") else TEXT_COLOR
            rendered.append(font.render(line, True, color))
        total_height = sum(text.get_height() + 8 for text in rendered)
        y = self.surface.get_height() / 2 - total_height / 2
        for text in rendered:
            self.surface.blit(text, (self.surface.get_width() / 2 - text.get_width() / 2, y))
            y += text.get_height() + 8


__all__ = ["HUD", "game_over_lines", "score_label", "status_lines"]
