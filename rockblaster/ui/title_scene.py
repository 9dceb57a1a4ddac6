"""Title screen scene."""
from __future__ import annotations

import pygame

from rockblaster.engine.scene import Scene

TITLE_COLOR = (78, 205, 196)
PROMPT_COLOR = (200, 200, 200)
CONTROLS = (
    "Arrows / WASD: turn and thrust    Space: fire",
    "P: pause    M: music    -/=: volume    N: sound    O: particles",
    "C: ship colour    F3: FPS    Tab: difficulty",
)


class TitleScene(Scene):
    def __init__(self, manager) -> None:
        super().__init__(manager)
        self.font = None
        self.small_font = None

    def on_enter(self, **kwargs) -> None:
        self.font = pygame.font.SysFont("consolas", 40, bold=True)
        self.small_font = pygame.font.SysFont("consolas", 18)

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type != pygame.KEYDOWN:
            return
        if event.key in (pygame.K_ESCAPE, pygame.K_q):
            pygame.event.post(pygame.event.Event(pygame.QUIT))
        else:
            self.manager.request("play")

    def render(self, surface: pygame.Surface, alpha: float) -> None:
        surface.fill((0, 0, 0))
        center_x = surface.get_width() / 2
        center_y = surface.get_height() / 2
        title = self.font.render("ROCKBLASTER", True, TITLE_COLOR)
        prompt = self.small_font.render("Press any key to launch", True, PROMPT_COLOR)
        surface.blit(title, (center_x - title.get_width() / 2, center_y - 120))
        surface.blit(prompt, (center_x - prompt.get_width() / 2, center_y - 40))
        y = center_y + 20
        for line in CONTROLS:
            text = self.small_font.render(line, True, PROMPT_COLOR)
            surface.blit(text, (center_x - text.get_width() / 2, y))
            y += text.get_height() + 6


__all__ = ["TitleScene"]
