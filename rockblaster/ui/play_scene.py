"""Main gameplay scene: wires input, session, renderer and audio together."""
from __future__ import annotations

from dataclasses import replace
from typing import Callable, Dict

import pygame

from rockblaster.audio.sounds import SoundBoard
from rockblaster.engine.clock import Clock, SystemClock
from rockblaster.engine.input import HELD_ACTIONS, InputMapper
from rockblaster.engine.logger import GameLogger
from rockblaster.engine.scene import Scene
from rockblaster.engine.storage import GameSettings, SettingsStore
from rockblaster.engine.telemetry import FrameRateCounter
from rockblaster.render.hud import HUD
from rockblaster.render.renderer import VectorRenderer
from rockblaster.ships.ship import next_ship_color
from rockblaster.world.session import GameSession, SessionState


MUSIC_VOLUME_STEP = 0.1


class PlayScene(Scene):
    def __init__(self, manager) -> None:
        super().__init__(manager)
        self.store: SettingsStore | None = None
        self.input: InputMapper | None = None
        self.logger: GameLogger | None = None
        self.sound: SoundBoard | None = None
        self.clock: Clock = SystemClock()
        self.session: GameSession | None = None
        self.renderer: VectorRenderer | None = None
        self.hud: HUD | None = None
        self.fps_counter = FrameRateCounter()
        self._handlers: Dict[str, Callable[[], None]] = {
            "fire": self._fire,
            "pause": self._toggle_pause,
            "restart": self._restart,
            "toggle_music": self._toggle_music,
            "toggle_sound": lambda: self._update_settings(sound=not self._settings().sound),
            "toggle_particles": lambda: self._update_settings(particles=not self._settings().particles),
            "toggle_fps": lambda: self._update_settings(show_fps=not self._settings().show_fps),
            "cycle_difficulty": lambda: self._update_settings(difficulty=self._settings().difficulty.next()),
            "music_volume_up": lambda: self._step_music_volume(MUSIC_VOLUME_STEP),
            "music_volume_down": lambda: self._step_music_volume(-MUSIC_VOLUME_STEP),
            "cycle_ship_color": lambda: self._update_settings(ship_color=next_ship_color(self._settings().ship_color)),
            "quit": self._quit,
        }

    def on_enter(self, **kwargs) -> None:
        self.store = kwargs["store"]
        self.input = kwargs["input"]
        self.logger = kwargs.get("logger")
        self.sound = kwargs.get("sound")
        self.clock = kwargs.get("clock") or SystemClock()
        surface = pygame.display.get_surface()
        width, height = surface.get_size()
        self.session = GameSession(self.store, width, height, clock=self.clock, logger=self.logger)
        if self.sound:
            self.sound.settings = self.session.settings
            self.sound.apply_music_settings()
        self.renderer = VectorRenderer(surface)
        self.hud = HUD(surface)
        self.input.release_all()

    def _settings(self) -> GameSettings:
        return self.session.settings

    def handle_event(self, event: pygame.event.Event) -> None:
        if not self.input or not self.session:
            return
        for action in self.input.handle_event(event):
            if action in HELD_ACTIONS:
                continue
            handler = self._handlers.get(action)
            if handler:
                handler()

    def _fire(self) -> None:
        self.session.fire()
        self._flush_events()

    def _toggle_pause(self) -> None:
        self.session.toggle_pause()

    def _restart(self) -> None:
        if self.session.state is SessionState.RUNNING:
            return
        self.session.restart()
        self.input.release_all()
        if self.sound:
            self.sound.settings = self.session.settings
        self._flush_events()

    def _toggle_music(self) -> None:
        self._update_settings(music=not self._settings().music)

    def _step_music_volume(self, step: float) -> None:
        volume = round(min(1.0, max(0.0, self._settings().music_volume + step)), 2)
        self._update_settings(music_volume=volume)

    def _update_settings(self, **changes) -> None:
        settings = replace(self._settings(), **changes)
        self.session.apply_settings(settings)
        if self.sound:
            self.sound.settings = settings
            if "music" in changes or "music_volume" in changes:
                self.sound.apply_music_settings()

    def _quit(self) -> None:
        self.manager.request("title")

    def _flush_events(self) -> None:
        events = self.session.drain_events()
        if self.sound:
            self.sound.handle(events)

    def update(self, dt: float) -> None:
        if not self.session or not self.input:
            return
        self.session.tick(self.input.control_state())
        self._flush_events()

    def render(self, surface: pygame.Surface, alpha: float) -> None:
        if not self.session or not self.renderer or not self.hud:
            return
        fps = self.fps_counter.tick(self.clock.now_ms())
        snapshot = self.session.snapshot()
        settings = self._settings()
        self.renderer.draw(snapshot.world, draw_particles=settings.particles)
        self.hud.draw(snapshot, fps=fps if settings.show_fps else None)


__all__ = ["PlayScene"]
