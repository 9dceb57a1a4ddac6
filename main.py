"""Entry point for Rockblaster."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

import pygame

from rockblaster.audio.sounds import SoundBoard
from rockblaster.engine.input import InputBindings, InputMapper
from rockblaster.engine.logger import init_logger
from rockblaster.engine.loop import FixedTimestepLoop
from rockblaster.engine.scene import SceneManager
from rockblaster.engine.storage import HIGH_SCORE_PATH, SETTINGS_PATH, SettingsStore
from rockblaster.ui.play_scene import PlayScene
from rockblaster.ui.title_scene import TitleScene

DISPLAY_DEFAULTS: Dict[str, Any] = {
    "resolution": [1024, 768],
    "simHz": 60,
    "maxFps": 120,
}


def load_display_settings(path: Path = SETTINGS_PATH) -> Dict[str, Any]:
    settings = dict(DISPLAY_DEFAULTS)
    if not path.exists():
        return settings
    try:
        data = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError):
        return settings
    if isinstance(data, dict):
        settings.update({key: data[key] for key in DISPLAY_DEFAULTS if key in data})
    return settings


def main() -> None:
    display = load_display_settings()
    logger = init_logger(SETTINGS_PATH)
    pygame.init()
    resolution = tuple(display.get("resolution") or DISPLAY_DEFAULTS["resolution"])
    if resolution == (0, 0):
        info = pygame.display.Info()
        resolution = (info.current_w, info.current_h)

    screen = pygame.display.set_mode(resolution)
    pygame.display.set_caption("Rockblaster")
    clock = pygame.time.Clock()

    store = SettingsStore(SETTINGS_PATH, HIGH_SCORE_PATH, logger=logger)
    input_mapper = InputMapper(InputBindings.load(SETTINGS_PATH))
    sound = SoundBoard(store.load_settings(), logger=logger)

    manager = SceneManager()
    manager.register("title", TitleScene)
    manager.register("play", PlayScene)
    manager.set_context(store=store, input=input_mapper, logger=logger, sound=sound)
    manager.activate("title")

    def process_events() -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                loop.stop()
                return
            manager.handle_event(event)

    def update(dt: float) -> None:
        manager.update(dt)

    def render(alpha: float) -> None:
        manager.render(screen, alpha)
        pygame.display.flip()
        clock.tick(display.get("maxFps", 120))

    loop = FixedTimestepLoop(
        update,
        render,
        process_events,
        fixed_hz=display.get("simHz", 60),
    )

    try:
        loop.run()
    finally:
        manager.shutdown()
        sound.shutdown()
        pygame.quit()


if __name__ == "__main__":
    main()
