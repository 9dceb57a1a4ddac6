"""Input mapping and rebind support."""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

import pygame

from rockblaster.ships.ship import ShipControlState

DEFAULT_BINDINGS = {
    "turn_left": ["K_LEFT", "K_a"],
    "turn_right": ["K_RIGHT", "K_d"],
    "thrust": ["K_UP", "K_w"],
    "fire": ["K_SPACE"],
    "pause": ["K_p"],
    "toggle_music": ["K_m"],
    "toggle_sound": ["K_n"],
    "toggle_particles": ["K_o"],
    "toggle_fps": ["K_F3"],
    "cycle_difficulty": ["K_TAB"],
    "music_volume_up": ["K_EQUALS", "K_KP_PLUS"],
    "music_volume_down": ["K_MINUS", "K_KP_MINUS"],
    "cycle_ship_color": ["K_c"],
    "restart": ["K_r", "K_RETURN"],
    "quit": ["K_ESCAPE"],
}

# Actions that steer the ship while held; everything else fires on key press.
HELD_ACTIONS = ("turn_left", "turn_right", "thrust")


@dataclass
class InputBindings:
    """Runtime structure representing current bindings."""

    actions: Dict[str, List[str]] = field(default_factory=lambda: {k: list(v) for k, v in DEFAULT_BINDINGS.items()})

    @classmethod
    def load(cls, path: Path) -> "InputBindings":
        if not path.exists():
            return cls()
        try:
            data = json.loads(path.read_text())
        except (OSError, json.JSONDecodeError):
            return cls()
        if not isinstance(data, dict) or not isinstance(data.get("bindings", {}), dict):
            return cls()
        actions = {k: list(v) for k, v in DEFAULT_BINDINGS.items()}
        for action, keys in data.get("bindings", {}).items():
            if isinstance(keys, list):
                actions[action] = [str(key) for key in keys]
        return cls(actions=actions)

    def key_codes(self) -> Dict[int, List[str]]:
        """Resolve binding names like ``K_SPACE`` to pygame key codes."""

        codes: Dict[int, List[str]] = {}
        for action, keys in self.actions.items():
            for key_name in keys:
                code = getattr(pygame, key_name, None)
                if not isinstance(code, int):
                    continue
                codes.setdefault(code, []).append(action)
        return codes


class InputMapper:
    """Tracks held keys and turns key presses into logical actions."""

    def __init__(self, bindings: Optional[InputBindings] = None) -> None:
        self.bindings = bindings or InputBindings()
        self._key_actions = self.bindings.key_codes()
        self.action_state: Dict[str, bool] = {action: False for action in self.bindings.actions}

    def handle_event(self, event: pygame.event.Event) -> List[str]:
        """Update held state and return the actions triggered by a key press."""

        if event.type not in (pygame.KEYDOWN, pygame.KEYUP):
            return []
        actions = self._key_actions.get(getattr(event, "key", None), [])
        pressed = event.type == pygame.KEYDOWN
        for action in actions:
            self.action_state[action] = pressed
        return list(actions) if pressed else []

    def action(self, name: str) -> bool:
        return self.action_state.get(name, False)

    def release_all(self) -> None:
        for action in self.action_state:
            self.action_state[action] = False

    def control_state(self) -> ShipControlState:
        return ShipControlState(
            turn_left=self.action("turn_left"),
            turn_right=self.action("turn_right"),
            thrust=self.action("thrust"),
        )


__all__ = ["DEFAULT_BINDINGS", "HELD_ACTIONS", "InputBindings", "InputMapper"]
