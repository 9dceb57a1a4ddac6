"""Settings and high-score persistence backed by JSON files.

Nothing in here raises to the caller: unreadable or malformed files fall back
to defaults and failed writes are logged and dropped, so a broken disk never
interrupts a game in progress.
"""
from __future__ import annotations

import json
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

from rockblaster.engine.logger import ChannelLogger, GameLogger
from rockblaster.world.difficulty import Difficulty

SETTINGS_PATH = Path("settings.json")
HIGH_SCORE_PATH = Path("highscore.json")

# Attribute name -> key used in settings.json.
_SETTINGS_KEYS = {
    "sound": "sound",
    "music": "music",
    "music_volume": "musicVolume",
    "particles": "particles",
    "show_fps": "showFPS",
    "ship_color": "shipColor",
    "difficulty": "difficulty",
}


@dataclass
class GameSettings:
    sound: bool = True
    music: bool = True
    music_volume: float = 0.5
    particles: bool = True
    show_fps: bool = False
    ship_color: str = "#4ecdc4"
    difficulty: Difficulty = Difficulty.NORMAL

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameSettings":
        """Build settings from stored JSON, keeping defaults for bad values."""

        settings = cls()
        for name in ("sound", "music", "particles", "show_fps"):
            value = data.get(_SETTINGS_KEYS[name])
            if isinstance(value, bool):
                setattr(settings, name, value)
        volume = data.get("musicVolume")
        if isinstance(volume, (int, float)) and not isinstance(volume, bool):
            settings.music_volume = max(0.0, min(1.0, float(volume)))
        color = data.get("shipColor")
        if isinstance(color, str) and color:
            settings.ship_color = color
        difficulty = data.get("difficulty")
        if difficulty is not None:
            try:
                settings.difficulty = Difficulty.from_key(difficulty)
            except ValueError:
                pass
        return settings

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["difficulty"] = self.difficulty.value
        return {_SETTINGS_KEYS[f.name]: data[f.name] for f in fields(self)}


class SettingsStore:
    """Loads and saves player settings and the best score."""

    def __init__(
        self,
        settings_path: Path = SETTINGS_PATH,
        high_score_path: Path = HIGH_SCORE_PATH,
        logger: Optional[GameLogger] = None,
    ) -> None:
        self.settings_path = Path(settings_path)
        self.high_score_path = Path(high_score_path)
        self._log: Optional[ChannelLogger] = logger.channel("storage") if logger else None

    def _read_json(self, path: Path) -> Any:
        if not path.exists():
            return None
        try:
            return json.loads(path.read_text())
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            if self._log:
                self._log.warning("Ignoring unreadable %s: %s", path, exc)
            return None

    def _write_json(self, path: Path, data: Any) -> bool:
        try:
            path.write_text(json.dumps(data, indent=2))
        except (OSError, TypeError, ValueError) as exc:
            if self._log:
                self._log.warning("Could not save %s: %s", path, exc)
            return False
        return True

    def load_settings(self) -> GameSettings:
        data = self._read_json(self.settings_path)
        if not isinstance(data, dict):
            return GameSettings()
        return GameSettings.from_dict(data)

    def save_settings(self, settings: GameSettings) -> bool:
        # settings.json also carries bindings and log config; keep those keys.
        existing = self._read_json(self.settings_path)
        merged = existing if isinstance(existing, dict) else {}
        merged.update(settings.to_dict())
        return self._write_json(self.settings_path, merged)

    def load_high_score(self) -> int:
        data = self._read_json(self.high_score_path)
        if isinstance(data, dict):
            data = data.get("highScore")
        if isinstance(data, bool):
            return 0
        if isinstance(data, (int, float)):
            return max(0, int(data))
        if isinstance(data, str):
            try:
                return max(0, int(data.strip()))
            except ValueError:
                return 0
        return 0

    def save_high_score(self, score: int) -> bool:
        return self._write_json(self.high_score_path, {"highScore": int(score)})


__all__ = ["GameSettings", "HIGH_SCORE_PATH", "SETTINGS_PATH", "SettingsStore"]
