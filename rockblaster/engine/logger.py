"""Game logging utilities with channel toggles."""
from __future__ import annotations

import json
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, Optional

DEFAULT_CHANNELS = {
    "physics": False,
    "combat": True,
    "spawn": True,
    "session": True,
    "audio": True,
    "storage": True,
}

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


@dataclass
class LoggerConfig:
    """Configuration for runtime logging."""

    level: int = logging.INFO
    channels: Dict[str, bool] = field(default_factory=lambda: DEFAULT_CHANNELS.copy())

    @classmethod
    def from_settings(cls, settings_path: Path) -> "LoggerConfig":
        if not settings_path.exists():
            return cls()
        try:
            data = json.loads(settings_path.read_text())
        except (OSError, json.JSONDecodeError):
            return cls()
        if not isinstance(data, dict):
            return cls()
        level_name = str(data.get("logLevel", "INFO")).upper()
        level = getattr(logging, level_name, logging.INFO)
        if not isinstance(level, int):
            level = logging.INFO
        channels = DEFAULT_CHANNELS.copy()
        overrides = data.get("logChannels", {})
        if isinstance(overrides, dict):
            channels.update({str(k): bool(v) for k, v in overrides.items()})
        return cls(level=level, channels=channels)

    @classmethod
    def quiet(cls) -> "LoggerConfig":
        """Config with every channel muted, used by tests and tools."""

        return cls(level=logging.CRITICAL, channels={name: False for name in DEFAULT_CHANNELS})


class ChannelLogger:
    """Wrapper that only emits records when the channel is enabled."""

    def __init__(self, name: str, logger: logging.Logger, enabled: bool) -> None:
        self._logger = logger
        self._enabled = enabled
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    @property
    def enabled(self) -> bool:
        return self._enabled

    @enabled.setter
    def enabled(self, value: bool) -> None:
        self._enabled = value

    def debug(self, msg: str, *args, **kwargs) -> None:
        if self._enabled:
            self._logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs) -> None:
        if self._enabled:
            self._logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs) -> None:
        if self._enabled:
            self._logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs) -> None:
        # Errors are always recorded, even on muted channels.
        self._logger.error(msg, *args, **kwargs)


class GameLogger:
    """Central logging registry for the project."""

    def __init__(self, config: Optional[LoggerConfig] = None) -> None:
        config = config or LoggerConfig()
        logging.basicConfig(level=config.level, format=LOG_FORMAT, stream=sys.stdout)
        self._root = logging.getLogger("rockblaster")
        self._root.setLevel(config.level)
        self._channels: Dict[str, ChannelLogger] = {}
        for name, enabled in config.channels.items():
            self._channels[name] = self._make_channel(name, enabled)

    def _make_channel(self, name: str, enabled: bool) -> ChannelLogger:
        return ChannelLogger(name, self._root.getChild(name), enabled)

    def channel(self, name: str) -> ChannelLogger:
        if name not in self._channels:
            # Unknown channels start disabled until explicitly enabled.
            self._channels[name] = self._make_channel(name, False)
        return self._channels[name]

    def set_enabled(self, name: str, enabled: bool) -> None:
        self.channel(name).enabled = enabled

    def channels(self) -> Iterable[str]:
        return self._channels.keys()


def init_logger(settings_path: Optional[Path] = None) -> GameLogger:
    """Initialise a logger from settings.json."""

    settings_path = settings_path or Path("settings.json")
    return GameLogger(LoggerConfig.from_settings(settings_path))


__all__ = ["ChannelLogger", "DEFAULT_CHANNELS", "GameLogger", "LoggerConfig", "init_logger"]
