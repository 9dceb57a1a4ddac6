"""Scene management utilities."""
from __future__ import annotations

from typing import Any, Dict, Optional, Tuple, Type

import pygame


class Scene:
    """Base scene interface."""

    def __init__(self, manager: "SceneManager") -> None:
        self.manager = manager

    def on_enter(self, **kwargs) -> None:  # pragma: no cover - hooks
        pass

    def on_exit(self) -> None:  # pragma: no cover - hooks
        pass

    def handle_event(self, event: pygame.event.Event) -> None:
        pass

    def update(self, dt: float) -> None:
        pass

    def render(self, surface: pygame.Surface, alpha: float) -> None:
        pass


class SceneManager:
    """Registers and swaps scenes.

    ``request`` defers a swap until the current update or event dispatch has
    finished, so a scene never tears itself down mid-call.
    """

    def __init__(self) -> None:
        self._scenes: Dict[str, Type[Scene]] = {}
        self._active: Optional[Scene] = None
        self._active_name: Optional[str] = None
        self._pending: Optional[Tuple[str, Dict[str, Any]]] = None
        self.context: Dict[str, Any] = {}

    @property
    def active_name(self) -> Optional[str]:
        return self._active_name

    def register(self, name: str, scene_cls: Type[Scene]) -> None:
        self._scenes[name] = scene_cls

    def activate(self, name: str, **kwargs) -> None:
        if name not in self._scenes:
            raise KeyError(f"Scene '{name}' is not registered")
        if self._active:
            self._active.on_exit()
        self._active = self._scenes[name](self)
        self._active_name = name
        self._active.on_enter(**{**self.context, **kwargs})

    def request(self, name: str, **kwargs) -> None:
        if name not in self._scenes:
            raise KeyError(f"Scene '{name}' is not registered")
        self._pending = (name, kwargs)

    def _apply_pending(self) -> None:
        if self._pending is None:
            return
        name, kwargs = self._pending
        self._pending = None
        self.activate(name, **kwargs)

    def set_context(self, **kwargs) -> None:
        self.context.update(kwargs)

    def handle_event(self, event: pygame.event.Event) -> None:
        if self._active:
            self._active.handle_event(event)
        self._apply_pending()

    def update(self, dt: float) -> None:
        if self._active:
            self._active.update(dt)
        self._apply_pending()

    def render(self, surface: pygame.Surface, alpha: float) -> None:
        if self._active:
            self._active.render(surface, alpha)

    def shutdown(self) -> None:
        if self._active:
            self._active.on_exit()
        self._active = None
        self._active_name = None


__all__ = ["Scene", "SceneManager"]
