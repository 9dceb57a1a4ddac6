"""Fixed timestep game loop."""
from __future__ import annotations

import time
from typing import Callable, Optional


class FixedTimestepLoop:
    """Runs a fixed-rate update loop with variable rendering.

    Simulation rules are expressed in units per tick, so ``update`` is called a
    whole number of times per rendered frame. ``max_steps`` caps the catch-up
    after a long stall (window drag, debugger) so the game does not fast-forward.
    """

    def __init__(
        self,
        update: Callable[[float], None],
        render: Callable[[float], None],
        process_events: Callable[[], None],
        fixed_hz: float = 60.0,
        max_frame_time: float = 0.25,
        max_steps: int = 5,
        time_source: Callable[[], float] = time.perf_counter,
    ) -> None:
        if fixed_hz <= 0:
            raise ValueError("fixed_hz must be positive")
        self.update = update
        self.render = render
        self.process_events = process_events
        self.fixed_dt = 1.0 / fixed_hz
        self.max_frame_time = max_frame_time
        self.max_steps = max(1, max_steps)
        self._time_source = time_source
        self._running = False
        self.frames = 0
        self.steps = 0

    @property
    def running(self) -> bool:
        return self._running

    def stop(self) -> None:
        self._running = False

    def run(self, max_frames: Optional[int] = None) -> None:
        self._running = True
        accumulator = 0.0
        last_time = self._time_source()
        while self._running:
            now = self._time_source()
            frame_time = min(now - last_time, self.max_frame_time)
            last_time = now
            accumulator += frame_time
            self.process_events()
            if not self._running:
                break
            steps = 0
            while accumulator >= self.fixed_dt and steps < self.max_steps:
                self.update(self.fixed_dt)
                accumulator -= self.fixed_dt
                steps += 1
            if steps == self.max_steps:
                accumulator = min(accumulator, self.fixed_dt)
            self.steps += steps
            self.render(accumulator / self.fixed_dt)
            self.frames += 1
            if max_frames is not None and self.frames >= max_frames:
                self._running = False


__all__ = ["FixedTimestepLoop"]
