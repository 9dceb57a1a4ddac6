"""Game session lifecycle: running, paused, game over, restart."""
from __future__ import annotations

import random
from enum import Enum
from typing import List, Optional

from rockblaster.combat.scoring import time_bonus
from rockblaster.engine.clock import Clock, SystemClock
from rockblaster.engine.logger import ChannelLogger, GameLogger
from rockblaster.engine.storage import GameSettings, SettingsStore
from rockblaster.render.state import GameOverSummary, SessionSnapshot
from rockblaster.ships.ship import ShipControlState
from rockblaster.world.difficulty import Difficulty
from rockblaster.world.events import GameEvent
from rockblaster.world.simulation import Simulation, TickResult


class SessionState(Enum):
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


def format_clock(elapsed_ms: float) -> str:
    seconds = max(0, int(elapsed_ms // 1000))
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


class GameSession:
    """Owns the simulation and everything tied to wall-clock time.

    Ticks only run while RUNNING. The elapsed time, and the time bonus derived
    from it, excludes time spent paused; after game over both stay frozen
    until ``restart``.
    """

    def __init__(
        self,
        store: SettingsStore,
        width: float,
        height: float,
        clock: Optional[Clock] = None,
        rng: Optional[random.Random] = None,
        logger: Optional[GameLogger] = None,
    ) -> None:
        self.store = store
        self.clock = clock or SystemClock()
        self._log: Optional[ChannelLogger] = logger.channel("session") if logger else None
        self.settings: GameSettings = store.load_settings()
        self.high_score: int = store.load_high_score()
        self.simulation = Simulation(
            width,
            height,
            difficulty=self.settings.difficulty,
            rng=rng,
            logger=logger,
            particles_enabled=self.settings.particles,
            ship_color=self.settings.ship_color,
        )
        self.state = SessionState.RUNNING
        self.summary: Optional[GameOverSummary] = None
        self._events: List[GameEvent] = []
        self._start_ms = 0.0
        self._paused_at: Optional[float] = None
        self.elapsed_ms = 0.0
        self._begin(boost=False)

    @property
    def difficulty(self) -> Difficulty:
        return self.simulation.difficulty

    @property
    def level(self) -> int:
        return self.simulation.level

    @property
    def kill_score(self) -> int:
        return self.simulation.score.kills

    @property
    def time_bonus(self) -> int:
        return time_bonus(self.elapsed_ms)

    @property
    def total_score(self) -> int:
        return self.kill_score + self.time_bonus

    @property
    def running(self) -> bool:
        return self.state is SessionState.RUNNING

    def _begin(self, boost: bool) -> None:
        now = self.clock.now_ms()
        self._events.extend(self.simulation.reset(now, boost=boost))
        self._start_ms = now
        self._paused_at = None
        self.elapsed_ms = 0.0
        self.summary = None
        self.state = SessionState.RUNNING

    def tick(self, control: ShipControlState) -> Optional[TickResult]:
        if self.state is not SessionState.RUNNING:
            return None
        now = self.clock.now_ms()
        self.elapsed_ms = now - self._start_ms
        result = self.simulation.tick(control, now)
        self._events.extend(result.events)
        if result.ship_destroyed:
            self._end_game()
        return result

    def fire(self) -> bool:
        if self.state is not SessionState.RUNNING:
            return False
        self._events.append(self.simulation.fire())
        return True

    def pause(self) -> None:
        if self.state is SessionState.RUNNING:
            self.state = SessionState.PAUSED
            self._paused_at = self.clock.now_ms()

    def resume(self) -> None:
        if self.state is not SessionState.PAUSED:
            return
        now = self.clock.now_ms()
        paused_for = now - self._paused_at if self._paused_at is not None else 0.0
        self._start_ms += paused_for
        self.simulation.shift_timers(paused_for)
        self._paused_at = None
        self.state = SessionState.RUNNING

    def toggle_pause(self) -> SessionState:
        if self.state is SessionState.RUNNING:
            self.pause()
        elif self.state is SessionState.PAUSED:
            self.resume()
        return self.state

    def restart(self) -> None:
        """Reload settings and start over; hard mode grants a thrust boost."""

        self.settings = self.store.load_settings()
        self.simulation.difficulty = self.settings.difficulty
        self.simulation.set_particles_enabled(self.settings.particles)
        self.simulation.ship_color = self.settings.ship_color
        self._begin(boost=True)
        if self._log:
            self._log.info("Restarted on %s", self.difficulty.value)

    def apply_settings(self, settings: GameSettings) -> None:
        """Apply changed settings live and persist them."""

        if settings.difficulty is not self.simulation.difficulty:
            self.simulation.set_difficulty(settings.difficulty)
        if settings.particles != self.simulation.particles_enabled:
            self.simulation.set_particles_enabled(settings.particles)
        if settings.ship_color != self.simulation.ship_color:
            self.simulation.set_ship_color(settings.ship_color)
        self.settings = settings
        self.store.save_settings(settings)

    def _end_game(self) -> None:
        self.state = SessionState.GAME_OVER
        total = self.total_score
        new_high = total > self.high_score
        if new_high:
            self.high_score = total
            self.store.save_high_score(total)
        self.summary = GameOverSummary(
            final_score=total,
            best_score=self.high_score,
            level=self.level,
            elapsed_ms=self.elapsed_ms,
            new_high_score=new_high,
        )
        if self._log:
            self._log.info(
                "Game over: score=%d level=%d time=%s%s",
                total,
                self.level,
                format_clock(self.elapsed_ms),
                " (new high score)" if new_high else "",
            )

    def drain_events(self) -> List[GameEvent]:
        events, self._events = self._events, []
        return events

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            world=self.simulation.snapshot(),
            state=self.state.value,
            score=self.total_score,
            high_score=self.high_score,
            elapsed_ms=self.elapsed_ms,
            difficulty=self.difficulty.value,
            game_over=self.summary,
        )


__all__ = ["GameSession", "SessionState", "format_clock"]
