import itertools
import json
import logging
from pathlib import Path

import pytest

from rockblaster.engine.logger import GameLogger, LoggerConfig
from rockblaster.engine.loop import FixedTimestepLoop
from rockblaster.engine.telemetry import CollisionTelemetry, FrameRateCounter


def _stepper(step: float):
    counter = itertools.count()
    return lambda: next(counter) * step


def test_loop_runs_whole_ticks_per_frame() -> None:
    updates: list = []
    renders: list = []
    loop = FixedTimestepLoop(
        update=updates.append,
        render=renders.append,
        process_events=lambda: None,
        fixed_hz=4.0,
        max_frame_time=1.0,
        time_source=_stepper(0.5),
    )

    loop.run(max_frames=3)

    assert loop.frames == 3
    assert loop.steps == 6
    assert updates == [0.25] * 6
    assert renders == [0.0, 0.0, 0.0]
    assert not loop.running


def test_loop_caps_catch_up_after_stall() -> None:
    updates: list = []
    loop = FixedTimestepLoop(
        update=updates.append,
        render=lambda alpha: None,
        process_events=lambda: None,
        fixed_hz=4.0,
        max_frame_time=1.0,
        max_steps=2,
        time_source=_stepper(8.0),
    )

    loop.run(max_frames=2)

    assert len(updates) == 4


def test_stop_from_event_handler_skips_the_frame() -> None:
    loop: FixedTimestepLoop

    def quit_now() -> None:
        loop.stop()

    loop = FixedTimestepLoop(
        update=lambda dt: None,
        render=lambda alpha: None,
        process_events=quit_now,
        time_source=_stepper(0.1),
    )
    loop.run()
    assert loop.frames == 0


def test_loop_rejects_non_positive_rate() -> None:
    with pytest.raises(ValueError):
        FixedTimestepLoop(lambda dt: None, lambda alpha: None, lambda: None, fixed_hz=0)


def test_frame_rate_counter_publishes_each_second() -> None:
    counter = FrameRateCounter()
    for frame in range(60):
        counter.tick(frame * 16.0)
    assert counter.fps == 0
    counter.tick(1000.0)
    assert counter.fps == 61


def test_collision_telemetry_resets_per_tick() -> None:
    telemetry = CollisionTelemetry()
    telemetry.begin_tick(projectiles=3, asteroids=4)
    telemetry.record_tested(5)
    telemetry.record_hit()
    telemetry.begin_tick(projectiles=1, asteroids=2)
    telemetry.record_hit()

    snapshot = telemetry.snapshot()
    assert snapshot.hits == 1
    assert snapshot.pairs_tested == 0
    assert telemetry.total_hits == 2


def test_logger_config_reads_level_and_channels(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"logLevel": "debug", "logChannels": {"physics": True, "audio": False}}))

    config = LoggerConfig.from_settings(path)

    assert config.level == logging.DEBUG
    assert config.channels["physics"] is True
    assert config.channels["audio"] is False
    assert config.channels["combat"] is True


def test_logger_config_defaults_on_garbage(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text("nope")
    assert LoggerConfig.from_settings(path) == LoggerConfig()


def test_muted_channel_still_reports_errors(caplog: pytest.LogCaptureFixture) -> None:
    logger = GameLogger(LoggerConfig.quiet())
    session = logger.channel("session")
    assert not session.enabled

    with caplog.at_level(logging.DEBUG, logger="rockblaster"):
        session.info("hidden")
        session.error("visible")

    messages = [record.getMessage() for record in caplog.records]
    assert messages == ["visible"]


def test_unknown_channels_start_disabled() -> None:
    logger = GameLogger(LoggerConfig.quiet())
    assert not logger.channel("replay").enabled
    logger.set_enabled("replay", True)
    assert logger.channel("replay").enabled
    assert "replay" in logger.channels()
