import pygame
import pytest

from rockblaster.audio.sounds import (
    SOUND_RECIPES,
    Note,
    SoundBoard,
    combo_notes,
    sound_key,
    synth_notes,
)
from rockblaster.engine.clock import ManualClock
from rockblaster.engine.storage import GameSettings
from rockblaster.world.events import GameEvent, SoundEvent


def test_synth_length_matches_duration_and_channels() -> None:
    notes = [Note(0.0, 0.5, 440.0, 440.0, 0.5)]
    mono = synth_notes(notes, sample_rate=8000, channels=1)
    stereo = synth_notes(notes, sample_rate=8000, channels=2)
    assert len(mono) == 4000
    assert len(stereo) == 8000
    assert max(abs(sample) for sample in mono) <= 32767
    assert synth_notes([]).tolist() == []


def test_overlapping_notes_extend_the_buffer() -> None:
    notes = [Note(0.0, 0.1, 300.0, 300.0, 0.2), Note(0.25, 0.25, 600.0, 600.0, 0.2, "square")]
    assert len(synth_notes(notes, sample_rate=1000)) == 500


def test_unknown_waveform_is_rejected() -> None:
    with pytest.raises(ValueError):
        synth_notes([Note(0.0, 0.1, 100.0, 100.0, 0.2, "noise")], sample_rate=1000)


def test_every_event_has_a_recipe() -> None:
    for sound in SoundEvent:
        assert sound_key(GameEvent(sound, combo_level=3)) in SOUND_RECIPES


def test_combo_pitch_rises_and_caps() -> None:
    assert combo_notes(2)[0].start_freq > combo_notes(1)[0].start_freq
    assert combo_notes(9) == combo_notes(5)
    assert sound_key(GameEvent(SoundEvent.COMBO, combo_level=12)) == "combo_5"


@pytest.fixture
def no_mixer(monkeypatch: pytest.MonkeyPatch) -> None:
    def fail(*_args, **_kwargs):
        raise pygame.error("no audio device")

    monkeypatch.setattr(pygame.mixer, "get_init", lambda: None)
    monkeypatch.setattr(pygame.mixer, "init", fail)


def test_missing_mixer_disables_audio(no_mixer: None) -> None:
    board = SoundBoard(GameSettings(), clock=ManualClock())

    assert not board.available
    assert not board.play(GameEvent(SoundEvent.SHOOT))
    board.apply_music_settings()
    board.shutdown()


class _FakeSound:
    def __init__(self) -> None:
        self.plays = 0

    def play(self, loops: int = 0):
        self.plays += 1


def test_thrust_sound_is_throttled(no_mixer: None) -> None:
    clock = ManualClock()
    board = SoundBoard(GameSettings(), clock=clock)
    thrust = _FakeSound()
    board._sounds["thrust"] = thrust
    board.available = True

    assert board.play(GameEvent(SoundEvent.THRUST))
    clock.advance(20)
    assert not board.play(GameEvent(SoundEvent.THRUST))
    clock.advance(30)
    assert board.play(GameEvent(SoundEvent.THRUST))
    assert thrust.plays == 2


def test_sound_setting_mutes_playback(no_mixer: None) -> None:
    board = SoundBoard(GameSettings(sound=False), clock=ManualClock())
    shoot = _FakeSound()
    board._sounds["shoot"] = shoot
    board.available = True

    assert not board.play(GameEvent(SoundEvent.SHOOT))
    assert shoot.plays == 0
