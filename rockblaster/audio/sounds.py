"""Synthesised sound effects and ambient music on pygame.mixer."""
from __future__ import annotations

import math
from array import array
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Sequence

import pygame

from rockblaster.engine.clock import Clock, SystemClock
from rockblaster.engine.logger import ChannelLogger, GameLogger
from rockblaster.engine.storage import GameSettings
from rockblaster.world.events import GameEvent, SoundEvent

SAMPLE_RATE = 22050
MAX_AMPLITUDE = 32767
THRUST_THROTTLE_MS = 50.0
MUSIC_GAIN = 0.3
MAX_COMBO_PITCH_LEVEL = 5

MELODY = (220.0, 246.94, 261.63, 293.66, 329.63, 293.66, 261.63, 246.94)
MELODY_NOTE_SECONDS = 0.5
LEVELUP_NOTES = (523.25, 659.25, 783.99, 1046.50)


@dataclass(frozen=True)
class Note:
    offset: float
    duration: float
    start_freq: float
    end_freq: float
    volume: float
    waveform: str = "sine"
    attack: float = 0.0


def _oscillator(waveform: str, phase: float) -> float:
    cycle = phase % 1.0
    if waveform == "sine":
        return math.sin(math.tau * cycle)
    if waveform == "square":
        return 1.0 if cycle < 0.5 else -1.0
    if waveform == "triangle":
        return 4.0 * cycle - 1.0 if cycle < 0.5 else 3.0 - 4.0 * cycle
    if waveform == "sawtooth":
        return 2.0 * cycle - 1.0
    raise ValueError(f"Unknown waveform '{waveform}'")


def synth_notes(notes: Sequence[Note], sample_rate: int = SAMPLE_RATE, channels: int = 1) -> array:
    """Mix notes into a signed 16-bit interleaved buffer.

    Frequencies sweep exponentially from start to end. Volume either decays
    exponentially to 1% (the default) or, with ``attack``, ramps up linearly
    and back down to silence.
    """

    if not notes:
        return array("h")
    length = max(note.offset + note.duration for note in notes)
    frames = max(1, int(length * sample_rate))
    mix = [0.0] * frames
    for note in notes:
        start = int(note.offset * sample_rate)
        count = max(1, int(note.duration * sample_rate))
        ratio = note.end_freq / note.start_freq if note.start_freq > 0 else 1.0
        phase = 0.0
        for index in range(count):
            frame = start + index
            if frame >= frames:
                break
            progress = index / count
            frequency = note.start_freq * (ratio ** progress)
            phase += frequency / sample_rate
            if note.attack > 0.0:
                t = index / sample_rate
                if t < note.attack:
                    gain = note.volume * (t / note.attack)
                else:
                    gain = note.volume * max(0.0, 1.0 - (t - note.attack) / max(1e-6, note.duration - note.attack))
            else:
                gain = note.volume * (0.01 ** progress)
            mix[frame] += _oscillator(note.waveform, phase) * gain
    samples = array("h")
    for value in mix:
        sample = max(-MAX_AMPLITUDE - 1, min(MAX_AMPLITUDE, int(value * MAX_AMPLITUDE)))
        samples.extend([sample] * channels)
    return samples


def combo_notes(combo_level: int) -> list[Note]:
    level = max(1, min(combo_level, MAX_COMBO_PITCH_LEVEL))
    base = 400.0 + level * 200.0
    return [
        Note(
            offset=i * 0.05,
            duration=0.1,
            start_freq=base + i * 200.0,
            end_freq=base + i * 200.0,
            volume=0.3 - i * 0.05,
            waveform="sine" if i == 0 else "square",
        )
        for i in range(3)
    ]


SOUND_RECIPES: Dict[str, list[Note]] = {
    "shoot": [Note(0.0, 0.08, 1200.0, 600.0, 0.2, "square")],
    "explosion": [Note(0.0, 0.3, 150.0, 40.0, 0.5, "sawtooth")],
    "hit": [Note(0.0, 0.15, 300.0, 100.0, 0.4, "triangle")],
    "thrust": [Note(0.0, 0.05, 80.0, 80.0, 0.15, "sawtooth")],
    "levelup": [Note(i * 0.1, 0.3, freq, freq, 0.3) for i, freq in enumerate(LEVELUP_NOTES)],
    "powerup": [Note(0.0, 0.2, 800.0, 1600.0, 0.4, attack=0.05)],
}
for _level in range(1, MAX_COMBO_PITCH_LEVEL + 1):
    SOUND_RECIPES[f"combo_{_level}"] = combo_notes(_level)

MUSIC_RECIPE = [
    Note(i * MELODY_NOTE_SECONDS, MELODY_NOTE_SECONDS, freq, freq, 0.1, attack=0.1)
    for i, freq in enumerate(MELODY)
]


def sound_key(event: GameEvent) -> str:
    if event.sound is SoundEvent.COMBO:
        level = max(1, min(event.combo_level, MAX_COMBO_PITCH_LEVEL))
        return f"combo_{level}"
    return event.sound.value


class SoundBoard:
    """Plays game events; any mixer failure just turns sound off."""

    def __init__(
        self,
        settings: GameSettings,
        logger: Optional[GameLogger] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self.settings = settings
        self.clock = clock or SystemClock()
        self._log: Optional[ChannelLogger] = logger.channel("audio") if logger else None
        self._sounds: Dict[str, pygame.mixer.Sound] = {}
        self._music: Optional[pygame.mixer.Sound] = None
        self._music_channel: Optional[pygame.mixer.Channel] = None
        self._last_thrust_ms: Optional[float] = None
        self.available = self._init_mixer()
        if self.available:
            self.apply_music_settings()

    def _init_mixer(self) -> bool:
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=1, buffer=512)
            init = pygame.mixer.get_init()
            if not init:
                raise pygame.error("mixer did not initialise")
            frequency, _size, channels = init
            for name, notes in SOUND_RECIPES.items():
                self._sounds[name] = pygame.mixer.Sound(buffer=synth_notes(notes, frequency, channels))
            self._music = pygame.mixer.Sound(buffer=synth_notes(MUSIC_RECIPE, frequency, channels))
        except pygame.error as exc:
            self._sounds.clear()
            self._music = None
            if self._log:
                self._log.warning("Audio unavailable, continuing silently: %s", exc)
            return False
        return True

    def _disable(self, exc: Exception) -> None:
        self.available = False
        if self._log:
            self._log.warning("Audio playback failed, disabling sound: %s", exc)

    def play(self, event: GameEvent) -> bool:
        if not self.available or not self.settings.sound:
            return False
        if event.sound is SoundEvent.THRUST:
            now = self.clock.now_ms()
            if self._last_thrust_ms is not None and now - self._last_thrust_ms < THRUST_THROTTLE_MS:
                return False
            self._last_thrust_ms = now
        sound = self._sounds.get(sound_key(event))
        if sound is None:
            return False
        try:
            sound.play()
        except pygame.error as exc:
            self._disable(exc)
            return False
        return True

    def handle(self, events: Iterable[GameEvent]) -> None:
        for event in events:
            self.play(event)

    def apply_music_settings(self) -> None:
        if not self.available or self._music is None:
            return
        try:
            if self.settings.music:
                self._music.set_volume(self.settings.music_volume * MUSIC_GAIN)
                if self._music_channel is None or not self._music_channel.get_busy():
                    self._music_channel = self._music.play(loops=-1)
            else:
                self._music.stop()
                self._music_channel = None
        except pygame.error as exc:
            self._disable(exc)

    def shutdown(self) -> None:
        if not self.available:
            return
        try:
            pygame.mixer.stop()
        except pygame.error:
            pass
        self.available = False


__all__ = [
    "MUSIC_RECIPE",
    "Note",
    "SOUND_RECIPES",
    "SoundBoard",
    "combo_notes",
    "sound_key",
    "synth_notes",
]
