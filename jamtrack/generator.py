from __future__ import annotations

import json
import logging
from pathlib import Path

from .audio import SAMPLE_RATE, FloatArray, write_wav
from .config import ConfigInput, JamTrackConfig, coerce_config
from .synth import apply_lowpass, chord_duration, render_track
from .tabs import tabs_to_json
from .theory import Mode, PitchClass, Progression, generate_modal_progression

_LOGGER = logging.getLogger("jamtrack.generator")


def available_modes() -> list[str]:
    return [mode.value for mode in Mode]


def available_keys() -> list[str]:
    return [pitch.display_name for pitch in PitchClass]


class JamTrackGenerator:
    """Turns a JamTrackConfig into a chord progression and rendered audio."""

    def __init__(self, config: ConfigInput) -> None:
        self._config = coerce_config(config)
        _LOGGER.info(
            "Creating JamTrackGenerator with key: %s, mode: %s, tempo: %s",
            self._config.key,
            self._config.mode,
            self._config.tempo,
        )

    @property
    def config(self) -> JamTrackConfig:
        return self._config

    @property
    def sample_rate(self) -> int:
        return SAMPLE_RATE

    def update_config(self, config: ConfigInput) -> None:
        self._config = coerce_config(config)

    def progression(self) -> Progression:
        root = PitchClass.parse(self._config.key)
        mode = Mode.parse(self._config.mode)
        return generate_modal_progression(root, mode)

    def generate_samples(self, *, max_workers: int | None = None) -> FloatArray:
        progression = self.progression()
        _LOGGER.info("Generating progression for %s %s", progression.root, progression.mode)
        _LOGGER.info("Generated %d chords", len(progression))
        for index, chord in enumerate(progression, start=1):
            _LOGGER.info("Chord %d: %s", index, chord.name)

        samples = render_track(
            progression,
            self._config.octave,
            self._config.tempo,
            self._config.beats_per_chord,
            max_workers=max_workers,
        )
        _LOGGER.info("Generated %d samples", samples.size)
        return samples

    def duration(self) -> float:
        """Track length in seconds."""
        per_chord = chord_duration(self._config.tempo, self._config.beats_per_chord)
        return len(self.progression()) * per_chord

    def progression_info(self) -> str:
        """Chord names as a JSON array."""
        return json.dumps(self.progression().names)

    def chord_tabs(self) -> str:
        """Guitar fingerings as a JSON array, ``null`` where no fingering is known."""
        return tabs_to_json([chord.guitar_tab() for chord in self.progression()])

    def save(
        self,
        path: str | Path,
        *,
        lowpass_hz: float | None = None,
        max_workers: int | None = None,
    ) -> Path:
        samples = self.generate_samples(max_workers=max_workers)
        if lowpass_hz is not None and samples.size:
            samples = apply_lowpass(samples, lowpass_hz)
        target = write_wav(path, samples, sample_rate=self.sample_rate)
        _LOGGER.info("Wrote %s", target)
        return target
