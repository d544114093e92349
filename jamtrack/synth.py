"""
Architecture:

1. Primitives: additive oscillator, ADSR envelope
2. Mixing: notes into chords, chords into a track
3. Post: equal-weight buffer mixer and one-pole low-pass smoothing
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import NamedTuple, TypeAlias

import numpy as np
from numpy.typing import NDArray
from scipy.signal import lfilter  # type: ignore[import]

from .audio import SAMPLE_RATE, FloatArray, empty_buffer, sample_count
from .errors import EmptyAudioError, InvalidConfigError, InvalidSynthParamsError
from .theory import Chord

_LOGGER = logging.getLogger("jamtrack.synth")

Float64Array: TypeAlias = NDArray[np.float64]

# Fundamental plus 2nd and 3rd harmonics.
HARMONIC_WEIGHTS: tuple[float, ...] = (1.0, 0.3, 0.1)
MASTER_GAIN = 0.3

# Envelope policy used for every chord of a rendered track.
TRACK_ATTACK = 0.01
TRACK_DECAY = 0.1
TRACK_SUSTAIN = 0.7
TRACK_RELEASE_FRACTION = 0.3


# =============================================================================
# PART 1: SYNTHESIS PRIMITIVES
# =============================================================================


def _require_finite(name: str, value: float) -> None:
    if not math.isfinite(value):
        raise InvalidSynthParamsError(f"{name} must be finite, got {value!r}")


def _require_non_negative(name: str, value: float) -> None:
    _require_finite(name, value)
    if value < 0:
        raise InvalidSynthParamsError(f"{name} must be >= 0, got {value!r}")


def _require_positive(name: str, value: float) -> None:
    _require_finite(name, value)
    if value <= 0:
        raise InvalidSynthParamsError(f"{name} must be > 0, got {value!r}")


class EnvelopePhases(NamedTuple):
    attack: int
    decay: int
    sustain: int
    release: int


@dataclass(frozen=True, slots=True)
class EnvelopeSpec:
    """ADSR times in seconds and a sustain level in [0, 1]."""

    attack: float
    decay: float
    sustain: float
    release: float

    def __post_init__(self) -> None:
        _require_non_negative("attack", self.attack)
        _require_non_negative("decay", self.decay)
        _require_non_negative("release", self.release)
        _require_finite("sustain", self.sustain)
        if not 0.0 <= self.sustain <= 1.0:
            raise InvalidSynthParamsError(f"sustain must be within [0, 1], got {self.sustain!r}")

    def phases(self, total: int, sr: int = SAMPLE_RATE) -> EnvelopePhases:
        """Sample count per phase; sustain absorbs any overshoot by shrinking to zero."""
        attack = sample_count(self.attack, sr)
        decay = sample_count(self.decay, sr)
        release = sample_count(self.release, sr)
        sustain = max(0, total - attack - decay - release)
        return EnvelopePhases(attack, decay, sustain, release)


def build_envelope(total: int, spec: EnvelopeSpec, sr: int = SAMPLE_RATE) -> Float64Array:
    """
    Piecewise-linear ADSR gain curve of ``total`` samples.

    Phases run attack, decay, sustain, release from sample 0. A phase with zero samples
    is skipped outright. When attack+decay+release overshoots ``total`` the sustain is
    empty and the tail of whichever phase is running gets cut off at ``total``.
    """
    attack, decay, sustain, release = spec.phases(total, sr)
    level = spec.sustain
    index = np.arange(total, dtype=np.float64)
    envelope = np.zeros(total, dtype=np.float64)

    decay_start = attack
    sustain_start = decay_start + decay
    release_start = sustain_start + sustain

    if attack > 0:
        envelope[:decay_start] = index[:decay_start] / attack
    if decay > 0:
        progress = (index[decay_start:sustain_start] - decay_start) / decay
        envelope[decay_start:sustain_start] = 1.0 - (1.0 - level) * progress
    envelope[sustain_start:release_start] = level
    if release > 0:
        progress = (index[release_start:] - release_start) / release
        envelope[release_start:] = level * (1.0 - progress)

    return envelope


def additive_wave(frequency: float, total: int, sr: int = SAMPLE_RATE) -> Float64Array:
    """Sum of the fundamental and its harmonics at HARMONIC_WEIGHTS."""
    t = np.arange(total, dtype=np.float64) / sr
    wave = np.zeros(total, dtype=np.float64)
    for harmonic, weight in enumerate(HARMONIC_WEIGHTS, start=1):
        wave += weight * np.sin(2 * np.pi * frequency * harmonic * t)
    return wave


def render_tone(
    frequency: float,
    duration: float,
    attack: float,
    decay: float,
    sustain_level: float,
    release: float,
    *,
    sr: int = SAMPLE_RATE,
) -> FloatArray:
    """Render one enveloped note as float32 samples."""
    _require_finite("frequency", frequency)
    _require_non_negative("duration", duration)
    spec = EnvelopeSpec(attack=attack, decay=decay, sustain=sustain_level, release=release)
    return _render_tone(frequency, duration, spec, sr)


def _render_tone(frequency: float, duration: float, spec: EnvelopeSpec, sr: int) -> FloatArray:
    total = sample_count(duration, sr)
    samples = additive_wave(frequency, total, sr) * build_envelope(total, spec, sr) * MASTER_GAIN
    return samples.astype(np.float32)


# =============================================================================
# PART 2: CHORD + TRACK RENDERING
# =============================================================================


def render_chord(
    chord: Chord,
    octave: int,
    duration: float,
    envelope: EnvelopeSpec,
    *,
    sr: int = SAMPLE_RATE,
) -> FloatArray:
    """Render every chord tone with the same envelope and average them."""
    _require_non_negative("duration", duration)
    frequencies = chord.frequencies(octave)
    output = np.zeros(sample_count(duration, sr), dtype=np.float32)
    voices = np.float32(len(frequencies))
    for frequency in frequencies:
        output += _render_tone(frequency, duration, envelope, sr) / voices
    return output


def track_envelope(chord_duration: float) -> EnvelopeSpec:
    """Fixed envelope for track rendering; release scales with the chord length."""
    return EnvelopeSpec(
        attack=TRACK_ATTACK,
        decay=TRACK_DECAY,
        sustain=TRACK_SUSTAIN,
        release=chord_duration * TRACK_RELEASE_FRACTION,
    )


def chord_duration(tempo: float, beats_per_chord: float) -> float:
    """Seconds per chord at ``tempo`` beats per minute."""
    _require_positive("tempo", tempo)
    _require_positive("beats_per_chord", beats_per_chord)
    seconds_per_beat = 60.0 / tempo
    return seconds_per_beat * beats_per_chord


def render_track(
    chords: Sequence[Chord],
    octave: int,
    tempo: float,
    beats_per_chord: float,
    *,
    sr: int = SAMPLE_RATE,
    max_workers: int | None = None,
) -> FloatArray:
    """
    Render chords back to back into one buffer.

    Every chord lasts ``beats_per_chord`` beats and uses ``track_envelope``. Chords are
    hard-cut against each other; there is no overlap or crossfade.

    Args:
        chords: Chords in playback order (a Progression works as is).
        octave: Octave the chord tones are voiced in.
        tempo: Beats per minute.
        beats_per_chord: Length of each chord in beats.
        sr: Sample rate.
        max_workers: Render chords on a thread pool when greater than 1. The result is
                     identical to the serial path.
    """
    chord_list = list(chords)
    for chord in chord_list:
        if not isinstance(chord, Chord):
            raise InvalidConfigError(f"Expected Chord, got {type(chord).__name__}")

    duration = chord_duration(tempo, beats_per_chord)
    envelope = track_envelope(duration)

    def _render(chord: Chord) -> FloatArray:
        return render_chord(chord, octave, duration, envelope, sr=sr)

    if max_workers is not None and max_workers > 1 and len(chord_list) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            buffers = list(pool.map(_render, chord_list))
    else:
        buffers = [_render(chord) for chord in chord_list]

    if not buffers:
        return empty_buffer()

    track = np.concatenate(buffers)
    _LOGGER.debug(
        "Rendered %d chords at %.1f bpm into %d samples", len(buffers), tempo, track.size
    )
    return track


# =============================================================================
# PART 3: POST PROCESSING
# =============================================================================


def mix_samples(buffers: Sequence[FloatArray]) -> FloatArray:
    """
    Equal-weight average of ``buffers``.

    The result is as long as the longest input. Shorter buffers stop contributing at
    their end, but the divisor stays the total buffer count.
    """
    if not buffers:
        return empty_buffer()

    arrays = [np.asarray(buffer, dtype=np.float32).reshape(-1) for buffer in buffers]
    result = np.zeros(max(array.size for array in arrays), dtype=np.float32)
    count = np.float32(len(arrays))
    for array in arrays:
        result[: array.size] += array / count
    return result


def apply_lowpass(samples: FloatArray, cutoff: float, sr: int = SAMPLE_RATE) -> FloatArray:
    """One-pole RC smoothing: y[0] = x[0], y[i] = y[i-1] + alpha * (x[i] - y[i-1])."""
    _require_positive("cutoff", cutoff)
    signal = np.asarray(samples, dtype=np.float64).reshape(-1)
    if signal.size == 0:
        raise EmptyAudioError("Cannot low-pass filter an empty buffer")

    rc = 1.0 / (2.0 * np.pi * cutoff)
    dt = 1.0 / sr
    alpha = dt / (rc + dt)
    # Initial state primes the recursion so the first output equals the first input.
    initial = np.array([(1.0 - alpha) * signal[0]])
    filtered, _ = lfilter([alpha], [1.0, alpha - 1.0], signal, zi=initial)
    return np.asarray(filtered, dtype=np.float32)
