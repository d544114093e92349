from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any

import numpy as np
import soundfile as sf  # type: ignore[import]
from numpy.typing import NDArray

from .errors import InvalidConfigError

FloatArray = NDArray[np.float32]
AudioNumbers = NDArray[np.floating[Any]] | Sequence[float] | FloatArray

# Every buffer length in the package is derived from this rate.
SAMPLE_RATE = 44_100


def sample_count(duration: float, sr: int = SAMPLE_RATE) -> int:
    """Whole samples in ``duration`` seconds, truncated toward zero."""
    return int(duration * sr)


def empty_buffer() -> FloatArray:
    return np.zeros(0, dtype=np.float32)


def ensure_audio_contract(
    audio: AudioNumbers,
    *,
    check_peak: bool = True,
) -> FloatArray:
    """Flatten to mono float32; scale down only when the peak exceeds 1.0."""

    mono: FloatArray = np.asarray(audio, dtype=np.float32).reshape(-1)
    if mono.size == 0 or not check_peak:
        return mono
    peak = float(np.max(np.abs(mono)))
    if peak > 1.0:
        mono = mono / peak
    return mono


def _looks_like_samples(sequence: Sequence[object]) -> bool:
    match sequence:
        case []:
            return True
        case [int() | float() | np.floating(), *_]:
            return True
        case _:
            return False


def write_wav(
    path: str | Path,
    audio: AudioNumbers,
    *,
    sample_rate: int = SAMPLE_RATE,
) -> Path:
    """Write a mono 32-bit float wav file."""

    target = Path(path)
    audio_obj: object = audio
    match audio_obj:
        case np.ndarray():
            samples = ensure_audio_contract(audio_obj)
        case str() | bytes():
            raise InvalidConfigError("audio must be a sample array or a sequence of floats")
        case Sequence() as sequence if _looks_like_samples(sequence):
            samples = ensure_audio_contract(np.asarray(sequence, dtype=np.float32))
        case _:
            raise InvalidConfigError("audio must be a sample array or a sequence of floats")

    sf.write(target, samples, sample_rate, subtype="FLOAT")
    return target
