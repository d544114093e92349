from pathlib import Path

import numpy as np
import pytest
import soundfile as sf

from jamtrack.audio import SAMPLE_RATE, ensure_audio_contract, sample_count, write_wav
from jamtrack.errors import InvalidConfigError


def test_sample_count_truncates() -> None:
    assert sample_count(1.0) == SAMPLE_RATE
    assert sample_count(0.99999) == 44_099
    assert sample_count(0.0) == 0


def test_ensure_audio_contract_scales_loud_audio() -> None:
    audio = np.array([2.0, -1.0], dtype=np.float64)
    out = ensure_audio_contract(audio)
    assert out.dtype == np.float32
    assert np.allclose(out, [1.0, -0.5])


def test_ensure_audio_contract_skip_peak() -> None:
    audio = np.array([2.0, -2.0], dtype=np.float32)
    out = ensure_audio_contract(audio, check_peak=False)
    assert np.allclose(out, audio)


def test_write_wav_round_trips_float_samples(tmp_path: Path) -> None:
    target = tmp_path / "tone.wav"
    samples = np.array([0.0, 0.25, -0.5, 0.125], dtype=np.float32)

    write_wav(target, samples)

    data, rate = sf.read(target, dtype="float32")
    assert rate == SAMPLE_RATE
    assert np.allclose(data, samples)


def test_write_wav_accepts_sequence(tmp_path: Path) -> None:
    target = tmp_path / "seq.wav"
    samples = [0.0, 0.1, -0.1, 0.0]

    write_wav(target, samples, sample_rate=22_050)

    assert target.exists()
    assert target.stat().st_size > 0


def test_write_wav_rejects_text(tmp_path: Path) -> None:
    with pytest.raises(InvalidConfigError):
        write_wav(tmp_path / "bad.wav", "not audio")  # type: ignore[arg-type]
