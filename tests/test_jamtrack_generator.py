from __future__ import annotations

import json
import logging
from pathlib import Path

import numpy as np
import pytest
import soundfile as sf

from jamtrack.audio import SAMPLE_RATE
from jamtrack.config import JamTrackConfig
from jamtrack.errors import InvalidConfigError
from jamtrack.generator import JamTrackGenerator, available_keys, available_modes


def _generator(key: str = "A", mode: str = "Aeolian", tempo: float = 240.0) -> JamTrackGenerator:
    return JamTrackGenerator(JamTrackConfig(key=key, mode=mode, tempo=tempo, beats_per_chord=1.0))


def test_available_lists() -> None:
    assert available_modes() == [
        "Ionian",
        "Dorian",
        "Phrygian",
        "Lydian",
        "Mixolydian",
        "Aeolian",
        "Locrian",
    ]
    assert available_keys()[:3] == ["C", "C#", "D"]
    assert len(available_keys()) == 12


def test_sample_rate() -> None:
    assert _generator().sample_rate == SAMPLE_RATE


def test_generate_samples_length_matches_duration() -> None:
    generator = _generator()
    samples = generator.generate_samples()
    assert samples.dtype == np.float32
    assert generator.duration() == pytest.approx(1.0)
    assert samples.size == 4 * int(0.25 * SAMPLE_RATE)


def test_generate_samples_logs_progression(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO, logger="jamtrack.generator"):
        _generator().generate_samples()
    messages = [record.getMessage() for record in caplog.records]
    assert "Chord 2: Dm" in messages
    assert any(message.startswith("Generated ") and "samples" in message for message in messages)


def test_progression_info_is_json_names() -> None:
    generator = _generator(key="C", mode="major")
    assert json.loads(generator.progression_info()) == ["C", "F", "C", "G"]


def test_chord_tabs_json() -> None:
    tabs = json.loads(_generator(key="E", mode="Phrygian").chord_tabs())
    assert [tab["name"] for tab in tabs] == ["Em", "F", "Em", "D"]
    assert tabs[0]["fingers"] == [0, 2, 2, 0, 0, 0]


def test_update_config_changes_progression() -> None:
    generator = _generator()
    generator.update_config({"key": "G", "mode": "Mixolydian", "tempo": 100})
    assert generator.progression().names == ["G", "F", "G", "F"]
    assert generator.config.tempo == 100


def test_rejects_bad_mapping() -> None:
    with pytest.raises(InvalidConfigError):
        JamTrackGenerator({"key": "Q", "mode": "Ionian", "tempo": 120})


def test_save_writes_wav(tmp_path: Path) -> None:
    generator = _generator()
    path = generator.save(tmp_path / "jam.wav", lowpass_hz=2000.0)
    data, rate = sf.read(path, dtype="float32")
    assert rate == SAMPLE_RATE
    assert data.size == generator.generate_samples().size
