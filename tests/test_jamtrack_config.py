from __future__ import annotations

import pytest
from pydantic import ValidationError

from jamtrack.config import JamTrackConfig, coerce_config, parse_config
from jamtrack.errors import InvalidConfigError
from jamtrack.theory import Mode, PitchClass


def test_defaults() -> None:
    config = JamTrackConfig(key="F#", mode="Phrygian", tempo=150.0)
    assert config.key == "F#"
    assert config.mode == "Phrygian"
    assert config.tempo == 150.0
    assert config.octave == 3
    assert config.beats_per_chord == 4.0


def test_parsed_properties() -> None:
    config = JamTrackConfig(key="gb", mode="minor", tempo=90)
    assert config.root is PitchClass.F_SHARP
    assert config.mode_value is Mode.AEOLIAN


def test_rejects_unknown_key_with_input_in_message() -> None:
    with pytest.raises(ValidationError, match="'H'"):
        JamTrackConfig(key="H", mode="Ionian", tempo=120)


def test_rejects_unknown_mode() -> None:
    with pytest.raises(ValidationError, match="'bebop'"):
        JamTrackConfig(key="C", mode="bebop", tempo=120)


@pytest.mark.parametrize(
    "overrides",
    [
        {"tempo": 0},
        {"tempo": -10},
        {"tempo": float("inf")},
        {"octave": -1},
        {"octave": 11},
        {"beats_per_chord": 0},
    ],
)
def test_rejects_degenerate_numbers(overrides: dict[str, float]) -> None:
    payload = {"key": "C", "mode": "Ionian", "tempo": 120.0, **overrides}
    with pytest.raises(ValidationError):
        JamTrackConfig.model_validate(payload)


def test_rejects_unknown_fields() -> None:
    with pytest.raises(ValidationError):
        JamTrackConfig.model_validate({"key": "C", "mode": "Ionian", "tempo": 120, "swing": 1})


def test_assignment_is_validated() -> None:
    config = JamTrackConfig(key="C", mode="Ionian", tempo=120)
    config.tempo = 95
    config.key = "Bb"
    assert config.tempo == 95
    assert config.root is PitchClass.A_SHARP
    with pytest.raises(ValidationError):
        config.mode = "nope"
    assert config.mode == "Ionian"


def test_parse_config_wraps_validation_errors() -> None:
    assert parse_config({"key": "A", "mode": "Dorian", "tempo": 100}).mode == "Dorian"
    with pytest.raises(InvalidConfigError):
        parse_config({"key": "A", "mode": "Dorian"})


def test_coerce_config() -> None:
    config = JamTrackConfig(key="E", mode="Lydian", tempo=80)
    assert coerce_config(config) is config
    assert coerce_config({"key": "E", "mode": "Lydian", "tempo": 80}) == config
    with pytest.raises(InvalidConfigError):
        coerce_config(42)  # type: ignore[arg-type]
