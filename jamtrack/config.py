from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import InvalidConfigError, UnknownKeyError, UnknownModeError
from .theory import Mode, PitchClass

_LOGGER = logging.getLogger("jamtrack.config")

DEFAULT_OCTAVE = 3
DEFAULT_BEATS_PER_CHORD = 4.0
MAX_OCTAVE = 10


class JamTrackConfig(BaseModel):
    """Key, mode and timing for one jam track.

    Assignment is validated, so ``config.tempo = 90`` is the way to change a field.

    Example:
        config = JamTrackConfig(key="F#", mode="Phrygian", tempo=150)
        config.mode = "dorian"
    """

    key: str
    mode: str
    tempo: float = Field(gt=0, allow_inf_nan=False, description="Beats per minute.")
    octave: int = Field(default=DEFAULT_OCTAVE, ge=0, le=MAX_OCTAVE)
    beats_per_chord: float = Field(default=DEFAULT_BEATS_PER_CHORD, gt=0, allow_inf_nan=False)

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    @field_validator("key")
    @classmethod
    def _check_key(cls, value: str) -> str:
        try:
            PitchClass.parse(value)
        except UnknownKeyError as exc:
            raise ValueError(str(exc)) from exc
        return value

    @field_validator("mode")
    @classmethod
    def _check_mode(cls, value: str) -> str:
        try:
            Mode.parse(value)
        except UnknownModeError as exc:
            raise ValueError(str(exc)) from exc
        return value

    @property
    def root(self) -> PitchClass:
        return PitchClass.parse(self.key)

    @property
    def mode_value(self) -> Mode:
        return Mode.parse(self.mode)


ConfigInput = JamTrackConfig | Mapping[str, Any]


def parse_config(payload: Mapping[str, Any]) -> JamTrackConfig:
    """Validate a config payload, raising InvalidConfigError on failure."""

    try:
        return JamTrackConfig.model_validate(payload)
    except ValidationError as exc:
        _LOGGER.warning("Config validation failed: %s", exc, exc_info=True)
        raise InvalidConfigError(str(exc)) from exc


def coerce_config(config: ConfigInput) -> JamTrackConfig:
    match config:
        case JamTrackConfig():
            return config
        case Mapping():
            return parse_config(config)
        case _:
            raise InvalidConfigError(f"Unsupported config type: {type(config).__name__}")
