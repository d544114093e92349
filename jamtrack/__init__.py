from __future__ import annotations

from .audio import SAMPLE_RATE, write_wav
from .config import JamTrackConfig, parse_config
from .errors import (
    EmptyAudioError,
    InvalidConfigError,
    InvalidSynthParamsError,
    JamTrackError,
    UnknownKeyError,
    UnknownModeError,
)
from .generator import JamTrackGenerator, available_keys, available_modes
from .logging_utils import configure_logging as _configure_logging
from .synth import (
    EnvelopeSpec,
    apply_lowpass,
    mix_samples,
    render_chord,
    render_tone,
    render_track,
)
from .tabs import ChordTab, get_chord_tab
from .theory import (
    Chord,
    ChordQuality,
    Mode,
    PitchClass,
    Progression,
    generate_modal_progression,
)

__all__ = [
    "SAMPLE_RATE",
    "Chord",
    "ChordQuality",
    "ChordTab",
    "EmptyAudioError",
    "EnvelopeSpec",
    "InvalidConfigError",
    "InvalidSynthParamsError",
    "JamTrackConfig",
    "JamTrackError",
    "JamTrackGenerator",
    "Mode",
    "PitchClass",
    "Progression",
    "UnknownKeyError",
    "UnknownModeError",
    "apply_lowpass",
    "available_keys",
    "available_modes",
    "generate_modal_progression",
    "get_chord_tab",
    "mix_samples",
    "parse_config",
    "render_chord",
    "render_tone",
    "render_track",
    "write_wav",
]

__version__ = "0.1.0"

_configure_logging()
del _configure_logging
