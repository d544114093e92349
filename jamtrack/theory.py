"""
Harmony primitives.

1. PitchClass: the twelve semitones as a cyclic group, with equal-tempered frequencies
2. Mode: the seven diatonic modes and their scales
3. Chord: a root plus a fixed triad (or power chord) shape
4. Progression: the per-mode four-chord template
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from .errors import UnknownKeyError, UnknownModeError
from .tabs import ChordTab, get_chord_tab

_LOGGER = logging.getLogger("jamtrack.theory")

CONCERT_A_HZ = 440.0
CONCERT_A_OCTAVE = 4
SEMITONES_PER_OCTAVE = 12


# =============================================================================
# PITCH CLASSES
# =============================================================================


class PitchClass(Enum):
    """One of the twelve pitch classes; the value is the semitone offset from C."""

    C = 0
    C_SHARP = 1
    D = 2
    D_SHARP = 3
    E = 4
    F = 5
    F_SHARP = 6
    G = 7
    G_SHARP = 8
    A = 9
    A_SHARP = 10
    B = 11

    @property
    def semitone(self) -> int:
        return self.value

    @classmethod
    def from_semitone(cls, semitone: int) -> PitchClass:
        """Inverse of ``semitone``; any integer is reduced modulo 12."""
        return cls(semitone % SEMITONES_PER_OCTAVE)

    @classmethod
    def lookup(cls, name: str) -> PitchClass | None:
        """Resolve a spelling such as ``"F#"``, ``"gb"`` or ``"E#"``; ``None`` if unknown."""
        return _NOTE_ALIASES.get(name.strip().upper())

    @classmethod
    def parse(cls, name: str) -> PitchClass:
        pitch = cls.lookup(name)
        if pitch is None:
            raise UnknownKeyError(name, ", ".join(p.display_name for p in cls))
        return pitch

    @property
    def display_name(self) -> str:
        return _NOTE_NAMES[self]

    def transpose(self, semitones: int) -> PitchClass:
        return PitchClass.from_semitone(self.value + semitones)

    def frequency(self, octave: int) -> float:
        """Equal-tempered frequency in Hz, anchored at A4 = 440 Hz."""
        semitones_from_a4 = (octave - CONCERT_A_OCTAVE) * SEMITONES_PER_OCTAVE + (
            self.value - PitchClass.A.value
        )
        return CONCERT_A_HZ * 2.0 ** (semitones_from_a4 / SEMITONES_PER_OCTAVE)

    def __str__(self) -> str:
        return self.display_name


_NOTE_NAMES: Mapping[PitchClass, str] = MappingProxyType(
    {
        PitchClass.C: "C",
        PitchClass.C_SHARP: "C#",
        PitchClass.D: "D",
        PitchClass.D_SHARP: "D#",
        PitchClass.E: "E",
        PitchClass.F: "F",
        PitchClass.F_SHARP: "F#",
        PitchClass.G: "G",
        PitchClass.G_SHARP: "G#",
        PitchClass.A: "A",
        PitchClass.A_SHARP: "A#",
        PitchClass.B: "B",
    }
)

# Upper-cased spellings, including the enharmonic edge cases E#/Fb/B#/Cb.
_NOTE_ALIASES: Mapping[str, PitchClass] = MappingProxyType(
    {
        "C": PitchClass.C,
        "B#": PitchClass.C,
        "C#": PitchClass.C_SHARP,
        "DB": PitchClass.C_SHARP,
        "D": PitchClass.D,
        "D#": PitchClass.D_SHARP,
        "EB": PitchClass.D_SHARP,
        "E": PitchClass.E,
        "FB": PitchClass.E,
        "F": PitchClass.F,
        "E#": PitchClass.F,
        "F#": PitchClass.F_SHARP,
        "GB": PitchClass.F_SHARP,
        "G": PitchClass.G,
        "G#": PitchClass.G_SHARP,
        "AB": PitchClass.G_SHARP,
        "A": PitchClass.A,
        "A#": PitchClass.A_SHARP,
        "BB": PitchClass.A_SHARP,
        "B": PitchClass.B,
        "CB": PitchClass.B,
    }
)


# =============================================================================
# MODES
# =============================================================================


class Mode(Enum):
    IONIAN = "Ionian"
    DORIAN = "Dorian"
    PHRYGIAN = "Phrygian"
    LYDIAN = "Lydian"
    MIXOLYDIAN = "Mixolydian"
    AEOLIAN = "Aeolian"
    LOCRIAN = "Locrian"

    @classmethod
    def lookup(cls, name: str) -> Mode | None:
        return _MODE_ALIASES.get(name.strip().lower())

    @classmethod
    def parse(cls, name: str) -> Mode:
        mode = cls.lookup(name)
        if mode is None:
            raise UnknownModeError(name, ", ".join(m.value for m in cls))
        return mode

    @property
    def intervals(self) -> tuple[int, ...]:
        return MODE_INTERVALS[self]

    def scale(self, root: PitchClass) -> tuple[PitchClass, ...]:
        """The seven scale notes starting at ``root``, in interval order."""
        return tuple(root.transpose(interval) for interval in self.intervals)

    def __str__(self) -> str:
        return self.value


# Semitones from the root; every pattern is heptatonic and strictly ascending.
MODE_INTERVALS: Mapping[Mode, tuple[int, ...]] = MappingProxyType(
    {
        Mode.IONIAN: (0, 2, 4, 5, 7, 9, 11),
        Mode.DORIAN: (0, 2, 3, 5, 7, 9, 10),
        Mode.PHRYGIAN: (0, 1, 3, 5, 7, 8, 10),
        Mode.LYDIAN: (0, 2, 4, 6, 7, 9, 11),
        Mode.MIXOLYDIAN: (0, 2, 4, 5, 7, 9, 10),
        Mode.AEOLIAN: (0, 2, 3, 5, 7, 8, 10),
        Mode.LOCRIAN: (0, 1, 3, 5, 6, 8, 10),
    }
)

_MODE_ALIASES: Mapping[str, Mode] = MappingProxyType(
    {
        **{mode.value.lower(): mode for mode in Mode},
        "major": Mode.IONIAN,
        "minor": Mode.AEOLIAN,
    }
)


# =============================================================================
# CHORDS
# =============================================================================


class ChordQuality(Enum):
    MAJOR = "major"
    MINOR = "minor"
    DIMINISHED = "diminished"
    SUS2 = "sus2"
    SUS4 = "sus4"
    POWER = "power"

    @property
    def intervals(self) -> tuple[int, ...]:
        return CHORD_SHAPES[self]

    @property
    def suffix(self) -> str:
        return CHORD_SUFFIXES[self]


CHORD_SHAPES: Mapping[ChordQuality, tuple[int, ...]] = MappingProxyType(
    {
        ChordQuality.MAJOR: (0, 4, 7),
        ChordQuality.MINOR: (0, 3, 7),
        ChordQuality.DIMINISHED: (0, 3, 6),
        ChordQuality.SUS2: (0, 2, 7),
        ChordQuality.SUS4: (0, 5, 7),
        ChordQuality.POWER: (0, 7),
    }
)

CHORD_SUFFIXES: Mapping[ChordQuality, str] = MappingProxyType(
    {
        ChordQuality.MAJOR: "",
        ChordQuality.MINOR: "m",
        ChordQuality.DIMINISHED: "dim",
        ChordQuality.SUS2: "sus2",
        ChordQuality.SUS4: "sus4",
        ChordQuality.POWER: "5",
    }
)


@dataclass(frozen=True, slots=True)
class Chord:
    """A root pitch class with a fixed shape. Equality is root plus shape."""

    root: PitchClass
    quality: ChordQuality

    @classmethod
    def major(cls, root: PitchClass) -> Chord:
        return cls(root, ChordQuality.MAJOR)

    @classmethod
    def minor(cls, root: PitchClass) -> Chord:
        return cls(root, ChordQuality.MINOR)

    @classmethod
    def diminished(cls, root: PitchClass) -> Chord:
        return cls(root, ChordQuality.DIMINISHED)

    @classmethod
    def sus2(cls, root: PitchClass) -> Chord:
        return cls(root, ChordQuality.SUS2)

    @classmethod
    def sus4(cls, root: PitchClass) -> Chord:
        return cls(root, ChordQuality.SUS4)

    @classmethod
    def power(cls, root: PitchClass) -> Chord:
        return cls(root, ChordQuality.POWER)

    @property
    def intervals(self) -> tuple[int, ...]:
        return self.quality.intervals

    @property
    def name(self) -> str:
        return f"{self.root.display_name}{self.quality.suffix}"

    def notes(self) -> tuple[PitchClass, ...]:
        return tuple(self.root.transpose(interval) for interval in self.intervals)

    def frequencies(self, octave: int) -> tuple[float, ...]:
        return tuple(note.frequency(octave) for note in self.notes())

    def guitar_tab(self) -> ChordTab | None:
        return get_chord_tab(self.name)

    def __str__(self) -> str:
        return self.name


# =============================================================================
# PROGRESSIONS
# =============================================================================

ProgressionStep = tuple[int, ChordQuality]

_MAJ = ChordQuality.MAJOR
_MIN = ChordQuality.MINOR
_DIM = ChordQuality.DIMINISHED

# (scale degree, quality) per chord; each mode's characteristic four-bar loop.
MODE_PROGRESSIONS: Mapping[Mode, tuple[ProgressionStep, ...]] = MappingProxyType(
    {
        Mode.IONIAN: ((0, _MAJ), (3, _MAJ), (0, _MAJ), (4, _MAJ)),  # I IV I V
        Mode.DORIAN: ((0, _MIN), (3, _MAJ), (0, _MIN), (3, _MAJ)),  # i IV i IV
        Mode.PHRYGIAN: ((0, _MIN), (1, _MAJ), (0, _MIN), (6, _MAJ)),  # i bII i bVII
        Mode.LYDIAN: ((0, _MAJ), (1, _MAJ), (0, _MAJ), (1, _MAJ)),  # I II I II
        Mode.MIXOLYDIAN: ((0, _MAJ), (6, _MAJ), (0, _MAJ), (6, _MAJ)),  # I bVII I bVII
        Mode.AEOLIAN: ((0, _MIN), (3, _MIN), (0, _MIN), (4, _MIN)),  # i iv i v
        Mode.LOCRIAN: ((0, _DIM), (1, _MAJ), (0, _DIM), (4, _MAJ)),  # i° bII i° bV
    }
)


@dataclass(frozen=True, slots=True)
class Progression:
    """The four chords generated for one key and mode."""

    root: PitchClass
    mode: Mode
    chords: tuple[Chord, ...]

    def __iter__(self) -> Iterator[Chord]:
        return iter(self.chords)

    def __len__(self) -> int:
        return len(self.chords)

    def __getitem__(self, index: int) -> Chord:
        return self.chords[index]

    @property
    def names(self) -> list[str]:
        return [chord.name for chord in self.chords]


def generate_modal_progression(root: PitchClass, mode: Mode) -> Progression:
    """Build the mode's four-chord template on the scale of ``root``."""
    scale = mode.scale(root)
    chords = tuple(Chord(scale[degree], quality) for degree, quality in MODE_PROGRESSIONS[mode])
    _LOGGER.debug("Progression for %s %s: %s", root, mode, " ".join(c.name for c in chords))
    return Progression(root=root, mode=mode, chords=chords)
