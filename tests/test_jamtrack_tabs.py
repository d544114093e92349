import json

import pytest
from pydantic import ValidationError

from jamtrack.tabs import CHORD_TABS, MUTED, ChordTab, get_chord_tab, tabs_to_json
from jamtrack.theory import Chord, ChordQuality, PitchClass


def test_table_covers_every_triad_root() -> None:
    assert len(CHORD_TABS) == 36
    for root in PitchClass:
        for quality in (ChordQuality.MAJOR, ChordQuality.MINOR, ChordQuality.DIMINISHED):
            assert Chord(root, quality).guitar_tab() is not None


def test_known_shapes() -> None:
    assert get_chord_tab("C") == ChordTab(name="C", fingers=(MUTED, 3, 2, 0, 1, 0))
    assert get_chord_tab("Em").fingers == (0, 2, 2, 0, 0, 0)  # type: ignore[union-attr]


def test_unknown_chord_has_no_tab() -> None:
    assert get_chord_tab("Gb") is None
    assert Chord.sus4(PitchClass.D).guitar_tab() is None
    assert Chord.power(PitchClass.E).guitar_tab() is None


def test_tabs_are_frozen() -> None:
    tab = get_chord_tab("G")
    assert tab is not None
    with pytest.raises(ValidationError):
        tab.base_fret = 3  # type: ignore[misc]


def test_tabs_to_json_keeps_missing_entries() -> None:
    payload = json.loads(tabs_to_json([get_chord_tab("Am"), None]))
    assert payload == [
        {"name": "Am", "fingers": [-1, 0, 2, 2, 1, 0], "base_fret": 0},
        None,
    ]
