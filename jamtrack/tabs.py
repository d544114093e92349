from __future__ import annotations

from collections.abc import Mapping, Sequence
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

MUTED = -1


class ChordTab(BaseModel):
    """Guitar fingering, strings ordered low E to high E.

    ``-1`` mutes a string, ``0`` plays it open, anything higher is a fret number.
    """

    name: str
    fingers: tuple[int, int, int, int, int, int]
    base_fret: int = Field(default=0, ge=0)

    model_config = ConfigDict(frozen=True, extra="forbid")


def _tab(name: str, *fingers: int) -> ChordTab:
    return ChordTab(name=name, fingers=fingers)  # type: ignore[arg-type]


CHORD_TABS: Mapping[str, ChordTab] = MappingProxyType(
    {
        tab.name: tab
        for tab in (
            _tab("C", -1, 3, 2, 0, 1, 0),
            _tab("Cm", -1, 3, 5, 5, 4, 3),
            _tab("Cdim", -1, 3, 4, 5, 4, -1),
            _tab("C#", -1, 4, 6, 6, 6, 4),
            _tab("C#m", -1, 4, 6, 6, 5, 4),
            _tab("C#dim", -1, 4, 5, 6, 5, -1),
            _tab("D", -1, -1, 0, 2, 3, 2),
            _tab("Dm", -1, -1, 0, 2, 3, 1),
            _tab("Ddim", -1, -1, 0, 1, 3, 1),
            _tab("D#", -1, -1, 1, 3, 4, 3),
            _tab("D#m", -1, -1, 1, 3, 4, 2),
            _tab("D#dim", -1, -1, 1, 2, 4, 2),
            _tab("E", 0, 2, 2, 1, 0, 0),
            _tab("Em", 0, 2, 2, 0, 0, 0),
            _tab("Edim", 0, 1, 2, 0, 2, 0),
            _tab("F", 1, 3, 3, 2, 1, 1),
            _tab("Fm", 1, 3, 3, 1, 1, 1),
            _tab("Fdim", 1, 2, 3, 1, 3, 1),
            _tab("F#", 2, 4, 4, 3, 2, 2),
            _tab("F#m", 2, 4, 4, 2, 2, 2),
            _tab("F#dim", 2, 3, 4, 2, 4, 2),
            _tab("G", 3, 2, 0, 0, 0, 3),
            _tab("Gm", 3, 5, 5, 3, 3, 3),
            _tab("Gdim", 3, 4, 5, 3, 5, 3),
            _tab("G#", 4, 6, 6, 5, 4, 4),
            _tab("G#m", 4, 6, 6, 4, 4, 4),
            _tab("G#dim", 4, 5, 6, 4, 6, 4),
            _tab("A", -1, 0, 2, 2, 2, 0),
            _tab("Am", -1, 0, 2, 2, 1, 0),
            _tab("Adim", -1, 0, 1, 2, 1, -1),
            _tab("A#", -1, 1, 3, 3, 3, 1),
            _tab("A#m", -1, 1, 3, 3, 2, 1),
            _tab("A#dim", -1, 1, 2, 3, 2, -1),
            _tab("B", -1, 2, 4, 4, 4, 2),
            _tab("Bm", -1, 2, 4, 4, 3, 2),
            _tab("Bdim", -1, 2, 3, 4, 3, -1),
        )
    }
)

_TAB_LIST_ADAPTER: TypeAdapter[list[ChordTab | None]] = TypeAdapter(list[ChordTab | None])


def get_chord_tab(chord_name: str) -> ChordTab | None:
    """Look up a fingering by exact chord name (sharp spellings only)."""
    return CHORD_TABS.get(chord_name)


def tabs_to_json(tabs: Sequence[ChordTab | None]) -> str:
    return _TAB_LIST_ADAPTER.dump_json(list(tabs)).decode("utf-8")
