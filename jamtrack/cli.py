from __future__ import annotations

import argparse
import logging
import os
from collections.abc import Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .audio import SAMPLE_RATE
from .config import DEFAULT_BEATS_PER_CHORD, DEFAULT_OCTAVE, JamTrackConfig
from .generator import JamTrackGenerator, available_keys, available_modes
from .logging_utils import DEBUG_ENV, configure_logging, log_exception
from .tabs import MUTED, ChordTab

_LOGGER = logging.getLogger("jamtrack.cli")
_CONSOLE = Console()


def render_error(context: str, exc: BaseException, *, console: Console | None = None) -> None:
    target = console or _CONSOLE
    target.print(f"[bold red]{context} failed:[/bold red] {escape(str(exc))}", highlight=False)


def _format_fingers(tab: ChordTab) -> str:
    return " ".join("x" if fret == MUTED else str(fret) for fret in tab.fingers)


def _tabs_table(generator: JamTrackGenerator) -> Table:
    table = Table(title="Guitar fingerings (low E to high E)")
    table.add_column("Chord")
    table.add_column("Frets")
    for chord in generator.progression():
        tab = chord.guitar_tab()
        table.add_row(chord.name, _format_fingers(tab) if tab else "-")
    return table


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="jamtrack")
    sub = parser.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render", help="Render a jam track to a wav file.")
    render.add_argument("key", type=str)
    render.add_argument("mode", type=str)
    render.add_argument("--tempo", type=float, default=120.0)
    render.add_argument("--octave", type=int, default=DEFAULT_OCTAVE)
    render.add_argument("--beats-per-chord", type=float, default=DEFAULT_BEATS_PER_CHORD)
    render.add_argument("--lowpass", type=float, default=None, help="Smoothing cutoff in Hz.")
    render.add_argument("--workers", type=int, default=None)
    render.add_argument("--output", type=str, default="jamtrack.wav")

    chords = sub.add_parser("chords", help="Show the chord progression for a key and mode.")
    chords.add_argument("key", type=str)
    chords.add_argument("mode", type=str)
    chords.add_argument("--tabs", action="store_true", help="Include guitar fingerings.")
    chords.add_argument("--json", action="store_true", help="Print JSON instead of text.")

    sub.add_parser("list", help="List the available keys and modes.")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    configure_logging()
    try:
        parser = build_parser()
        args = parser.parse_args(argv)

        if args.command == "render":
            config = JamTrackConfig(
                key=args.key,
                mode=args.mode,
                tempo=args.tempo,
                octave=args.octave,
                beats_per_chord=args.beats_per_chord,
            )
            generator = JamTrackGenerator(config)
            with _CONSOLE.status("Rendering jam track"):
                path = generator.save(
                    args.output, lowpass_hz=args.lowpass, max_workers=args.workers
                )
            names = " | ".join(generator.progression().names)
            _CONSOLE.print(f"Wrote {path} ({generator.duration():.2f}s, sr={SAMPLE_RATE})")
            _CONSOLE.print(f"Progression: {names}")
            return 0

        if args.command == "chords":
            generator = JamTrackGenerator({"key": args.key, "mode": args.mode, "tempo": 120.0})
            if args.json:
                _CONSOLE.print_json(generator.progression_info())
                if args.tabs:
                    _CONSOLE.print_json(generator.chord_tabs())
                return 0
            _CONSOLE.print(" | ".join(generator.progression().names))
            if args.tabs:
                _CONSOLE.print(_tabs_table(generator))
            return 0

        if args.command == "list":
            _CONSOLE.print(f"Keys: {', '.join(available_keys())}")
            _CONSOLE.print(f"Modes: {', '.join(available_modes())}")
            return 0

        parser.print_help()
        return 1
    except Exception as exc:
        debug = bool(os.environ.get(DEBUG_ENV))
        _LOGGER.warning("jamtrack CLI failed: %s", exc, exc_info=debug)
        log_exception("jamtrack CLI", exc)
        render_error("jamtrack CLI", exc)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
