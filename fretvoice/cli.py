"""fretvoice CLI entry point."""

import logging
import sys
from dataclasses import replace

import click

from fretvoice import __version__
from fretvoice.generator import VoicingGenerator
from fretvoice.logger import setup_logger
from fretvoice.options import SearchOptions
from fretvoice.scoring import PlayabilityScore, PlayabilityScorer
from fretvoice.shapes import ChordShapeLibrary
from fretvoice.theory import Chord, Note, Tuning
from fretvoice.voicing import Voicing

TUNING_NAMES = [tuning.name for tuning in Tuning]


def _fail(message: str) -> None:
    click.echo(f"  ERROR: {message}", err=True)
    sys.exit(1)


def _format_row(index: int, voicing: Voicing, score: PlayabilityScore) -> str:
    challenges = "; ".join(score.challenge_notes)
    row = (
        f"  {index:>2}. {voicing.tab:<20} {voicing.position_label:<12} "
        f"{score.total_score:>3}  {score.difficulty_text}"
    )
    return f"{row}  ({challenges})" if challenges else row


# ── CLI group ──────────────────────────────────────────────────────────────────

@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="fretvoice")
@click.option("--verbose", "-v", is_flag=True, help="Log search details (DEBUG level).")
def main(verbose: bool) -> None:
    """fretvoice — guitar chord voicing generator and playability scorer."""
    setup_logger(logging.DEBUG if verbose else logging.INFO)


# ── voicings subcommand ────────────────────────────────────────────────────────

@main.command()
@click.argument("symbol")
@click.option(
    "--preset",
    type=click.Choice(["beginner", "intermediate", "advanced"], case_sensitive=False),
    default=None,
    help="Start from a preset; other options override it.",
)
@click.option("--max-results", "-n", type=click.IntRange(1, 100), default=None, help="How many voicings to list.")
@click.option("--max-fret", type=click.IntRange(0, 24), default=None, help="Highest fret to search.")
@click.option("--max-span", type=click.IntRange(0, 12), default=None, help="Widest allowed fret stretch.")
@click.option(
    "--fret-range",
    type=(int, int),
    default=None,
    metavar="MIN MAX",
    help="Only search between these frets (overrides --max-fret).",
)
@click.option("--no-barre", is_flag=True, help="Skip movable barre shapes.")
@click.option("--any-bass", is_flag=True, help="Do not require the root on the three lowest strings.")
@click.option(
    "--tuning",
    type=click.Choice(TUNING_NAMES, case_sensitive=False),
    default=None,
    help="Instrument tuning (default: STANDARD).",
)
def voicings(
    symbol: str,
    preset: str | None,
    max_results: int | None,
    max_fret: int | None,
    max_span: int | None,
    fret_range: tuple[int, int] | None,
    no_barre: bool,
    any_bass: bool,
    tuning: str | None,
) -> None:
    """
    List ranked voicings for a chord symbol.

    SYMBOL is a chord such as C, Am, F#7, Bbmaj7 or Dsus4.

    \b
    Examples:
      fretvoice voicings C
      fretvoice voicings Am7 --preset advanced -n 5
      fretvoice voicings G --fret-range 7 12 --no-barre
    """
    try:
        chord = Chord.parse(symbol)
        base = SearchOptions.preset(preset) if preset else SearchOptions()
        overrides: dict = {}
        if max_results is not None:
            overrides["max_results"] = max_results
        if max_fret is not None:
            overrides["max_fret"] = max_fret
        if max_span is not None:
            overrides["max_fret_span"] = max_span
        if fret_range is not None:
            overrides["fret_range"] = fret_range
        if no_barre:
            overrides["allow_barre"] = False
        if any_bass:
            overrides["require_root_in_bass"] = False
        if tuning is not None:
            overrides["tuning"] = Tuning.from_name(tuning)
        options = replace(base, **overrides)
    except ValueError as exc:
        _fail(str(exc))
        return

    results = VoicingGenerator().generate_scored(chord, options)

    click.echo(f"fretvoice v{__version__}")
    click.echo(f"  Chord  : {chord.symbol}  ({' '.join(n.name + n.accidental for n in chord.chord_tones())})")
    click.echo()

    if not results:
        click.echo("  No playable voicings found. Try --preset advanced or a wider --max-span.", err=True)
        return

    for index, (voicing, rating) in enumerate(results, start=1):
        click.echo(_format_row(index, voicing, rating))


# ── score subcommand ───────────────────────────────────────────────────────────

@main.command()
@click.argument("tab")
def score(tab: str) -> None:
    """
    Break down the playability score of a fingering.

    TAB lists one fret per string from low to high, x for muted
    (e.g. x32010, or x-10-12-12-12-10 for frets above 9).
    """
    try:
        voicing = Voicing.from_tab(tab)
    except ValueError as exc:
        _fail(str(exc))
        return

    result = PlayabilityScorer().score(voicing)

    click.echo(f"  Tab          : {voicing.tab}")
    click.echo(f"  Position     : {voicing.position_label}")
    click.echo(f"  Fingers      : {' '.join('x' if f < 0 else str(f) for f in voicing.fingers)}")
    click.echo(f"  Fret stretch : {result.fret_stretch_score:>3} / {PlayabilityScorer.MAX_FRET_STRETCH_SCORE}")
    click.echo(f"  Barre        : {result.barre_complexity_score:>3} / {PlayabilityScorer.MAX_BARRE_SCORE}")
    click.echo(f"  Finger count : {result.finger_count_score:>3} / {PlayabilityScorer.MAX_FINGER_COUNT_SCORE}")
    click.echo(f"  Position     : {result.position_score:>3} / {PlayabilityScorer.MAX_POSITION_SCORE}")
    click.echo(f"  Open strings : {result.open_string_score:>3} / {PlayabilityScorer.MAX_OPEN_STRING_SCORE}")
    click.echo(f"  Spacing      : {result.string_spacing_score:>3} / {PlayabilityScorer.MAX_STRING_SPACING_SCORE}")
    click.echo(f"  Total        : {result.total_score:>3} / 100  {result.difficulty_text}")
    for note in result.challenge_notes:
        click.echo(f"    - {note}")


# ── shapes subcommand ──────────────────────────────────────────────────────────

@main.command()
@click.option("--root", default=None, metavar="NOTE", help="Only shapes built on this root, e.g. A or F#.")
def shapes(root: str | None) -> None:
    """List the built-in table of common open chord shapes."""
    library = ChordShapeLibrary.common()
    try:
        selected = library.for_root(Note.parse(root)) if root else list(library.values())
    except ValueError as exc:
        _fail(str(exc))
        return

    for shape in selected:
        tab = "".join("x" if f < 0 else str(f) for f in shape.frets)
        click.echo(f"  {shape.symbol:<4} {tab}")
