"""VoicingStrategy: Strategy pattern for proposing raw fret-per-string candidates for a chord."""

import logging
from abc import ABC, abstractmethod
from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass

from fretvoice.fretboard import Fretboard, FretboardPosition
from fretvoice.options import SearchOptions
from fretvoice.theory import Chord, ChordQuality

logger = logging.getLogger(__name__)

MUTED = -1

# Frets considered "open position"
OPEN_POSITION_MAX_FRET = 3

# Root positions tried per barre search; bounds the search
MAX_BARRE_ROOTS = 5

# Systematic search windows start every this many frets
WINDOW_STEP = 2

RawVoicing = tuple[int, ...]


@dataclass(frozen=True)
class ChordTarget:
    """
    What a search is aiming at: the chord's distinct pitch classes and its root.

    Attributes:
        pitch_classes: Distinct chord-tone pitch classes, in chord-tone order.
        root:          Pitch class of the root.
        quality:       Chord quality, used only to pick barre templates.
    """

    pitch_classes: tuple[int, ...]
    root: int
    quality: ChordQuality | None = None

    @classmethod
    def from_chord(cls, chord: Chord) -> "ChordTarget":
        ordered: list[int] = []
        for note in chord.chord_tones():
            pitch_class = note.semitone_class()
            if pitch_class not in ordered:
                ordered.append(pitch_class)
        return cls(tuple(ordered), chord.root.semitone_class(), chord.quality)

    def __contains__(self, pitch_class: object) -> bool:
        return pitch_class in self.pitch_classes


def chord_tone_positions(
    fretboard: Fretboard, target: ChordTarget, min_fret: int, max_fret: int
) -> list[FretboardPosition]:
    """
    Every position sounding a chord tone with ``min_fret <= fret <= max_fret``.

    Grouped by chord tone (in chord-tone order), each group sorted by (fret, string).
    """
    positions: list[FretboardPosition] = []
    for pitch_class in target.pitch_classes:
        positions.extend(
            p for p in fretboard.positions_for_pitch_class(pitch_class, max_fret)
            if p.fret >= min_fret
        )
    return positions


# ── Per-string assignment ───────────────────────────────────────────────────

@dataclass(frozen=True)
class StringAssignment:
    """
    Result of one greedy low-to-high pass over the strings.

    Attributes:
        frets:    One fret per string, -1 where muted.
        covered:  Chord-tone pitch classes sounded.
        has_root: True when the root landed on one of the three lowest strings.
    """

    frets: RawVoicing
    covered: frozenset[int]
    has_root: bool

    @property
    def muted_count(self) -> int:
        return sum(1 for fret in self.frets if fret == MUTED)

    @property
    def fret_span(self) -> int:
        fretted = [fret for fret in self.frets if fret > 0]
        return max(fretted) - min(fretted) if fretted else 0


def group_by_string(positions: Iterable[FretboardPosition]) -> dict[int, list[FretboardPosition]]:
    by_string: dict[int, list[FretboardPosition]] = defaultdict(list)
    for position in positions:
        by_string[position.string_index].append(position)
    for candidates in by_string.values():
        candidates.sort(key=lambda p: p.fret)
    return dict(by_string)


def assign_strings(
    fretboard: Fretboard,
    target: ChordTarget,
    positions_by_string: dict[int, list[FretboardPosition]],
) -> StringAssignment:
    """
    Choose one fret (or a mute) per string, walking from the lowest string up.

    Algorithm overview
    ------------------
    For each string:

    1. **No candidates in the window** – fall back to the open string if it
       sounds a chord tone, otherwise mute.
    2. **Root in the bass** – on strings 0-2, until a root has been placed,
       take the first candidate sounding the root.
    3. **Coverage** – otherwise take a candidate whose pitch class is not yet
       covered, lowest fret first; if every candidate is already covered,
       reinforce with the lowest-fret one.
    4. **Nothing suitable** – mute.
    """
    frets: list[int] = []
    covered: set[int] = set()
    has_root = False

    for string_index in range(fretboard.string_count):
        candidates = positions_by_string.get(string_index, [])

        if not candidates:
            open_class = fretboard.open_pitch_class(string_index)
            if open_class in target:
                frets.append(0)
                covered.add(open_class)
                if open_class == target.root and string_index <= 2:
                    has_root = True
            else:
                frets.append(MUTED)
            continue

        chosen: FretboardPosition | None = None

        if string_index <= 2 and not has_root:
            chosen = next((p for p in candidates if p.pitch_class == target.root), None)
            if chosen is not None:
                has_root = True

        if chosen is None:
            tones = [p for p in candidates if p.pitch_class in target]
            if tones:
                chosen = min(tones, key=lambda p: (p.pitch_class in covered, p.fret))

        if chosen is None:
            frets.append(MUTED)
        else:
            frets.append(chosen.fret)
            covered.add(chosen.pitch_class)

    return StringAssignment(tuple(frets), frozenset(covered), has_root)


def passes_constraints(
    assignment: StringAssignment, target: ChordTarget, options: SearchOptions
) -> bool:
    """Post-build checks for greedy candidates: mutes, root, coverage, span."""
    if assignment.muted_count > options.max_muted_strings:
        return False
    if options.root_required_in_bass and not assignment.has_root:
        return False
    if len(assignment.covered) < min(3, len(target.pitch_classes)):
        return False
    return assignment.fret_span <= options.max_fret_span


# ── Barre templates ─────────────────────────────────────────────────────────

TEMPLATE_STRING_COUNT = 6

#: Root on the lowest string; offsets added to the root's fret
E_SHAPE_TEMPLATES: dict[ChordQuality, RawVoicing] = {
    ChordQuality.MAJOR: (0, 0, 2, 2, 2, 0),
    ChordQuality.MINOR: (0, 0, 2, 2, 1, 0),
    ChordQuality.DOMINANT7: (0, 0, 2, 0, 2, 0),
    ChordQuality.MINOR7: (0, 0, 2, 0, 1, 0),
    ChordQuality.MAJOR7: (0, 0, 2, 1, 2, 0),
}

#: Root on the second string; -1 keeps the lowest string muted
A_SHAPE_TEMPLATES: dict[ChordQuality, RawVoicing] = {
    ChordQuality.MAJOR: (-1, 0, 2, 2, 2, 0),
    ChordQuality.MINOR: (-1, 0, 2, 2, 1, 0),
    ChordQuality.DOMINANT7: (-1, 0, 2, 0, 2, 0),
    ChordQuality.MINOR7: (-1, 0, 2, 0, 1, 0),
}


def apply_template(template: RawVoicing, base_fret: int) -> RawVoicing:
    """Shift a shape template to *base_fret*; muted entries stay muted."""
    return tuple(MUTED if offset == MUTED else base_fret + offset for offset in template)


def is_valid_shape(frets: RawVoicing, fretboard: Fretboard, target: ChordTarget) -> bool:
    """
    True when every sounded note is a chord tone, the root sounds, and at
    least two distinct chord tones sound.
    """
    sounded = {
        fretboard.pitch_class_at(string_index, fret)
        for string_index, fret in enumerate(frets)
        if fret != MUTED
    }
    if not all(pitch_class in target for pitch_class in sounded):
        return False
    if target.root not in sounded:
        return False
    return len(sounded) >= 2


# ── Abstract base ────────────────────────────────────────────────────────────

class VoicingStrategy(ABC):
    """
    Abstract Strategy for proposing candidate voicings.

    Concrete subclasses implement ``propose()``; they return raw fret tuples
    and leave building, scoring and ranking to the generator.
    """

    name: str = "strategy"

    def applies(self, options: SearchOptions) -> bool:
        """Whether this strategy runs at all under *options*."""
        return True

    @abstractmethod
    def propose(
        self,
        target: ChordTarget,
        fretboard: Fretboard,
        positions: list[FretboardPosition],
        options: SearchOptions,
    ) -> list[RawVoicing]:
        """
        Propose candidate fret tuples.

        Args:
            target:    Chord tones and root to realise.
            fretboard: Instrument geometry.
            positions: Chord-tone positions inside the searched fret range.
            options:   Search constraints.

        Returns:
            Zero or more raw fret tuples, in proposal order.
        """


# ── Concrete strategies ──────────────────────────────────────────────────────

class OpenPositionStrategy(VoicingStrategy):
    """
    One greedy pass restricted to the first three frets plus open strings.

    Produces at most one candidate: the classic open-position chord shape
    when one exists (for C: 032010, the x32010 shape with the low E ringing).
    """

    name = "open"

    def applies(self, options: SearchOptions) -> bool:
        return options.prefer_open_strings or options.effective_max_fret >= OPEN_POSITION_MAX_FRET

    def propose(
        self,
        target: ChordTarget,
        fretboard: Fretboard,
        positions: list[FretboardPosition],
        options: SearchOptions,
    ) -> list[RawVoicing]:
        nearby = [p for p in positions if p.fret <= OPEN_POSITION_MAX_FRET]
        assignment = assign_strings(fretboard, target, group_by_string(nearby))
        if not passes_constraints(assignment, target, options):
            logger.debug(f"open: rejected {assignment.frets}")
            return []
        return [assignment.frets]


class BarreShapeStrategy(VoicingStrategy):
    """
    Movable E-shape and A-shape barre chords.

    For each of the first five roots found on the two lowest strings, the
    quality's template is shifted to the root's fret and kept if it spells the
    chord. Qualities without a template are skipped for that shape.
    """

    name = "barre"

    def applies(self, options: SearchOptions) -> bool:
        return options.allow_barre

    def propose(
        self,
        target: ChordTarget,
        fretboard: Fretboard,
        positions: list[FretboardPosition],
        options: SearchOptions,
    ) -> list[RawVoicing]:
        if target.quality is None:
            return []
        if fretboard.string_count != TEMPLATE_STRING_COUNT:
            logger.debug("barre: templates need a six-string instrument, skipping")
            return []

        roots = sorted(
            (
                p for p in positions
                if p.pitch_class == target.root
                and p.string_index in (0, 1)
                and 0 < p.fret <= options.effective_max_fret
            ),
            key=lambda p: (p.fret, p.string_index),
        )[:MAX_BARRE_ROOTS]

        proposals: list[RawVoicing] = []
        for root in roots:
            templates = E_SHAPE_TEMPLATES if root.string_index == 0 else A_SHAPE_TEMPLATES
            template = templates.get(target.quality)
            if template is None:
                logger.debug(f"barre: no template for {target.quality.name} on string {root.string_index}")
                continue

            frets = apply_template(template, root.fret)
            if max(frets) > fretboard.max_fret:
                continue
            # Mute and stretch limits still apply to fixed shapes
            muted = sum(1 for fret in frets if fret == MUTED)
            fretted = [fret for fret in frets if fret > 0]
            if muted > options.max_muted_strings:
                continue
            if max(fretted) - min(fretted) > options.max_fret_span:
                continue
            if is_valid_shape(frets, fretboard, target):
                proposals.append(frets)
            else:
                logger.debug(f"barre: {frets} does not spell the chord")
        return proposals


class FretWindowStrategy(VoicingStrategy):
    """
    Greedy passes over sliding fret windows up the neck.

    Windows start at fret 0 and every second fret after that, each as wide as
    ``max_fret_span``; each window yields at most one candidate.
    """

    name = "window"

    def propose(
        self,
        target: ChordTarget,
        fretboard: Fretboard,
        positions: list[FretboardPosition],
        options: SearchOptions,
    ) -> list[RawVoicing]:
        max_fret = options.effective_max_fret
        proposals: list[RawVoicing] = []

        for start_fret in range(0, max_fret - 3 + 1, WINDOW_STEP):
            end_fret = min(start_fret + options.max_fret_span, max_fret)
            window = [p for p in positions if start_fret <= p.fret <= end_fret]
            assignment = assign_strings(fretboard, target, group_by_string(window))
            if passes_constraints(assignment, target, options):
                proposals.append(assignment.frets)
        return proposals


DEFAULT_STRATEGIES: tuple[VoicingStrategy, ...] = (
    OpenPositionStrategy(),
    BarreShapeStrategy(),
    FretWindowStrategy(),
)
