"""PlayabilityScorer: six weighted step functions rating how easy a voicing is to fret.

Components (maximum points):
    fret stretch      25 – span between lowest and highest fretted note
    barre complexity  20 – whether, and across how many strings, a barre is needed
    finger count      20 – fingers needed to hold the shape
    position          15 – how far up the neck the shape sits
    open strings      10 – open strings make a shape easier
    string spacing    10 – skipped strings between fretted notes

Every partial score is ``weight * percent // 100``; the total is clamped to
0..100 and mapped to a ``DifficultyLevel``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fretvoice.voicing import Voicing


class DifficultyLevel(IntEnum):
    """Ordered difficulty bands; ``BEGINNER < INTERMEDIATE < ADVANCED < EXPERT``."""

    BEGINNER = 0
    INTERMEDIATE = 1
    ADVANCED = 2
    EXPERT = 3

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @classmethod
    def from_name(cls, name: str) -> DifficultyLevel:
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown difficulty level {name!r}") from None


_DIFFICULTY_COLORS: dict[DifficultyLevel, str] = {
    DifficultyLevel.BEGINNER: "success",
    DifficultyLevel.INTERMEDIATE: "warning",
    DifficultyLevel.ADVANCED: "error",
    DifficultyLevel.EXPERT: "dark",
}


@dataclass(frozen=True)
class PlayabilityScore:
    """
    Breakdown of a voicing's playability; higher is easier.

    Attributes:
        total_score:            Sum of the components, clamped to 0..100.
        difficulty:             Band derived from ``total_score``.
        challenge_notes:        Human-readable reasons points were lost.
        fret_stretch_score:     0..25
        barre_complexity_score: 0..20
        finger_count_score:     0..20
        position_score:         0..15
        open_string_score:      0..10
        string_spacing_score:   0..10
    """

    total_score: int
    difficulty: DifficultyLevel
    challenge_notes: tuple[str, ...] = field(default_factory=tuple)
    fret_stretch_score: int = 0
    barre_complexity_score: int = 0
    finger_count_score: int = 0
    position_score: int = 0
    open_string_score: int = 0
    string_spacing_score: int = 0

    @property
    def difficulty_text(self) -> str:
        return self.difficulty.label

    @property
    def difficulty_color(self) -> str:
        """UI color token for the difficulty band."""
        return _DIFFICULTY_COLORS[self.difficulty]


def _portion(weight: int, percent: int) -> int:
    """Integer share of *weight*, truncated toward zero."""
    return weight * percent // 100


def difficulty_for_score(total_score: int) -> DifficultyLevel:
    if total_score >= 70:
        return DifficultyLevel.BEGINNER
    if total_score >= 50:
        return DifficultyLevel.INTERMEDIATE
    if total_score >= 30:
        return DifficultyLevel.ADVANCED
    return DifficultyLevel.EXPERT


class PlayabilityScorer:
    """
    Stateless scorer; one instance can be shared by any number of callers.

    Only the voicing's derived metrics are read (``fret_span``, ``is_barre``,
    ``barred_strings``, ``fingers_required``, ``base_fret``,
    ``open_strings_count``, ``max_string_gap``), so anything exposing those
    attributes can be scored.
    """

    MAX_FRET_STRETCH_SCORE = 25
    MAX_BARRE_SCORE = 20
    MAX_FINGER_COUNT_SCORE = 20
    MAX_POSITION_SCORE = 15
    MAX_OPEN_STRING_SCORE = 10
    MAX_STRING_SPACING_SCORE = 10

    # ── Individual components ─────────────────────────────────

    def fret_stretch_score(self, voicing: Voicing, challenges: list[str]) -> int:
        span = voicing.fret_span
        if span <= 2:
            return self.MAX_FRET_STRETCH_SCORE
        if span == 3:
            return _portion(self.MAX_FRET_STRETCH_SCORE, 70)
        if span == 4:
            challenges.append("Requires 4-fret stretch")
            return _portion(self.MAX_FRET_STRETCH_SCORE, 40)
        challenges.append(f"Requires difficult {span}-fret stretch")
        return 0

    def barre_score(self, voicing: Voicing, challenges: list[str]) -> int:
        if not voicing.is_barre:
            return self.MAX_BARRE_SCORE
        barred = len(voicing.barred_strings)
        if barred <= 2:
            return _portion(self.MAX_BARRE_SCORE, 80)
        if barred <= 4:
            challenges.append("Barre chord")
            return _portion(self.MAX_BARRE_SCORE, 50)
        challenges.append("Full barre chord")
        return _portion(self.MAX_BARRE_SCORE, 30)

    def finger_count_score(self, voicing: Voicing, challenges: list[str]) -> int:
        fingers = voicing.fingers_required
        if fingers >= 4:
            challenges.append("Uses all 4 fingers")
        percent = {1: 100, 2: 90, 3: 70, 4: 40}.get(fingers, 0)
        return _portion(self.MAX_FINGER_COUNT_SCORE, percent)

    def position_score(self, voicing: Voicing, challenges: list[str]) -> int:
        base_fret = voicing.base_fret
        if base_fret == 0:
            return self.MAX_POSITION_SCORE
        if base_fret <= 3:
            return _portion(self.MAX_POSITION_SCORE, 90)
        if base_fret <= 5:
            return _portion(self.MAX_POSITION_SCORE, 70)
        if base_fret <= 7:
            return _portion(self.MAX_POSITION_SCORE, 50)
        if base_fret <= 10:
            challenges.append(f"High position (fret {base_fret})")
            return _portion(self.MAX_POSITION_SCORE, 30)
        challenges.append(f"Very high position (fret {base_fret})")
        return 0

    def open_string_score(self, voicing: Voicing) -> int:
        open_strings = voicing.open_strings_count
        if open_strings >= 3:
            return self.MAX_OPEN_STRING_SCORE
        if open_strings == 2:
            return _portion(self.MAX_OPEN_STRING_SCORE, 80)
        if open_strings == 1:
            return _portion(self.MAX_OPEN_STRING_SCORE, 50)
        return 0

    def string_spacing_score(self, voicing: Voicing, challenges: list[str]) -> int:
        gap = voicing.max_string_gap
        if gap == 0:
            return self.MAX_STRING_SPACING_SCORE
        if gap == 1:
            return _portion(self.MAX_STRING_SPACING_SCORE, 80)
        if gap == 2:
            challenges.append("String skip required")
            return _portion(self.MAX_STRING_SPACING_SCORE, 50)
        challenges.append("Large string skip required")
        return 0

    # ── Aggregate ─────────────────────────────────────────────

    def score(self, voicing: Voicing) -> PlayabilityScore:
        """
        Score a voicing.

        Args:
            voicing: The voicing (or any object with the same derived metrics).

        Returns:
            A fresh PlayabilityScore; nothing is cached.
        """
        challenges: list[str] = []

        fret_stretch = self.fret_stretch_score(voicing, challenges)
        barre = self.barre_score(voicing, challenges)
        finger_count = self.finger_count_score(voicing, challenges)
        position = self.position_score(voicing, challenges)
        open_strings = self.open_string_score(voicing)
        string_spacing = self.string_spacing_score(voicing, challenges)

        total = fret_stretch + barre + finger_count + position + open_strings + string_spacing
        total = max(0, min(100, total))

        return PlayabilityScore(
            total_score=total,
            difficulty=difficulty_for_score(total),
            challenge_notes=tuple(challenges),
            fret_stretch_score=fret_stretch,
            barre_complexity_score=barre,
            finger_count_score=finger_count,
            position_score=position,
            open_string_score=open_strings,
            string_spacing_score=string_spacing,
        )

    def difficulty(self, voicing: Voicing) -> DifficultyLevel:
        return self.score(voicing).difficulty


def score_voicing(voicing: Voicing) -> PlayabilityScore:
    """Score *voicing* with a default ``PlayabilityScorer``."""
    return PlayabilityScorer().score(voicing)
