"""Fretboard: precomputed (string, fret) → pitch grid for a tuned, fretted instrument."""

from collections.abc import Sequence
from dataclasses import dataclass
from functools import lru_cache

import numpy as np

from fretvoice.theory import SEMITONES_PER_OCTAVE, Note, Tuning

DEFAULT_FRET_COUNT = 24


@dataclass(frozen=True, order=True)
class FretboardPosition:
    """
    One playable spot on the neck.

    Attributes:
        string_index: 0 = lowest-pitched string.
        fret:         0 = open string.
        pitch_class:  0-11, (open string pitch class + fret) mod 12.
    """

    string_index: int
    fret: int
    pitch_class: int

    def __str__(self) -> str:
        return f"S{self.string_index}:F{self.fret}"


class Fretboard:
    """
    Immutable model of a fretboard for a given tuning and fret count.

    The pitch class of every (string, fret) pair is computed once at
    construction into a read-only numpy grid of shape (strings, frets + 1);
    instances can be shared between threads without locking.

        board = Fretboard()
        board.pitch_class_at(1, 3)        # 0  (C on the A string)
        board.positions_for_pitch_class(7, max_fret=3)
    """

    def __init__(
        self,
        tuning: Sequence[Note] | Tuning | None = None,
        max_fret: int = DEFAULT_FRET_COUNT,
    ) -> None:
        """
        Args:
            tuning:   Open-string pitches from lowest to highest string, or a
                      ``Tuning`` member. Defaults to standard six-string tuning.
            max_fret: Highest fret on the neck (inclusive).

        Raises:
            ValueError: If the tuning is empty or max_fret is negative.
        """
        if tuning is None:
            tuning = Tuning.STANDARD
        if isinstance(tuning, Tuning):
            tuning = tuning.open_string_pitches()
        if not tuning:
            raise ValueError("A fretboard needs at least one string")
        if max_fret < 0:
            raise ValueError(f"max_fret must be >= 0, got {max_fret}")

        self._tuning: tuple[Note, ...] = tuple(tuning)
        self._max_fret = max_fret

        open_classes = np.array([note.semitone_class() for note in self._tuning])
        frets = np.arange(max_fret + 1)
        grid = (open_classes[:, np.newaxis] + frets[np.newaxis, :]) % SEMITONES_PER_OCTAVE
        grid.flags.writeable = False
        self._grid = grid

        self._positions: tuple[FretboardPosition, ...] = tuple(
            FretboardPosition(string_index, fret, int(grid[string_index, fret]))
            for string_index in range(len(self._tuning))
            for fret in range(max_fret + 1)
        )

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def tuning(self) -> tuple[Note, ...]:
        return self._tuning

    @property
    def string_count(self) -> int:
        return len(self._tuning)

    @property
    def max_fret(self) -> int:
        return self._max_fret

    @property
    def positions(self) -> tuple[FretboardPosition, ...]:
        """Every position on the neck, string by string, open string first."""
        return self._positions

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _check_position(self, string_index: int, fret: int) -> None:
        if not 0 <= string_index < self.string_count:
            raise ValueError(
                f"String index {string_index} out of range [0, {self.string_count})"
            )
        if not 0 <= fret <= self._max_fret:
            raise ValueError(f"Fret {fret} out of range [0, {self._max_fret}]")

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def note_at(self, string_index: int, fret: int) -> Note:
        """
        Exact pitch (with octave) sounded at a position.

        Raises:
            ValueError: If the string or fret is off the neck.
        """
        self._check_position(string_index, fret)
        return self._tuning[string_index].transpose(fret)

    def pitch_class_at(self, string_index: int, fret: int) -> int:
        """Pitch class 0-11 sounded at a position, read from the precomputed grid."""
        self._check_position(string_index, fret)
        return int(self._grid[string_index, fret])

    def open_pitch_class(self, string_index: int) -> int:
        return self.pitch_class_at(string_index, 0)

    def positions_for_pitch_class(
        self, pitch_class: int, max_fret: int | None = None
    ) -> list[FretboardPosition]:
        """
        All positions sounding *pitch_class* up to *max_fret*, sorted by (fret, string).

        Args:
            pitch_class: 0-11.
            max_fret:    Inclusive upper bound; defaults to the top of the neck.
        """
        if not 0 <= pitch_class < SEMITONES_PER_OCTAVE:
            raise ValueError(f"Pitch class must be in [0, 11], got {pitch_class}")
        upper = self._max_fret if max_fret is None else min(max_fret, self._max_fret)
        if upper < 0:
            return []

        hits = np.argwhere(self._grid[:, : upper + 1] == pitch_class)
        positions = [
            FretboardPosition(int(string_index), int(fret), pitch_class)
            for string_index, fret in hits
        ]
        positions.sort(key=lambda p: (p.fret, p.string_index))
        return positions

    def positions_in_range(self, min_fret: int, max_fret: int) -> list[FretboardPosition]:
        """All positions with ``min_fret <= fret <= max_fret``, string by string."""
        if min_fret > max_fret:
            raise ValueError(f"Empty fret range [{min_fret}, {max_fret}]")
        return [p for p in self._positions if min_fret <= p.fret <= max_fret]

    def __repr__(self) -> str:
        strings = " ".join(str(note) for note in self._tuning)
        return f"Fretboard(tuning=[{strings}], max_fret={self._max_fret})"


@lru_cache(maxsize=None)
def default_fretboard() -> Fretboard:
    """Shared standard-tuning fretboard; safe to reuse because it never changes."""
    return Fretboard()
