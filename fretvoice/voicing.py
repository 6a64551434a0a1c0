"""Voicing: one concrete fret-or-mute assignment per string, with its derived shape metrics."""

import re
from collections import defaultdict
from collections.abc import Sequence

from fretvoice.fretboard import Fretboard, default_fretboard
from fretvoice.theory import Chord, Note

MUTED = -1
OPEN = 0

# Finger numbers: index = 1 ... pinky = 4
MAX_FINGER = 4

_TAB_SEPARATORS = re.compile(r"[\s,\-]+")


class Voicing:
    """
    A chord fingering on a fretted instrument, computed from ``fret_per_string``.

    ``fret_per_string[i]`` is -1 for a muted string, 0 for an open string and
    the fret number otherwise; index 0 is the lowest-pitched string. Every
    other attribute is derived once, at construction, and never changes:

    Shape metrics
    -------------
    ``lowest_fret`` / ``highest_fret`` ignore open strings (0 when nothing is
    fretted); ``fret_span`` is their difference and ``base_fret`` the lowest
    fretted position.

    Barre detection
    ---------------
    Fretted strings are grouped by fret, scanning frets from low to high. The
    first group of two or more strings whose outermost strings are at most
    ``len(group)`` apart is taken as the barre; this admits one skipped string
    inside the barre (e.g. an open G inside a partial barre).

    Fingering
    ---------
    The index finger covers the barre; the remaining fretted strings take
    fingers 2, 3, 4 in (fret, string) order. Without a barre the fretted
    strings take fingers 1-4 in the same order. Positions beyond the fourth
    finger stay unassigned (-1): the shape is still valid, its fingering is
    just incomplete.

    Two voicings are equal when their ``fret_per_string`` tuples are equal.
    """

    def __init__(
        self,
        fret_per_string: Sequence[int],
        fretboard: Fretboard | None = None,
        chord: Chord | None = None,
    ) -> None:
        """
        Args:
            fret_per_string: One entry per string, lowest string first.
            fretboard:       Instrument the frets refer to; standard tuning by default.
            chord:           Chord this voicing realises, kept for naming only.

        Raises:
            ValueError: If the length does not match the fretboard's string count,
                        or a fret is below -1 or beyond the top of the neck.
        """
        board = fretboard if fretboard is not None else default_fretboard()
        frets = tuple(int(f) for f in fret_per_string)

        if len(frets) != board.string_count:
            raise ValueError(
                f"Voicing needs exactly {board.string_count} frets, got {len(frets)}"
            )
        for string_index, fret in enumerate(frets):
            if fret < MUTED:
                raise ValueError(f"Invalid fret {fret} on string {string_index}")

        self._frets = frets
        self._fretboard = board
        self._chord = chord

        self._notes: tuple[Note | None, ...] = tuple(
            board.note_at(i, fret) if fret >= OPEN else None for i, fret in enumerate(frets)
        )

        fretted = [(i, fret) for i, fret in enumerate(frets) if fret > OPEN]
        self._fretted = fretted
        self._lowest_fret = min((f for _, f in fretted), default=0)
        self._highest_fret = max((f for _, f in fretted), default=0)

        self._open_strings = sum(1 for f in frets if f == OPEN)
        self._muted_strings = sum(1 for f in frets if f == MUTED)

        self._is_barre = False
        self._barre_fret: int | None = None
        self._barred_strings: tuple[int, ...] = ()
        self._detect_barre()

        self._fingers = self._assign_fingers()
        self._fingers_required = self._count_fingers_required()
        self._position_label = self._make_position_label()

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _detect_barre(self) -> None:
        strings_by_fret: dict[int, list[int]] = defaultdict(list)
        for string_index, fret in self._fretted:
            strings_by_fret[fret].append(string_index)

        for fret in sorted(strings_by_fret):
            indices = strings_by_fret[fret]
            if len(indices) < 2:
                continue
            if indices[-1] - indices[0] <= len(indices):
                self._is_barre = True
                self._barre_fret = fret
                self._barred_strings = tuple(indices)
                return

    def _assign_fingers(self) -> tuple[int, ...]:
        fingers = [MUTED if fret == MUTED else OPEN if fret == OPEN else -1 for fret in self._frets]
        ordered = sorted(self._fretted, key=lambda item: (item[1], item[0]))

        next_finger = 1
        if self._is_barre:
            for string_index in self._barred_strings:
                fingers[string_index] = 1
            next_finger = 2

        for string_index, _ in ordered:
            if string_index in self._barred_strings:
                continue
            if next_finger > MAX_FINGER:
                break
            fingers[string_index] = next_finger
            next_finger += 1

        return tuple(fingers)

    def _count_fingers_required(self) -> int:
        if self._is_barre:
            other_frets = {
                fret for string_index, fret in self._fretted
                if string_index not in self._barred_strings
            }
            return 1 + len(other_frets)
        return min(len(self._fretted), MAX_FINGER)

    def _make_position_label(self) -> str:
        if self._open_strings > 0 and self._lowest_fret <= 3:
            return "Open"
        if self._is_barre:
            return f"Barre {self._barre_fret}"
        if self._lowest_fret > 0:
            return f"Position {self._lowest_fret}"
        return "Open"

    # ------------------------------------------------------------------
    # Derived attributes
    # ------------------------------------------------------------------

    @property
    def fret_per_string(self) -> tuple[int, ...]:
        return self._frets

    @property
    def fretboard(self) -> Fretboard:
        return self._fretboard

    @property
    def chord(self) -> Chord | None:
        return self._chord

    @property
    def notes(self) -> tuple[Note | None, ...]:
        """Sounded pitch per string; None where the string is muted."""
        return self._notes

    @property
    def lowest_fret(self) -> int:
        return self._lowest_fret

    @property
    def highest_fret(self) -> int:
        return self._highest_fret

    @property
    def fret_span(self) -> int:
        if self._lowest_fret > 0 and self._highest_fret > 0:
            return self._highest_fret - self._lowest_fret
        return 0

    @property
    def base_fret(self) -> int:
        return self._lowest_fret if self._lowest_fret > 0 else 0

    @property
    def is_barre(self) -> bool:
        return self._is_barre

    @property
    def barre_fret(self) -> int | None:
        return self._barre_fret

    @property
    def barred_strings(self) -> tuple[int, ...]:
        return self._barred_strings

    @property
    def fingers(self) -> tuple[int, ...]:
        """-1 unused or muted, 0 open, 1-4 index to pinky."""
        return self._fingers

    @property
    def fingers_required(self) -> int:
        return self._fingers_required

    @property
    def strings_played(self) -> int:
        return len(self._frets) - self._muted_strings

    @property
    def open_strings_count(self) -> int:
        return self._open_strings

    @property
    def muted_strings_count(self) -> int:
        return self._muted_strings

    @property
    def position_label(self) -> str:
        return self._position_label

    @property
    def max_string_gap(self) -> int:
        """Most strings skipped between two consecutive fretted strings."""
        indices = [string_index for string_index, _ in self._fretted]
        return max((b - a - 1 for a, b in zip(indices, indices[1:])), default=0)

    def pitch_classes(self) -> set[int]:
        """Distinct pitch classes sounded by this voicing."""
        return {note.semitone_class() for note in self._notes if note is not None}

    @property
    def bass_note(self) -> Note | None:
        """Lowest sounded note, or None when every string is muted."""
        return next((note for note in self._notes if note is not None), None)

    # ------------------------------------------------------------------
    # Tab notation
    # ------------------------------------------------------------------

    @property
    def tab(self) -> str:
        """
        Compact tab string, lowest string first: "x32010".

        Frets above 9 switch to a dash-separated form: "x-10-12-12-12-10".
        """
        symbols = ["x" if fret == MUTED else str(fret) for fret in self._frets]
        if any(fret > 9 for fret in self._frets):
            return "-".join(symbols)
        return "".join(symbols)

    @classmethod
    def from_tab(cls, text: str, fretboard: Fretboard | None = None) -> "Voicing":
        """
        Parse a tab string such as "x32010", "x-3-2-0-1-0" or "x 10 12 12 12 10".

        Raises:
            ValueError: If a symbol is neither a fret number nor x/X.
        """
        stripped = text.strip()
        if _TAB_SEPARATORS.search(stripped):
            symbols = [s for s in _TAB_SEPARATORS.split(stripped) if s]
        else:
            symbols = list(stripped)

        frets: list[int] = []
        for symbol in symbols:
            if symbol.lower() == "x":
                frets.append(MUTED)
            elif symbol.isdigit():
                frets.append(int(symbol))
            else:
                raise ValueError(f"Invalid tab symbol {symbol!r} in {text!r}")
        return cls(frets, fretboard=fretboard)

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Voicing):
            return NotImplemented
        return self._frets == other._frets

    def __hash__(self) -> int:
        return hash(self._frets)

    def __repr__(self) -> str:
        return f"Voicing({list(self._frets)}, label={self._position_label!r})"

    def __str__(self) -> str:
        name = f"{self._chord.symbol} " if self._chord is not None else ""
        return f"{name}{self.tab}"
