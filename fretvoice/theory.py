"""Theory adapter: the small slice of pitch and chord data the voicing engine consumes."""

import re
from dataclasses import dataclass
from enum import Enum

# ── Pitch constants ─────────────────────────────────────────────────────────
SEMITONES_PER_OCTAVE = 12

# Chromatic pitch class names (index 0 = C)
NOTE_NAMES: list[str] = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]

_NATURAL_SEMITONES: dict[str, int] = {
    "C": 0, "D": 2, "E": 4, "F": 5, "G": 7, "A": 9, "B": 11,
}

_ACCIDENTAL_OFFSETS: dict[str, int] = {
    "": 0, "#": 1, "##": 2, "b": -1, "bb": -2,
}

_NOTE_PATTERN = re.compile(r"^([A-Ga-g])(##|#|bb|b)?(-?\d+)?$")


@dataclass(frozen=True)
class Note:
    """
    A spelled pitch: letter name, accidental and (optionally meaningful) octave.

    Attributes:
        name:       Letter name "C".."B".
        accidental: "", "#", "##", "b" or "bb".
        octave:     Scientific octave number (E2 is the low string of a guitar).
    """

    name: str
    accidental: str = ""
    octave: int = 4

    def __post_init__(self) -> None:
        if self.name not in _NATURAL_SEMITONES:
            raise ValueError(f"Invalid note name: {self.name!r}")
        if self.accidental not in _ACCIDENTAL_OFFSETS:
            raise ValueError(f"Invalid accidental: {self.accidental!r}")

    def semitone_class(self) -> int:
        """Pitch class 0-11 (0 = C), enharmonic spellings collapse to one value."""
        offset = _NATURAL_SEMITONES[self.name] + _ACCIDENTAL_OFFSETS[self.accidental]
        return offset % SEMITONES_PER_OCTAVE

    @property
    def midi(self) -> int:
        """Absolute MIDI number: C4 = 60. B#3 and C4 share a number."""
        offset = _NATURAL_SEMITONES[self.name] + _ACCIDENTAL_OFFSETS[self.accidental]
        return (self.octave + 1) * SEMITONES_PER_OCTAVE + offset

    def transpose(self, semitones: int) -> "Note":
        """Return the sharp-spelled note *semitones* above (or below) this one."""
        return Note.from_midi(self.midi + semitones)

    @classmethod
    def from_midi(cls, midi: int) -> "Note":
        """Build a note from a MIDI number, spelling black keys with sharps."""
        octave, pitch_class = divmod(midi, SEMITONES_PER_OCTAVE)
        spelled = NOTE_NAMES[pitch_class]
        return cls(spelled[0], spelled[1:], octave - 1)

    @classmethod
    def parse(cls, text: str, default_octave: int = 4) -> "Note":
        """
        Parse a note name such as "E2", "Bb", "f#3".

        Raises:
            ValueError: If *text* is not a recognisable note name.
        """
        match = _NOTE_PATTERN.match(text.strip())
        if not match:
            raise ValueError(f"Invalid note name format: {text!r}")
        letter, accidental, octave = match.groups()
        return cls(
            letter.upper(),
            accidental or "",
            int(octave) if octave is not None else default_octave,
        )

    def __str__(self) -> str:
        return f"{self.name}{self.accidental}{self.octave}"


# ── Chords ──────────────────────────────────────────────────────────────────

class ChordQuality(Enum):
    """Chord types the engine knows how to spell, with their root intervals."""

    MAJOR = ("", (0, 4, 7))
    MINOR = ("m", (0, 3, 7))
    DIMINISHED = ("dim", (0, 3, 6))
    AUGMENTED = ("aug", (0, 4, 8))
    SUS2 = ("sus2", (0, 2, 7))
    SUS4 = ("sus4", (0, 5, 7))
    DOMINANT7 = ("7", (0, 4, 7, 10))
    MINOR7 = ("m7", (0, 3, 7, 10))
    MAJOR7 = ("maj7", (0, 4, 7, 11))
    HALF_DIMINISHED7 = ("m7b5", (0, 3, 6, 10))
    DIMINISHED7 = ("dim7", (0, 3, 6, 9))
    ADD9 = ("add9", (0, 4, 7, 14))
    DOMINANT9 = ("9", (0, 4, 7, 10, 14))

    @property
    def suffix(self) -> str:
        return self.value[0]

    @property
    def intervals(self) -> tuple[int, ...]:
        return self.value[1]

    @classmethod
    def from_suffix(cls, suffix: str) -> "ChordQuality":
        """
        Look up a quality by its symbol suffix ("" major, "m", "7", "maj7", ...).

        Raises:
            ValueError: If the suffix is not one of the known qualities.
        """
        normalized = _SUFFIX_ALIASES.get(suffix, suffix)
        for quality in cls:
            if quality.suffix == normalized:
                return quality
        raise ValueError(f"Unknown chord quality suffix: {suffix!r}")


_SUFFIX_ALIASES: dict[str, str] = {
    "maj": "",
    "M": "",
    "min": "m",
    "-": "m",
    "M7": "maj7",
    "min7": "m7",
    "-7": "m7",
    "ø": "m7b5",
    "°": "dim",
    "°7": "dim7",
    "+": "aug",
}

_CHORD_PATTERN = re.compile(r"^([A-Ga-g])(##|#|bb|b)?(.*)$")


@dataclass(frozen=True)
class Chord:
    """
    An abstract chord: a root note and a quality.

    The voicing engine only needs ``root``, ``quality`` and ``chord_tones()``.
    """

    root: Note
    quality: ChordQuality = ChordQuality.MAJOR

    def chord_tones(self) -> list[Note]:
        """Chord tones in interval order, starting from the root."""
        return [self.root.transpose(interval) for interval in self.quality.intervals]

    def pitch_classes(self) -> set[int]:
        return {note.semitone_class() for note in self.chord_tones()}

    @property
    def symbol(self) -> str:
        """Chord symbol, e.g. 'C', 'F#m7', 'Bbmaj7'."""
        return f"{self.root.name}{self.root.accidental}{self.quality.suffix}"

    @classmethod
    def parse(cls, symbol: str, octave: int = 3) -> "Chord":
        """
        Parse a chord symbol such as "Am", "F#7", "Bbmaj7" or "Dsus4".

        Raises:
            ValueError: If the root or the quality suffix is not recognised.
        """
        match = _CHORD_PATTERN.match(symbol.strip())
        if not match:
            raise ValueError(f"Invalid chord symbol: {symbol!r}")
        letter, accidental, suffix = match.groups()
        root = Note(letter.upper(), accidental or "", octave)
        return cls(root, ChordQuality.from_suffix(suffix))

    def __str__(self) -> str:
        return self.symbol


# ── Tunings ─────────────────────────────────────────────────────────────────

class Tuning(Enum):
    # Values are tuples of note names from the lowest string to the highest
    STANDARD = ("E2", "A2", "D3", "G3", "B3", "E4")
    E_FLAT = ("Eb2", "Ab2", "Db3", "Gb3", "Bb3", "Eb4")
    DROP_D = ("D2", "A2", "D3", "G3", "B3", "E4")
    D_STANDARD = ("D2", "G2", "C3", "F3", "A3", "D4")
    DROP_C = ("C2", "G2", "C3", "F3", "A3", "D4")
    OPEN_G = ("D2", "G2", "D3", "G3", "B3", "D4")
    OPEN_D = ("D2", "A2", "D3", "F#3", "A3", "D4")
    OPEN_E = ("E2", "B2", "E3", "G#3", "B3", "E4")
    DADGAD = ("D2", "A2", "D3", "G3", "A3", "D4")

    def open_string_pitches(self) -> tuple[Note, ...]:
        return tuple(Note.parse(name) for name in self.value)

    @classmethod
    def from_name(cls, name: str) -> "Tuning":
        """
        Resolve a tuning by name, case-insensitively ("drop_d", "DADGAD").

        Raises:
            ValueError: If no tuning has that name.
        """
        try:
            return cls[name.strip().upper().replace("-", "_")]
        except KeyError:
            raise ValueError(f"Unknown tuning {name!r}") from None
