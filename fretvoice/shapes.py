"""ChordShapeLibrary: an immutable table of hand-curated common chord shapes."""

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from fretvoice.theory import Chord, ChordQuality, Note


@dataclass(frozen=True)
class ChordShape:
    """
    A known fingering for a chord, as printed on a chord chart.

    Attributes:
        chord:   The chord the shape spells.
        frets:   Fret per string, lowest string first, -1 muted.
        fingers: Finger per string: -1 unused, 0 open, 1-4 index to pinky.
    """

    chord: Chord
    frets: tuple[int, ...]
    fingers: tuple[int, ...]

    @property
    def symbol(self) -> str:
        return self.chord.symbol


def _shape(symbol: str, frets: tuple[int, ...], fingers: tuple[int, ...]) -> ChordShape:
    return ChordShape(Chord.parse(symbol), frets, fingers)


COMMON_SHAPES: tuple[ChordShape, ...] = (
    _shape("C", (-1, 3, 2, 0, 1, 0), (-1, 3, 2, 0, 1, 0)),
    _shape("G", (3, 2, 0, 0, 3, 3), (2, 1, 0, 0, 3, 4)),
    _shape("D", (-1, -1, 0, 2, 3, 2), (-1, -1, 0, 1, 3, 2)),
    _shape("A", (-1, 0, 2, 2, 2, 0), (-1, 0, 1, 2, 3, 0)),
    _shape("E", (0, 2, 2, 1, 0, 0), (0, 2, 3, 1, 0, 0)),
    _shape("F", (1, 3, 3, 2, 1, 1), (1, 3, 4, 2, 1, 1)),
    _shape("Am", (-1, 0, 2, 2, 1, 0), (-1, 0, 2, 3, 1, 0)),
    _shape("Em", (0, 2, 2, 0, 0, 0), (0, 2, 3, 0, 0, 0)),
    _shape("Dm", (-1, -1, 0, 2, 3, 1), (-1, -1, 0, 2, 3, 1)),
)


class ChordShapeLibrary(Mapping[str, ChordShape]):
    """
    Read-only lookup of chord shapes by symbol.

    Built explicitly by the caller and passed to whoever needs it; nothing
    is registered globally and the table cannot change after construction.

        library = ChordShapeLibrary.common()
        library["Am"].frets          # (-1, 0, 2, 2, 1, 0)
    """

    def __init__(self, shapes: Iterable[ChordShape]) -> None:
        table: dict[str, ChordShape] = {}
        for shape in shapes:
            if shape.symbol in table:
                raise ValueError(f"Duplicate shape for {shape.symbol}")
            table[shape.symbol] = shape
        self._shapes = MappingProxyType(table)

    @classmethod
    def common(cls) -> "ChordShapeLibrary":
        """Open-position shapes for C, G, D, A, E, F, Am, Em and Dm."""
        return cls(COMMON_SHAPES)

    def __getitem__(self, symbol: str) -> ChordShape:
        return self._shapes[symbol]

    def __iter__(self) -> Iterator[str]:
        return iter(self._shapes)

    def __len__(self) -> int:
        return len(self._shapes)

    def for_root(self, root: Note) -> list[ChordShape]:
        pitch_class = root.semitone_class()
        return [s for s in self._shapes.values() if s.chord.root.semitone_class() == pitch_class]

    def of_quality(self, quality: ChordQuality) -> list[ChordShape]:
        return [s for s in self._shapes.values() if s.chord.quality is quality]
