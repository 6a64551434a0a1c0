import hashlib
from dataclasses import astuple, dataclass

from fretvoice.scoring import DifficultyLevel
from fretvoice.theory import Note, Tuning


@dataclass(frozen=True)
class SearchOptions:
    """Holds every tunable of a single voicing search."""
    # Neck region
    max_fret: int = 15
    fret_range: tuple[int, int] | None = None  # overrides max_fret when set

    # Shape constraints
    min_strings: int = 4
    max_muted_strings: int = 2
    max_fret_span: int = 4
    allow_barre: bool = True
    require_root_in_bass: bool = True
    include_inversions: bool = False  # lifts require_root_in_bass
    prefer_open_strings: bool = True

    # Ranking
    max_difficulty: DifficultyLevel = DifficultyLevel.ADVANCED
    min_playability_score: int = 20
    max_results: int = 10

    # Instrument; None means standard tuning
    tuning: Tuning | tuple[Note, ...] | None = None

    def __post_init__(self) -> None:
        if self.max_fret < 0:
            raise ValueError(f"max_fret must be >= 0, got {self.max_fret}")
        if self.fret_range is not None:
            low, high = self.fret_range
            if low < 0 or high < low:
                raise ValueError(f"Invalid fret_range {self.fret_range}")
            object.__setattr__(self, "fret_range", (int(low), int(high)))
        if self.max_fret_span < 0:
            raise ValueError(f"max_fret_span must be >= 0, got {self.max_fret_span}")
        if self.max_muted_strings < 0:
            raise ValueError(f"max_muted_strings must be >= 0, got {self.max_muted_strings}")
        if self.min_strings < 0:
            raise ValueError(f"min_strings must be >= 0, got {self.min_strings}")
        if not 0 <= self.min_playability_score <= 100:
            raise ValueError(
                f"min_playability_score must be in [0, 100], got {self.min_playability_score}"
            )
        if self.max_results < 1:
            raise ValueError(f"max_results must be >= 1, got {self.max_results}")
        if not isinstance(self.max_difficulty, DifficultyLevel):
            object.__setattr__(self, "max_difficulty", DifficultyLevel(self.max_difficulty))
        if self.tuning is not None and not isinstance(self.tuning, Tuning):
            object.__setattr__(self, "tuning", tuple(self.tuning))

    @property
    def effective_max_fret(self) -> int:
        return self.fret_range[1] if self.fret_range is not None else self.max_fret

    @property
    def effective_min_fret(self) -> int:
        return self.fret_range[0] if self.fret_range is not None else 0

    @property
    def root_required_in_bass(self) -> bool:
        return self.require_root_in_bass and not self.include_inversions

    def digest(self) -> str:
        """Stable short key identifying these options, for result caching."""
        return hashlib.sha1(repr(astuple(self)).encode("utf-8")).hexdigest()[:16]

    # ── Presets ───────────────────────────────────────────────

    @classmethod
    def for_beginners(cls) -> "SearchOptions":
        """Open-position shapes only, low on the neck."""
        return cls(
            max_fret=5,
            allow_barre=False,
            max_difficulty=DifficultyLevel.BEGINNER,
            require_root_in_bass=True,
            max_fret_span=3,
            prefer_open_strings=True,
            min_playability_score=60,
        )

    @classmethod
    def for_intermediate(cls) -> "SearchOptions":
        return cls(
            max_fret=12,
            allow_barre=True,
            max_difficulty=DifficultyLevel.INTERMEDIATE,
            require_root_in_bass=True,
            max_fret_span=4,
            prefer_open_strings=False,
            min_playability_score=40,
        )

    @classmethod
    def for_advanced(cls) -> "SearchOptions":
        """Everything the search can find, inversions included."""
        return cls(
            max_fret=15,
            allow_barre=True,
            max_difficulty=DifficultyLevel.EXPERT,
            require_root_in_bass=False,
            max_fret_span=5,
            prefer_open_strings=False,
            min_playability_score=0,
            include_inversions=True,
            max_results=20,
        )

    @classmethod
    def preset(cls, name: str) -> "SearchOptions":
        presets = {
            "beginner": cls.for_beginners,
            "intermediate": cls.for_intermediate,
            "advanced": cls.for_advanced,
        }
        try:
            return presets[name.strip().lower()]()
        except KeyError:
            raise ValueError(f"Unknown preset {name!r}") from None
