"""fretvoice — guitar chord voicing generation and playability scoring."""

__version__ = "0.1.0"

from fretvoice.cache import VoicingCache
from fretvoice.fretboard import Fretboard, FretboardPosition
from fretvoice.generator import (
    VoicingGenerator,
    generate_best_voicing,
    generate_voicings,
    generate_voicings_in_range,
)
from fretvoice.options import SearchOptions
from fretvoice.scoring import DifficultyLevel, PlayabilityScore, PlayabilityScorer, score_voicing
from fretvoice.shapes import ChordShape, ChordShapeLibrary
from fretvoice.theory import Chord, ChordQuality, Note, Tuning
from fretvoice.voicing import Voicing

__all__ = [
    "Chord", "ChordQuality", "ChordShape", "ChordShapeLibrary", "DifficultyLevel",
    "Fretboard", "FretboardPosition", "Note", "PlayabilityScore", "PlayabilityScorer",
    "SearchOptions", "Tuning", "Voicing", "VoicingCache", "VoicingGenerator",
    "generate_best_voicing", "generate_voicings", "generate_voicings_in_range", "score_voicing",
]
