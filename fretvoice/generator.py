"""VoicingGenerator: runs every strategy, then dedupes, scores, filters and ranks the candidates."""

import logging
from collections.abc import Sequence

from fretvoice.fretboard import Fretboard, default_fretboard
from fretvoice.options import SearchOptions
from fretvoice.scoring import PlayabilityScore, PlayabilityScorer
from fretvoice.theory import Chord
from fretvoice.voicing import Voicing
from fretvoice.voicing_strategy import (
    DEFAULT_STRATEGIES,
    ChordTarget,
    RawVoicing,
    VoicingStrategy,
    chord_tone_positions,
)

logger = logging.getLogger(__name__)

# Result limit used by generate_voicings_in_range
RANGE_SEARCH_RESULTS = 20


class VoicingGenerator:
    """
    Generates and ranks guitar voicings for a chord.

    Pipeline
    --------
    1. **Candidates** – each applicable strategy (open position, barre shapes,
       fret windows) proposes raw fret tuples, merged in that order.
    2. **Dedup** – identical fret tuples are kept once, first proposal wins.
    3. **Score** – every survivor is scored by the ``PlayabilityScorer``.
    4. **Filter** – drop voicings below ``min_playability_score``, above
       ``max_difficulty`` or sounding fewer than ``min_strings`` strings.
    5. **Rank** – stable sort by descending total score, truncated to
       ``max_results``; equal scores keep proposal order.

    Generation never mutates the generator, so one instance can serve many
    threads. An empty result is a normal outcome, not an error.
    """

    def __init__(
        self,
        fretboard: Fretboard | None = None,
        scorer: PlayabilityScorer | None = None,
        strategies: Sequence[VoicingStrategy] = DEFAULT_STRATEGIES,
    ) -> None:
        self.fretboard = fretboard if fretboard is not None else default_fretboard()
        self.scorer = scorer if scorer is not None else PlayabilityScorer()
        self.strategies = tuple(strategies)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _fretboard_for(self, options: SearchOptions) -> Fretboard:
        """The shared fretboard, unless the options ask for another tuning or a longer neck."""
        if options.tuning is None and options.effective_max_fret <= self.fretboard.max_fret:
            return self.fretboard
        tuning = options.tuning if options.tuning is not None else self.fretboard.tuning
        return Fretboard(tuning, max(self.fretboard.max_fret, options.effective_max_fret))

    def _collect_candidates(
        self, target: ChordTarget, fretboard: Fretboard, options: SearchOptions
    ) -> list[RawVoicing]:
        positions = chord_tone_positions(
            fretboard, target, options.effective_min_fret, options.effective_max_fret
        )

        candidates: list[RawVoicing] = []
        seen: set[RawVoicing] = set()
        for strategy in self.strategies:
            if not strategy.applies(options):
                continue
            proposals = strategy.propose(target, fretboard, positions, options)
            logger.debug(f"{strategy.name}: {len(proposals)} candidate(s)")
            for frets in proposals:
                if frets not in seen:
                    seen.add(frets)
                    candidates.append(frets)
        return candidates

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def generate_scored(
        self, chord: Chord, options: SearchOptions | None = None
    ) -> list[tuple[Voicing, PlayabilityScore]]:
        """
        Ranked voicings paired with their scores.

        Args:
            chord:   Chord to voice.
            options: Search constraints; defaults to ``SearchOptions()``.

        Returns:
            At most ``options.max_results`` (voicing, score) pairs, best first.
        """
        options = options if options is not None else SearchOptions()
        fretboard = self._fretboard_for(options)
        target = ChordTarget.from_chord(chord)

        candidates = self._collect_candidates(target, fretboard, options)

        scored: list[tuple[Voicing, PlayabilityScore]] = []
        for frets in candidates:
            voicing = Voicing(frets, fretboard=fretboard, chord=chord)
            score = self.scorer.score(voicing)
            if score.total_score < options.min_playability_score:
                continue
            if score.difficulty > options.max_difficulty:
                continue
            if voicing.strings_played < options.min_strings:
                continue
            scored.append((voicing, score))

        scored.sort(key=lambda pair: pair[1].total_score, reverse=True)
        results = scored[: options.max_results]
        logger.debug(
            f"{chord.symbol}: {len(candidates)} candidate(s), {len(scored)} passed filters, "
            f"returning {len(results)}"
        )
        return results

    def generate_voicings(self, chord: Chord, options: SearchOptions | None = None) -> list[Voicing]:
        """Ranked voicings for *chord*, best first; empty when nothing fits."""
        return [voicing for voicing, _ in self.generate_scored(chord, options)]

    def generate_best_voicing(
        self, chord: Chord, options: SearchOptions | None = None
    ) -> Voicing | None:
        voicings = self.generate_voicings(chord, options)
        return voicings[0] if voicings else None

    def generate_voicings_in_range(self, chord: Chord, min_fret: int, max_fret: int) -> list[Voicing]:
        """Voicings using only frets ``min_fret..max_fret`` (open strings aside)."""
        options = SearchOptions(fret_range=(min_fret, max_fret), max_results=RANGE_SEARCH_RESULTS)
        return self.generate_voicings(chord, options)

    def score_voicing(self, voicing: Voicing) -> PlayabilityScore:
        return self.scorer.score(voicing)


def generate_voicings(chord: Chord, options: SearchOptions | None = None) -> list[Voicing]:
    return VoicingGenerator().generate_voicings(chord, options)


def generate_best_voicing(chord: Chord, options: SearchOptions | None = None) -> Voicing | None:
    return VoicingGenerator().generate_best_voicing(chord, options)


def generate_voicings_in_range(chord: Chord, min_fret: int, max_fret: int) -> list[Voicing]:
    return VoicingGenerator().generate_voicings_in_range(chord, min_fret, max_fret)
