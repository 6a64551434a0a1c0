"""Unit tests for the PlayabilityScorer components and difficulty bands."""

from types import SimpleNamespace

import pytest

from fretvoice.scoring import (
    DifficultyLevel,
    PlayabilityScorer,
    difficulty_for_score,
    score_voicing,
)
from fretvoice.voicing import Voicing


def _metrics(**overrides: object) -> SimpleNamespace:
    """Voicing stand-in with perfect metrics unless overridden."""
    values: dict[str, object] = {
        "fret_span": 0,
        "is_barre": False,
        "barred_strings": (),
        "fingers_required": 1,
        "base_fret": 0,
        "open_strings_count": 3,
        "max_string_gap": 0,
    }
    values.update(overrides)
    return SimpleNamespace(**values)


def test_perfect_metrics_score_100() -> None:
    result = PlayabilityScorer().score(_metrics())
    assert result.total_score == 100
    assert result.difficulty is DifficultyLevel.BEGINNER
    assert result.challenge_notes == ()


@pytest.mark.parametrize("span, expected", [(0, 25), (2, 25), (3, 17), (4, 10), (5, 0)])
def test_fret_stretch_steps(span: int, expected: int) -> None:
    assert PlayabilityScorer().fret_stretch_score(_metrics(fret_span=span), []) == expected


def test_fret_stretch_challenges() -> None:
    scorer = PlayabilityScorer()
    challenges: list[str] = []
    scorer.fret_stretch_score(_metrics(fret_span=4), challenges)
    scorer.fret_stretch_score(_metrics(fret_span=6), challenges)
    assert challenges == ["Requires 4-fret stretch", "Requires difficult 6-fret stretch"]


@pytest.mark.parametrize(
    "barred, expected",
    [((), 20), ((0, 1), 16), ((0, 1, 2), 10), ((0, 1, 2, 3), 10), ((0, 1, 2, 3, 4), 6)],
)
def test_barre_steps(barred: tuple[int, ...], expected: int) -> None:
    voicing = _metrics(is_barre=bool(barred), barred_strings=barred)
    assert PlayabilityScorer().barre_score(voicing, []) == expected


@pytest.mark.parametrize("fingers, expected", [(0, 0), (1, 20), (2, 18), (3, 14), (4, 8), (5, 0)])
def test_finger_count_steps(fingers: int, expected: int) -> None:
    assert PlayabilityScorer().finger_count_score(_metrics(fingers_required=fingers), []) == expected


@pytest.mark.parametrize(
    "base_fret, expected", [(0, 15), (1, 13), (3, 13), (4, 10), (5, 10), (7, 7), (8, 4), (10, 4), (11, 0)]
)
def test_position_steps(base_fret: int, expected: int) -> None:
    assert PlayabilityScorer().position_score(_metrics(base_fret=base_fret), []) == expected


def test_position_challenges() -> None:
    scorer = PlayabilityScorer()
    challenges: list[str] = []
    scorer.position_score(_metrics(base_fret=9), challenges)
    scorer.position_score(_metrics(base_fret=14), challenges)
    assert challenges == ["High position (fret 9)", "Very high position (fret 14)"]


@pytest.mark.parametrize("open_strings, expected", [(0, 0), (1, 5), (2, 8), (3, 10), (6, 10)])
def test_open_string_steps(open_strings: int, expected: int) -> None:
    assert PlayabilityScorer().open_string_score(_metrics(open_strings_count=open_strings)) == expected


@pytest.mark.parametrize("gap, expected", [(0, 10), (1, 8), (2, 5), (3, 0)])
def test_string_spacing_steps(gap: int, expected: int) -> None:
    assert PlayabilityScorer().string_spacing_score(_metrics(max_string_gap=gap), []) == expected


@pytest.mark.parametrize(
    "total, level",
    [
        (100, DifficultyLevel.BEGINNER),
        (70, DifficultyLevel.BEGINNER),
        (69, DifficultyLevel.INTERMEDIATE),
        (50, DifficultyLevel.INTERMEDIATE),
        (49, DifficultyLevel.ADVANCED),
        (30, DifficultyLevel.ADVANCED),
        (29, DifficultyLevel.EXPERT),
        (0, DifficultyLevel.EXPERT),
    ],
)
def test_difficulty_thresholds(total: int, level: DifficultyLevel) -> None:
    assert difficulty_for_score(total) is level


def test_open_c_scores_88() -> None:
    result = score_voicing(Voicing([-1, 3, 2, 0, 1, 0]))
    assert result.fret_stretch_score == 25
    assert result.barre_complexity_score == 20
    assert result.finger_count_score == 14
    assert result.position_score == 13
    assert result.open_string_score == 8
    assert result.string_spacing_score == 8
    assert result.total_score == 88
    assert result.difficulty_text == "Beginner"
    assert result.difficulty_color == "success"


def test_f_barre_scores_78() -> None:
    result = score_voicing(Voicing([1, 3, 3, 2, 1, 1]))
    assert result.total_score == 78
    assert result.difficulty is DifficultyLevel.BEGINNER


def test_full_barre_challenge() -> None:
    result = score_voicing(Voicing([3, 3, 3, 3, 3, 3]))
    assert result.total_score == 74
    assert result.challenge_notes == ("Full barre chord",)


def test_all_muted_scores_70() -> None:
    assert score_voicing(Voicing([-1] * 6)).total_score == 70


def test_high_full_barre_is_intermediate() -> None:
    result = score_voicing(Voicing([24] * 6))
    assert result.total_score == 61
    assert result.difficulty is DifficultyLevel.INTERMEDIATE
    assert result.difficulty_color == "warning"
    assert "Very high position (fret 24)" in result.challenge_notes


def test_hard_metrics_are_expert_with_every_challenge() -> None:
    hard = _metrics(
        fret_span=6,
        is_barre=True,
        barred_strings=(0, 1, 2, 3, 4),
        fingers_required=4,
        base_fret=12,
        open_strings_count=0,
        max_string_gap=3,
    )
    result = PlayabilityScorer().score(hard)
    assert result.total_score == 14
    assert result.difficulty is DifficultyLevel.EXPERT
    assert result.difficulty_color == "dark"
    assert result.challenge_notes == (
        "Requires difficult 6-fret stretch",
        "Full barre chord",
        "Uses all 4 fingers",
        "Very high position (fret 12)",
        "Large string skip required",
    )


def test_scoring_is_deterministic() -> None:
    voicing = Voicing([-1, 3, 5, 5, 5, 3])
    assert score_voicing(voicing) == score_voicing(voicing)
    assert score_voicing(voicing).total_score == 76


def test_difficulty_level_ordering_and_names() -> None:
    assert DifficultyLevel.BEGINNER < DifficultyLevel.EXPERT
    assert DifficultyLevel.from_name("advanced") is DifficultyLevel.ADVANCED
    with pytest.raises(ValueError):
        DifficultyLevel.from_name("impossible")
