"""Unit tests for Voicing shape metrics, barre detection and fingering."""

import pytest

from fretvoice.fretboard import Fretboard
from fretvoice.theory import Chord, Note
from fretvoice.voicing import Voicing


def test_open_c_metrics() -> None:
    voicing = Voicing([-1, 3, 2, 0, 1, 0])
    assert voicing.lowest_fret == 1
    assert voicing.highest_fret == 3
    assert voicing.fret_span == 2
    assert voicing.base_fret == 1
    assert voicing.open_strings_count == 2
    assert voicing.muted_strings_count == 1
    assert voicing.strings_played == 5
    assert voicing.max_string_gap == 1
    assert voicing.position_label == "Open"
    assert not voicing.is_barre


def test_open_c_fingering() -> None:
    voicing = Voicing([-1, 3, 2, 0, 1, 0])
    assert voicing.fingers == (-1, 3, 2, 0, 1, 0)
    assert voicing.fingers_required == 3


def test_notes_and_pitch_classes() -> None:
    voicing = Voicing([-1, 3, 2, 0, 1, 0])
    assert voicing.notes[0] is None
    assert voicing.notes[1] == Note("C", "", 3)
    assert voicing.bass_note == Note("C", "", 3)
    assert voicing.pitch_classes() == {0, 4, 7}


def test_f_barre_is_the_contiguous_group() -> None:
    # Fret-1 strings 0, 4, 5 are too spread out; the fret-3 pair qualifies
    voicing = Voicing([1, 3, 3, 2, 1, 1])
    assert voicing.is_barre
    assert voicing.barre_fret == 3
    assert voicing.barred_strings == (1, 2)
    assert voicing.position_label == "Barre 3"


def test_fingering_stops_when_fingers_run_out() -> None:
    voicing = Voicing([1, 3, 3, 2, 1, 1])
    assert voicing.fingers == (2, 1, 1, -1, 3, 4)
    assert voicing.fingers_required == 3


def test_full_barre_needs_one_finger() -> None:
    voicing = Voicing([3, 3, 3, 3, 3, 3])
    assert voicing.barred_strings == (0, 1, 2, 3, 4, 5)
    assert voicing.fingers == (1, 1, 1, 1, 1, 1)
    assert voicing.fingers_required == 1


def test_barre_tolerates_one_skipped_string() -> None:
    assert Voicing([3, -1, 3, -1, -1, -1]).is_barre
    assert not Voicing([3, -1, -1, 3, -1, -1]).is_barre


def test_no_barre_assigns_four_fingers_at_most() -> None:
    voicing = Voicing([1, 2, 3, 4, 5, 6])
    assert not voicing.is_barre
    assert voicing.fingers == (1, 2, 3, 4, -1, -1)
    assert voicing.fingers_required == 4
    assert voicing.position_label == "Position 1"


def test_all_muted() -> None:
    voicing = Voicing([-1] * 6)
    assert voicing.fret_span == 0
    assert voicing.base_fret == 0
    assert voicing.fingers_required == 0
    assert voicing.strings_played == 0
    assert voicing.bass_note is None
    assert voicing.position_label == "Open"


def test_open_strings_only() -> None:
    voicing = Voicing([0, 0, 0, 0, 0, 0])
    assert voicing.fret_span == 0
    assert voicing.fingers == (0, 0, 0, 0, 0, 0)
    assert voicing.position_label == "Open"


def test_string_gap_counts_skipped_strings() -> None:
    assert Voicing([3, -1, -1, 5, -1, -1]).max_string_gap == 2


def test_wrong_length_rejected() -> None:
    with pytest.raises(ValueError):
        Voicing([0, 2, 2])


def test_fret_below_muted_rejected() -> None:
    with pytest.raises(ValueError):
        Voicing([-2, 0, 0, 0, 0, 0])


def test_fret_beyond_neck_rejected() -> None:
    with pytest.raises(ValueError):
        Voicing([0, 0, 0, 0, 0, 13], fretboard=Fretboard(max_fret=12))


def test_equality_uses_frets_only() -> None:
    a = Voicing([-1, 3, 2, 0, 1, 0])
    b = Voicing([-1, 3, 2, 0, 1, 0], chord=Chord.parse("C"))
    assert a == b
    assert len({a, b}) == 1
    assert a != Voicing([-1, 3, 2, 0, 1, 3])


def test_tab_compact_and_dashed() -> None:
    assert Voicing([-1, 3, 2, 0, 1, 0]).tab == "x32010"
    assert Voicing([-1, 10, 12, 12, 12, 10]).tab == "x-10-12-12-12-10"


@pytest.mark.parametrize("text", ["x32010", "X-3-2-0-1-0", "x 3 2 0 1 0", "x,3,2,0,1,0"])
def test_from_tab_formats(text: str) -> None:
    assert Voicing.from_tab(text).fret_per_string == (-1, 3, 2, 0, 1, 0)


def test_from_tab_high_frets() -> None:
    voicing = Voicing.from_tab("x-10-12-12-12-10")
    assert voicing.fret_per_string == (-1, 10, 12, 12, 12, 10)


def test_from_tab_rejects_bad_symbol() -> None:
    with pytest.raises(ValueError):
        Voicing.from_tab("x3201o")


def test_str_includes_chord_symbol() -> None:
    voicing = Voicing([-1, 0, 2, 2, 1, 0], chord=Chord.parse("Am"))
    assert str(voicing) == "Am x02210"
