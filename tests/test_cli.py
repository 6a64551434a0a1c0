"""Tests for the click command line interface."""

from click.testing import CliRunner

from fretvoice import __version__
from fretvoice.cli import main


def test_voicings_lists_open_c() -> None:
    result = CliRunner().invoke(main, ["voicings", "C"])
    assert result.exit_code == 0
    assert f"fretvoice v{__version__}" in result.output
    assert "032010" in result.output
    assert "Beginner" in result.output


def test_voicings_respects_max_results() -> None:
    result = CliRunner().invoke(main, ["voicings", "G", "-n", "1"])
    assert result.exit_code == 0
    assert " 1. " in result.output
    assert " 2. " not in result.output


def test_voicings_with_preset_and_tuning() -> None:
    result = CliRunner().invoke(main, ["voicings", "D", "--preset", "beginner", "--tuning", "drop_d"])
    assert result.exit_code == 0
    assert "000232" in result.output


def test_voicings_rejects_bad_symbol() -> None:
    result = CliRunner().invoke(main, ["voicings", "H"])
    assert result.exit_code == 1
    assert "ERROR" in result.output


def test_voicings_rejects_inverted_range() -> None:
    result = CliRunner().invoke(main, ["voicings", "C", "--fret-range", "9", "5"])
    assert result.exit_code == 1


def test_voicings_empty_result_is_not_an_error() -> None:
    result = CliRunner().invoke(main, ["voicings", "C", "--max-span", "0", "--fret-range", "20", "24"])
    assert result.exit_code == 0


def test_score_breakdown() -> None:
    result = CliRunner().invoke(main, ["score", "x32010"])
    assert result.exit_code == 0
    assert "88 / 100" in result.output
    assert "Beginner" in result.output


def test_score_lists_challenges() -> None:
    result = CliRunner().invoke(main, ["score", "3-3-3-3-3-3"])
    assert result.exit_code == 0
    assert "Full barre chord" in result.output


def test_score_rejects_bad_tab() -> None:
    result = CliRunner().invoke(main, ["score", "x320"])
    assert result.exit_code == 1
    assert "ERROR" in result.output


def test_shapes_filtered_by_root() -> None:
    result = CliRunner().invoke(main, ["shapes", "--root", "A"])
    assert result.exit_code == 0
    lines = [line.split() for line in result.output.splitlines() if line.strip()]
    assert lines == [["A", "x02220"], ["Am", "x02210"]]


def test_shapes_lists_everything_by_default() -> None:
    result = CliRunner().invoke(main, ["shapes"])
    assert result.exit_code == 0
    assert len(result.output.strip().splitlines()) == 9


def test_version_option() -> None:
    result = CliRunner().invoke(main, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output
