"""Tests for VoicingCache bookkeeping and thread safety."""

import threading

import pytest

from fretvoice.cache import VoicingCache
from fretvoice.generator import VoicingGenerator
from fretvoice.options import SearchOptions
from fretvoice.theory import Chord


def test_second_lookup_is_a_hit() -> None:
    cache = VoicingCache()
    chord = Chord.parse("Am")
    first = cache.get_voicings(chord)
    second = cache.get_voicings(chord)
    assert first == second
    assert cache.misses == 1
    assert cache.hits == 1
    assert len(cache) == 1


def test_cached_result_matches_generator() -> None:
    chord = Chord.parse("E")
    assert VoicingCache().get_voicings(chord) == VoicingGenerator().generate_voicings(chord)


def test_returned_list_is_a_copy() -> None:
    cache = VoicingCache()
    chord = Chord.parse("C")
    cache.get_voicings(chord).clear()
    assert cache.get_voicings(chord)


def test_options_are_part_of_the_key() -> None:
    cache = VoicingCache()
    chord = Chord.parse("C")
    cache.get_voicings(chord)
    cache.get_voicings(chord, SearchOptions.for_beginners())
    assert cache.misses == 2
    assert len(cache) == 2
    assert VoicingCache.key_for(chord, SearchOptions()) != VoicingCache.key_for(
        chord, SearchOptions.for_beginners()
    )


def test_equal_options_share_an_entry() -> None:
    cache = VoicingCache()
    chord = Chord.parse("D")
    cache.get_voicings(chord, SearchOptions(max_results=3))
    cache.get_voicings(chord, SearchOptions(max_results=3))
    assert cache.hits == 1


def test_least_recently_used_entry_is_evicted() -> None:
    cache = VoicingCache(max_entries=2)
    c, g, d = Chord.parse("C"), Chord.parse("G"), Chord.parse("D")
    cache.get_voicings(c)
    cache.get_voicings(g)
    cache.get_voicings(c)  # C is now most recent
    cache.get_voicings(d)  # evicts G
    assert len(cache) == 2
    cache.get_voicings(c)
    assert cache.hits == 2
    cache.get_voicings(g)
    assert cache.misses == 4


def test_clear_resets_entries_and_counters() -> None:
    cache = VoicingCache()
    cache.get_voicings(Chord.parse("C"))
    cache.get_voicings(Chord.parse("C"))
    cache.clear()
    assert len(cache) == 0
    assert cache.hits == 0
    assert cache.misses == 0


def test_invalid_capacity_rejected() -> None:
    with pytest.raises(ValueError):
        VoicingCache(max_entries=0)


def test_concurrent_lookups() -> None:
    cache = VoicingCache()
    chords = [Chord.parse(symbol) for symbol in ("C", "G", "Am", "F", "Em")]
    results: list[list[str]] = []
    lock = threading.Lock()

    def worker() -> None:
        tabs = [[v.tab for v in cache.get_voicings(chord)] for chord in chords]
        with lock:
            results.append([" ".join(t) for t in tabs])

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(results) == 8
    assert all(r == results[0] for r in results)
    assert cache.hits + cache.misses == 8 * len(chords)
    assert len(cache) == len(chords)
