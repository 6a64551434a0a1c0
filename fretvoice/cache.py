"""VoicingCache: thread-safe memoization of generator results."""

import logging
import threading
from collections import OrderedDict

from fretvoice.generator import VoicingGenerator
from fretvoice.options import SearchOptions
from fretvoice.theory import Chord
from fretvoice.voicing import Voicing

logger = logging.getLogger(__name__)

CacheKey = tuple[str, str]


class VoicingCache:
    """
    Least-recently-used cache in front of a ``VoicingGenerator``.

    Results are keyed by ``(chord symbol, options digest)``. The cache is the
    only shared mutable state in the package, so every access to it holds a
    lock; generation itself runs outside the lock.

        cache = VoicingCache()
        cache.get_voicings(Chord.parse("Am"))   # miss, generates
        cache.get_voicings(Chord.parse("Am"))   # hit
    """

    DEFAULT_MAX_ENTRIES = 256

    def __init__(
        self,
        generator: VoicingGenerator | None = None,
        max_entries: int = DEFAULT_MAX_ENTRIES,
    ) -> None:
        """
        Args:
            generator:   Generator to delegate misses to.
            max_entries: Entries kept before the least recently used is evicted.
        """
        if max_entries < 1:
            raise ValueError(f"max_entries must be >= 1, got {max_entries}")
        self.generator = generator if generator is not None else VoicingGenerator()
        self.max_entries = max_entries
        self._entries: OrderedDict[CacheKey, tuple[Voicing, ...]] = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    @staticmethod
    def key_for(chord: Chord, options: SearchOptions) -> CacheKey:
        return chord.symbol, options.digest()

    def get_voicings(self, chord: Chord, options: SearchOptions | None = None) -> list[Voicing]:
        """Cached equivalent of ``VoicingGenerator.generate_voicings``."""
        options = options if options is not None else SearchOptions()
        key = self.key_for(chord, options)

        with self._lock:
            cached = self._entries.get(key)
            if cached is not None:
                self._entries.move_to_end(key)
                self.hits += 1
                logger.debug(f"cache hit for {key}")
                return list(cached)
            self.misses += 1

        voicings = tuple(self.generator.generate_voicings(chord, options))

        with self._lock:
            self._entries[key] = voicings
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_entries:
                self._entries.popitem(last=False)
        return list(voicings)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
