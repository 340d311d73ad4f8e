"""
Two-tier cache of influence maps keyed by trailing character sequence.

Short snippets recur constantly while a word is being built, so inference
results are kept around:

- The primary tier is an insertion-ordered dict with no size limit. Entries
  only get there by being requested a second time while still in the
  secondary tier.
- The secondary tier is a FIFO queue of at most SECONDARY_CACHE_SIZE entries.
  Fresh results go in at the head and the oldest fall off the tail.

A sequence lives in at most one tier at a time.
"""

import logging
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Dict, List, Optional, Tuple

from char_models.character_map import CharacterMap
from char_models.occurrence_histogram import OccurrenceHistogram
from utils.constants import SECONDARY_CACHE_SIZE

logger = logging.getLogger(__name__)

InfluenceMap = CharacterMap[OccurrenceHistogram]
CacheListener = Callable[[str, str], None]

PRIMARY_HIT = "primary_hit"
SECONDARY_HIT = "secondary_hit"
MISS = "miss"
EVICT = "evict"


@dataclass
class CacheStatistics:
    """Running counters for cache activity."""
    primary_hits: int = 0
    secondary_hits: int = 0
    misses: int = 0
    evictions: int = 0

    @property
    def lookups(self) -> int:
        return self.primary_hits + self.secondary_hits + self.misses


class InfluenceCache:
    """Primary dict plus bounded FIFO secondary queue with promotion."""

    def __init__(self, capacity: int = SECONDARY_CACHE_SIZE, listener: Optional[CacheListener] = None):
        """Initialize empty tiers.

        Args:
            capacity: Maximum number of entries in the secondary tier
            listener: Optional callable(event, sequence) notified on every
                primary hit, secondary hit, miss and eviction

        Raises:
            ValueError: If capacity is less than 1
        """
        if capacity < 1:
            raise ValueError(f"Secondary cache capacity must be at least 1, got {capacity}")
        self.capacity = capacity
        self.listener = listener
        self.statistics = CacheStatistics()
        self._primary: Dict[str, InfluenceMap] = {}
        # Head (left) holds the newest entry
        self._secondary: Deque[Tuple[str, InfluenceMap]] = deque()

    def _notify(self, event: str, sequence: str) -> None:
        logger.debug(f"Influence cache {event}: '{sequence}'")
        if self.listener is not None:
            self.listener(event, sequence)

    def get(self, sequence: str) -> Optional[InfluenceMap]:
        """Look up a sequence, promoting secondary hits to the primary tier.

        Args:
            sequence: The literal trailing character sequence

        Returns:
            The cached influence map, or None on a miss
        """
        cached = self._primary.get(sequence)
        if cached is not None:
            self.statistics.primary_hits += 1
            self._notify(PRIMARY_HIT, sequence)
            return cached

        for entry in self._secondary:
            if entry[0] == sequence:
                self._secondary.remove(entry)
                self._primary[sequence] = entry[1]
                self.statistics.secondary_hits += 1
                self._notify(SECONDARY_HIT, sequence)
                return entry[1]

        self.statistics.misses += 1
        self._notify(MISS, sequence)
        return None

    def put(self, sequence: str, influence_map: InfluenceMap) -> None:
        """Push a fresh result onto the head of the secondary tier.

        Any existing entry for the sequence is dropped first. The oldest
        secondary entry is evicted once the tier exceeds its capacity.
        """
        self.discard(sequence)
        self._secondary.appendleft((sequence, influence_map))
        if len(self._secondary) > self.capacity:
            evicted, _ = self._secondary.pop()
            self.statistics.evictions += 1
            self._notify(EVICT, evicted)

    def get_or_compute(self, sequence: str, compute: Callable[[str], InfluenceMap]) -> InfluenceMap:
        cached = self.get(sequence)
        if cached is not None:
            return cached
        generated = compute(sequence)
        self.put(sequence, generated)
        return generated

    def discard(self, sequence: str) -> None:
        """Remove a sequence from whichever tier holds it."""
        self._primary.pop(sequence, None)
        for entry in self._secondary:
            if entry[0] == sequence:
                self._secondary.remove(entry)
                break

    def primary_keys(self) -> List[str]:
        return list(self._primary)

    def secondary_keys(self) -> List[str]:
        """Secondary sequences, newest first."""
        return [sequence for sequence, _ in self._secondary]

    def clear(self) -> None:
        self._primary.clear()
        self._secondary.clear()

    def __contains__(self, sequence: str) -> bool:
        return sequence in self._primary or any(entry[0] == sequence for entry in self._secondary)

    def __len__(self) -> int:
        return len(self._primary) + len(self._secondary)
