import logging
import re
from typing import Iterable, List, Optional

from nltk.tokenize import RegexpTokenizer

from char_models.character_map import CharacterMap, count_map, decimal_map, histogram_map
from char_models.character_stats import CharacterStats
from char_models.influence_cache import CacheListener, InfluenceCache, InfluenceMap
from char_models.occurrence_histogram import OccurrenceHistogram
from utils.constants import DEFAULT_CASE_SENSITIVE, DEFAULT_DECAY, SECONDARY_CACHE_SIZE, WHITESPACE_PATTERN
from utils.pruning import trim_low_value_entries

logger = logging.getLogger(__name__)


def _merge_stats(old: CharacterStats, new: CharacterStats) -> CharacterStats:
    return old.add_all(new)


class CorpusModel:
    """Per-character statistics over a corpus of words.

    The model ingests words, keeps a CharacterStats entry for every character
    it has seen, and answers "which character is likely to come next after
    this sequence?" by superposing the correlations of the trailing
    characters into an influence map.
    """

    def __init__(self, case_sensitive: bool = DEFAULT_CASE_SENSITIVE,
                 cache_size: int = SECONDARY_CACHE_SIZE,
                 cache_listener: Optional[CacheListener] = None):
        """Initialize an empty model.

        Args:
            case_sensitive: False to fold every word and lookup to lowercase
            cache_size: Capacity of the secondary influence cache tier
            cache_listener: Optional callable(event, sequence) for cache activity
        """
        self._stats: CharacterMap[CharacterStats] = CharacterMap(_merge_stats, case_sensitive)
        self.word_lengths = OccurrenceHistogram()
        self.cache = InfluenceCache(cache_size, cache_listener)

    @property
    def case_sensitive(self) -> bool:
        return self._stats.case_sensitive

    def set_case_sensitive(self, active: bool) -> None:
        """Change case sensitivity for the model and every stats entry.

        Switching to case-insensitive merges the statistics of characters
        that differ only by case. Cached influence maps are dropped because
        their keys no longer line up with the stats table.
        """
        for stats in self._stats.values():
            stats.set_case_sensitive(active)
        self._stats.set_case_sensitive(active)
        self.cache.clear()
        logger.debug(f"Case sensitivity set to {active}, {len(self._stats)} characters tracked")

    # Ingestion

    def parse_word(self, word: str) -> None:
        """Add every character of a word to the statistics.

        Args:
            word: A single word; empty words are ignored
        """
        if not word:
            logger.debug("Skipping empty word")
            return
        if not self.case_sensitive:
            word = word.lower()

        self.word_lengths.increment(len(word) - 1)

        for i, char in enumerate(word):
            stats = self._stats.get(char)
            if stats is None:
                stats = CharacterStats(char, self.case_sensitive)
                self._stats.put(char, stats)
            stats.add_word(word, i)

    def parse_line_regex(self, line: str, pattern: str) -> int:
        """Split a line on a regular expression and parse every word.

        Args:
            line: A line of text
            pattern: Regular expression matching the gaps between words

        Returns:
            int: Number of words parsed
        """
        tokenizer = RegexpTokenizer(pattern, gaps=True, discard_empty=True)
        words = tokenizer.tokenize(line)
        for word in words:
            self.parse_word(word)
        return len(words)

    def parse_line(self, line: str, delimiters: Optional[str] = None) -> int:
        """Split a line on whitespace (plus optional delimiters) and parse every word.

        Args:
            line: A line of text
            delimiters: Extra characters to split on besides whitespace

        Returns:
            int: Number of words parsed
        """
        if not delimiters:
            return self.parse_line_regex(line, WHITESPACE_PATTERN)
        return self.parse_line_regex(line, "[" + re.escape(delimiters) + r"\s]+")

    def parse_lines(self, lines: Iterable[str], delimiters: Optional[str] = None) -> int:
        return sum(self.parse_line(line, delimiters) for line in lines)

    # Accessors

    def get_stats(self, char: str) -> Optional[CharacterStats]:
        return self._stats.get(char)

    def get_word_lengths(self) -> OccurrenceHistogram:
        """Word length counts. Index 0 corresponds to words of length 1."""
        return self.word_lengths

    def alphabet(self) -> List[str]:
        return self._stats.alphabet()

    def __contains__(self, char) -> bool:
        return char in self._stats

    def __len__(self) -> int:
        return len(self._stats)

    # Inference

    def generate_influence_map(self, sequence: str) -> InfluenceMap:
        """Superpose the correlations of every character in a sequence.

        Each character at distance `position` from the end of the sequence
        contributes the candidates it is known to precede by exactly
        position+1 steps. A candidate's histogram holds that evidence at
        index `position`.

        Args:
            sequence: The characters written so far

        Returns:
            CharacterMap[OccurrenceHistogram]: candidate -> evidence by distance
            from the end. Candidates without evidence are absent.
        """
        length = len(sequence)
        results = histogram_map(self.case_sensitive)

        for i in range(length - 1, -1, -1):
            position = length - i - 1
            stats = self._stats.get(sequence[i])
            if stats is None:
                continue

            for candidate, count in stats.get_correlations_at_index(position).items():
                histogram = results.get(candidate)
                if histogram is None:
                    histogram = OccurrenceHistogram()
                    results.put(candidate, histogram)
                histogram.increment(position, count)

        return results

    def get_influence_map_from_cache(self, sequence: str) -> Optional[InfluenceMap]:
        return self.cache.get(sequence)

    def get_influence_map_cached(self, sequence: str) -> InfluenceMap:
        """Influence map for a sequence, served from the cache when possible.

        Cached results are not refreshed by later ingestion; call clear_cache()
        after adding data if fresh results are needed.
        """
        return self.cache.get_or_compute(sequence, self.generate_influence_map)

    def compact_influence_map(self, influence_map: InfluenceMap, decay: float,
                              threshold: float = 0.0) -> CharacterMap[float]:
        """Collapse an influence map into next-character probabilities.

        Each candidate's histogram is folded from its farthest slot inward:
        influence = influence * (1 - decay) + count * decay. A decay above 0.5
        favours evidence close to the end of the sequence, below 0.5 favours
        evidence further back.

        With a positive threshold, candidates whose share of the original
        total is below it are removed and the rest are renormalized against
        the reduced total.

        Args:
            influence_map: Result of generate_influence_map
            decay: Weight given to nearer evidence at each step
            threshold: Minimum share a candidate needs to be kept

        Returns:
            CharacterMap[float]: candidate -> probability, summing to 1.0. An
            empty map is returned when there is no evidence.
        """
        influences = decimal_map(self.case_sensitive)
        total_sum = 0.0
        decay_inv = 1 - decay

        for candidate, histogram in influence_map.items():
            size = histogram.size()
            if size == 0:
                influence = 0.0
            else:
                influence = float(histogram.get(size - 1))
                for i in range(size - 2, -1, -1):
                    influence = influence * decay_inv + histogram.get(i) * decay
            influences.put(candidate, influence)
            total_sum += influence

        if total_sum == 0:
            logger.debug("No evidence in influence map, returning empty distribution")
            return decimal_map(self.case_sensitive)

        if threshold > 0:
            new_sum = total_sum
            trash = []
            for candidate, influence in influences.items():
                if influence / total_sum < threshold:
                    trash.append(candidate)
                    new_sum -= influence
            for candidate in trash:
                influences.remove(candidate)
            total_sum = new_sum

            if not influences or total_sum == 0:
                logger.debug(f"No candidates survived threshold {threshold}, returning empty distribution")
                return decimal_map(self.case_sensitive)

        results = decimal_map(self.case_sensitive)
        for candidate, influence in influences.items():
            results.set(candidate, influence / total_sum)
        return results

    def next_character_distribution(self, sequence: str, decay: float = DEFAULT_DECAY,
                                    threshold: float = 0.0) -> CharacterMap[float]:
        return self.compact_influence_map(self.get_influence_map_cached(sequence), decay, threshold)

    # Maintenance

    def prune_rare_characters(self, threshold: int) -> int:
        """Forget characters seen no more than `threshold` times.

        Correlations pointing at the removed characters are dropped from the
        remaining statistics as well, and cached influence maps are discarded.

        Returns:
            int: Number of characters removed

        Raises:
            ValueError: If threshold is less than or equal to 0
        """
        counts = count_map(self.case_sensitive)
        for char, stats in self._stats.items():
            counts.set(char, stats.occurrences)

        removed = trim_low_value_entries(counts, threshold)
        if not removed:
            return 0

        pruned = [char for char in self._stats.keys() if char not in counts]
        for char in pruned:
            self._stats.remove(char)
        for stats in self._stats.values():
            for char in pruned:
                stats.correlations.remove(char)
        self.cache.clear()

        logger.info(f"Pruned {removed} characters seen {threshold} times or fewer")
        return removed

    def clear_cache(self) -> None:
        self.cache.clear()

    def clear(self) -> None:
        """Reset all statistics, word lengths and cached results."""
        self._stats.clear()
        self.word_lengths.clear()
        self.cache.clear()
