from typing import List, Optional

from char_models.character_map import CharacterMap, count_map, histogram_map
from char_models.occurrence_histogram import OccurrenceHistogram


class CharacterStats:
    """Statistics for a single character.

    Tracks how often the character was seen, how far it sat from the start
    and end of each word, and for every character found later in the same
    word, the distance between the two.

    Correlations are directional: an entry for 'b' in the stats of 'a' means
    'a' preceded 'b'. Distances are 1-based and stored at index distance-1.
    """

    def __init__(self, character: str, case_sensitive: bool = True):
        """Initialize empty statistics.

        Args:
            character: The character these statistics describe
            case_sensitive: False to fold correlation keys to lowercase
        """
        self.character = character
        self.occurrences = 0
        self.start_distances = OccurrenceHistogram()
        self.end_distances = OccurrenceHistogram()
        self.correlations: CharacterMap[OccurrenceHistogram] = histogram_map(case_sensitive)

    @property
    def case_sensitive(self) -> bool:
        return self.correlations.case_sensitive

    def set_case_sensitive(self, active: bool) -> None:
        self.correlations.set_case_sensitive(active)

    def alphabet(self) -> List[str]:
        """Characters this one has been seen before."""
        return self.correlations.alphabet()

    # Tracking

    def add_instance(self) -> None:
        self.occurrences += 1

    def add_position_from_start(self, distance: int) -> None:
        """Record a distance from the start of a word.

        Raises:
            ValueError: If distance is negative
        """
        self.start_distances.increment(distance)

    def add_position_from_end(self, distance: int) -> None:
        """Record a distance from the end of a word.

        Raises:
            ValueError: If distance is negative
        """
        self.end_distances.increment(distance)

    def add_character_correlation(self, other: str, distance_to: int) -> None:
        """Record that `other` followed this character at a distance.

        Args:
            other: The character found later in the word
            distance_to: How many steps after this character it appeared

        Raises:
            ValueError: If distance_to is less than 1
        """
        if distance_to < 1:
            raise ValueError(f"Correlation distance must be at least 1, got {distance_to}")
        histogram = self.correlations.get(other)
        if histogram is None:
            histogram = OccurrenceHistogram()
            self.correlations.put(other, histogram)
        histogram.increment(distance_to - 1)

    def add_word(self, word: str, index: int) -> None:
        """Record the occurrence of this character at `index` in `word`.

        Args:
            word: The word being ingested
            index: Position of this character within the word

        Raises:
            ValueError: If index is outside the word
        """
        if not 0 <= index < len(word):
            raise ValueError(f"Index {index} is outside word of length {len(word)}")

        self.add_instance()
        self.add_position_from_start(index)
        self.add_position_from_end(len(word) - 1 - index)

        for other_index in range(index + 1, len(word)):
            self.add_character_correlation(word[other_index], other_index - index)

    # Fetching

    def get_correlations(self, other: str) -> Optional[OccurrenceHistogram]:
        return self.correlations.get(other)

    def get_all_correlations(self) -> List[OccurrenceHistogram]:
        return self.correlations.values()

    def get_correlations_at_index(self, position: int) -> CharacterMap[int]:
        """Characters this one precedes by exactly position+1 steps.

        Args:
            position: Index into the correlation histograms (0-based)

        Returns:
            CharacterMap[int]: character -> count at that index, non-zero only
        """
        results = count_map(self.case_sensitive)
        for other, histogram in self.correlations.items():
            count = histogram.get(position)
            if count > 0:
                results.put(other, count)
        return results

    # Structure

    def prepare(self, other: str) -> None:
        """Create an empty correlation entry for a character if none exists."""
        if other not in self.correlations:
            self.correlations.put(other, OccurrenceHistogram())

    def reset_character(self, other: str) -> None:
        histogram = self.correlations.get(other)
        if histogram is not None:
            histogram.clear()

    def reset(self) -> None:
        self.occurrences = 0
        self.start_distances.clear()
        self.end_distances.clear()
        self.correlations.clear()

    def add_all(self, other: 'CharacterStats') -> 'CharacterStats':
        """Merge another character's counts into these.

        Used when two case variants fold together or two corpora combine.

        Returns:
            CharacterStats: self
        """
        self.correlations.add_all(other.correlations)
        self.start_distances.add_all(other.start_distances)
        self.end_distances.add_all(other.end_distances)
        self.occurrences += other.occurrences
        return self

    def __repr__(self) -> str:
        return f"CharacterStats({self.character!r}, occurrences={self.occurrences}, alphabet={self.alphabet()})"
