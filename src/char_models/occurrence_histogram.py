from typing import List, Optional


class OccurrenceHistogram:
    """Growable count-by-distance structure.

    Index 0 is the nearest position (e.g. the first letter of a word, or
    the character directly after another one). Slots are zero-filled on
    demand, so the length is always one plus the greatest distance that
    has been incremented.
    """

    def __init__(self, counts: Optional[List[int]] = None):
        """Initialize the histogram.

        Args:
            counts: Optional starting counts, copied. All values must be >= 0.
        """
        self._counts: List[int] = []
        if counts:
            for distance, count in enumerate(counts):
                self.increment(distance, count)

    def increment(self, distance: int, amount: int = 1) -> int:
        """Add an amount at a distance, growing the histogram if needed.

        Args:
            distance: The distance to increment (0-based)
            amount: How much to add

        Returns:
            int: The new count held at the distance

        Raises:
            ValueError: If distance or amount is negative
        """
        if distance < 0:
            raise ValueError(f"Distance must be non-negative, got {distance}")
        if amount < 0:
            raise ValueError(f"Amount must be non-negative, got {amount}")
        if distance >= len(self._counts):
            self._counts.extend([0] * (distance + 1 - len(self._counts)))
        self._counts[distance] += amount
        return self._counts[distance]

    def get(self, distance: int) -> int:
        """Get the count at a distance.

        Distances past the end read as 0 and do not grow the histogram.

        Raises:
            ValueError: If distance is negative
        """
        if distance < 0:
            raise ValueError(f"Distance must be non-negative, got {distance}")
        if distance >= len(self._counts):
            return 0
        return self._counts[distance]

    def add_all(self, other: 'OccurrenceHistogram') -> 'OccurrenceHistogram':
        """Sum another histogram into this one, index by index.

        Args:
            other: The histogram to merge in (left untouched)

        Returns:
            OccurrenceHistogram: self, to allow use as a merge function
        """
        if len(other._counts) > len(self._counts):
            self._counts.extend([0] * (len(other._counts) - len(self._counts)))
        for distance, count in enumerate(other._counts):
            self._counts[distance] += count
        return self

    def size(self) -> int:
        return len(self._counts)

    def total(self) -> int:
        return sum(self._counts)

    def trim(self) -> int:
        """Drop trailing zero slots.

        Returns:
            int: Number of slots removed
        """
        removed = 0
        while self._counts and self._counts[-1] == 0:
            self._counts.pop()
            removed += 1
        return removed

    def clear(self) -> None:
        self._counts.clear()

    def copy(self) -> 'OccurrenceHistogram':
        new_histogram = OccurrenceHistogram()
        new_histogram._counts = list(self._counts)
        return new_histogram

    def to_list(self) -> List[int]:
        return list(self._counts)

    def __len__(self) -> int:
        return len(self._counts)

    def __eq__(self, other) -> bool:
        if not isinstance(other, OccurrenceHistogram):
            return NotImplemented
        return self._counts == other._counts

    def __repr__(self) -> str:
        return f"OccurrenceHistogram({self._counts})"
