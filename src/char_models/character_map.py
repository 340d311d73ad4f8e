"""
Character-keyed container with case-folding merge semantics.

A CharacterMap maps single characters to values. When it is case-insensitive,
keys that fold to the same lowercase form share one entry, and inserting a
colliding key combines the two values with the map's merge function (a sum
for counts, a histogram sum for histograms, a stats union for character
statistics) instead of overwriting.
"""

import copy
import operator
from typing import Callable, Dict, Generic, Iterator, List, Optional, Tuple, TypeVar

from char_models.occurrence_histogram import OccurrenceHistogram

V = TypeVar("V")

MergeFunction = Callable[[V, V], V]


class CharacterMap(Generic[V]):
    """Mapping from a single character to a value.

    Entries are held under their folded key. The stored key keeps the case
    of the first insertion, so iteration reports characters as they were
    first seen.
    """

    def __init__(self, merge: MergeFunction, case_sensitive: bool = True):
        """Initialize the map.

        Args:
            merge: Callable(existing, new) -> combined value, used whenever a
                case-insensitive insert collides with an existing entry
            case_sensitive: False to fold keys to lowercase
        """
        self._merge = merge
        self._case_sensitive = case_sensitive
        # folded key -> stored key / value
        self._keys: Dict[str, str] = {}
        self._values: Dict[str, V] = {}

    @property
    def case_sensitive(self) -> bool:
        return self._case_sensitive

    def _fold(self, key: str) -> str:
        if self._case_sensitive:
            return key
        return key.lower()

    def put(self, key: str, value: V) -> V:
        """Insert a value, merging into a case-folded duplicate if one exists.

        In case-sensitive mode an existing entry under the exact key is
        replaced.

        Args:
            key: A single character
            value: The value to store; the map takes ownership of it

        Returns:
            The value now held for the key

        Raises:
            ValueError: If key is not exactly one character
        """
        if not isinstance(key, str) or len(key) != 1:
            raise ValueError(f"CharacterMap keys must be single characters, got {key!r}")
        folded = self._fold(key)
        if folded in self._values and not self._case_sensitive:
            self._values[folded] = self._merge(self._values[folded], value)
        else:
            self._keys.setdefault(folded, key)
            self._values[folded] = value
        return self._values[folded]

    def set(self, key: str, value: V) -> None:
        """Overwrite the value under a key without merging."""
        if not isinstance(key, str) or len(key) != 1:
            raise ValueError(f"CharacterMap keys must be single characters, got {key!r}")
        folded = self._fold(key)
        self._keys.setdefault(folded, key)
        self._values[folded] = value

    def get(self, key: str, default: Optional[V] = None) -> Optional[V]:
        return self._values.get(self._fold(key), default)

    def remove(self, key: str) -> Optional[V]:
        """Delete the entry for a key (after folding).

        Returns:
            The removed value, or None if there was no entry
        """
        folded = self._fold(key)
        self._keys.pop(folded, None)
        return self._values.pop(folded, None)

    def set_case_sensitive(self, active: bool) -> None:
        """Toggle case sensitivity.

        Switching to case-insensitive re-folds every key and merges entries
        that now collide.
        """
        self._case_sensitive = active
        self.compact()

    def compact(self) -> None:
        """Rebuild the key index under the current folding mode."""
        entries = [(self._keys[folded], value) for folded, value in self._values.items()]
        self._keys = {}
        self._values = {}
        for key, value in entries:
            folded = self._fold(key)
            if folded in self._values:
                self._values[folded] = self._merge(self._values[folded], value)
            else:
                self._keys[folded] = key
                self._values[folded] = value

    def add_all(self, other: 'CharacterMap[V]') -> 'CharacterMap[V]':
        """Put a copy of every entry of another map into this one.

        Returns:
            CharacterMap: self
        """
        for key, value in other.items():
            folded = self._fold(key)
            if folded in self._values:
                self._values[folded] = self._merge(self._values[folded], copy.deepcopy(value))
            else:
                self._keys[folded] = key
                self._values[folded] = copy.deepcopy(value)
        return self

    def alphabet(self) -> List[str]:
        """Sorted list of the stored characters."""
        return sorted(self._keys.values())

    def keys(self) -> List[str]:
        return [self._keys[folded] for folded in self._values]

    def values(self) -> List[V]:
        return list(self._values.values())

    def items(self) -> List[Tuple[str, V]]:
        return [(self._keys[folded], value) for folded, value in self._values.items()]

    def clear(self) -> None:
        self._keys.clear()
        self._values.clear()

    def __contains__(self, key) -> bool:
        return isinstance(key, str) and self._fold(key) in self._values

    def __getitem__(self, key: str) -> V:
        return self._values[self._fold(key)]

    def __delitem__(self, key: str) -> None:
        folded = self._fold(key)
        del self._values[folded]
        del self._keys[folded]

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"CharacterMap({dict(self.items())!r}, case_sensitive={self._case_sensitive})"


def _merge_histograms(old: OccurrenceHistogram, new: OccurrenceHistogram) -> OccurrenceHistogram:
    return old.add_all(new)


def count_map(case_sensitive: bool = True) -> CharacterMap[int]:
    return CharacterMap(operator.add, case_sensitive)


def decimal_map(case_sensitive: bool = True) -> CharacterMap[float]:
    return CharacterMap(operator.add, case_sensitive)


def histogram_map(case_sensitive: bool = True) -> CharacterMap[OccurrenceHistogram]:
    return CharacterMap(_merge_histograms, case_sensitive)
