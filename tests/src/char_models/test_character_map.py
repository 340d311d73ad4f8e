"""
Tests for the character-keyed container.

Verifies:
- Case-insensitive inserts merge through the injected merge function
- Case-sensitive maps keep case variants apart
- Toggling case sensitivity re-folds and merges colliding keys
- add_all copies values instead of aliasing them
"""

import pytest
from char_models.character_map import CharacterMap, count_map, histogram_map
from char_models.occurrence_histogram import OccurrenceHistogram


class TestCharacterMap:
    """Test folding and merge behaviour."""

    def test_case_fold_merge_sums(self):
        """put('a', 3) then put('A', 4) leaves one entry worth 7."""
        counts = count_map(case_sensitive=False)
        counts.put('a', 3)
        counts.put('A', 4)

        assert len(counts) == 1
        assert counts.get('a') == 7
        assert counts.get('A') == 7
        assert counts.keys() == ['a']

    def test_case_sensitive_keeps_variants(self):
        """Case-sensitive maps store 'a' and 'A' separately and replace on put."""
        counts = count_map(case_sensitive=True)
        counts.put('a', 3)
        counts.put('A', 4)
        counts.put('a', 5)

        assert len(counts) == 2
        assert counts.get('a') == 5
        assert counts.get('A') == 4

    def test_switching_to_insensitive_compacts(self):
        """Turning off case sensitivity merges colliding entries."""
        counts = count_map(case_sensitive=True)
        counts.put('B', 1)
        counts.put('b', 2)
        counts.put('c', 5)

        counts.set_case_sensitive(False)

        assert not counts.case_sensitive
        assert len(counts) == 2
        assert counts.get('b') == 3
        assert counts.alphabet() == ['B', 'c']

    def test_histogram_merge(self):
        """Histogram maps merge colliding keys index by index."""
        histograms = histogram_map(case_sensitive=False)
        histograms.put('x', OccurrenceHistogram([1]))
        histograms.put('X', OccurrenceHistogram([0, 2]))

        assert histograms.get('x').to_list() == [1, 2]

    def test_custom_merge_strategy(self):
        """Any callable can serve as the merge policy."""
        latest = CharacterMap(lambda old, new: max(old, new), case_sensitive=False)
        latest.put('q', 4)
        latest.put('Q', 2)
        assert latest.get('q') == 4

    def test_set_overwrites_without_merging(self):
        """set() replaces the value even when case-insensitive."""
        counts = count_map(case_sensitive=False)
        counts.put('a', 3)
        counts.set('A', 1)
        assert counts.get('a') == 1

    def test_remove_uses_folded_key(self):
        """Removal folds the key and returns the removed value."""
        counts = count_map(case_sensitive=False)
        counts.put('z', 9)

        assert counts.remove('Z') == 9
        assert 'z' not in counts
        assert counts.remove('z') is None

    def test_rejects_multi_character_keys(self):
        """Keys must be exactly one character."""
        counts = count_map()
        with pytest.raises(ValueError):
            counts.put('ab', 1)
        with pytest.raises(ValueError):
            counts.put('', 1)

    def test_add_all_copies_values(self):
        """Values brought in by add_all are not shared with the source."""
        source = histogram_map()
        source.put('k', OccurrenceHistogram([1]))
        target = histogram_map()
        target.put('k', OccurrenceHistogram([2]))
        target.put('j', OccurrenceHistogram([0]))

        target.add_all(source)
        source.get('k').increment(0, 10)

        assert target.get('k').to_list() == [3]
        assert source.get('k').to_list() == [11]

        fresh = histogram_map()
        fresh.add_all(source)
        source.get('k').increment(0)
        assert fresh.get('k').to_list() == [11]

    def test_mapping_protocol(self):
        """Iteration, item access and deletion behave like a dict."""
        counts = count_map()
        counts.put('a', 1)
        counts.put('b', 2)

        assert list(counts) == ['a', 'b']
        assert counts['b'] == 2
        assert dict(counts.items()) == {'a': 1, 'b': 2}

        del counts['a']
        assert counts.keys() == ['b']
        with pytest.raises(KeyError):
            counts['a']
