"""
Tests for per-character statistics.

Verifies:
- Word ingestion records instance, start and end distances
- Correlations are directional and stored at distance - 1
- Precondition failures raise ValueError
- Merging two stats entries
"""

import pytest
from char_models.character_stats import CharacterStats


class TestCharacterStats:
    """Test statistic tracking for a single character."""

    @pytest.fixture
    def stats(self):
        """Stats for 'a' after seeing it at the start of "abc"."""
        stats = CharacterStats('a')
        stats.add_word("abc", 0)
        return stats

    def test_add_word_positions(self, stats):
        """The first letter of a 3-letter word sits 0 from the start, 2 from the end."""
        assert stats.occurrences == 1
        assert stats.start_distances.to_list() == [1]
        assert stats.end_distances.to_list() == [0, 0, 1]

    def test_add_word_correlations(self, stats):
        """Later characters are recorded at their 1-based distance."""
        assert stats.get_correlations('b').to_list() == [1]
        assert stats.get_correlations('c').to_list() == [0, 1]
        assert stats.alphabet() == ['b', 'c']

    def test_correlations_are_directional(self):
        """Only characters after the current index are correlated."""
        last = CharacterStats('b')
        last.add_word("ab", 1)

        assert last.occurrences == 1
        assert last.get_correlations('a') is None
        assert len(last.get_all_correlations()) == 0

    def test_correlations_at_index(self, stats):
        """Only histograms with a non-zero count at the index are returned."""
        nearest = stats.get_correlations_at_index(0)
        second = stats.get_correlations_at_index(1)

        assert dict(nearest.items()) == {'b': 1}
        assert dict(second.items()) == {'c': 1}
        assert len(stats.get_correlations_at_index(5)) == 0

    def test_invalid_correlation_distance(self, stats):
        """Correlation distance must be at least 1."""
        with pytest.raises(ValueError):
            stats.add_character_correlation('x', 0)
        assert stats.get_correlations('x') is None

    def test_negative_positions_rejected(self, stats):
        """Start and end distances cannot be negative."""
        with pytest.raises(ValueError):
            stats.add_position_from_start(-1)
        with pytest.raises(ValueError):
            stats.add_position_from_end(-2)

    def test_add_word_index_outside_word(self, stats):
        """The character index must fall within the word."""
        with pytest.raises(ValueError):
            stats.add_word("abc", 3)
        with pytest.raises(ValueError):
            stats.add_word("abc", -1)

    def test_repeated_characters(self):
        """A character following itself is correlated with itself."""
        stats = CharacterStats('a')
        stats.add_word("aab", 0)

        assert stats.get_correlations('a').to_list() == [1]
        assert stats.get_correlations('b').to_list() == [0, 1]

    def test_add_all(self, stats):
        """Merging sums counts and unions correlation tables."""
        other = CharacterStats('a')
        other.add_word("xad", 1)

        stats.add_all(other)

        assert stats.occurrences == 2
        assert stats.start_distances.to_list() == [1, 1]
        assert stats.end_distances.to_list() == [0, 1, 1]
        assert stats.get_correlations('b').to_list() == [1]
        assert stats.get_correlations('d').to_list() == [1]
        # the merged-in stats stay independent
        other.add_character_correlation('d', 1)
        assert stats.get_correlations('d').to_list() == [1]

    def test_case_insensitive_correlations(self):
        """Folded stats merge correlations for case variants."""
        stats = CharacterStats('a')
        stats.add_character_correlation('B', 1)
        stats.add_character_correlation('b', 2)

        stats.set_case_sensitive(False)

        assert not stats.case_sensitive
        assert stats.get_correlations('b').to_list() == [1, 1]

    def test_prepare_and_reset(self, stats):
        """prepare creates empty entries, reset clears everything."""
        stats.prepare('z')
        assert stats.get_correlations('z').size() == 0

        stats.reset_character('c')
        assert stats.get_correlations('c').size() == 0

        stats.reset()
        assert stats.occurrences == 0
        assert stats.start_distances.size() == 0
        assert stats.alphabet() == []
