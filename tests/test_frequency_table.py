"""
Unit tests cho core/counting/frequency_table.py
"""

import pytest

from core.counting.frequency_table import FrequencyTable, Pair


class TestFrequencyTable:
    """Test increment/add/read API."""

    def test_increment_creates_entry(self):
        table = FrequencyTable()
        table.increment("go")
        assert table["go"] == 1
        assert "go" in table

    def test_increment_accumulates(self):
        table = FrequencyTable()
        for _ in range(4):
            table.increment("go")
        assert table == {"go": 4}

    def test_unknown_word_is_zero(self):
        table = FrequencyTable()
        assert table["missing"] == 0
        assert "missing" not in table
        assert len(table) == 0

    def test_add_negative_rejected(self):
        table = FrequencyTable()
        with pytest.raises(ValueError):
            table.add("go", -1)

    def test_pairs(self):
        table = FrequencyTable({"cat": 2})
        pairs = list(table.pairs())
        assert pairs == [Pair("cat", 2)]
        assert pairs[0].word == "cat"
        assert pairs[0].count == 2

    def test_initial_counts_not_shared(self):
        counts = {"cat": 1}
        table = FrequencyTable(counts)
        table.increment("cat")
        assert counts == {"cat": 1}
        assert table["cat"] == 2

    def test_equality_with_dict(self):
        assert FrequencyTable({"cat": 1}) == {"cat": 1}
        assert FrequencyTable({"cat": 1}) == FrequencyTable({"cat": 1})


class TestMerge:
    """Test merge() semantics."""

    def test_merge_returns_receiver(self):
        left = FrequencyTable({"cat": 1})
        right = FrequencyTable({"dog": 2})
        assert left.merge(right) is left

    def test_merge_adds_counts(self):
        left = FrequencyTable({"cat": 1, "dog": 1})
        left.merge(FrequencyTable({"dog": 2, "owl": 5}))
        assert left == {"cat": 1, "dog": 3, "owl": 5}

    def test_merge_with_itself_doubles(self):
        """merge(T, T) tren mot ban sao: moi count gap doi."""
        original = {"the": 3, "dog": 5, "cat": 1}
        doubled = FrequencyTable(original)
        doubled.merge(doubled)
        for word, count in original.items():
            assert doubled[word] == 2 * count
        assert len(doubled) == len(original)

    def test_merge_commutative_in_values(self):
        a_counts = {"cat": 1, "dog": 2}
        b_counts = {"dog": 3, "owl": 4}
        left = FrequencyTable(a_counts).merge(FrequencyTable(b_counts))
        right = FrequencyTable(b_counts).merge(FrequencyTable(a_counts))
        assert left == right
