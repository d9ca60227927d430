"""
SCRAMPAGE: Word store tests.

Run with: pytest tests/test_word.py -v
"""

import random
from collections import Counter

import pytest

from scrampage.graphics.metrics import MonospaceMeasurer, TextMeasurer
from scrampage.simulation.word import WordStore, scramble


class NegativeMeasurer(TextMeasurer):
    @property
    def line_height(self):
        return 10

    def text_width(self, text):
        return -1.0


@pytest.fixture
def store(measurer, rng):
    return WordStore(measurer, rng)


class TestScramble:

    def test_is_anagram(self, rng):
        for _ in range(50):
            assert Counter(scramble("SCRAMPAGE", rng)) == Counter("SCRAMPAGE")

    def test_single_character(self, rng):
        assert scramble("A", rng) == "A"

    def test_keeps_whitespace(self, rng):
        result = scramble("A B", rng)
        assert sorted(result) == sorted("A B")


class TestSetWord:

    def test_sets_text_and_extent(self, store):
        assert store.set_word("HELLO") is True
        assert store.text == "HELLO"
        assert store.text_width == 300
        assert store.text_height == 100

    def test_empty_is_ignored(self, store):
        store.set_word("HI")
        assert store.set_word("") is False
        assert store.text == "HI"

    def test_same_word_twice_is_noop(self, store):
        """Second identical set generates no new permutation."""
        store.set_word("CAT")
        count = store.scramble_count
        scrambled = store.scrambled_text

        assert store.set_word("CAT") is False
        assert store.scramble_count == count
        assert store.scrambled_text == scrambled

    def test_new_word_rescrambles(self, store):
        store.set_word("CAT")
        count = store.scramble_count
        store.set_word("DOGS")
        assert store.scramble_count == count + 1
        assert Counter(store.scrambled_text) == Counter("DOGS")

    def test_negative_measurement_raises(self, rng):
        store = WordStore(NegativeMeasurer(), rng)
        with pytest.raises(ValueError):
            store.set_word("HI")


class TestDisplayed:

    def test_shows_original_by_default(self, store):
        store.set_word("SCRAMPAGE")
        assert store.displayed == "SCRAMPAGE"
        assert not store.scramble_active

    def test_apply_shows_scrambled(self, store):
        store.set_word("SCRAMPAGE")
        store.apply_scramble()
        assert store.displayed == store.scrambled_text
        assert Counter(store.displayed) == Counter("SCRAMPAGE")

    def test_restore_prepares_fresh_scramble(self, store):
        store.set_word("SCRAMPAGE")
        store.apply_scramble()
        count = store.scramble_count
        store.restore_scramble()
        assert store.displayed == "SCRAMPAGE"
        assert store.scramble_count == count + 1
        assert Counter(store.scrambled_text) == Counter("SCRAMPAGE")

    def test_remeasure_with_new_backend(self, store):
        store.set_word("HI")
        store.remeasure(MonospaceMeasurer(font_size=50))
        assert store.text_width == 60
        assert store.text_height == 50
