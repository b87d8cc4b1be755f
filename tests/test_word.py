"""Tests for the padded word view."""

import pytest
from metaph.core.word import PAD, PaddedWord, is_slavo_germanic


class TestFromWord:
    def test_uppercases_and_pads(self):
        w = PaddedWord.from_word("smith")
        assert w.text == "SMITH" + PAD
        assert w.length == 5
        assert w.last == 4

    def test_accented_letters_uppercased(self):
        w = PaddedWord.from_word("ça")
        assert w.text.startswith("ÇA")

    def test_length_in_characters(self):
        w = PaddedWord.from_word("niño")
        assert w.length == 4
        assert w.at(2) == "Ñ"
        assert w.at(4) == " "

    def test_frozen(self):
        w = PaddedWord.from_word("a")
        with pytest.raises(AttributeError):
            w.length = 3


class TestAt:
    def test_in_range(self):
        w = PaddedWord.from_word("abc")
        assert w.at(0) == "A"
        assert w.at(2) == "C"

    def test_padding_is_blank(self):
        w = PaddedWord.from_word("abc")
        assert w.at(3) == " "

    def test_out_of_range_is_none(self):
        w = PaddedWord.from_word("abc")
        assert w.at(-1) is None
        assert w.at(len(w.text)) is None
        assert w.at(100) is None


class TestIsVowel:
    def test_vowels_include_y(self):
        w = PaddedWord.from_word("aeiouy")
        assert all(w.is_vowel(i) for i in range(6))

    def test_consonant_and_out_of_range(self):
        w = PaddedWord.from_word("b")
        assert not w.is_vowel(0)
        assert not w.is_vowel(-1)
        assert not w.is_vowel(50)


class TestStringAt:
    def test_matches_any_candidate(self):
        w = PaddedWord.from_word("schmidt")
        assert w.string_at(0, 3, "XYZ", "SCH")

    def test_no_match(self):
        w = PaddedWord.from_word("schmidt")
        assert not w.string_at(0, 3, "SMI")

    def test_negative_start_rejected(self):
        w = PaddedWord.from_word("ach")
        assert not w.string_at(-1, 3, " AC")

    def test_window_reaching_buffer_end_rejected(self):
        w = PaddedWord.from_word("ab")
        # buffer is "AB" + 5 blanks, length 7
        assert w.string_at(0, 6, "AB    ")
        assert not w.string_at(0, 7, "AB     ")

    def test_window_into_padding(self):
        w = PaddedWord.from_word("jose")
        assert w.string_at(0, 4, "JOSE")
        assert w.at(4) == " "
        assert w.string_at(3, 2, "E ")


class TestSlavoGermanic:
    @pytest.mark.parametrize("word", ["wagner", "kafka", "czerny", "filipowicz"])
    def test_positive(self, word):
        assert is_slavo_germanic(PaddedWord.from_word(word))

    @pytest.mark.parametrize("word", ["smith", "rogier", "cabrillo", "zcar"])
    def test_negative(self, word):
        assert not is_slavo_germanic(PaddedWord.from_word(word))
