import numpy as np
import pytest

from wordle_tree.feedback import (
    ABSENT, CORRECT, N_PATTERNS, build_feedback_table, feedback,
    feedback_to_string, string_to_feedback, word_to_codes,
)


@pytest.mark.parametrize("guess,answer,expected", [
    ("sanes", "boats", "apaac"),
    ("tonka", "aunty", "pacap"),
    ("lares", "coach", "apaaa"),
    ("aaabb", "bbaaa", "ppcpp"),
    ("xxxaa", "aaaxx", "ppapp"),
    ("abbbb", "baaaa", "ppaaa"),
])
def test_feedback_fixtures(guess, answer, expected):
    assert feedback_to_string(feedback(guess, answer)) == expected


def test_feedback_packed_values():
    assert feedback("aaabb", "bbaaa") == 130
    assert feedback("xxxaa", "aaaxx") == 112


def test_feedback_identical_is_correct():
    for word in ["crane", "geese", "abbbb"]:
        assert feedback(word, word) == CORRECT


def test_feedback_disjoint_is_absent():
    assert feedback("fghij", "abcde") == ABSENT


def test_repeated_letters_only_credited_once():
    # Only one 'e' left in the answer for the two in the guess
    assert feedback_to_string(feedback("geese", "those")) == "aaacc"
    assert feedback_to_string(feedback("eerie", "crane")) == "aapac"


def test_string_round_trip():
    assert feedback_to_string(CORRECT) == "ccccc"
    assert feedback_to_string(ABSENT) == "aaaaa"
    assert string_to_feedback("paaaa") == 1
    assert string_to_feedback("apaaa") == 3
    assert string_to_feedback("aaaap") == 81


@pytest.mark.parametrize("code", [-1, N_PATTERNS, 1000])
def test_feedback_to_string_rejects_out_of_range(code):
    with pytest.raises(ValueError):
        feedback_to_string(code)


@pytest.mark.parametrize("pattern", ["ccc", "cccccc", "ccxcc"])
def test_string_to_feedback_rejects_malformed(pattern):
    with pytest.raises(ValueError):
        string_to_feedback(pattern)


@pytest.mark.parametrize("word", ["abcd", "abcdef", "ABCDE", "ab1de", "abcdé"])
def test_word_to_codes_rejects_malformed(word):
    with pytest.raises(ValueError):
        word_to_codes(word)


def test_word_to_codes():
    assert word_to_codes("azbyc").tolist() == [0, 25, 1, 24, 2]


def test_build_feedback_table_layout():
    words = ["abcde", "abcdf", "fghij"]
    letters = np.stack([word_to_codes(w) for w in words])
    table = build_feedback_table(letters)

    assert table.dtype == np.uint8
    assert table.shape == (9,)
    for g, guess in enumerate(words):
        for a, answer in enumerate(words):
            assert table[g * 3 + a] == feedback(guess, answer)
