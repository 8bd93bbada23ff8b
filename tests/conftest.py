import os

# Numba's TBB threading layer deadlocks at interpreter exit after the
# process-pool tests run; pick a layer that shuts down cleanly.
os.environ.setdefault("NUMBA_THREADING_LAYER", "workqueue")

import pytest

from wordle_tree.feedback import build_feedback_table
from wordle_tree.wordset import IndexWordSet, LetterWordSet


ANSWERS = ["abcde", "abcdf", "abcdg", "abcdh"]
SPLITTER = "fghij"


@pytest.fixture
def answers():
    return LetterWordSet(ANSWERS)


@pytest.fixture
def guesses():
    return LetterWordSet(ANSWERS + [SPLITTER])


@pytest.fixture
def index_words(answers):
    return IndexWordSet(build_feedback_table(answers.letters), len(answers))


def write_words(path, words, sep="\n"):
    path.write_text(sep.join(words) + "\n")
    return str(path)
