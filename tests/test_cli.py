import numpy as np
import pytest

from wordle_tree.cli import main
from wordle_tree.feedback import build_feedback_table
from wordle_tree.words import load_feedback_table, load_word_set

from conftest import ANSWERS, SPLITTER, write_words


@pytest.fixture
def word_files(tmp_path):
    answers = write_words(tmp_path / "answers.txt", ANSWERS)
    guesses = write_words(tmp_path / "guesses.txt", ANSWERS + [SPLITTER], "")
    return ["--answers", answers, "--guesses", guesses, "--workers", "1"]


def test_tree(word_files, capsys):
    assert main(word_files + ["--depth", "3"]) == 0
    assert capsys.readouterr().out.splitlines() == [
        "fghij aaaaa abcde",
        "fghij paaaa abcdf",
        "fghij apaaa abcdg",
        "fghij aapaa abcdh",
        "mean: 2.0000",
    ]


def test_tree_with_opening_guess(word_files, capsys):
    assert main(word_files + ["--depth", "3", "--guess", "abcde"]) == 0
    assert capsys.readouterr().out.splitlines() == [
        "abcde cccca fghij paaaa abcdf",
        "abcde cccca fghij apaaa abcdg",
        "abcde cccca fghij aapaa abcdh",
        "abcde",
        "mean: 2.5000",
    ]


def test_tree_no_solution(word_files, capsys):
    assert main(word_files + ["--depth", "1"]) == 0
    assert capsys.readouterr().out == "no solution\n"


def test_tree_with_worker_processes(word_files, capsys):
    assert main(word_files[:4] + ["--depth", "3", "--workers", "2"]) == 0
    assert capsys.readouterr().out.splitlines()[-1] == "mean: 2.0000"


def test_search_easy(word_files, capsys):
    assert main(word_files + ["--search", "--depth", "3"]) == 0
    assert capsys.readouterr().out.splitlines() == [
        "abcde: 2.5000",
        "abcdf: 2.5000",
        "abcdg: 2.5000",
        "abcdh: 2.5000",
        "fghij: 2.0000",
    ]


def test_search_reports_failures(word_files, capsys):
    assert main(word_files + ["--search", "--depth", "2", "--guess", "abcde"]) == 0
    assert capsys.readouterr().out == "abcde: no solution\n"


def test_search_hard(word_files, capsys):
    assert main(word_files + ["--search", "--hard", "--depth", "3", "--guess", "abcde"]) == 0
    assert capsys.readouterr().out == "abcde: no solution\n"
    assert main(word_files + ["--search", "--hard", "--depth", "4", "--guess", "abcde"]) == 0
    assert capsys.readouterr().out == "abcde: 2.5000\n"


def test_search_hard_limited(word_files, capsys):
    assert main(word_files + ["--search", "--hard", "--limit-guesses", "--depth", "4",
                              "--guess", "abcdf"]) == 0
    assert capsys.readouterr().out == "abcdf: 2.5000\n"


def test_write_and_use_table(word_files, tmp_path, capsys):
    table_path = str(tmp_path / "table.bin")
    assert main(word_files + ["--write-table", table_path]) == 0

    answers = load_word_set(word_files[1])
    assert np.array_equal(load_feedback_table(table_path, 4),
                          build_feedback_table(answers.letters))

    assert main(word_files + ["--search", "--hard", "--limit-guesses", "--depth", "4",
                              "--table", table_path]) == 0
    assert capsys.readouterr().out.splitlines() == [
        "abcde: 2.5000",
        "abcdf: 2.5000",
        "abcdg: 2.5000",
        "abcdh: 2.5000",
    ]


@pytest.mark.parametrize("extra", [
    ["--depth", "zero"],
    ["--guess", "abcd"],
    ["--search", "--hard", "--limit-guesses", "--guess", "fghij"],
    ["--search", "--hard", "--limit-guesses", "--table", "missing.bin"],
])
def test_configuration_errors(word_files, extra):
    assert main(word_files + extra) == 2


def test_missing_word_list(tmp_path):
    assert main(["--answers", str(tmp_path / "nope.txt"), "--workers", "1"]) == 2


def test_empty_word_list(tmp_path):
    empty = tmp_path / "empty.txt"
    empty.write_text("\n")
    assert main(["--answers", str(empty), "--workers", "1"]) == 2


def test_malformed_word_list_fails_fast(tmp_path):
    bad = write_words(tmp_path / "bad.txt", ["abcde", "abc"], "")
    with pytest.raises(ValueError):
        main(["--answers", bad, "--workers", "1"])
