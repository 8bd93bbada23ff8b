import dataclasses

import pytest

from wordle_tree.config import DEFAULT_ANSWERS, DEFAULT_GUESSES, ConfigError, SearchConfig


def test_defaults():
    config = SearchConfig.from_args([])
    assert config.hard is False
    assert config.breadth == 10
    assert config.depth == 6
    assert config.limit_guesses is False
    assert config.first_guess is None
    assert config.search is False
    assert config.answers_path == DEFAULT_ANSWERS
    assert config.guesses_path == DEFAULT_GUESSES
    assert config.table_path is None
    assert config.workers >= 1
    assert config.shortcut is True
    assert config.write_table is None
    assert config.verbose is False


def test_flags():
    config = SearchConfig.from_args([
        "--hard", "--breadth", "3", "--depth", "4", "--limit-guesses",
        "--guess", "SALET", "--search", "--answers", "a.txt", "--guesses", "g.txt",
        "--table", "t.bin", "--workers", "1", "--no-shortcut", "-v",
    ])
    assert config.hard and config.limit_guesses and config.search and config.verbose
    assert config.breadth == 3
    assert config.depth == 4
    assert config.first_guess == "salet"
    assert config.answers_path == "a.txt"
    assert config.guesses_path == "g.txt"
    assert config.table_path == "t.bin"
    assert config.workers == 1
    assert config.shortcut is False


@pytest.mark.parametrize("argv", [
    ["--depth"],
    ["--depth", "0"],
    ["--breadth", "x"],
    ["--breadth", "0"],
    ["--workers", "0"],
    ["--guess", "abc"],
    ["--guess", "ab1de"],
    ["--frobnicate"],
])
def test_bad_arguments(argv):
    with pytest.raises(ConfigError):
        SearchConfig.from_args(argv)


def test_config_error_is_value_error():
    with pytest.raises(ValueError):
        SearchConfig(depth=-1)


def test_frozen():
    config = SearchConfig()
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.depth = 3
