"""
Command Line Front End
======================

Tree mode (default) prints one line per terminal path of the best decision
tree found, then the mean number of guesses:

    salet aaaaa courd ...
    mean: 3.4212

Batch mode (``--search``) prints the exhaustive mean cost of each opening
guess, or ``no solution`` when it cannot finish within ``--depth``.

Diagnostics go to stderr through ``logging``; results go to stdout.
"""

import logging
import time
from concurrent.futures import ProcessPoolExecutor
from contextlib import nullcontext
from functools import partial
from typing import List, Optional

import numpy as np

from .candidate import Candidate
from .config import ConfigError, SearchConfig
from .feedback import build_feedback_table
from .solve import solve, solve_easy, solve_hard, solve_hard_limited
from .words import load_feedback_table, load_word_set, save_feedback_table
from .wordset import IndexWordSet, LetterWordSet, install_tables, shared_tables

log = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


# ============================================================================
# SETUP
# ============================================================================

def _load(filepath: str, what: str) -> LetterWordSet:
    try:
        words = load_word_set(filepath)
    except FileNotFoundError:
        raise ConfigError(f"{what} list not found: {filepath}") from None
    if len(words) == 0:
        raise ConfigError(f"{what} list is empty: {filepath}")
    return words


def _feedback_table(config: SearchConfig, answers: LetterWordSet) -> np.ndarray:
    """Load the answer feedback table, or compute it if no file was given."""
    if config.table_path is not None:
        try:
            table = load_feedback_table(config.table_path, len(answers))
        except FileNotFoundError:
            raise ConfigError(f"Feedback table not found: {config.table_path}") from None
        log.info(f"Loaded feedback table from {config.table_path}")
        return table

    log.info(f"Computing feedback table ({len(answers)} x {len(answers)})...")
    t0 = time.time()
    table = build_feedback_table(answers.letters)
    log.info(f"Done in {time.time() - t0:.1f}s")
    return table


def _make_executor(config: SearchConfig):
    """Process pool for the first fan-out, or a no-op context for one worker."""
    if config.workers <= 1:
        return nullcontext()
    return ProcessPoolExecutor(
        max_workers=config.workers,
        initializer=install_tables,
        initargs=(shared_tables(),),
    )


def _check_first_guess(config: SearchConfig, answers: LetterWordSet,
                       guesses: LetterWordSet) -> None:
    guess = config.first_guess
    if guess is None:
        return
    if config.search and config.hard and config.limit_guesses:
        if answers.index_of(guess) is None:
            raise ConfigError(f"Opening guess {guess!r} is not in the answer list")
    elif guesses.index_of(guess) is None:
        log.warning(f"Opening guess {guess!r} is not in the guess list")


# ============================================================================
# MODES
# ============================================================================

def _report(word, total: Optional[int], n_answers: int) -> None:
    if total is None:
        print(f"{word}: no solution", flush=True)
    else:
        print(f"{word}: {total / n_answers:.4f}", flush=True)


def run_search(config: SearchConfig, answers: LetterWordSet, guesses: LetterWordSet,
               table: Optional[np.ndarray] = None) -> None:
    """
    Print the exhaustive cost of each opening guess.

    ``table`` is the answer feedback table, required for hard mode with
    guesses limited to the answers.
    """
    n = len(answers)
    depth = config.depth - 1

    if config.hard and config.limit_guesses:
        words = IndexWordSet(table, n)
        if config.first_guess is not None:
            openings = [answers.index_of(config.first_guess)]
        else:
            openings = range(n)
        with _make_executor(config) as executor:
            for idx in openings:
                _report(answers.word(idx), solve_hard_limited(idx, words, depth, executor), n)
        return

    if config.hard:
        cost = partial(solve_hard, guesses=guesses, answers=answers, depth=depth)
    else:
        cost = partial(solve_easy, guesses=guesses, answers=answers, depth=depth)
    openings = [config.first_guess] if config.first_guess is not None else guesses
    with _make_executor(config) as executor:
        for guess in openings:
            _report(guess, cost(guess, executor=executor), n)


def run_tree(config: SearchConfig, answers: LetterWordSet, guesses: LetterWordSet) -> None:
    """Print the decision tree found by the beam search."""
    t0 = time.time()
    with _make_executor(config) as executor:
        if config.first_guess is not None:
            candidate = Candidate(config.first_guess, answers)
            solution = candidate.slow_solution(guesses, answers, config.breadth, config.depth - 1,
                                               config.hard, executor, config.shortcut)
        else:
            solution = solve(guesses, answers, config.breadth, config.depth, config.hard,
                             executor, config.shortcut)
    log.info(f"Search took {time.time() - t0:.1f}s")

    if solution is None:
        print("no solution")
        return

    for line in solution.lines():
        print(line)
    distribution = ', '.join(f"{n}: {count}" for n, count in solution.distribution().items())
    log.info(f"Distribution: {distribution}")
    print(f"mean: {solution.mean(len(answers)):.4f}")


# ============================================================================
# MAIN
# ============================================================================

def main(argv: Optional[List[str]] = None) -> int:
    """Run the solver; returns the process exit status."""
    try:
        config = SearchConfig.from_args(argv)
    except ConfigError as e:
        logging.basicConfig(format=LOG_FORMAT)
        log.error(f"{e}")
        return 2

    logging.basicConfig(level=logging.DEBUG if config.verbose else logging.INFO,
                        format=LOG_FORMAT)

    try:
        answers = _load(config.answers_path, "Answer")
        if config.write_table is not None:
            save_feedback_table(_feedback_table(config, answers), config.write_table)
            log.info(f"Wrote feedback table to {config.write_table}")
            return 0
        guesses = answers if config.limit_guesses else _load(config.guesses_path, "Guess")
        log.info(f"Answers: {len(answers)}, Guesses: {len(guesses)}")
        _check_first_guess(config, answers, guesses)
        table = None
        if config.search and config.hard and config.limit_guesses:
            table = _feedback_table(config, answers)
    except ConfigError as e:
        log.error(f"{e}")
        return 2

    if config.search:
        run_search(config, answers, guesses, table)
    else:
        run_tree(config, answers, guesses)
    return 0
