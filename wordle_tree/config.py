"""Search configuration and command line parsing."""

import argparse
import os
import re
from dataclasses import dataclass, field
from typing import List, Optional

from .feedback import WORD_LENGTH


BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DEFAULT_ANSWERS = os.path.join(BASE_DIR, "words", "answers.txt")
DEFAULT_GUESSES = os.path.join(BASE_DIR, "words", "guesses.txt")

_WORD_RE = re.compile(rf'^[a-z]{{{WORD_LENGTH}}}$')


class ConfigError(ValueError):
    """Invalid or incomplete configuration."""


class _ArgumentParser(argparse.ArgumentParser):
    """Parser that reports bad arguments as ConfigError instead of exiting."""

    def error(self, message):
        raise ConfigError(message)


@dataclass(frozen=True)
class SearchConfig:
    """
    Options for one run of the solver.

    Attributes:
        hard: later guesses must be consistent with earlier feedback
        breadth: candidates expanded per node in tree mode
        depth: maximum number of guesses
        limit_guesses: use the answer list as the guess pool
        first_guess: fixed opening guess
        search: rank opening guesses by cost instead of building a tree
        answers_path: answer list (fixed-width or one word per line)
        guesses_path: guess list, a superset of the answers
        table_path: precomputed answer-by-answer feedback table
        workers: processes for parallel expansion (1 runs in-process)
        shortcut: accept the singleton shortcut during tree search
        write_table: write the answer feedback table here and exit
        verbose: debug logging
    """

    hard: bool = False
    breadth: int = 10
    depth: int = 6
    limit_guesses: bool = False
    first_guess: Optional[str] = None
    search: bool = False
    answers_path: str = DEFAULT_ANSWERS
    guesses_path: str = DEFAULT_GUESSES
    table_path: Optional[str] = None
    workers: int = field(default_factory=lambda: os.cpu_count() or 1)
    shortcut: bool = True
    write_table: Optional[str] = None
    verbose: bool = False

    def __post_init__(self):
        if self.breadth < 1:
            raise ConfigError(f"breadth must be at least 1, got {self.breadth}")
        if self.depth < 1:
            raise ConfigError(f"depth must be at least 1, got {self.depth}")
        if self.workers < 1:
            raise ConfigError(f"workers must be at least 1, got {self.workers}")
        if self.first_guess is not None and not _WORD_RE.match(self.first_guess):
            raise ConfigError(
                f"guess must be {WORD_LENGTH} lowercase letters, got {self.first_guess!r}"
            )

    @classmethod
    def from_args(cls, argv: Optional[List[str]] = None) -> 'SearchConfig':
        """
        Build a configuration from command line arguments.

        Raises:
            ConfigError: on unknown flags, missing or malformed values
        """
        parser = _ArgumentParser(
            prog="wordle-tree",
            description="Search for guessing strategies that minimise the mean "
                        "number of guesses.",
            formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        )
        parser.add_argument("--hard", action="store_true",
                            help="Hard mode: guesses must fit all feedback so far")
        parser.add_argument("--breadth", type=int, default=10,
                            help="Candidates expanded at each node")
        parser.add_argument("--depth", type=int, default=6,
                            help="Maximum number of guesses")
        parser.add_argument("--limit-guesses", action="store_true",
                            help="Only guess words from the answer list")
        parser.add_argument("--guess", metavar="WORD",
                            help="Fix the opening guess")
        parser.add_argument("--search", action="store_true",
                            help="Rank opening guesses by exhaustive cost instead "
                                 "of printing a decision tree")
        parser.add_argument("--answers", default=DEFAULT_ANSWERS,
                            help="Answer word list")
        parser.add_argument("--guesses", default=DEFAULT_GUESSES,
                            help="Allowed guess word list")
        parser.add_argument("--table",
                            help="Precomputed feedback table for the answer list "
                                 "(built in memory if omitted)")
        parser.add_argument("--workers", type=int, default=os.cpu_count() or 1,
                            help="Worker processes (1 disables parallelism)")
        parser.add_argument("--no-shortcut", action="store_true",
                            help="Always search instead of accepting the "
                                 "singleton shortcut")
        parser.add_argument("--write-table", metavar="PATH",
                            help="Write the answer feedback table to PATH and exit")
        parser.add_argument("--verbose", "-v", action="store_true",
                            help="Be verbose")
        args = parser.parse_args(argv)

        return cls(
            hard=args.hard,
            breadth=args.breadth,
            depth=args.depth,
            limit_guesses=args.limit_guesses,
            first_guess=args.guess.lower() if args.guess is not None else None,
            search=args.search,
            answers_path=args.answers,
            guesses_path=args.guesses,
            table_path=args.table,
            workers=args.workers,
            shortcut=not args.no_shortcut,
            write_table=args.write_table,
            verbose=args.verbose,
        )
