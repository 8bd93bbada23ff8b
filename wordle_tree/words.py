"""Loading word lists and feedback tables from disk."""

import logging

import numpy as np

from .wordset import LetterWordSet

log = logging.getLogger(__name__)


def load_word_set(filepath: str) -> LetterWordSet:
    """
    Load a word list into a LetterWordSet.

    The file holds five-letter words either concatenated with no separators
    or separated by whitespace; case is ignored.
    """
    with open(filepath, 'r') as f:
        words = LetterWordSet.from_text(f.read().lower())
    log.debug(f"Read {len(words)} words from {filepath}")
    return words


def load_feedback_table(filepath: str, size: int) -> np.ndarray:
    """
    Load a raw feedback table for a list of ``size`` words.

    Raises:
        ValueError: if the file does not hold exactly size * size bytes
    """
    table = np.fromfile(filepath, dtype=np.uint8)
    if table.shape[0] != size * size:
        raise ValueError(
            f"{filepath} holds {table.shape[0]} entries, expected {size * size} "
            f"for {size} words"
        )
    return table


def save_feedback_table(table: np.ndarray, filepath: str) -> None:
    """Write a feedback table as raw bytes."""
    np.ascontiguousarray(table, dtype=np.uint8).tofile(filepath)
