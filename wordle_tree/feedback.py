"""
Feedback Codec
==============

Per-letter clue patterns for a guess against an answer.

A feedback code packs one base-3 digit per position (0 = absent,
1 = present, 2 = correct) with weights 1, 3, 9, 27, 81, so every code
fits in a byte (0..242).  Rendered as text, each position becomes one of
``a`` / ``p`` / ``c``.
"""

import numpy as np
from numba import jit, prange


# ============================================================================
# CONSTANTS
# ============================================================================

WORD_LENGTH = 5
N_PATTERNS = 243  # 3^5 possible feedback patterns
ABSENT = 0
CORRECT = 242  # 2 + 2*3 + 2*9 + 2*27 + 2*81 = 242 (all correct)

MATCH_CHARS = 'apc'


# ============================================================================
# NUMBA-ACCELERATED FEEDBACK COMPUTATION
# ============================================================================

@jit(nopython=True, cache=True)
def compute_feedback(guess: np.ndarray, answer: np.ndarray) -> int:
    """
    Compute the feedback code for a guess against an answer.

    Unmatched answer letters are counted in a 52-bit accumulator, two bits
    per letter.  Each count saturates at 2: five positions never need more,
    and a third increment would carry into the next letter's bits.

    Args:
        guess: shape (5,) array of letter codes (0-25 for a-z)
        answer: shape (5,) array of letter codes

    Returns:
        Integer feedback pattern (0-242)
    """
    feedback = np.zeros(5, dtype=np.int32)
    available = 0

    # First pass: mark correct letters, count the rest of the answer
    for i in range(5):
        if guess[i] == answer[i]:
            feedback[i] = 2
        else:
            shift = 2 * np.int64(answer[i])
            if ((available >> shift) & 3) < 2:
                available += 1 << shift

    # Second pass: mark present letters while the answer still has them
    for i in range(5):
        if feedback[i] == 0:
            shift = 2 * np.int64(guess[i])
            if ((available >> shift) & 3) != 0:
                feedback[i] = 1
                available -= 1 << shift

    return feedback[0] + 3*feedback[1] + 9*feedback[2] + 27*feedback[3] + 81*feedback[4]


@jit(nopython=True, cache=True)
def feedback_row(guess: np.ndarray, letters: np.ndarray) -> np.ndarray:
    """Feedback of one guess against every row of a (n, 5) letter matrix."""
    n = letters.shape[0]
    result = np.zeros(n, dtype=np.uint8)
    for j in range(n):
        result[j] = compute_feedback(guess, letters[j])
    return result


@jit(nopython=True, parallel=True, cache=True)
def compute_feedback_matrix(guess_letters: np.ndarray, answer_letters: np.ndarray) -> np.ndarray:
    """
    Compute feedback for all guess/answer pairs in parallel.

    Args:
        guess_letters: shape (n_guesses, 5) array of letter codes
        answer_letters: shape (n_answers, 5) array of letter codes

    Returns:
        shape (n_guesses, n_answers) feedback matrix
    """
    n_guesses = guess_letters.shape[0]
    n_answers = answer_letters.shape[0]
    result = np.zeros((n_guesses, n_answers), dtype=np.uint8)

    for i in prange(n_guesses):
        for j in range(n_answers):
            result[i, j] = compute_feedback(guess_letters[i], answer_letters[j])

    return result


def build_feedback_table(letters: np.ndarray) -> np.ndarray:
    """
    Flat row-major table of every word against every word of one list.

    ``table[g * n + a]`` is the feedback of word ``g`` against word ``a``.
    """
    return compute_feedback_matrix(letters, letters).ravel()


# ============================================================================
# WORD / PATTERN CONVERSION
# ============================================================================

def word_to_codes(word: str) -> np.ndarray:
    """Convert a five-letter lowercase word to a (5,) array of letter codes."""
    if len(word) != WORD_LENGTH or not (word.isascii() and word.isalpha() and word.islower()):
        raise ValueError(f"Not a {WORD_LENGTH}-letter lowercase word: {word!r}")
    return np.frombuffer(word.encode('ascii'), dtype=np.uint8) - ord('a')


def feedback(guess: str, answer: str) -> int:
    """Feedback code for two words given as strings."""
    return int(compute_feedback(word_to_codes(guess), word_to_codes(answer)))


def feedback_to_string(code: int) -> str:
    """Convert a feedback code (0-242) to its a/p/c string, e.g. 'apaac'."""
    if not 0 <= code < N_PATTERNS:
        raise ValueError(f"Invalid feedback code: {code}")
    chars = []
    for _ in range(WORD_LENGTH):
        chars.append(MATCH_CHARS[code % 3])
        code //= 3
    return ''.join(chars)


def string_to_feedback(pattern: str) -> int:
    """Convert an a/p/c string (e.g. 'apaac') to its feedback code."""
    if len(pattern) != WORD_LENGTH:
        raise ValueError(f"Invalid pattern length: {pattern!r}")
    result = 0
    multiplier = 1
    for c in pattern:
        val = MATCH_CHARS.find(c)
        if val < 0:
            raise ValueError(f"Invalid pattern char: {c}")
        result += val * multiplier
        multiplier *= 3
    return result
