"""
Wordle Tree - Decision Tree Search for Wordle
=============================================

Finds guessing strategies that minimise the mean number of guesses over a
list of possible answers, or ranks opening guesses by their exhaustive cost.
"""

__version__ = "1.0.0"

from .feedback import CORRECT, feedback, feedback_to_string, string_to_feedback
from .wordset import WordSet, LetterWordSet, IndexWordSet
from .candidate import Candidate
from .solution import Solution
from .solve import solve, solve_easy, solve_hard, solve_hard_limited
