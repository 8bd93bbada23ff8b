"""Decision tree nodes produced by the tree-mode search."""

from collections import Counter
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, List

from .feedback import CORRECT, feedback_to_string


@dataclass
class Solution:
    """
    One node of a guessing strategy.

    Attributes:
        guess: word to play at this node
        size: total guesses summed over every answer that reaches this node
        children: next node for each feedback code this guess can produce
            (empty for a leaf, where ``guess`` is the only remaining answer)
    """

    guess: object
    size: int = 1
    children: Dict[int, 'Solution'] = field(default_factory=dict)

    def paths(self, prefix: List[str] = None, render: Callable = str) -> Iterator[List[str]]:
        """
        Yield every terminal path as a token list: guesses, with the
        feedback code observed between consecutive guesses.
        """
        path = (prefix or []) + [render(self.guess)]
        if not self.children:
            yield path
            return
        for code, child in self.children.items():
            if code == CORRECT:
                yield path
            else:
                yield from child.paths(path + [feedback_to_string(code)], render)

    def lines(self, render: Callable = str) -> Iterator[str]:
        """One space-separated line per terminal path."""
        for path in self.paths(render=render):
            yield ' '.join(path)

    def guess_counts(self, played: int = 1) -> Iterator[int]:
        """Number of guesses used along each terminal path."""
        if not self.children:
            yield played
            return
        for code, child in self.children.items():
            if code == CORRECT:
                yield played
            else:
                yield from child.guess_counts(played + 1)

    def distribution(self) -> Dict[int, int]:
        """Answers solved in each number of guesses."""
        return dict(sorted(Counter(self.guess_counts()).items()))

    def mean(self, n_answers: int) -> float:
        return self.size / n_answers
