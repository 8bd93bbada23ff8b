"""
Candidate Guesses
=================

A candidate is a guess together with the partition it induces on the
remaining answers.  Its score is the sum of log2(bucket size) over the
buckets: 0 when every answer lands in its own bucket, larger the more
answers the guess leaves indistinguishable.  Lower scores rank first.
"""

import math
from typing import Optional

from .feedback import CORRECT
from .solution import Solution
from .wordset import WordSet


class Candidate:
    """A guess evaluated against a set of remaining answers."""

    def __init__(self, word, answers: WordSet):
        self.word = word
        self.partition = answers.partition(word)
        self.score = sum(math.log2(len(bucket)) for bucket in self.partition.values())

    def __repr__(self) -> str:
        return f"Candidate({self.word!r}, score={self.score:.4f}, buckets={len(self.partition)})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Candidate):
            return NotImplemented
        return self.word == other.word

    def __hash__(self) -> int:
        return hash(self.word)

    def __lt__(self, other: 'Candidate') -> bool:
        return (self.score, self.word) < (other.score, other.word)

    @property
    def is_degenerate(self) -> bool:
        """True when every answer gives the same feedback (nothing learned)."""
        return len(self.partition) == 1

    def fast_solution(self, depth: int) -> Optional[Solution]:
        """
        Singleton shortcut: a two-ply solution built without searching.

        Fires when every bucket is a singleton (score below 1), the guess is
        itself one of the answers and at least two guesses remain.  Each
        other answer is then played next.  Callers accept the result as
        final without comparing it against other guesses.
        """
        if self.score >= 1.0 or depth <= 1 or CORRECT not in self.partition:
            return None
        return Solution(
            guess=self.partition[CORRECT].word(0),
            size=2 * len(self.partition) - 1,
            children={code: Solution(bucket.word(0)) for code, bucket in self.partition.items()},
        )

    def slow_solution(self, guesses: WordSet, answers: WordSet, breadth: int, depth: int,
                      hard: bool, executor=None, shortcut: bool = True) -> Optional[Solution]:
        """
        Expand every bucket of this candidate with a full search.

        In hard mode each bucket's search may only use guesses that give the
        bucket's feedback against this word.  When the guess pool is the
        answer set itself the bucket already is that pool; otherwise the
        pool is partitioned once here and shared by all buckets.

        Args:
            guesses: guess pool used to reach this candidate
            answers: answers this candidate was evaluated against
            breadth: candidates kept per level of the search
            depth: guesses still available after this one
            hard: restrict later guesses to ones consistent with feedback
            executor: optional pool for the first fan-out of each bucket
            shortcut: allow ``fast_solution`` below this node

        Returns:
            Solution rooted at this word, or None if any bucket has no
            solution within ``depth`` guesses.
        """
        from .solve import solve

        shared_pool = hard and guesses is answers
        consistent = guesses.partition(self.word) if hard and not shared_pool else {}

        solution = Solution(self.word, size=0)
        for code, bucket in self.partition.items():
            if shared_pool:
                pool = bucket
            elif hard:
                pool = consistent.get(code)
                if pool is None:
                    return None
            else:
                pool = guesses

            sub_solution = solve(pool, bucket, breadth, depth, hard, executor, shortcut)
            if sub_solution is None:
                return None

            # One guess for every answer in the bucket; the correct bucket
            # is finished by this guess.
            solution.size += len(bucket)
            if code != CORRECT:
                solution.size += sub_solution.size
            solution.children[code] = sub_solution

        return solution
